from __future__ import annotations

import logging
import shutil
import uuid
from pathlib import Path
from typing import Optional, Union

from ..backends.base import ImageBackend
from ..errors import BrandAssetError, ExternalToolFailure, InvalidArguments, OutputWriteFailure
from ..media.downloader import ImageDownloader, is_remote_source
from ..models import PipelineResult, PipelineStage, TargetSpec
from .geometry import compute_crop
from .validator import validate_output
from .workspace import Workspace, workspace

logger = logging.getLogger(__name__)

SourceLike = Union[str, Path]


def require_png_output(output: Path) -> None:
    if output.suffix.lower() != ".png":
        raise InvalidArguments("Output must be a .png file.")


def prepare_output_dir(output: Path) -> None:
    if output.is_dir():
        raise InvalidArguments(f"Output path is a directory: {output}")
    try:
        output.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise InvalidArguments(f"Cannot create output directory {output.parent}: {exc}") from exc


def publish_output(staged: Path, output: Path) -> None:
    """Copy *staged* next to *output*, then rename it into place.

    The rename stays on one filesystem, so *output* is either the previous
    file or the complete new one.
    """

    partial = output.with_name(f".{output.stem}.tmp-{uuid.uuid4().hex[:8]}{output.suffix}")
    try:
        shutil.copyfile(staged, partial)
        partial.replace(output)
    except OSError as exc:
        partial.unlink(missing_ok=True)
        raise OutputWriteFailure(f"Cannot write {output}: {exc}") from exc


class AssetPipeline:
    """Crop, resize and validate one source image into a fixed-size PNG asset.

    The scratch workspace lives for the inspect/transform/validate stages and
    is removed on every exit path. The resized image is validated inside the
    workspace and only published to the output path once it passes, so a
    failed run never leaves an invalid or partial artifact behind.
    """

    def __init__(
        self,
        target: TargetSpec,
        backend: ImageBackend,
        downloader: Optional[ImageDownloader] = None,
        workspace_dir: Optional[Path] = None,
    ) -> None:
        self.target = target
        self.backend = backend
        self.downloader = downloader
        self.workspace_dir = workspace_dir
        self.stage = PipelineStage.PARSING

    def run(self, source: SourceLike, output: Path) -> PipelineResult:
        try:
            path = self.execute(source, output)
        except BrandAssetError as exc:
            return PipelineResult(target=self.target, stage=PipelineStage.FAILED, error=exc)
        return PipelineResult(target=self.target, stage=PipelineStage.DONE, output=path)

    def execute(self, source: SourceLike, output: Path) -> Path:
        self.stage = PipelineStage.PARSING
        try:
            return self._execute(source, Path(output))
        except BrandAssetError as exc:
            if exc.stage is None:
                exc.stage = self.stage
            logger.debug("%s failed during %s: %s", self.target.name, exc.stage.value, exc)
            self.stage = PipelineStage.FAILED
            raise

    def _execute(self, source: SourceLike, output: Path) -> Path:
        require_png_output(output)
        self.backend.probe()
        prepare_output_dir(output)

        prefix = f"brand-assets-{Path(self.target.name).stem}-"
        with workspace(prefix, self.workspace_dir) as scratch:
            self._advance(PipelineStage.INSPECTING)
            source_path = self._resolve_source(source, scratch)
            dimensions = self.backend.inspect(source_path)
            crop = compute_crop(dimensions, self.target)
            logger.info(
                "Source %s is %s; cropping to %sx%s",
                source_path.name,
                dimensions,
                crop.width,
                crop.height,
            )

            self._advance(PipelineStage.TRANSFORMING)
            self.backend.crop(source_path, crop, scratch.cropped_path)
            if not scratch.cropped_path.is_file():
                raise ExternalToolFailure(f"Crop step produced no file at {scratch.cropped_path}")
            self.backend.resize_and_encode(scratch.cropped_path, self.target, scratch.staged_output_path)

            self._advance(PipelineStage.VALIDATING)
            validate_output(self.backend, scratch.staged_output_path, self.target)
            publish_output(scratch.staged_output_path, output)

        self._advance(PipelineStage.DONE)
        logger.info("Wrote %s (%sx%s) to %s", self.target.name, self.target.width, self.target.height, output)
        return output

    def _resolve_source(self, source: SourceLike, scratch: Workspace) -> Path:
        if isinstance(source, str) and is_remote_source(source):
            if self.downloader is None:
                raise InvalidArguments(f"Remote input is not supported here: {source}")
            return self.downloader.download(source, scratch.file("source"))

        path = Path(source)
        if not path.is_file():
            raise InvalidArguments(f"Input file not found: {path}")
        return path

    def _advance(self, stage: PipelineStage) -> None:
        logger.debug("%s: %s -> %s", self.target.name, self.stage.value, stage.value)
        self.stage = stage
