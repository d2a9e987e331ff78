from __future__ import annotations

import logging
from pathlib import Path

from PIL import Image

from ..errors import DimensionReadFailure, ExternalToolFailure
from ..models import CropRectangle, ImageDimensions, TargetSpec
from .base import ImageBackend, pixel_argument

logger = logging.getLogger(__name__)

# Modes PNG can store without conversion.
_PNG_MODES = frozenset({"1", "L", "LA", "P", "RGB", "RGBA", "I", "I;16"})


class PillowBackend(ImageBackend):
    """In-process backend for systems without ``sips``."""

    name = "pillow"

    def __init__(self, resample: Image.Resampling = Image.Resampling.LANCZOS) -> None:
        self.resample = resample

    def probe(self) -> None:
        return None

    def inspect(self, path: Path) -> ImageDimensions:
        try:
            with Image.open(path) as image:
                width, height = image.size
        except OSError as exc:
            raise DimensionReadFailure(path, str(exc)) from exc
        if not width or not height:
            raise DimensionReadFailure(path, "zero dimension")
        return ImageDimensions(width=width, height=height)

    def crop(self, input_path: Path, rect: CropRectangle, output_path: Path) -> None:
        pixel_argument("crop width", rect.width)
        pixel_argument("crop height", rect.height)
        try:
            with Image.open(input_path) as image:
                source = ImageDimensions(*image.size)
                left, top = rect.offset_within(source)
                logger.debug("Cropping %s to %sx%s at (%s, %s)", input_path, rect.width, rect.height, left, top)
                cropped = image.crop((left, top, left + rect.width, top + rect.height))
                self._save_png(cropped, output_path)
        except (OSError, ValueError) as exc:
            raise ExternalToolFailure(f"Unable to crop {input_path}: {exc}") from exc

    def resize_and_encode(self, input_path: Path, target: TargetSpec, output_path: Path) -> None:
        size = (
            int(pixel_argument("target width", target.width)),
            int(pixel_argument("target height", target.height)),
        )
        try:
            with Image.open(input_path) as image:
                logger.debug("Resizing %s to %sx%s", input_path, *size)
                resized = image.resize(size, self.resample)
                self._save_png(resized, output_path, optimize=True)
        except (OSError, ValueError) as exc:
            raise ExternalToolFailure(f"Unable to resize {input_path}: {exc}") from exc

    def _save_png(self, image: Image.Image, path: Path, *, optimize: bool = False) -> None:
        if image.mode not in _PNG_MODES:
            image = image.convert("RGBA")
        image.save(path, format="PNG", optimize=optimize)
