from __future__ import annotations

import logging
import re
import subprocess
from pathlib import Path
from typing import Optional, Sequence

from ..errors import DimensionReadFailure, ExternalToolFailure, ToolUnavailable
from ..models import CropRectangle, ImageDimensions, TargetSpec
from .base import ImageBackend, pixel_argument

logger = logging.getLogger(__name__)

_WIDTH_PATTERN = re.compile(r"pixelWidth:\s*(\d+)")
_HEIGHT_PATTERN = re.compile(r"pixelHeight:\s*(\d+)")


def parse_dimensions(output: str, path: Path | str) -> ImageDimensions:
    """Extract pixel width/height from ``sips -g`` output."""

    width_match = _WIDTH_PATTERN.search(output)
    height_match = _HEIGHT_PATTERN.search(output)
    width = int(width_match.group(1)) if width_match else 0
    height = int(height_match.group(1)) if height_match else 0
    if not width or not height:
        raise DimensionReadFailure(path, "pixelWidth/pixelHeight missing or zero")
    return ImageDimensions(width=width, height=height)


class SipsBackend(ImageBackend):
    """Shells out to the macOS ``sips`` tool for every operation."""

    name = "sips"

    def __init__(self, executable: str = "sips", *, timeout: Optional[float] = None) -> None:
        self.executable = executable
        self.timeout = timeout

    def probe(self) -> None:
        try:
            self._run(["--help"])
        except ExternalToolFailure as exc:
            raise ToolUnavailable(
                f"{self.executable} is required but not available on this system."
            ) from exc

    def inspect(self, path: Path) -> ImageDimensions:
        try:
            output = self._run(["-g", "pixelWidth", "-g", "pixelHeight", str(path)])
        except ExternalToolFailure as exc:
            raise DimensionReadFailure(path, str(exc)) from exc
        return parse_dimensions(output, path)

    def crop(self, input_path: Path, rect: CropRectangle, output_path: Path) -> None:
        self._run(
            [
                "--cropToHeightWidth",
                pixel_argument("crop height", rect.height),
                pixel_argument("crop width", rect.width),
                str(input_path),
                "--out",
                str(output_path),
            ]
        )

    def resize_and_encode(self, input_path: Path, target: TargetSpec, output_path: Path) -> None:
        self._run(
            [
                "-s",
                "format",
                "png",
                "-z",
                pixel_argument("target height", target.height),
                pixel_argument("target width", target.width),
                str(input_path),
                "--out",
                str(output_path),
            ]
        )

    def _run(self, args: Sequence[str]) -> str:
        command = [self.executable, *args]
        logger.debug("Running %s", command)
        try:
            completed = subprocess.run(
                command,
                capture_output=True,
                text=True,
                timeout=self.timeout,
                check=False,
            )
        except (OSError, subprocess.TimeoutExpired) as exc:
            raise ExternalToolFailure(f"Unable to run {self.executable}: {exc}", command=command) from exc
        if completed.returncode != 0:
            raise ExternalToolFailure(
                f"{self.executable} {args[0]} failed",
                command=command,
                returncode=completed.returncode,
                stderr=completed.stderr,
            )
        return completed.stdout
