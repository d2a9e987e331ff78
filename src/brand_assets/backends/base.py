from __future__ import annotations

import abc
from pathlib import Path

from ..models import CropRectangle, ImageDimensions, TargetSpec


def pixel_argument(name: str, value: int) -> str:
    """Validate a pixel count and render it as a command-line argument."""

    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an int, got {type(value).__name__}")
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")
    return str(value)


class ImageBackend(abc.ABC):
    """Reads image metadata and performs the crop and resize steps."""

    name: str = "abstract"

    @abc.abstractmethod
    def probe(self) -> None:
        """Raise ``ToolUnavailable`` when the backend cannot run here."""

    @abc.abstractmethod
    def inspect(self, path: Path) -> ImageDimensions:
        ...

    @abc.abstractmethod
    def crop(self, input_path: Path, rect: CropRectangle, output_path: Path) -> None:
        """Cut a centered *rect* out of *input_path* into *output_path*."""

    @abc.abstractmethod
    def resize_and_encode(self, input_path: Path, target: TargetSpec, output_path: Path) -> None:
        """Resize to the exact target size and write a PNG."""
