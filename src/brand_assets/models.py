from __future__ import annotations

import enum
from dataclasses import dataclass
from fractions import Fraction
from pathlib import Path
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .errors import BrandAssetError


def _require_positive(name: str, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ValueError(f"{name} must be a positive integer, got {value!r}")


@dataclass(frozen=True, slots=True)
class ImageDimensions:
    """Pixel extent of an image file."""

    width: int
    height: int

    def __post_init__(self) -> None:
        _require_positive("width", self.width)
        _require_positive("height", self.height)

    def __str__(self) -> str:
        return f"{self.width}x{self.height}"


@dataclass(frozen=True, slots=True)
class TargetSpec:
    """Fixed output contract for one asset kind."""

    name: str
    width: int
    height: int
    max_bytes: Optional[int] = None

    def __post_init__(self) -> None:
        _require_positive("width", self.width)
        _require_positive("height", self.height)
        if self.max_bytes is not None:
            _require_positive("max_bytes", self.max_bytes)

    @property
    def ratio(self) -> Fraction:
        return Fraction(self.width, self.height)

    @property
    def dimensions(self) -> ImageDimensions:
        return ImageDimensions(self.width, self.height)


@dataclass(frozen=True, slots=True)
class CropRectangle:
    """Size of the centered region cut from the source before resizing."""

    width: int
    height: int

    def __post_init__(self) -> None:
        _require_positive("width", self.width)
        _require_positive("height", self.height)

    def offset_within(self, source: ImageDimensions) -> tuple[int, int]:
        """Return the ``(left, top)`` corner that centers this crop in *source*."""

        if self.width > source.width or self.height > source.height:
            raise ValueError(f"crop {self.width}x{self.height} exceeds source {source}")
        return (source.width - self.width) // 2, (source.height - self.height) // 2


class PipelineStage(str, enum.Enum):
    PARSING = "parsing"
    INSPECTING = "inspecting"
    TRANSFORMING = "transforming"
    VALIDATING = "validating"
    DONE = "done"
    FAILED = "failed"


@dataclass(slots=True)
class PipelineResult:
    """Terminal outcome of one asset pipeline run."""

    target: TargetSpec
    stage: PipelineStage
    output: Optional[Path] = None
    error: Optional["BrandAssetError"] = None

    @property
    def ok(self) -> bool:
        return self.stage is PipelineStage.DONE and self.error is None


LOGO = TargetSpec(name="logo.png", width=1000, height=1000)
SOCIAL_SHARE = TargetSpec(name="social-share.png", width=1280, height=640, max_bytes=1_000_000)
