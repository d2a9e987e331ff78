from __future__ import annotations

import math
from fractions import Fraction

from ..models import CropRectangle, ImageDimensions, TargetSpec


def round_half_up(value: Fraction) -> int:
    """Round a non-negative fraction to the nearest integer, halves away from zero."""

    if value < 0:
        return -round_half_up(-value)
    return math.floor(value + Fraction(1, 2))


def compute_crop(source: ImageDimensions, target: TargetSpec) -> CropRectangle:
    """Return the largest centered crop of *source* matching the target aspect ratio.

    The limiting source dimension is kept as-is; only the other side is derived
    from the target ratio and rounded. Ratios are compared by cross-multiplying
    so that near-equal ratios never flip because of float error.
    """

    ratio = target.ratio
    if source.width * target.height > source.height * target.width:
        width = max(1, round_half_up(source.height * ratio))
        return CropRectangle(width=min(width, source.width), height=source.height)

    height = max(1, round_half_up(source.width / ratio))
    return CropRectangle(width=source.width, height=min(height, source.height))
