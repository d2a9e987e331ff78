from __future__ import annotations

import logging
from pathlib import Path

from ..backends.base import ImageBackend
from ..errors import DimensionMismatch, InvalidArguments, SizeExceeded
from ..models import ImageDimensions, TargetSpec

logger = logging.getLogger(__name__)

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


def validate_output(backend: ImageBackend, path: Path, target: TargetSpec) -> ImageDimensions:
    """Check *path* against the exact size and byte limit of *target*.

    Raises ``DimensionMismatch`` unless the pixel size matches exactly, and
    ``SizeExceeded`` when a byte limit is set and the file reaches it.
    """

    actual = backend.inspect(path)
    expected = target.dimensions
    if actual != expected:
        raise DimensionMismatch(target.name, expected, actual)

    if target.max_bytes is not None:
        size = path.stat().st_size
        if size >= target.max_bytes:
            raise SizeExceeded(target.name, size, target.max_bytes)
        logger.debug("%s is %s bytes (limit %s)", path, size, target.max_bytes)
    return actual


def check_png_signature(path: Path) -> None:
    with path.open("rb") as handle:
        header = handle.read(len(PNG_SIGNATURE))
    if header != PNG_SIGNATURE:
        raise InvalidArguments(f"{path} is not a valid PNG file.")
