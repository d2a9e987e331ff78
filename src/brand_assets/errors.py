from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence

from .models import ImageDimensions, PipelineStage


class BrandAssetError(Exception):
    """Base class for every classified asset pipeline failure."""

    exit_code = 1

    def __init__(self, message: str, *, stage: Optional[PipelineStage] = None) -> None:
        super().__init__(message)
        self.stage = stage


class InvalidArguments(BrandAssetError, ValueError):
    """Missing or malformed input, or an output path that is not a PNG."""


class ToolUnavailable(BrandAssetError):
    """The image backend cannot be used on this system."""


class DimensionReadFailure(BrandAssetError):
    """Image metadata could not be read or reported a zero dimension."""

    def __init__(self, path: Path | str, reason: str = "") -> None:
        message = f"Unable to read dimensions for {path}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.path = Path(path)


class ExternalToolFailure(BrandAssetError):
    """A backend operation could not be started or exited non-zero."""

    def __init__(
        self,
        message: str,
        *,
        command: Sequence[str] = (),
        returncode: Optional[int] = None,
        stderr: str = "",
    ) -> None:
        details = message
        if returncode is not None:
            details = f"{details} (exit code {returncode})"
        if stderr.strip():
            details = f"{details}: {stderr.strip()}"
        super().__init__(details)
        self.command = list(command)
        self.returncode = returncode
        self.stderr = stderr


class DownloadFailure(ExternalToolFailure):
    """A remote source image could not be fetched."""


class OutputWriteFailure(BrandAssetError):
    """The validated asset could not be written to its destination."""


class DimensionMismatch(BrandAssetError):
    def __init__(self, target_name: str, expected: ImageDimensions, actual: ImageDimensions) -> None:
        super().__init__(f"{target_name} must be {expected}, got {actual}")
        self.expected = expected
        self.actual = actual


class SizeExceeded(BrandAssetError):
    def __init__(self, target_name: str, size: int, limit: int) -> None:
        super().__init__(
            f"{target_name} must be under {_format_limit(limit)}. Current size: {size} bytes"
        )
        self.size = size
        self.limit = limit


def _format_limit(limit: int) -> str:
    if limit % 1_000_000 == 0:
        return f"{limit // 1_000_000}MB"
    return f"{limit} bytes"
