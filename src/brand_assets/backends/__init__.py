from __future__ import annotations

import logging
import shutil
from typing import Optional

from ..config import BACKEND_CHOICES, Settings
from .base import ImageBackend, pixel_argument
from .pillow import PillowBackend
from .sips import SipsBackend, parse_dimensions

logger = logging.getLogger(__name__)


def create_backend(settings: Settings, name: Optional[str] = None) -> ImageBackend:
    """Instantiate the backend named by *name* or, failing that, by *settings*."""

    choice = (name or settings.backend).lower()
    if choice not in BACKEND_CHOICES:
        raise ValueError(f"Unknown backend {choice!r}; expected one of {', '.join(BACKEND_CHOICES)}")
    if choice == "auto":
        choice = "sips" if shutil.which(settings.sips_executable) else "pillow"
        logger.debug("Auto-selected %s backend", choice)
    if choice == "sips":
        return SipsBackend(settings.sips_executable, timeout=settings.timeout)
    return PillowBackend()


__all__ = [
    "ImageBackend",
    "PillowBackend",
    "SipsBackend",
    "create_backend",
    "parse_dimensions",
    "pixel_argument",
]
