from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

logger = logging.getLogger(__name__)

BACKEND_CHOICES = ("auto", "sips", "pillow")

_ENV_PREFIX = "BRAND_ASSETS_"


@dataclass(slots=True)
class Settings:
    backend: str = "auto"
    sips_executable: str = "sips"
    timeout: Optional[float] = None
    log_level: str = "INFO"


def load_settings(
    environ: Optional[Mapping[str, str]] = None,
    env_path: Path = Path(".env"),
) -> Settings:
    """Build settings from ``BRAND_ASSETS_*`` variables, then ``.env``, then defaults."""

    environ = os.environ if environ is None else environ
    dotenv = _read_dotenv(env_path)

    def lookup(key: str) -> Optional[str]:
        name = _ENV_PREFIX + key
        for source in (environ, dotenv):
            value = source.get(name)
            if value is not None and value.strip():
                return value.strip()
        return None

    settings = Settings()
    backend = lookup("BACKEND")
    if backend is not None:
        backend = backend.lower()
        if backend not in BACKEND_CHOICES:
            raise ValueError(
                f"{_ENV_PREFIX}BACKEND must be one of {', '.join(BACKEND_CHOICES)}, got {backend!r}"
            )
        settings.backend = backend

    sips = lookup("SIPS")
    if sips is not None:
        settings.sips_executable = sips

    timeout = lookup("TIMEOUT")
    if timeout is not None:
        try:
            settings.timeout = float(timeout)
        except ValueError as exc:
            raise ValueError(f"{_ENV_PREFIX}TIMEOUT must be a number, got {timeout!r}") from exc
        if settings.timeout <= 0:
            raise ValueError(f"{_ENV_PREFIX}TIMEOUT must be positive, got {timeout!r}")

    log_level = lookup("LOG_LEVEL")
    if log_level is not None:
        settings.log_level = log_level.upper()
    return settings


def _read_dotenv(env_path: Path) -> dict[str, str]:
    values: dict[str, str] = {}
    if not env_path.exists():
        return values

    try:
        for line in env_path.read_text(encoding="utf-8").splitlines():
            stripped = line.strip()
            if not stripped or stripped.startswith("#"):
                continue
            if "=" not in stripped:
                continue
            key, raw_value = stripped.split("=", 1)
            key = key.strip()
            if key.startswith(_ENV_PREFIX):
                values[key] = raw_value.strip().strip('"').strip("'")
    except OSError:
        logger.debug("Unable to read %s", env_path, exc_info=True)
    return values
