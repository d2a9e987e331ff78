from __future__ import annotations

import logging
import shutil
import tempfile
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Workspace:
    """Scratch directory owned by a single pipeline run."""

    path: Path

    @property
    def cropped_path(self) -> Path:
        return self.path / "cropped.png"

    @property
    def staged_output_path(self) -> Path:
        return self.path / "output.png"

    def file(self, name: str) -> Path:
        return self.path / name


def acquire_workspace(prefix: str = "brand-assets-", base_dir: Optional[Path] = None) -> Workspace:
    path = Path(tempfile.mkdtemp(prefix=prefix, dir=base_dir))
    logger.debug("Acquired workspace %s", path)
    return Workspace(path=path)


def release_workspace(handle: Workspace) -> None:
    """Remove the workspace and everything in it. Safe to call twice."""

    if not handle.path.exists():
        return
    shutil.rmtree(handle.path)
    logger.debug("Released workspace %s", handle.path)


@contextmanager
def workspace(prefix: str = "brand-assets-", base_dir: Optional[Path] = None) -> Iterator[Workspace]:
    handle = acquire_workspace(prefix, base_dir)
    try:
        yield handle
    finally:
        release_workspace(handle)
