from __future__ import annotations

import json
import os
import stat
import sys
from pathlib import Path
from typing import Optional

import pytest

from brand_assets.backends.base import ImageBackend
from brand_assets.errors import DimensionReadFailure, ExternalToolFailure, ToolUnavailable
from brand_assets.models import CropRectangle, ImageDimensions, TargetSpec


def write_pseudo_image(path: Path, width: int, height: int, size: int = 2048) -> Path:
    """Write a file whose first line carries its dimensions, padded to *size* bytes."""

    header = json.dumps({"width": width, "height": height}) + "\n"
    padding = "x" * (size - len(header)) if size > len(header) else ""
    path.write_text(header + padding, encoding="utf-8")
    return path


def read_pseudo_image(path: Path) -> tuple[int, int]:
    first_line = path.read_text(encoding="utf-8").split("\n", 1)[0]
    meta = json.loads(first_line)
    return int(meta["width"]), int(meta["height"])


class PseudoImageBackend(ImageBackend):
    """Deterministic backend operating on pseudo-image files."""

    name = "pseudo"

    def __init__(
        self,
        *,
        output_bytes: int = 2048,
        output_size: Optional[tuple[int, int]] = None,
        available: bool = True,
        fail_on: Optional[str] = None,
        skip_crop_output: bool = False,
    ) -> None:
        self.output_bytes = output_bytes
        self.output_size = output_size
        self.available = available
        self.fail_on = fail_on
        self.skip_crop_output = skip_crop_output
        self.calls: list[str] = []
        self.crops: list[CropRectangle] = []
        self.touched: list[Path] = []

    def probe(self) -> None:
        self.calls.append("probe")
        if not self.available:
            raise ToolUnavailable("pseudo backend unavailable")

    def inspect(self, path: Path) -> ImageDimensions:
        self.calls.append("inspect")
        self._maybe_fail("inspect")
        try:
            width, height = read_pseudo_image(path)
        except (OSError, ValueError, KeyError) as exc:
            raise DimensionReadFailure(path, str(exc)) from exc
        if width <= 0 or height <= 0:
            raise DimensionReadFailure(path, "zero dimension")
        return ImageDimensions(width, height)

    def crop(self, input_path: Path, rect: CropRectangle, output_path: Path) -> None:
        self.calls.append("crop")
        self.crops.append(rect)
        self.touched.append(output_path)
        self._maybe_fail("crop")
        if not self.skip_crop_output:
            write_pseudo_image(output_path, rect.width, rect.height)

    def resize_and_encode(self, input_path: Path, target: TargetSpec, output_path: Path) -> None:
        self.calls.append("resize")
        self.touched.append(output_path)
        self._maybe_fail("resize")
        width, height = self.output_size or (target.width, target.height)
        write_pseudo_image(output_path, width, height, self.output_bytes)

    def _maybe_fail(self, operation: str) -> None:
        if self.fail_on == operation:
            raise ExternalToolFailure(f"pseudo {operation} failed", returncode=2)


FAKE_SIPS = """#!{python}
import json
import os
import sys

args = sys.argv[1:]

log_path = os.environ.get("SIPS_FAKE_LOG")
if log_path:
    with open(log_path, "a", encoding="utf-8") as log:
        log.write(json.dumps(args) + "\\n")


def fail(message):
    print(message, file=sys.stderr)
    sys.exit(2)


def read_meta(path):
    try:
        with open(path, encoding="utf-8") as handle:
            return json.loads(handle.readline())
    except (OSError, ValueError):
        fail("Invalid pseudo-image metadata in " + path)


def write_meta(path, width, height):
    target_bytes = int(os.environ.get("SIPS_FAKE_OUTPUT_BYTES", "2048"))
    header = json.dumps({{"width": width, "height": height}}) + "\\n"
    padding = "x" * (target_bytes - len(header)) if target_bytes > len(header) else ""
    with open(path, "w", encoding="utf-8") as handle:
        handle.write(header + padding)


def out_path():
    if "--out" not in args or args.index("--out") + 1 >= len(args):
        fail("Missing --out")
    return args[args.index("--out") + 1]


if args[:1] == ["--help"]:
    print("fake sips")
    sys.exit(0)

if args[:4] == ["-g", "pixelWidth", "-g", "pixelHeight"]:
    meta = read_meta(args[4])
    print(args[4])
    print("  pixelWidth: %s" % meta["width"])
    print("  pixelHeight: %s" % meta["height"])
    sys.exit(0)

if args[:1] == ["--cropToHeightWidth"]:
    read_meta(args[3])
    write_meta(out_path(), int(args[2]), int(args[1]))
    sys.exit(0)

if args[:4] == ["-s", "format", "png", "-z"]:
    read_meta(args[6])
    width = int(os.environ.get("SIPS_FAKE_RESIZE_WIDTH", args[5]))
    write_meta(out_path(), width, int(args[4]))
    sys.exit(0)

fail("Unsupported args: " + " ".join(args))
"""


@pytest.fixture
def fake_sips(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Put a scripted ``sips`` on PATH and return the file its invocations are logged to."""

    if sys.platform == "win32":
        pytest.skip("fake sips relies on a shebang script")

    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    script = bin_dir / "sips"
    script.write_text(FAKE_SIPS.format(python=sys.executable), encoding="utf-8")
    script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)

    log_path = tmp_path / "sips-calls.jsonl"
    monkeypatch.setenv("PATH", f"{bin_dir}{os.pathsep}{os.environ.get('PATH', '')}")
    monkeypatch.setenv("SIPS_FAKE_LOG", str(log_path))
    return log_path


def logged_calls(log_path: Path) -> list[list[str]]:
    if not log_path.exists():
        return []
    return [json.loads(line) for line in log_path.read_text(encoding="utf-8").splitlines() if line]


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    for key in list(os.environ):
        if key.startswith("BRAND_ASSETS_") or key.startswith("SIPS_FAKE_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
