from __future__ import annotations

from typing import Optional, Sequence

from ..models import LOGO
from .common import run_asset_command


def main(argv: Optional[Sequence[str]] = None) -> int:
    return run_asset_command(
        LOGO,
        prog="normalize-logo",
        description="Normalize any image to a centered 1000x1000 PNG logo",
        argv=argv,
    )


if __name__ == "__main__":
    raise SystemExit(main())
