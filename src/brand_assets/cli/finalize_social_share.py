from __future__ import annotations

from typing import Optional, Sequence

from ..models import SOCIAL_SHARE
from .common import run_asset_command


def main(argv: Optional[Sequence[str]] = None) -> int:
    return run_asset_command(
        SOCIAL_SHARE,
        prog="finalize-social-share",
        description="Crop and resize an image to a 1280x640 social preview PNG under 1MB",
        argv=argv,
    )


if __name__ == "__main__":
    raise SystemExit(main())
