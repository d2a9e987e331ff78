from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Optional, Sequence

from ..backends import ImageBackend, create_backend
from ..errors import BrandAssetError, InvalidArguments
from ..image_processing.validator import check_png_signature, validate_output
from ..models import LOGO, SOCIAL_SHARE, TargetSpec
from .common import ArgumentParser, add_backend_argument, configure_logging, eprint, load_cli_settings

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = ArgumentParser(
        prog="verify-brand-assets",
        description="Check committed brand assets against their size contracts",
    )
    parser.add_argument("--logo", type=Path, default=Path("assets") / LOGO.name, help="Logo PNG to check")
    parser.add_argument(
        "--social-share",
        type=Path,
        default=Path("assets") / SOCIAL_SHARE.name,
        help="Social preview PNG to check",
    )
    add_backend_argument(parser)
    return parser.parse_args(argv)


def verify_asset(backend: ImageBackend, path: Path, target: TargetSpec) -> None:
    if not path.is_file():
        raise InvalidArguments(f"{target.name} not found at {path}")
    check_png_signature(path)
    validate_output(backend, path, target)


def main(argv: Optional[Sequence[str]] = None) -> int:
    try:
        settings = load_cli_settings()
        configure_logging(settings)
        args = parse_args(argv)
        backend = create_backend(settings, args.backend)
        backend.probe()
    except BrandAssetError as exc:
        eprint(f"error: {exc}")
        return exc.exit_code

    failures = 0
    for path, target in ((args.logo, LOGO), (args.social_share, SOCIAL_SHARE)):
        try:
            verify_asset(backend, path, target)
        except BrandAssetError as exc:
            failures += 1
            eprint(f"error: {exc}")
            continue
        logger.info("%s ok (%sx%s)", path, target.width, target.height)
    return 1 if failures else 0


if __name__ == "__main__":
    raise SystemExit(main())
