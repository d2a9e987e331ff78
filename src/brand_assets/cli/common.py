from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import NoReturn, Optional, Sequence

from ..backends import create_backend
from ..config import BACKEND_CHOICES, Settings, load_settings
from ..errors import BrandAssetError, InvalidArguments
from ..image_processing.pipeline import AssetPipeline
from ..media.downloader import ImageDownloader
from ..models import TargetSpec

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


class ArgumentParser(argparse.ArgumentParser):
    """Argument parser that reports bad usage as ``InvalidArguments``."""

    def error(self, message: str) -> NoReturn:
        raise InvalidArguments(f"{self.format_usage().strip()}\n{self.prog}: error: {message}")


def eprint(message: str) -> None:
    print(message, file=sys.stderr)


def configure_logging(settings: Settings) -> None:
    level = getattr(logging, settings.log_level, None)
    if not isinstance(level, int):
        level = logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT)


def load_cli_settings() -> Settings:
    try:
        return load_settings()
    except ValueError as exc:
        raise InvalidArguments(str(exc)) from exc


def add_backend_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--backend",
        choices=BACKEND_CHOICES,
        default=None,
        help="Image backend (default: BRAND_ASSETS_BACKEND or auto)",
    )


def build_asset_parser(prog: str, description: str) -> ArgumentParser:
    parser = ArgumentParser(prog=prog, description=description)
    parser.add_argument("--input", default="", help="Source image path or http(s) URL")
    parser.add_argument("--output", default="", help="Destination .png path")
    add_backend_argument(parser)
    return parser


def parse_asset_args(parser: ArgumentParser, argv: Optional[Sequence[str]]) -> argparse.Namespace:
    args = parser.parse_args(argv)
    if not args.input or not args.output:
        raise InvalidArguments(f"Usage: {parser.prog} --input <path> --output <path>")
    args.output = Path(args.output)
    return args


def run_asset_command(
    target: TargetSpec,
    prog: str,
    description: str,
    argv: Optional[Sequence[str]] = None,
) -> int:
    """Shared entry point for the single-asset commands. Returns the exit code."""

    try:
        settings = load_cli_settings()
        configure_logging(settings)
        args = parse_asset_args(build_asset_parser(prog, description), argv)
        backend = create_backend(settings, args.backend)
    except BrandAssetError as exc:
        eprint(f"error: {exc}")
        return exc.exit_code

    logger.info("Generating %s with the %s backend", target.name, backend.name)
    pipeline = AssetPipeline(target, backend, downloader=ImageDownloader())
    result = pipeline.run(args.input, args.output)
    if not result.ok:
        assert result.error is not None
        stage = result.error.stage.value if result.error.stage else "unknown"
        logger.error("%s failed during %s stage", target.name, stage)
        eprint(f"error: {result.error}")
        return result.error.exit_code

    logger.info("Stored %s at %s", target.name, result.output)
    return 0
