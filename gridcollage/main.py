# main.py
"""
Command line entry point for Grid Collage.
"""
import argparse
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Sequence

from utils.collage_builder import CollageError, create_collage
from utils.validation import validate_output_path

from . import config
from .controllers import ImageSelection


DEFAULT_LOG_PATH = Path(__file__).resolve().parents[1] / config.LOG_FILENAME


def configure_logging(log_path: Optional[Path] = None) -> logging.Logger:
    """Configure and return the application logger.

    The handler setup is idempotent to avoid duplicate handlers when the module
    is imported multiple times (e.g., in tests). A rotating file handler limits
    on-disk log growth while mirroring output to stdout for developer visibility.
    """

    logger = logging.getLogger(config.LOGGER_NAME)
    if logger.handlers:
        return logger

    logger.setLevel(logging.INFO)

    formatter = logging.Formatter(config.LOG_FORMAT)

    if log_path is None:
        log_path = DEFAULT_LOG_PATH
    log_path.parent.mkdir(parents=True, exist_ok=True)

    file_handler = RotatingFileHandler(
        log_path,
        maxBytes=config.LOG_MAX_BYTES,
        backupCount=config.LOG_BACKUP_COUNT,
        encoding="utf-8",
    )
    file_handler.setFormatter(formatter)

    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setFormatter(formatter)

    logger.addHandler(file_handler)
    logger.addHandler(stream_handler)
    logger.propagate = False

    return logger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gridcollage",
        description="Arrange images on a uniform-height grid and save the collage.",
    )
    parser.add_argument("images", nargs="+", help="Input image paths (in grid order).")
    parser.add_argument(
        "-o",
        "--output",
        default=config.DEFAULT_OUTPUT_NAME,
        help="Output path; .png writes PNG, anything else JPEG (default: %(default)s).",
    )
    parser.add_argument(
        "--per-row",
        default=config.IMAGES_PER_ROW_AUTO,
        choices=config.IMAGES_PER_ROW_CHOICES,
        help="Images per row (default: %(default)s).",
    )
    parser.add_argument("--log-file", type=Path, help="Where to write the rotating log file.")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logger = configure_logging(args.log_file)

    try:
        output = validate_output_path(args.output)
    except ValueError as exc:
        parser.error(str(exc))

    selection = ImageSelection()
    selection.replace(args.images)
    selection.set_images_per_row(args.per_row)

    request = selection.build_request(output)
    selection.begin_build()
    try:
        saved = create_collage(request.image_paths, request.output_path, request.images_per_row)
    except CollageError as exc:
        logger.error("Failed to create collage: %s", exc)
        print(f"Failed to create collage:\n{exc}", file=sys.stderr)
        return 1
    finally:
        selection.end_build()

    print(f"Collage created successfully!\n\nSaved to:\n{saved}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
