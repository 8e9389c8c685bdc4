"""DICOM Projector - Command Line Interface

Reads a DICOM file and prints its metadata as a JSON document keyed by
tag. Pixel data is reported as frame offsets and sizes only.
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from pathlib import Path

from dicom_projector import __version__
from dicom_projector.adapters.pydicom_adapter import read_nodes
from dicom_projector.core.config import ProjectionSettings, get_settings
from dicom_projector.core.constants import MIN_MAX_DEPTH
from dicom_projector.core.exceptions import ProjectionError, TagFormatError
from dicom_projector.core.names import PydicomNameResolver
from dicom_projector.core.projection import (
    dataset_to_text,
    dataset_to_text_filtered,
    default_metadata_tag_filter,
)
from dicom_projector.core.tags import Tag
from dicom_projector.utils.logger import configure_logging, get_logger

logger = get_logger(__name__)


def parse_tags(values: Sequence[str]) -> list[Tag]:
    """Parse tag arguments such as ``00100010`` or ``(0010,0010)``.

    Raises:
        argparse.ArgumentTypeError: If a tag cannot be parsed

    """
    tags: list[Tag] = []
    for value in values:
        try:
            tags.append(Tag.from_string(value))
        except TagFormatError as e:
            raise argparse.ArgumentTypeError(e.message) from e
    return tags


def depth_limit(value: str) -> int:
    """argparse type for the sequence nesting limit."""
    number = int(value)
    if number < MIN_MAX_DEPTH:
        raise argparse.ArgumentTypeError(
            f"must be at least {MIN_MAX_DEPTH}, got {number}"
        )
    return number


def create_parser(settings: ProjectionSettings) -> argparse.ArgumentParser:
    """Create the argument parser, with defaults taken from settings."""
    parser = argparse.ArgumentParser(
        prog="dicom-projector",
        description="Print DICOM metadata as a JSON document",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Full document with tag keywords
  dicom-projector image.dcm --names

  # Header summary without binary values, pretty printed
  dicom-projector image.dcm --default-filter --omit-binary --indent 2

  # Selected tags only
  dicom-projector image.dcm --tags 00100010 0020000D
        """,
    )

    parser.add_argument("input_file", help="Path to the DICOM file")
    parser.add_argument(
        "-o",
        "--output",
        metavar="FILE",
        help="Write the document to FILE instead of stdout",
    )
    parser.add_argument(
        "--names",
        action="store_true",
        default=settings.add_names,
        help="Annotate entries with tag names",
    )
    parser.add_argument(
        "--name-style",
        choices=["keyword", "description"],
        default=settings.name_style.value,
        help="Tag name style (default: %(default)s)",
    )
    parser.add_argument(
        "--omit-binary",
        action="store_true",
        default=settings.omit_binary_values,
        help="Leave OB/OW values out of the document",
    )

    filter_group = parser.add_mutually_exclusive_group()
    filter_group.add_argument(
        "--default-filter",
        action="store_true",
        default=settings.use_default_filter,
        help="Only output the built-in header-summary tags",
    )
    filter_group.add_argument(
        "--tags",
        nargs="+",
        metavar="TAG",
        help="Only output these top-level tags (e.g. 00100010 or (0010,0010))",
    )

    parser.add_argument(
        "--indent",
        type=int,
        default=settings.json_indent,
        metavar="N",
        help="Pretty print with N spaces of indentation",
    )
    parser.add_argument(
        "--max-depth",
        type=depth_limit,
        default=settings.max_depth,
        metavar="N",
        help="Maximum sequence nesting depth (default: %(default)s)",
    )
    parser.add_argument(
        "--no-file-meta",
        action="store_true",
        help="Skip the group 0002 file meta elements",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    parser.add_argument(
        "--log-format",
        choices=["json", "console"],
        default=settings.logging.log_format,
        help="Log output format (default: %(default)s)",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the projector.

    Returns:
        Exit status: 0 on success, 1 on decoding or projection errors

    """
    settings = get_settings()
    parser = create_parser(settings)
    args = parser.parse_args(argv)

    log_level = "DEBUG" if args.verbose else settings.logging.log_level.value
    configure_logging(
        log_level=log_level,
        json_format=args.log_format == "json",
        log_file=settings.logging.log_file,
    )

    tags: list[Tag] | None = None
    if args.tags:
        try:
            tags = parse_tags(args.tags)
        except argparse.ArgumentTypeError as e:
            parser.error(str(e))
    elif args.default_filter:
        tags = list(default_metadata_tag_filter())

    resolver = PydicomNameResolver(args.name_style)

    try:
        nodes = read_nodes(args.input_file, include_file_meta=not args.no_file_meta)
        if tags is None:
            text = dataset_to_text(
                nodes,
                args.omit_binary,
                args.names,
                indent=args.indent,
                name_resolver=resolver,
                max_depth=args.max_depth,
            )
        else:
            text = dataset_to_text_filtered(
                nodes,
                args.omit_binary,
                args.names,
                tags,
                indent=args.indent,
                name_resolver=resolver,
                max_depth=args.max_depth,
            )
    except ProjectionError as e:
        logger.error(
            "projection_failed",
            file_path=args.input_file,
            error_code=e.error_code,
            error=e.message,
        )
        print(f"Error: {e.message}", file=sys.stderr)
        return 1

    if args.output:
        output = Path(args.output)
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(text + "\n", encoding="utf-8")
        logger.info("document_written", output=str(output), size=len(text))
    else:
        print(text)
    return 0


if __name__ == "__main__":
    sys.exit(main())
