#!/usr/bin/env python3
"""
Command-line entry point:

    ppm-edit <in-file> <out-file> <grayscale|invert|emboss|motionblur> {motion-blur-length}

Exit status: 0 on success, 2 for usage errors, 1 when the image can't be
read, parsed or written. No output file is produced on failure.
"""

import argparse
import logging
import os
import sys
from typing import List, Optional

from dotenv import load_dotenv

# Load environment variables first
load_dotenv()

from ..errors import ImageEditorError, UsageError
from ..models.image_filter import ImageFilter
from ..pipeline.image_editor import edit_image

logger = logging.getLogger(__name__)

USAGE = (
    "%(prog)s <in-file> <out-file> <grayscale|invert|emboss|motionblur> "
    "{motion-blur-length}"
)


class _UsageParser(argparse.ArgumentParser):
    """Report argparse failures as UsageError instead of exiting."""

    def error(self, message):
        raise UsageError(message)


def build_parser() -> argparse.ArgumentParser:
    parser = _UsageParser(
        prog="ppm-edit",
        usage=USAGE,
        description="Apply a pixel filter to a plain-text (P3) PPM image.",
    )
    parser.add_argument("in_file", help="P3 image to read")
    parser.add_argument("out_file", help="where to write the filtered image")
    parser.add_argument("filter", help="grayscale, greyscale, invert, emboss or motionblur")
    parser.add_argument("filter_args", nargs="*", help="motion blur length (motionblur only)")
    return parser


def _configure_logging() -> None:
    logging.basicConfig(
        level=os.getenv("PPM_EDITOR_LOG_LEVEL", "WARNING").upper(),
        format='%(asctime)s - %(name)-25s - %(levelname)-8s - %(message)s',
        datefmt='%H:%M:%S'
    )


def main(argv: Optional[List[str]] = None) -> int:
    _configure_logging()
    parser = build_parser()

    try:
        args = parser.parse_args(argv)
        image_filter = ImageFilter.from_args(args.filter, args.filter_args)
    except UsageError as err:
        parser.print_usage(sys.stderr)
        print(f"{parser.prog}: {err}", file=sys.stderr)
        return 2

    try:
        edit_image(args.in_file, args.out_file, image_filter)
    except (ImageEditorError, OSError) as err:
        logger.error(f"Failed to edit {args.in_file}: {err}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
