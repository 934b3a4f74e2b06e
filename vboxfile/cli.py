"""Command-line converter from telemetry CSV exports to VBOX files."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Optional, Sequence

from vboxfile.errors import VboxError
from vboxfile.services.csv_import import import_csv
from vboxfile.services.writer import DEFAULT_ENCODING, save_document


logger = logging.getLogger("vboxfile.cli")

LOG_LEVEL_ENV = "VBOX_LOG_LEVEL"
NEWLINE_ENV = "VBOX_NEWLINE"

NEWLINES = {"lf": "\n", "crlf": "\r\n"}


def _default_newline() -> str:
    name = os.getenv(NEWLINE_ENV, "lf").strip().lower()
    if name not in NEWLINES:
        raise ValueError(f"{NEWLINE_ENV} must be one of {sorted(NEWLINES)}, got '{name}'")
    return name


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vbox-convert",
        description="Convert a telemetry CSV export into a VBOX file",
    )
    parser.add_argument("input", type=Path, help="CSV file to convert")
    parser.add_argument(
        "--output", "-o",
        type=Path,
        default=None,
        help="Output file (default: input file with .vbo suffix)",
    )
    parser.add_argument("--comment", "-c", default=None, help="Text for the [comments] section")
    parser.add_argument(
        "--newline",
        choices=sorted(NEWLINES),
        default=None,
        help=f"Line ending (default: ${NEWLINE_ENV} or lf)",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Reject rows that do not match the channel count",
    )
    parser.add_argument(
        "--log-level",
        default=os.getenv(LOG_LEVEL_ENV, "INFO"),
        help=f"Logging level (default: ${LOG_LEVEL_ENV} or INFO)",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=str(args.log_level).upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    output = args.output or args.input.with_suffix(".vbo")

    try:
        newline = NEWLINES[args.newline or _default_newline()]
        document = import_csv(args.input, comment=args.comment, strict=args.strict)
        save_document(document, output, newline=newline, encoding=DEFAULT_ENCODING)
    except (VboxError, ValueError, OSError) as e:
        logger.error(f"Conversion failed for {args.input}: {e}")
        return 1

    logger.info(f"Wrote {output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
