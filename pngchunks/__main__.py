"""CLI entry point for inspecting chunk type codes.

Usage:
    python -m pngchunks IHDR tEXt
    python -m pngchunks RuSt --format json
    python -m pngchunks 52755374 --hex
    python -m pngchunks 52ff5374 --hex --raw --render-mode escape

Exit status is 0 when every code is accepted, 1 when any is rejected and
2 for usage or configuration errors.
"""

from __future__ import annotations

import argparse
import binascii
import json
import logging
import sys
from dataclasses import replace
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

import yaml

from pngchunks.lib.base import RichEnumMixin
from pngchunks.lib.chunk_type import ChunkType, ChunkTypeReport, RenderMode
from pngchunks.lib.config import ChunkSettings, load_settings
from pngchunks.lib.errors import ChunkTypeError, ConfigurationError
from pngchunks.lib.logging import setup_logging

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_REJECTED = 1
EXIT_USAGE = 2


class ReportFormat(RichEnumMixin, str, Enum):
    """Output format for inspection reports."""

    TEXT = "text"
    JSON = "json"
    YAML = "yaml"


ReportFormat._default = "TEXT"
ReportFormat._aliases = {"yml": "yaml"}


def parse_code(value: str, *, hex_input: bool = False, raw: bool = False) -> ChunkType:
    """Turn one command-line argument into a ChunkType.

    Args:
        value: Code text, or 8 hex digits when hex_input is set
        hex_input: Interpret value as hex-encoded bytes
        raw: Skip letter validation (only meaningful with hex_input)

    Raises:
        ChunkTypeError: If the code is rejected
        ValueError: If hex_input is set and value is not valid hex
    """
    if not hex_input:
        return ChunkType.try_from_text(value)

    try:
        data = binascii.unhexlify(value.strip())
    except (binascii.Error, ValueError) as e:
        raise ValueError(f"Invalid hex chunk type '{value}': {e}") from e

    if raw:
        return ChunkType.from_raw_bytes(data)
    return ChunkType.try_from_bytes(data)


def format_reports(reports: List[ChunkTypeReport], output_format: ReportFormat) -> str:
    """Render reports as a text table, JSON or YAML."""
    if output_format is ReportFormat.JSON:
        return json.dumps([r.to_dict() for r in reports], indent=2)
    if output_format is ReportFormat.YAML:
        return yaml.safe_dump(
            [r.to_dict() for r in reports], sort_keys=False, default_flow_style=False
        ).rstrip("\n")

    header = f"{'code':<8} {'critical':<9} {'public':<7} {'reserved':<9} {'copy':<6} {'valid':<5}"
    lines = [header, "-" * len(header)]
    for r in reports:
        lines.append(
            f"{r.code:<8} {_yes_no(r.critical):<9} {_yes_no(r.public):<7} "
            f"{_yes_no(r.reserved_bit_valid):<9} {_yes_no(r.safe_to_copy):<6} "
            f"{_yes_no(r.valid):<5}"
        )
    return "\n".join(lines)


def _yes_no(flag: bool) -> str:
    return "yes" if flag else "no"


def inspect_codes(
    codes: Sequence[str],
    settings: ChunkSettings,
    *,
    hex_input: bool = False,
    raw: bool = False,
    require_valid: bool = False,
) -> tuple[List[ChunkTypeReport], int]:
    """Build reports for every accepted code; log the rejected ones.

    Returns:
        (reports, number of rejected codes)
    """
    reports: List[ChunkTypeReport] = []
    rejected = 0

    for value in codes:
        try:
            chunk_type = parse_code(value, hex_input=hex_input, raw=raw)
            report = chunk_type.report(settings.render_mode)
        except ChunkTypeError as e:
            rejected += 1
            logger.error(
                "Rejected chunk type %r: %s",
                value,
                e.message,
                extra={"chunk_error": e.to_dict()},
            )
            continue
        except ValueError as e:
            rejected += 1
            logger.error("Rejected chunk type %r: %s", value, e)
            continue

        if require_valid and not report.valid:
            rejected += 1
            logger.error(
                "Rejected chunk type %r: reserved bit is not set (third letter must be uppercase)",
                value,
            )
            continue

        logger.debug("Accepted chunk type %r", report.code)
        reports.append(report)

    return reports, rejected


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pngchunks",
        description="Inspect PNG-style chunk type codes",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Show the property bits of some codes
    python -m pngchunks IHDR tEXt

    # Machine-readable output
    python -m pngchunks RuSt --format json

    # Codes as hex bytes, e.g. copied from a hex dump
    python -m pngchunks 49484452 --hex

    # Inspect a malformed code without rejecting it
    python -m pngchunks 52ff5374 --hex --raw --render-mode escape

Environment:
    CHUNKS_RENDER_MODE, CHUNKS_VERBOSE, CHUNKS_LOG_JSON, CHUNKS_LOG_FILE
        """,
    )

    parser.add_argument(
        "codes",
        nargs="+",
        help="Chunk type codes (4 ASCII letters, or 8 hex digits with --hex)",
    )
    parser.add_argument(
        "--hex",
        dest="hex_input",
        action="store_true",
        help="Read codes as hex-encoded bytes",
    )
    parser.add_argument(
        "--raw",
        action="store_true",
        help="With --hex, accept any 4 bytes without letter validation",
    )
    parser.add_argument(
        "--require-valid",
        action="store_true",
        help="Also reject codes whose reserved bit is not set",
    )
    parser.add_argument(
        "--format",
        dest="output_format",
        default=None,
        help=f"Output format ({', '.join(ReportFormat.choices())})",
    )
    parser.add_argument(
        "--render-mode",
        default=None,
        help=f"How to render non-ASCII bytes ({', '.join(RenderMode.choices())})",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=None,
        help="Enable debug logging",
    )
    parser.add_argument(
        "--json-logs",
        action="store_true",
        default=None,
        help="Emit logs as JSON",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Also write logs to this file",
    )
    parser.add_argument(
        "--env-file",
        default=None,
        help="Load CHUNKS_* settings from a .env file",
    )
    return parser


def resolve_settings(args: argparse.Namespace) -> ChunkSettings:
    """Merge command-line overrides onto environment settings."""
    settings = load_settings(args.env_file)
    overrides: Dict[str, Any] = {}

    if args.render_mode is not None:
        try:
            overrides["render_mode"] = RenderMode.normalize(args.render_mode)
        except ValueError as e:
            raise ConfigurationError(str(e), field="--render-mode", value=args.render_mode) from e
    if args.verbose is not None:
        overrides["verbose"] = args.verbose
    if args.json_logs is not None:
        overrides["json_logs"] = args.json_logs
    if args.log_file is not None:
        overrides["log_file"] = args.log_file

    if not overrides:
        return settings
    return replace(settings, **overrides)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.raw and not args.hex_input:
        parser.error("--raw requires --hex")

    try:
        output_format = ReportFormat.normalize(args.output_format)
        settings = resolve_settings(args)
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_USAGE
    except ValueError as e:
        parser.error(str(e))

    try:
        setup_logging(
            verbose=settings.verbose,
            json_format=settings.json_logs,
            log_file=settings.log_file,
        )
    except OSError as e:
        print(f"Error: Cannot open log file {settings.log_file}: {e}", file=sys.stderr)
        return EXIT_USAGE

    reports, rejected = inspect_codes(
        args.codes,
        settings,
        hex_input=args.hex_input,
        raw=args.raw,
        require_valid=args.require_valid,
    )

    if reports:
        print(format_reports(reports, output_format))  # type: ignore[arg-type]

    if rejected:
        logger.info("%d of %d chunk type(s) rejected", rejected, len(args.codes))
        return EXIT_REJECTED
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
