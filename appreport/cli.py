#!/usr/bin/env python3
"""
appreport - command line entry point.

Usage:
    # Render a report from exported report data
    appreport generate report.json --output reports/october.pdf

    # Read a previous report back and prepare next month's data
    appreport parse reports/october.pdf --output november.json

    # Read it back exactly as rendered
    appreport parse reports/october.pdf --no-rollover

    # Alternative settings file / single overrides
    appreport --config my_settings.yaml --set snapshot.enabled=false generate report.json
"""
from __future__ import annotations

import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional, Sequence

from appreport.core.config import load_settings
from appreport.models.codec import dumps_config, export_config, import_config
from appreport.pdf_report_builder import write_pdf
from appreport.pipeline.report_parser import parse_report

LOG_FORMAT = "[%(levelname)s] %(message)s"

LOGGER = logging.getLogger(__name__)


# ============================================================================
# COMMANDS
# ============================================================================
def generate_command(args, settings) -> int:
    config = import_config(args.config_file)
    output = args.output or Path(args.config_file).with_suffix(".pdf")

    print()
    print("=" * 80)
    print("  PDF REPORT GENERATION")
    print("=" * 80)
    print(f"  Company:      {config.company_name}")
    print(f"  Report date:  {config.formatted_report_date() or '-'}")
    print(f"  Output:       {output}")
    print(f"  Timestamp:    {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
    print("=" * 80)
    print()

    pdf_path = write_pdf(config, output, settings=settings)
    print(f"  [OK] {pdf_path} ({pdf_path.stat().st_size / 1024:.1f} KB)")
    return 0


def parse_command(args, settings) -> int:
    pdf_path = Path(args.pdf_file)
    size_mb = pdf_path.stat().st_size / (1024 * 1024)
    if size_mb > settings.max_pdf_size_mb:
        LOGGER.error("[FAIL] %s is %.1f MB; the limit is %d MB",
                     pdf_path, size_mb, settings.max_pdf_size_mb)
        return 1

    config = parse_report(pdf_path.read_bytes(), rollover=not args.no_rollover,
                          settings=settings)

    if args.output:
        export_config(config, args.output)
        print(f"  [OK] {args.output}")
    else:
        print(dumps_config(config, indent=2))
    return 0


# ============================================================================
# COMMAND LINE INTERFACE
# ============================================================================
def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="appreport",
        description="Generate mobile app performance PDF reports and read them back",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--verbose", "-v",
        help="Enable verbose logging (DEBUG level)",
        action="store_true",
    )
    parser.add_argument(
        "--config",
        dest="config_path",
        help="Settings YAML (default: bundled defaults.yaml)",
        metavar="PATH",
    )
    parser.add_argument(
        "--set",
        dest="set_values",
        action="append",
        default=[],
        help="Override one setting, e.g. --set snapshot.enabled=false (repeatable)",
        metavar="KEY=VALUE",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    generate = commands.add_parser("generate", help="Render a PDF from a report data file")
    generate.add_argument("config_file", help="Report data JSON", metavar="REPORT_JSON")
    generate.add_argument("--output", "-o", type=Path, default=None, metavar="PATH",
                          help="Output PDF (default: next to the data file)")
    generate.set_defaults(handler=generate_command)

    parse = commands.add_parser("parse", help="Recover report data from a generated PDF")
    parse.add_argument("pdf_file", help="Previously generated report", metavar="REPORT_PDF")
    parse.add_argument("--output", "-o", type=Path, default=None, metavar="PATH",
                       help="Write the recovered data here instead of printing it")
    parse.add_argument("--no-rollover", action="store_true",
                       help="Keep the report's own period instead of preparing the next one")
    parse.set_defaults(handler=parse_command)

    return parser


def _settings_args(args) -> list:
    cli_args = []
    if args.config_path:
        cli_args += ["--config", args.config_path]
    for item in args.set_values:
        cli_args += ["--set", item]
    return cli_args


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    log_level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(level=log_level, format=LOG_FORMAT)

    try:
        settings = load_settings(cli_args=_settings_args(args), reload=True)
        return args.handler(args, settings)
    except FileNotFoundError as e:
        LOGGER.error("[FAIL] File not found: %s", e)
        return 1
    except (OSError, ValueError, TypeError) as e:
        LOGGER.error("[FAIL] %s", e)
        if args.verbose:
            import traceback
            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
