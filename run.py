#!/usr/bin/env python3
"""
Invoice PDF extraction - CLI entry point.

Usage:
  python run.py                                  # Process ./invoices, write ./invoice_data.csv
  python run.py --input Invoices --output out/invoices.csv
  python run.py --model gpt-4o-mini --max-attempts 3
  python run.py --parallel 4                     # Extract 4 PDFs at a time

Install with `pip install -e .` first. Set OPENAI_API_KEY (or OPENROUTER_API_KEY) in the environment or a .env file.
The CSV has no header row; columns are fileName followed by the invoice fields.
"""
from __future__ import annotations

import argparse
import logging
import sys

from invoice_extractor.config import load_settings
from invoice_extractor.errors import ConfigurationError, DocumentParseError
from invoice_extractor.pipeline import run_from_settings


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Extract invoice fields from PDFs with an LLM and write them to a CSV file."
    )
    parser.add_argument(
        "--input",
        "-i",
        type=str,
        default=None,
        help="Directory containing PDF invoices (default: $INVOICE_DIR or ./invoices)",
    )
    parser.add_argument(
        "--output",
        "-o",
        type=str,
        default=None,
        help="CSV file to write (default: $OUTPUT_PATH or ./invoice_data.csv)",
    )
    parser.add_argument("--model", type=str, default=None, help="Model name (default: $OPENAI_MODEL)")
    parser.add_argument(
        "--max-attempts",
        type=int,
        default=None,
        help="Extraction attempts per invoice before it is skipped (default: 8)",
    )
    parser.add_argument(
        "--parallel",
        "-j",
        type=int,
        default=None,
        metavar="N",
        help="Extract N invoices concurrently (default: 1)",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        settings = load_settings(
            input_dir=args.input,
            output_path=args.output,
            model=args.model,
            max_attempts=args.max_attempts,
            max_workers=args.parallel,
        )
        report = run_from_settings(settings)
    except (ConfigurationError, DocumentParseError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"Extracted {len(report.batch)} of {len(report.outcomes)} invoice(s). CSV: {report.output_path.absolute()}")
    for outcome in report.failed:
        print(f"  - {outcome.identifier}: {outcome.error}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
