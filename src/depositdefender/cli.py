"""
Deposit Defender CLI: Analyze Tool

Run the case strength engine on an intake JSON file and print the
report and its validation result.

Usage:
    depositdefender-analyze intake.json
    depositdefender-analyze intake.json --today 2024-03-15
    depositdefender-analyze intake.json --lease lease.txt --compact
"""
from __future__ import annotations

import argparse
import json
import sys
from datetime import date
from pathlib import Path
from typing import Optional, Sequence

from .canon import canonical_json, pretty_json
from .config import DD_LOG_LEVEL
from .engine import CaseAnalyzer, FixedClock, SystemClock
from .exceptions import DepositDefenderError
from .logsetup import configure_logging
from .models import IntakeRecord


def load_json(file_path: Path) -> dict:
    """Load JSON file."""
    with open(file_path, encoding="utf-8") as f:
        return json.load(f)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="depositdefender-analyze",
        description="Score a Texas security deposit dispute and print the case analysis report",
    )
    parser.add_argument("intake", type=Path, help="Path to intake JSON file")
    parser.add_argument(
        "--today",
        help="Analyze as of this date (YYYY-MM-DD) instead of the current date",
    )
    parser.add_argument(
        "--lease",
        type=Path,
        help="Path to a plain-text lease document",
    )
    parser.add_argument(
        "--compact",
        action="store_true",
        help="Print canonical (compact, sorted) JSON",
    )
    parser.add_argument(
        "--log-level",
        default=DD_LOG_LEVEL,
        help="Log level for stderr output (default: %(default)s)",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)

    clock = SystemClock()
    if args.today:
        try:
            clock = FixedClock(date.fromisoformat(args.today))
        except ValueError:
            print(f"ERROR: --today must be YYYY-MM-DD, got {args.today!r}", file=sys.stderr)
            return 1

    try:
        payload = load_json(args.intake)
        lease_text = args.lease.read_text(encoding="utf-8") if args.lease else None
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        print(f"ERROR: Could not read input: {e}", file=sys.stderr)
        return 1

    try:
        intake = IntakeRecord.from_dict(payload, lease_text=lease_text)
        result = CaseAnalyzer(clock=clock).analyze(intake)
    except DepositDefenderError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    output = result.to_dict()
    print(canonical_json(output) if args.compact else pretty_json(output))
    return 0


if __name__ == "__main__":
    sys.exit(main())
