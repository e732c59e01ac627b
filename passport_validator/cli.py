"""
Passport Validator — Command Line
==================================

Reads a passport batch, validates every record and prints a report.

Usage:
    passport-validator passports.txt                    # Full validation
    passport-validator passports.txt --mode simplified  # Required keys only
    cat passports.txt | python -m passport_validator -  # Read from stdin
"""

from __future__ import annotations

import argparse
import logging
import sys

from . import __version__
from .config import Settings
from .exceptions import PassportError
from .models import BatchReport, ValidationMode
from .pipeline import PassportBatchPipeline


# ─── ANSI Color Constants ───────────────────────────────────────────

_RED = "\033[91m"
_GREEN = "\033[92m"
_CYAN = "\033[96m"
_DIM = "\033[2m"
_BOLD = "\033[1m"
_RESET = "\033[0m"
_WIDTH = 72


# ─── Pretty Printer ─────────────────────────────────────────────────


def print_report(report: BatchReport, verbose: bool = False) -> None:
    """Pretty-print the batch report with ANSI color codes.

    Only rejected passports are listed unless ``verbose`` is set.
    """
    print(f"\n{'=' * _WIDTH}")
    print(f"{_BOLD}{_CYAN}  PASSPORT BATCH REPORT{_RESET}")
    print(f"{'=' * _WIDTH}")
    print(f"  Mode:        {report.mode.value}")
    print(f"  Passports:   {report.total}")
    if report.source_hash:
        print(f"  Audit Hash:  {_DIM}{report.source_hash[:16]}...{_RESET}")
    print(f"{'─' * _WIDTH}")

    for entry in report.passports:
        if entry.is_valid:
            if verbose:
                print(f"  {_GREEN}#{entry.index:<4} OK{_RESET}")
            continue
        print(f"  {_RED}#{entry.index:<4} REJECTED ({len(entry.violations)}){_RESET}")
        for v in entry.violations:
            print(f"      [{v.kind.value}] {v.message}")
        if verbose:
            fields = " ".join(f"{k}:{val}" for k, val in entry.fields.items())
            print(f"      {_DIM}{fields}{_RESET}")

    print(f"{'=' * _WIDTH}")
    print(f"  {_BOLD}VALID: {report.valid_count}{_RESET}   INVALID: {report.invalid_count}")
    print(f"{'=' * _WIDTH}\n")


# ─── Main ────────────────────────────────────────────────────────────


def _parse_args(argv: list[str] | None, settings: Settings) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="passport-validator",
        description="Parse and validate a batch of passport records.",
    )
    p.add_argument("path", nargs="?", default="-", help="Input file path or '-' for stdin")
    p.add_argument(
        "--mode",
        choices=[m.value for m in ValidationMode],
        default=settings.validation_mode.value,
        help="Validation mode (default from PASSPORT_VALIDATION_MODE, else full)",
    )
    p.add_argument("-v", "--verbose", action="store_true", help="List valid passports too")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return p.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Run the batch pipeline and print the report.

    Returns:
        0 if the batch was read, 1 if reading failed.
    """
    settings = Settings.from_env()
    args = _parse_args(argv, settings)
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    pipeline = PassportBatchPipeline(args.mode)
    try:
        if args.path == "-":
            report = pipeline.run_text(sys.stdin.read())
        else:
            report = pipeline.run(args.path)
    except PassportError as exc:
        sys.stderr.write(f"error: [{exc.code}] {exc.message}\n")
        return 1

    print_report(report, verbose=args.verbose)
    return 0


if __name__ == "__main__":
    sys.exit(main())
