"""
Batch validation pipeline — read a batch, validate each record, report.

Flow:
  ┌───────────┐
  │ Raw lines │
  └─────┬─────┘
        │
  ┌─────▼─────┐
  │  Record   │   ← blank-line grouping, key:value parsing
  │  Builder  │     (any bad line aborts the batch)
  └─────┬─────┘
        │
  ┌─────▼─────┐
  │ Validator │   ← simplified or full, all violations collected
  └─────┬─────┘
        │
  ┌─────▼─────┐
  │  Report   │   ← per-record verdicts + valid count
  └───────────┘
"""

from __future__ import annotations

import hashlib
import logging

from .models import BatchReport, Passport, PassportReport, ValidationMode
from .reader import Source, read_all

logger = logging.getLogger(__name__)


class PassportBatchPipeline:
    """Orchestrates reading and validating a passport batch.

    Usage:
        pipeline = PassportBatchPipeline(ValidationMode.FULL)
        report = pipeline.run("passports.txt")
        print(report.valid_count)
    """

    def __init__(self, mode: ValidationMode | str = ValidationMode.FULL):
        self.mode = ValidationMode(mode)

    def run(self, source: Source) -> BatchReport:
        """Read and validate a batch from a file path or iterable of lines.

        Raises:
            InputReadError, BatchReadError
        """
        passports = read_all(source)
        return self.validate(passports)

    def run_text(self, text: str) -> BatchReport:
        """Read and validate a batch held in memory as one string."""
        source_hash = hashlib.sha256(text.encode("utf-8")).hexdigest()
        passports = read_all(text.split("\n"))
        report = self.validate(passports)
        report.source_hash = source_hash
        return report

    def validate(self, passports: list[Passport]) -> BatchReport:
        """Validate already-built records with the configured mode."""
        logger.info("Validating %d passport(s) in %s mode", len(passports), self.mode.value)

        reports: list[PassportReport] = []
        for index, passport in enumerate(passports):
            violations = passport.check(self.mode)
            if violations:
                logger.debug(
                    "Passport %d rejected: %s",
                    index,
                    ", ".join(f"{v.kind.value}({v.field.value})" for v in violations),
                )
            reports.append(
                PassportReport(
                    index=index,
                    is_valid=not violations,
                    violations=violations,
                    fields=passport.to_raw(),
                )
            )

        valid_count = sum(1 for r in reports if r.is_valid)
        logger.info("%d of %d passport(s) valid", valid_count, len(reports))

        return BatchReport(
            mode=self.mode,
            total=len(reports),
            valid_count=valid_count,
            invalid_count=len(reports) - valid_count,
            passports=reports,
        )
