"""
Record Builder — groups raw lines into passport records.

Records are runs of non-blank lines separated by one or more blank lines.
A two-state machine walks the input:

    EMPTY ──non-blank──▶ IN_RECORD ──blank──▶ EMPTY (record emitted)
                           │  ▲
                           └──┘ non-blank (tokens folded into the record)

End of input while IN_RECORD emits the pending record, so a trailing blank
line is optional. Any parse error aborts the whole batch: there is no
best-effort partial result.
"""

from __future__ import annotations

import logging
import os
from enum import Enum
from pathlib import Path
from typing import Iterable, Union

from .exceptions import BatchReadError, InputReadError, PassportProcessError
from .models import Passport

logger = logging.getLogger(__name__)

Source = Union[str, os.PathLike, Iterable[str]]


class ReadState(str, Enum):
    """Whether a record is currently being accumulated."""

    EMPTY = "EMPTY"
    IN_RECORD = "IN_RECORD"


def build_passports(lines: Iterable[str]) -> list[Passport]:
    """Group lines into records and parse each line's tokens.

    Raises:
        UnknownKeyError, UnparsableIntegerError: the first bad line, with its
            1-based ``line_number`` added to ``details``.
    """
    state = ReadState.EMPTY
    passports: list[Passport] = []
    passport = Passport()

    for line_number, line in enumerate(lines, start=1):
        trimmed = line.strip()

        if not trimmed:
            if state is ReadState.IN_RECORD:
                passports.append(passport)
                logger.debug("Closed record %d at line %d", len(passports), line_number)
            state = ReadState.EMPTY
            continue

        try:
            if state is ReadState.EMPTY:
                passport = Passport.from_line(trimmed)
            else:
                passport = passport.process(trimmed)
        except PassportProcessError as exc:
            exc.details["line_number"] = line_number
            raise
        state = ReadState.IN_RECORD

    if state is ReadState.IN_RECORD:
        passports.append(passport)

    return passports


def read_lines(path: str | os.PathLike[str]) -> list[str]:
    """Read a whole file into memory as a list of lines.

    Raises:
        InputReadError: the file is missing, unreadable, or not UTF-8.
    """
    try:
        contents = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise InputReadError(
            f"File cannot be read: {path}",
            details={"path": str(path), "reason": str(exc)},
        ) from exc
    return contents.split("\n")


def read_all(source: Source) -> list[Passport]:
    """Read every passport record from a file path or an iterable of lines.

    Returns:
        All completed records in input order (empty for empty input).

    Raises:
        InputReadError: the source file could not be read.
        BatchReadError: a line failed to parse; the structured
            PassportProcessError is chained as ``__cause__``.
    """
    if isinstance(source, (str, os.PathLike)):
        logger.info("Reading passport batch from %s", source)
        lines: Iterable[str] = read_lines(source)
    else:
        lines = source

    try:
        passports = build_passports(lines)
    except PassportProcessError as exc:
        logger.warning("Passport batch read failed: %s", exc.message)
        raise BatchReadError(
            "passport process error",
            details={"cause": exc.code, **exc.details},
        ) from exc

    logger.info("Read %d passport record(s)", len(passports))
    return passports
