"""
Custom exception hierarchy for passport batch processing.

Parse failures are exceptions: a single bad line aborts the whole batch.
Validation findings are NOT exceptions: they are plain `Violation` models
collected in full by the validators.
"""

from __future__ import annotations


class PassportError(Exception):
    """Base exception for all passport processing failures."""

    def __init__(self, code: str, message: str, details: dict | None = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)


# ─── Parse-time errors (raised by the Record Builder) ───────────────


class PassportProcessError(PassportError):
    """A line could not be folded into the current passport record."""


class UnknownKeyError(PassportProcessError):
    """A key outside the fixed field catalog appeared in the input."""

    def __init__(self, key: str, details: dict | None = None):
        self.key = key
        super().__init__(
            "UNKNOWN_KEY",
            f"Unknown field key '{key}'",
            {"key": key, **(details or {})},
        )


class UnparsableIntegerError(PassportProcessError):
    """A numeric-valued key carried text that is not an unsigned integer."""

    def __init__(self, text: str, details: dict | None = None):
        self.text = text
        super().__init__(
            "UNPARSABLE_INTEGER",
            f"Cannot parse '{text}' as a non-negative integer",
            {"text": text, **(details or {})},
        )


# ─── Boundary errors (raised by read_all) ───────────────────────────


class BatchReadError(PassportError):
    """The batch could not be read; the structured cause is chained."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__("BATCH_READ_FAILED", message, details)


class InputReadError(PassportError):
    """The input source itself (file, stream) could not be read."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__("INPUT_UNREADABLE", message, details)
