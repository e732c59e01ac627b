"""
Pydantic models for passport data: a closed field catalog and typed values.

The catalog is fixed at design time. Whether a key holds a number or a
string is decided by the key itself, once, when a line is parsed; nothing
downstream has to guess.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from .exceptions import UnknownKeyError, UnparsableIntegerError

U32_MAX = 2**32 - 1

_UNSIGNED_INT = re.compile(r"\+?[0-9]+")


# ─── Field Key Catalog ──────────────────────────────────────────────


class FieldKey(str, Enum):
    """The eight recognised passport keys."""

    BYR = "byr"  # Birth Year
    EYR = "eyr"  # Expiration Year
    IYR = "iyr"  # Issue Year
    ECL = "ecl"  # Eye Color
    HCL = "hcl"  # Hair Color
    HGT = "hgt"  # Height
    PID = "pid"  # Passport ID
    CID = "cid"  # Country ID (optional)


NUMERIC_KEYS: frozenset[FieldKey] = frozenset({FieldKey.BYR, FieldKey.EYR, FieldKey.IYR})

TEXT_KEYS: frozenset[FieldKey] = frozenset({
    FieldKey.ECL, FieldKey.HCL, FieldKey.HGT, FieldKey.PID, FieldKey.CID,
})

# Catalog order; validators report in this order.
REQUIRED_KEYS: tuple[FieldKey, ...] = (
    FieldKey.BYR,
    FieldKey.EYR,
    FieldKey.IYR,
    FieldKey.ECL,
    FieldKey.HCL,
    FieldKey.HGT,
    FieldKey.PID,
)


# ─── Field Values ───────────────────────────────────────────────────


class NumericValue(BaseModel):
    """A year-style field: byr, eyr, iyr."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["numeric"] = "numeric"
    value: int = Field(ge=0, le=U32_MAX)

    def __str__(self) -> str:
        return str(self.value)


class TextValue(BaseModel):
    """A verbatim string field: ecl, hcl, hgt, pid, cid."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["text"] = "text"
    value: str

    def __str__(self) -> str:
        return self.value


FieldValue = Annotated[Union[NumericValue, TextValue], Field(discriminator="kind")]


def parse_unsigned(text: str) -> int:
    """Parse an unsigned 32-bit integer, raising UnparsableIntegerError."""
    if not _UNSIGNED_INT.fullmatch(text):
        raise UnparsableIntegerError(text)
    value = int(text)
    if value > U32_MAX:
        raise UnparsableIntegerError(text)
    return value


def parse_field_value(key: str, text: str) -> tuple[FieldKey, NumericValue | TextValue]:
    """Resolve a raw key against the catalog and type its value.

    Raises:
        UnknownKeyError: key is not in the catalog.
        UnparsableIntegerError: numeric key with non-integer text.
    """
    try:
        field_key = FieldKey(key)
    except ValueError:
        raise UnknownKeyError(key) from None

    if field_key in NUMERIC_KEYS:
        return field_key, NumericValue(value=parse_unsigned(text))
    return field_key, TextValue(value=text)


def tokenize_line(line: str) -> list[tuple[str, str]]:
    """Split a line into (key, value_text) pairs.

    Tokens are separated by runs of whitespace; each token splits on its
    first colon. A token without a colon yields an empty value.
    """
    pairs: list[tuple[str, str]] = []
    for token in line.split():
        key, _, value = token.partition(":")
        pairs.append((key, value))
    return pairs


# ─── Violations ─────────────────────────────────────────────────────


class ViolationKind(str, Enum):
    """Category of a validation violation."""

    MISSING_FIELD = "MISSING_FIELD"
    OUT_OF_RANGE = "OUT_OF_RANGE"
    INVALID_FORMAT = "INVALID_FORMAT"


class Violation(BaseModel):
    """A single validation finding for one passport field."""

    model_config = ConfigDict(frozen=True)

    kind: ViolationKind
    field: FieldKey
    value: Optional[str] = None  # Observed value text; None when missing
    message: str

    @classmethod
    def missing(cls, key: FieldKey) -> Violation:
        return cls(
            kind=ViolationKind.MISSING_FIELD,
            field=key,
            message=f"Required field '{key.value}' is missing",
        )

    @classmethod
    def out_of_range(cls, key: FieldKey, value: str) -> Violation:
        return cls(
            kind=ViolationKind.OUT_OF_RANGE,
            field=key,
            value=value,
            message=f"Field '{key.value}' value '{value}' is out of range",
        )

    @classmethod
    def invalid_format(cls, key: FieldKey, value: str) -> Violation:
        return cls(
            kind=ViolationKind.INVALID_FORMAT,
            field=key,
            value=value,
            message=f"Field '{key.value}' value '{value}' has an invalid format",
        )


class ValidationMode(str, Enum):
    """Which validator a batch runs through."""

    SIMPLIFIED = "simplified"  # Presence of required keys only
    FULL = "full"  # Presence + per-field format/range


# ─── Passport Record ────────────────────────────────────────────────


class Passport(BaseModel):
    """One passport record: a closed-catalog map of typed field values.

    Identity is the field contents. `process` never mutates the receiver;
    it returns an updated copy or raises a PassportProcessError.
    """

    model_config = ConfigDict(frozen=True)

    fields: dict[FieldKey, FieldValue] = Field(default_factory=dict)

    @classmethod
    def from_line(cls, line: str) -> Passport:
        """Build a passport from a single line of key:value tokens."""
        return cls().process(line)

    def process(self, line: str) -> Passport:
        """Fold one line of key:value tokens into this record.

        A repeated key overwrites the earlier value.

        Raises:
            UnknownKeyError, UnparsableIntegerError
        """
        fields = dict(self.fields)
        for key, text in tokenize_line(line):
            field_key, value = parse_field_value(key, text)
            fields[field_key] = value
        return Passport(fields=fields)

    def get(self, key: FieldKey | str) -> NumericValue | TextValue | None:
        return self.fields.get(FieldKey(key))

    def __contains__(self, key: object) -> bool:
        # Coerce plain strings through the catalog; unknown keys are never present.
        try:
            return FieldKey(key) in self.fields
        except ValueError:
            return False

    def __len__(self) -> int:
        return len(self.fields)

    def __hash__(self) -> int:
        return hash(frozenset(self.fields.items()))

    def to_raw(self) -> dict[str, str]:
        """Field values as plain strings, keyed by catalog name."""
        return {key.value: str(value) for key, value in self.fields.items()}

    def validate_simplified(self) -> list[Violation]:
        """Presence-only check; empty list means valid."""
        from .validators import validate_presence

        return validate_presence(self)

    def validate_full(self) -> list[Violation]:
        """Presence plus format/range checks; empty list means valid."""
        from .validators import validate_full

        return validate_full(self)

    def check(self, mode: ValidationMode = ValidationMode.FULL) -> list[Violation]:
        if ValidationMode(mode) is ValidationMode.SIMPLIFIED:
            return self.validate_simplified()
        return self.validate_full()

    def is_valid(self, mode: ValidationMode = ValidationMode.FULL) -> bool:
        return not self.check(mode)


# ─── Reports ────────────────────────────────────────────────────────


class PassportReport(BaseModel):
    """Validation verdict for one passport in a batch."""

    index: int  # 0-based position in the batch
    is_valid: bool
    violations: list[Violation] = Field(default_factory=list)
    fields: dict[str, str] = Field(default_factory=dict)


class BatchReport(BaseModel):
    """The final output of the batch pipeline."""

    mode: ValidationMode
    total: int
    valid_count: int
    invalid_count: int
    passports: list[PassportReport] = Field(default_factory=list)
    source_hash: str = ""  # SHA-256 of the input text when available
