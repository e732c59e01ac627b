"""
Deterministic validation engine for passport records.

Two modes:
  - validate_presence(): required keys present, nothing else.
  - validate_full(): presence plus per-field format/range rules.

Each per-field validator:
  - Takes the field key and the stored value (never None)
  - Returns a list of Violation objects (empty = all clear)
  - Is independently testable

Neither mode stops at the first problem; every violation is collected.
Patterns are compiled once at import and shared read-only.
"""

from __future__ import annotations

import re
from typing import Callable, Union

from .models import (
    REQUIRED_KEYS,
    U32_MAX,
    FieldKey,
    NumericValue,
    Passport,
    TextValue,
    Violation,
)

FieldValidator = Callable[[FieldKey, Union[NumericValue, TextValue]], list[Violation]]


# ─── Constants ───────────────────────────────────────────────────────

BIRTH_YEAR_RANGE = (1920, 2002)
ISSUE_YEAR_RANGE = (2010, 2020)
EXPIRATION_YEAR_RANGE = (2020, 2030)

HEIGHT_RANGES: dict[str, tuple[int, int]] = {
    "cm": (150, 193),
    "in": (59, 76),
}

VALID_EYE_COLORS: frozenset[str] = frozenset({
    "amb", "blu", "brn", "gry", "grn", "hzl", "oth",
})

HEIGHT_PATTERN = re.compile(r"(\d+)(\D+)", re.ASCII)
HAIR_COLOR_PATTERN = re.compile(r"#[0-9a-f]{6}")
PASSPORT_ID_PATTERN = re.compile(r"[0-9]{9}")


# ─── Orchestrators ───────────────────────────────────────────────────


def validate_presence(passport: Passport) -> list[Violation]:
    """Report every required key that is absent, in catalog order."""
    return [Violation.missing(key) for key in REQUIRED_KEYS if key not in passport]


def validate_full(passport: Passport) -> list[Violation]:
    """Run presence and format/range checks for every required key."""
    violations: list[Violation] = []
    for key in REQUIRED_KEYS:
        value = passport.get(key)
        if value is None:
            violations.append(Violation.missing(key))
            continue
        violations.extend(FIELD_VALIDATORS[key](key, value))
    return violations


# ─── Individual Validators ───────────────────────────────────────────


def _year_in_range(bounds: tuple[int, int]) -> FieldValidator:
    low, high = bounds

    def check(key: FieldKey, value: NumericValue | TextValue) -> list[Violation]:
        if not isinstance(value, NumericValue):
            return [Violation.invalid_format(key, str(value))]
        if not low <= value.value <= high:
            return [Violation.out_of_range(key, str(value.value))]
        return []

    return check


validate_birth_year = _year_in_range(BIRTH_YEAR_RANGE)
validate_issue_year = _year_in_range(ISSUE_YEAR_RANGE)
validate_expiration_year = _year_in_range(EXPIRATION_YEAR_RANGE)


def validate_height(key: FieldKey, value: NumericValue | TextValue) -> list[Violation]:
    """Height is <digits><unit>, unit cm or in, each unit with its own range.

    An unknown unit is a format problem only: no range applies to it, so it
    never produces a second violation. A measure too large for an unsigned
    32-bit integer is a format problem too.
    """
    if not isinstance(value, TextValue):
        return [Violation.invalid_format(key, str(value))]

    match = HEIGHT_PATTERN.fullmatch(value.value)
    if match is None:
        return [Violation.invalid_format(key, value.value)]

    measure, unit = int(match.group(1)), match.group(2)
    bounds = HEIGHT_RANGES.get(unit)
    if bounds is None or measure > U32_MAX:
        return [Violation.invalid_format(key, value.value)]

    low, high = bounds
    if not low <= measure <= high:
        return [Violation.out_of_range(key, value.value)]
    return []


def _text_matches(predicate: Callable[[str], bool]) -> FieldValidator:
    def check(key: FieldKey, value: NumericValue | TextValue) -> list[Violation]:
        if not isinstance(value, TextValue) or not predicate(value.value):
            return [Violation.invalid_format(key, str(value))]
        return []

    return check


validate_hair_color = _text_matches(lambda text: HAIR_COLOR_PATTERN.fullmatch(text) is not None)
validate_eye_color = _text_matches(lambda text: text in VALID_EYE_COLORS)
validate_passport_id = _text_matches(lambda text: PASSPORT_ID_PATTERN.fullmatch(text) is not None)


FIELD_VALIDATORS: dict[FieldKey, FieldValidator] = {
    FieldKey.BYR: validate_birth_year,
    FieldKey.EYR: validate_expiration_year,
    FieldKey.IYR: validate_issue_year,
    FieldKey.ECL: validate_eye_color,
    FieldKey.HCL: validate_hair_color,
    FieldKey.HGT: validate_height,
    FieldKey.PID: validate_passport_id,
}
