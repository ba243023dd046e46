"""
Field validation rules.

Every validator here is total: it returns an empty string when the value is
acceptable and a human-readable message otherwise, and never raises. The
``*_violation`` variants return the typed ``Violation`` for callers that need
to branch on the kind. Checks run in a fixed order and stop at the first
failure.
"""

import math
import re
from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any

from src.core.entities.inventory import MAX_QUANTITY, Unit
from src.core.exceptions import ValidationError


class Violation(str, Enum):
    """Kinds of field rule violations."""

    REQUIRED = "required"
    TOO_SHORT = "too_short"
    TOO_LONG = "too_long"
    INVALID_CHARACTERS = "invalid_characters"
    NOT_A_NUMBER = "not_a_number"
    NEGATIVE = "negative"
    TOO_SMALL = "too_small"
    TOO_LARGE = "too_large"
    NOT_INTEGER = "not_integer"
    INVALID_UNIT = "invalid_unit"


@dataclass(frozen=True)
class TextRule:
    """Length bounds and an optional whole-value character pattern."""

    min_len: int = 1
    max_len: int | None = None
    pattern: re.Pattern[str] | None = None


# Person, company and warehouse names
NAME_RULE = TextRule(2, 50, re.compile(r"[a-zA-Z0-9\s\-'&,.]+"))
# Cities and countries
PLACE_RULE = TextRule(2, 50, re.compile(r"[a-zA-Z\s\-']+"))
ADDRESS_RULE = TextRule(5, 100)
SKU_RULE = TextRule(1, 64)
RECORD_NAME_RULE = TextRule(1, 255)

SESSION_TIMEOUT_RANGE = (1, 1440)  # minutes
PASSWORD_EXPIRY_RANGE = (1, 365)  # days


def _as_number(value: Any) -> int | float | None:
    """Coerce a numeric-looking value, or None if it is not a number."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, (float, Decimal)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    if math.isnan(number):
        return None
    return number


def _is_whole(number: int | float) -> bool:
    return isinstance(number, int) or float(number).is_integer()


# Numbers


def quantity_violation(value: Any) -> Violation | None:
    """Classify a quantity-like value (stock counts, thresholds)."""
    number = _as_number(value)
    if number is None:
        return Violation.NOT_A_NUMBER
    if number < 0:
        return Violation.NEGATIVE
    if number > MAX_QUANTITY:
        return Violation.TOO_LARGE
    if not _is_whole(number):
        return Violation.NOT_INTEGER
    return None


_QUANTITY_MESSAGES = {
    Violation.NOT_A_NUMBER: "Must be a valid number",
    Violation.NEGATIVE: "Must be a positive number",
    Violation.TOO_LARGE: "Value is too large",
    Violation.NOT_INTEGER: "Must be a whole number",
}


def validate_quantity_like(value: Any) -> str:
    """Check a non-negative 32-bit whole number."""
    violation = quantity_violation(value)
    return _QUANTITY_MESSAGES[violation] if violation else ""


def as_whole_number(value: Any) -> int:
    """Convert a value that passed validate_quantity_like to int."""
    number = _as_number(value)
    if number is None:
        raise ValueError(f"not a number: {value!r}")
    return int(number)


def int_range_violation(value: Any, minimum: int, maximum: int) -> Violation | None:
    """Classify a configuration-style integer against caller bounds."""
    number = _as_number(value)
    if number is None:
        return Violation.NOT_A_NUMBER
    if number < minimum:
        return Violation.TOO_SMALL
    if number > maximum:
        return Violation.TOO_LARGE
    if not _is_whole(number):
        return Violation.NOT_INTEGER
    return None


def validate_int_range(value: Any, minimum: int, maximum: int) -> str:
    violation = int_range_violation(value, minimum, maximum)
    if violation is None:
        return ""
    if violation is Violation.TOO_SMALL:
        return f"Must be at least {minimum}"
    if violation is Violation.TOO_LARGE:
        return f"Must be less than {maximum}"
    return _QUANTITY_MESSAGES[violation]


def validate_session_timeout(value: Any) -> str:
    return validate_int_range(value, *SESSION_TIMEOUT_RANGE)


def validate_password_expiry(value: Any) -> str:
    return validate_int_range(value, *PASSWORD_EXPIRY_RANGE)


# Text


def text_violation(
    value: Any,
    min_len: int = 1,
    max_len: int | None = None,
    pattern: re.Pattern[str] | str | None = None,
) -> Violation | None:
    """Classify a required text value."""
    if not isinstance(value, str) or not value.strip():
        return Violation.REQUIRED
    if len(value) < min_len:
        return Violation.TOO_SHORT
    if max_len is not None and len(value) > max_len:
        return Violation.TOO_LONG
    if pattern is not None and re.fullmatch(pattern, value) is None:
        return Violation.INVALID_CHARACTERS
    return None


def validate_required_text(
    value: Any,
    min_len: int = 1,
    max_len: int | None = None,
    pattern: re.Pattern[str] | str | None = None,
) -> str:
    violation = text_violation(value, min_len, max_len, pattern)
    if violation is None:
        return ""
    if violation is Violation.REQUIRED:
        return "This field is required"
    if violation is Violation.TOO_SHORT:
        return f"Must be at least {min_len} characters"
    if violation is Violation.TOO_LONG:
        return f"Must be less than {max_len} characters"
    return "Contains invalid characters"


def _validate_rule(value: Any, rule: TextRule) -> str:
    return validate_required_text(value, rule.min_len, rule.max_len, rule.pattern)


def validate_name(value: Any) -> str:
    return _validate_rule(value, NAME_RULE)


def validate_company(value: Any) -> str:
    return _validate_rule(value, NAME_RULE)


def validate_city(value: Any) -> str:
    return _validate_rule(value, PLACE_RULE)


def validate_country(value: Any) -> str:
    return _validate_rule(value, PLACE_RULE)


def validate_address(value: Any) -> str:
    return _validate_rule(value, ADDRESS_RULE)


def validate_sku(value: Any) -> str:
    return _validate_rule(value, SKU_RULE)


# Records


def unit_violation(value: Any) -> Violation | None:
    if value not in {unit.value for unit in Unit}:
        return Violation.INVALID_UNIT
    return None


def validate_unit(value: Any) -> str:
    if unit_violation(value) is None:
        return ""
    return "Must be one of: " + ", ".join(unit.value for unit in Unit)


@dataclass(frozen=True)
class FieldViolation:
    """A rule violation attributed to one record field."""

    field: str
    violation: Violation
    message: str

    def as_error(self, value: Any = None) -> ValidationError:
        return ValidationError(self.field, self.violation.value, self.message, value)


_RECORD_RULES: list[tuple[str, TextRule | None]] = [
    ("sku", SKU_RULE),
    ("name", RECORD_NAME_RULE),
    ("quantity", None),
    ("minimum_stock", None),
]


def validate_record_fields(candidate: Mapping[str, Any]) -> list[FieldViolation]:
    """
    Check the user-editable fields of a record candidate.

    Values are taken as submitted (before any integer coercion) so that
    fractional or non-numeric quantities are reported rather than truncated.
    Returns violations in field order; an empty list means the candidate may
    be submitted.
    """
    violations: list[FieldViolation] = []
    for field, rule in _RECORD_RULES:
        value = candidate.get(field)
        if rule is None:
            violation = quantity_violation(value)
            message = validate_quantity_like(value)
        else:
            violation = text_violation(value, rule.min_len, rule.max_len, rule.pattern)
            message = _validate_rule(value, rule)
        if violation is not None:
            violations.append(FieldViolation(field, violation, message))

    unit = candidate.get("unit", Unit.PCS.value)
    if unit_violation(unit) is not None:
        violations.append(FieldViolation("unit", Violation.INVALID_UNIT, validate_unit(unit)))
    return violations
