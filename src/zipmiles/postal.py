"""Postal code normalization and syntax checks.

Everything here is pure: no caches, no network.
"""

from __future__ import annotations

import re

from zipmiles.models import ValidationOutcome

_NON_DIGITS = re.compile(r"[^0-9]")

SENTINEL_CODE = "00000"
MILITARY_PREFIXES = tuple(f"09{d}" for d in range(10))
TERRITORY_PREFIXES = ("006", "007", "008", "009")


class InvalidFormatError(ValueError):
    pass


def normalize_postal_code(raw: str | None) -> str:
    if raw is None or not str(raw).strip():
        raise InvalidFormatError("postal code is required")

    digits = _NON_DIGITS.sub("", str(raw))
    if len(digits) < 5:
        raise InvalidFormatError(f"postal code {raw!r} must contain at least 5 digits")

    code = digits[:5]
    if code == SENTINEL_CODE:
        raise InvalidFormatError(f"postal code {SENTINEL_CODE} is not a real location")
    return code


def special_range_warnings(code: str) -> list[str]:
    warnings: list[str] = []
    if code.startswith(MILITARY_PREFIXES):
        warnings.append(
            "Military/APO/FPO postal code detected - distance calculations may be estimates"
        )
    if code.startswith(TERRITORY_PREFIXES):
        warnings.append(
            "US territory postal code detected - ensure distance calculations are appropriate"
        )
    return warnings


def validate_postal_code(raw: str | None) -> ValidationOutcome:
    outcome = ValidationOutcome()
    try:
        code = normalize_postal_code(raw)
    except InvalidFormatError as exc:
        outcome.add_error(str(exc))
        return outcome

    for warning in special_range_warnings(code):
        outcome.add_warning(warning)
    return outcome
