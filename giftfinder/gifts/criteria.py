"""
Per-dimension eligibility predicates for gift criteria.

Every dimension of a gift's criteria is either unconstrained (absent or
empty, matching any profile value including a missing one) or constrained to
a non-empty set / range. None of the helpers here raise: malformed optional
input degrades to "unconstrained" so a bad record never hides a gift.
"""
from __future__ import annotations

import math
from collections.abc import Iterable
from typing import Any

MIN_AGE = 1
MAX_AGE = 120


def _normalise(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip().lower()


def parse_list(raw: Any) -> list[str]:
    """Turn ``"Male, female,,"`` or ``["Male", " female"]`` into ``["male", "female"]``.

    Splits on commas, trims, lower-cases, drops empties and duplicates while
    keeping first-seen order. Anything that is neither a string nor an
    iterable of strings yields an empty (unconstrained) list.
    """
    if raw is None:
        return []
    if isinstance(raw, float) and math.isnan(raw):
        return []
    if isinstance(raw, str):
        parts: Iterable[Any] = raw.split(",")
    elif isinstance(raw, Iterable) and not isinstance(raw, (bytes, dict)):
        parts = [p for item in raw for p in (str(item).split(",") if item is not None else [])]
    else:
        return []

    seen: list[str] = []
    for part in parts:
        value = _normalise(part)
        if value and value not in seen:
            seen.append(value)
    return seen


def _as_int(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if math.isfinite(value) and value.is_integer():
            return int(value)
        return None
    if isinstance(value, str):
        raw = value.strip()
        try:
            return int(raw)
        except ValueError:
            try:
                return _as_int(float(raw))
            except ValueError:
                return None
    return None


def coerce_bound(value: Any) -> int | None:
    """Return an age bound as ``int``, or ``None`` when it is missing or unusable."""
    return _as_int(value)


def coerce_age(value: Any) -> int | None:
    """Return a profile age in ``MIN_AGE..MAX_AGE``, otherwise ``None``."""
    age = _as_int(value)
    if age is None or not MIN_AGE <= age <= MAX_AGE:
        return None
    return age


def gender_matches(profile_sex: Any, genders: Iterable[Any] | None) -> bool:
    allowed = parse_list(genders)
    if not allowed:
        return True
    sex = _normalise(profile_sex)
    return bool(sex) and sex in allowed


def age_matches(profile_age: Any, age_min: Any = None, age_max: Any = None) -> bool:
    low = coerce_bound(age_min)
    high = coerce_bound(age_max)
    if low is None and high is None:
        return True

    age = coerce_age(profile_age)
    if age is None:
        return False
    if low is not None and age < low:
        return False
    if high is not None and age > high:
        return False
    return True


def set_matches(profile_value: Any, values: Iterable[Any] | None) -> bool:
    """Exact, case-insensitive membership; substrings never match."""
    allowed = parse_list(values)
    if not allowed:
        return True
    value = _normalise(profile_value)
    return bool(value) and value in allowed
