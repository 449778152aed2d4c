from __future__ import annotations

from typing import Any

from .criteria import coerce_age
from .models import UserProfile


def _clean(value: Any) -> str:
    return "" if value is None else str(value).strip()


def parse_profile(
    sex: Any = None,
    age: Any = None,
    national: Any = None,
    job: Any = None,
) -> UserProfile:
    """Build a ``UserProfile`` from raw query parameters.

    Non-numeric, fractional or out-of-range ages become ``None`` instead of
    raising, so the matcher only ever sees a valid age or an absent one.
    """
    return UserProfile(
        sex=_clean(sex).lower(),
        age=coerce_age(age),
        nationality=_clean(national),
        job=_clean(job),
    )
