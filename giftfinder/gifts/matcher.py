"""
Gift eligibility matcher.

Responsibilities:
- Evaluate one user profile against one gift's criteria (AND over the four
  demographic dimensions).
- Filter a catalog down to the eligible gifts, preserving catalog order.

The functions here are pure: no I/O, no logging, no retained state.
"""
from __future__ import annotations

from collections.abc import Iterable

from .criteria import age_matches, gender_matches, set_matches
from .models import Gift, GiftCriteria, UserProfile


def is_eligible(profile: UserProfile, criteria: GiftCriteria) -> bool:
    return (
        gender_matches(profile.sex, criteria.genders)
        and age_matches(profile.age, criteria.age_min, criteria.age_max)
        and set_matches(profile.nationality, criteria.nationalities)
        and set_matches(profile.job, criteria.jobs)
    )


def match(profile: UserProfile, catalog: Iterable[Gift]) -> list[Gift]:
    """Return the eligible gifts as an order-preserving sub-sequence of ``catalog``."""
    return [gift for gift in catalog if is_eligible(profile, gift.criteria)]


def suggest(profile: UserProfile, catalog: Iterable[Gift]) -> list[Gift]:
    return match(profile, list(catalog))
