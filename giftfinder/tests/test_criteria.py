from __future__ import annotations

import math

from giftfinder.gifts.criteria import (
    age_matches,
    coerce_age,
    coerce_bound,
    gender_matches,
    parse_list,
    set_matches,
)


# ── List parsing ─────────────────────────────────────────────────────────


class TestParseList:
    def test_comma_separated_string(self):
        assert parse_list(" Male, female ,,") == ["male", "female"]

    def test_list_input_is_normalised(self):
        assert parse_list(["Japanese ", " AMERICAN"]) == ["japanese", "american"]

    def test_duplicates_dropped_in_order(self):
        assert parse_list("chef, Cook, CHEF") == ["chef", "cook"]

    def test_missing_values_are_empty(self):
        assert parse_list(None) == []
        assert parse_list("") == []
        assert parse_list(float("nan")) == []
        assert parse_list(42) == []


# ── Gender ───────────────────────────────────────────────────────────────


def test_gender_unconstrained_matches_everyone():
    for sex in ["male", "female", "other", "", None]:
        assert gender_matches(sex, [])
        assert gender_matches(sex, None)


def test_gender_case_insensitive_membership():
    assert gender_matches("Female", ["female"])
    assert gender_matches("female", ["FEMALE", "other"])


def test_gender_excluded_when_not_listed_or_missing():
    assert not gender_matches("male", ["female"])
    assert not gender_matches("", ["female"])
    assert not gender_matches(None, ["female"])


def test_gender_blank_members_count_as_unconstrained():
    assert gender_matches("male", ["", "  "])


# ── Age ──────────────────────────────────────────────────────────────────


class TestAgeMatches:
    def test_no_bounds_matches_anything(self):
        assert age_matches(None)
        assert age_matches(30)
        assert age_matches("garbage")

    def test_inclusive_range(self):
        assert age_matches(18, 18, 25)
        assert age_matches(25, 18, 25)
        assert not age_matches(17, 18, 25)
        assert not age_matches(26, 18, 25)

    def test_open_ended_bounds(self):
        assert age_matches(90, 65, None)
        assert not age_matches(64, 65, None)
        assert age_matches(5, None, 12)
        assert not age_matches(13, None, 12)

    def test_missing_or_invalid_age_fails_bounded_gift(self):
        assert not age_matches(None, 18, 25)
        assert not age_matches(0, None, 25)
        assert not age_matches(121, 18, None)
        assert not age_matches(20.5, 18, 25)
        assert not age_matches(True, 1, 25)
        assert not age_matches(math.inf, 18, None)

    def test_unusable_bounds_degrade_to_unconstrained(self):
        assert age_matches(None, "abc", "")
        assert age_matches(40, "abc", 50)


def test_coerce_helpers():
    assert coerce_bound("18") == 18
    assert coerce_bound("18.0") == 18
    assert coerce_bound("18.5") is None
    assert coerce_bound(False) is None
    assert coerce_age("30") == 30
    assert coerce_age("121") is None
    assert coerce_age("abc") is None


# ── Nationality / job ────────────────────────────────────────────────────


class TestSetMatches:
    def test_case_insensitive_and_trimmed(self):
        assert set_matches("japanese", ["Japanese"])
        assert set_matches(" Japanese ", ["Japanese"])

    def test_no_substring_match(self):
        assert not set_matches("Japan", ["Japanese"])
        assert not set_matches("Engineer", ["software engineer"])

    def test_empty_set_is_unconstrained(self):
        assert set_matches("", [])
        assert set_matches("Teacher", None)

    def test_missing_value_fails_constrained_set(self):
        assert not set_matches("", ["teacher"])
        assert not set_matches(None, ["teacher"])

    def test_comma_string_constraint(self):
        assert set_matches("Nurse", "doctor, nurse")
