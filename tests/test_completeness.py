import pytest

from directory.completeness import REQUIRED_FIELDS, completeness, is_filled


def test_empty_profile_scores_zero():
    assert completeness({}) == 0


def test_full_profile_scores_hundred(full_profile):
    assert completeness(full_profile) == 100


@pytest.mark.parametrize("value", [None, "", "   ", [], {}])
def test_blank_values_are_not_filled(value):
    assert not is_filled(value)


@pytest.mark.parametrize("value", ["x", 0, ["Python"], {"a": 1}, False])
def test_present_values_are_filled(value):
    assert is_filled(value)


def test_score_is_rounded_percentage():
    # 1 of 11 -> 9.09 -> 9; 6 of 11 -> 54.5 -> 55
    assert completeness({"pronouns": "she/her"}) == 9
    profile = {name: "x" for name in REQUIRED_FIELDS[:6]}
    assert completeness(profile) == 55


def test_score_never_decreases_as_fields_fill(full_profile):
    profile = {}
    previous = completeness(profile)
    for name in REQUIRED_FIELDS:
        profile[name] = full_profile[name]
        current = completeness(profile)
        assert current >= previous
        previous = current
    assert previous == 100


def test_fields_outside_required_set_are_ignored():
    assert completeness({"industry": "Fintech", "isPublic": True, "first_name": "Ava"}) == 0
