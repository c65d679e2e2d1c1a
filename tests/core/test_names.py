"""Tests for chromepass/core/names.py - near-duplicate name detection."""

import pytest
from hypothesis import given
from hypothesis import settings as hypothesis_settings
from hypothesis import strategies as st

from chromepass.core.names import are_names_similar, find_duplicate, normalize_name


def test_normalize_name_separators_and_case():
    assert normalize_name("Dev-Team_1") == normalize_name("dev team 1")
    assert normalize_name("Dev-Team_1") == "dev team 1"


def test_normalize_name_strips_punctuation_and_whitespace():
    assert normalize_name("  Q.A.  (Europe)!  ") == "q a europe"


@pytest.mark.parametrize("value", [None, "", 42, ["dev"]])
def test_normalize_name_non_string_or_empty(value):
    assert normalize_name(value) == ""


def test_empty_names_only_match_each_other():
    assert are_names_similar("", None) is True
    assert are_names_similar("", "Dev") is False
    assert are_names_similar("Dev", "") is False


def test_single_word_contained_in_multi_word_name():
    assert are_names_similar("Marketing", "Marketing Europe") is True
    assert are_names_similar("Marketing Europe", "Marketing") is True


def test_single_word_containment_is_whole_word():
    assert are_names_similar("Mark", "Marketing Europe") is False


def test_short_single_word_is_not_containment_match():
    # Two-letter words are too short to count as containment.
    assert are_names_similar("QA", "QA Europe") is False


@pytest.mark.parametrize(
    ("first", "second"),
    [
        ("Dev", "Development"),
        ("Admin Team", "Administration Team"),
        ("Ops", "Operations"),
        ("Eng", "Engineering Core"),
        ("Tech", "Technology"),
        ("Mgr Office", "Manager Office"),
        ("Mgt", "Management"),
    ],
)
def test_abbreviation_pairs(first, second):
    assert are_names_similar(first, second) is True
    assert are_names_similar(second, first) is True


def test_unrelated_names_are_not_similar():
    assert are_names_similar("Finance", "Sales") is False


def test_find_duplicate_abbreviation():
    assert find_duplicate("Development", ["Dev"]) == "Dev"


def test_find_duplicate_prefers_exact_match():
    """An exact normalized match wins over an earlier fuzzy one."""
    existing = ["Development", "Dev Team", "dev-team"]
    assert find_duplicate("Dev_Team", existing) == "Dev Team"


def test_find_duplicate_returns_first_fuzzy_match():
    assert find_duplicate("Operations", ["Sales", "Ops", "Ops Europe"]) == "Ops"


def test_find_duplicate_none():
    assert find_duplicate("Finance", ["Sales", "Marketing"]) is None
    assert find_duplicate("Finance", []) is None


@hypothesis_settings(max_examples=100)
@given(name=st.text(max_size=60))
def test_normalize_name_is_idempotent(name):
    once = normalize_name(name)

    assert normalize_name(once) == once
    assert once == once.strip()
    assert "  " not in once


@hypothesis_settings(max_examples=100)
@given(first=st.text(max_size=40), second=st.text(max_size=40))
def test_similarity_is_symmetric(first, second):
    assert are_names_similar(first, second) == are_names_similar(second, first)


@hypothesis_settings(max_examples=100)
@given(
    name=st.text(min_size=1, max_size=40),
    others=st.lists(st.text(max_size=40), max_size=5),
)
def test_find_duplicate_detects_exact_name(name, others):
    existing = [*others, name]

    duplicate = find_duplicate(name, existing)

    assert duplicate is not None
    assert normalize_name(duplicate) == normalize_name(name)
