"""Tests for chromepass/credential/matching.py - page url matching."""

import pytest
from hypothesis import given
from hypothesis import settings as hypothesis_settings
from hypothesis import strategies as st

from chromepass.credential.matching import matches, pattern_to_regex
from chromepass.credential.models import Credential


def _credential(url: str, url_pattern: str | None = None) -> Credential:
    return Credential(
        label="Example",
        url=url,
        url_pattern=url_pattern,
        username="user",
        password="secret",
    )


def test_exact_url_match():
    credential = _credential("https://app.example.com/login")

    assert matches(credential, "https://app.example.com/login") is True
    assert matches(credential, "https://app.example.com/login/") is False


def test_wildcard_pattern_matches_subdomain():
    credential = _credential("https://example.com", url_pattern="*.example.com")

    assert matches(credential, "https://app.example.com") is True
    assert matches(credential, "https://example.org") is False


def test_pattern_is_anchored_at_both_ends():
    credential = _credential("https://example.com", url_pattern="https://*.example.com")

    assert matches(credential, "https://app.example.com/path") is False
    assert matches(credential, "xhttps://app.example.com") is False


def test_pattern_characters_are_literal():
    """Dots and other regex metacharacters only match themselves."""
    credential = _credential("https://example.com", url_pattern="https://app.example.com/?a=*")

    assert matches(credential, "https://app.example.com/?a=1") is True
    assert matches(credential, "https://appxexample.com/?a=1") is False
    assert matches(credential, "https://app.example.com/a=1") is False


def test_matching_is_case_sensitive():
    credential = _credential("https://Example.com", url_pattern="https://*.Example.com")

    assert matches(credential, "https://example.com") is False
    assert matches(credential, "https://app.example.com") is False


@pytest.mark.parametrize(
    ("pattern", "url", "expected"),
    [
        ("*", "anything at all", True),
        ("https://*/login", "https://a.b.c/login", True),
        ("https://*/login", "https://a.b.c/logout", False),
    ],
)
def test_pattern_to_regex(pattern, url, expected):
    assert (pattern_to_regex(pattern).fullmatch(url) is not None) is expected


_URLS = st.text(
    alphabet=st.characters(whitelist_categories=("L", "N"), whitelist_characters=":/.?=&-_"),
    min_size=1,
    max_size=60,
)


@hypothesis_settings(max_examples=100)
@given(pattern=_URLS, url=_URLS)
def test_pattern_without_wildcard_is_literal(pattern, url):
    credential = _credential("not a url", url_pattern=pattern)

    assert matches(credential, url) is (url == pattern)


@hypothesis_settings(max_examples=100)
@given(url=_URLS)
def test_lone_wildcard_matches_any_url(url):
    credential = _credential("not a url", url_pattern="*")

    assert matches(credential, url) is True
