"""Near-duplicate detection for human-entered team and project names."""

import re
from collections.abc import Iterable

_SEPARATORS = re.compile(r"[-_.]")
_PUNCTUATION = re.compile(r"[^\w\s]", re.ASCII)
_WHITESPACE = re.compile(r"\s+")

ABBREVIATIONS: dict[str, str] = {
    "dev": "development",
    "admin": "administration",
    "mgr": "manager",
    "mgt": "management",
    "ops": "operations",
    "eng": "engineering",
    "tech": "technology",
}


def normalize_name(name: object) -> str:
    """Lowercase, trim, turn ``-``, ``_`` and ``.`` into spaces, strip
    remaining punctuation and collapse whitespace.

    Non-string or empty input normalizes to an empty string.
    """
    if not name or not isinstance(name, str):
        return ""

    value = _SEPARATORS.sub(" ", name.lower().strip())
    value = _PUNCTUATION.sub("", value)
    return _WHITESPACE.sub(" ", value).strip()


def _words(normalized: str) -> list[str]:
    return [w for w in normalized.split(" ") if len(w) > 1]


def _single_word_contained(short: list[str], long: list[str]) -> bool:
    if len(short) != 1 or len(long) <= 1:
        return False
    word = short[0]
    return len(word) > 2 and word in long


def are_names_similar(first: object, second: object) -> bool:
    """Return True when two names should be treated as duplicates."""
    a = normalize_name(first)
    b = normalize_name(second)

    if a == b:
        return True
    if not a or not b:
        return False

    words_a = _words(a)
    words_b = _words(b)
    if _single_word_contained(words_a, words_b) or _single_word_contained(
        words_b, words_a
    ):
        return True

    for abbr, full in ABBREVIATIONS.items():
        if (abbr in a and full in b) or (full in a and abbr in b):
            return True

    return False


def find_duplicate(new_name: str, existing_names: Iterable[str]) -> str | None:
    """Return the existing name that ``new_name`` collides with, if any.

    Exact matches after normalization win over fuzzy matches, whatever their
    position in ``existing_names``.
    """
    existing = list(existing_names)
    normalized = normalize_name(new_name)

    for name in existing:
        if normalize_name(name) == normalized:
            return name

    for name in existing:
        if are_names_similar(new_name, name):
            return name

    return None
