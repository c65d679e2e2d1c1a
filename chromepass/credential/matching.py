"""Match the page a browser is on against stored credentials."""

import re

from chromepass.credential.models import Credential


def pattern_to_regex(url_pattern: str) -> re.Pattern[str]:
    """Compile a ``*`` wildcard pattern into a regular expression.

    Every character other than ``*`` matches literally. Callers use
    ``fullmatch`` so the pattern covers the whole url.
    """
    parts = (re.escape(part) for part in url_pattern.split("*"))
    return re.compile(".*".join(parts))


def matches(credential: Credential, current_url: str) -> bool:
    """Return True when ``current_url`` is the credential's url or fits its
    url pattern. Comparison is case-sensitive and the url is not normalized.
    """
    if credential.url == current_url:
        return True
    if not credential.url_pattern:
        return False
    return pattern_to_regex(credential.url_pattern).fullmatch(current_url) is not None
