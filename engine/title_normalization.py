from __future__ import annotations

import re

# Checked in this order; only the first match is stripped.
_LEADING_ARTICLE_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"^the\s+", re.IGNORECASE),
    re.compile(r"^a\s+", re.IGNORECASE),
    re.compile(r"^an\s+", re.IGNORECASE),
)


def strip_leading_article(title: str) -> str:
    text = str(title or "")
    for pattern in _LEADING_ARTICLE_PATTERNS:
        stripped, count = pattern.subn("", text, count=1)
        if count:
            return stripped
    return text


def title_sort_key(title: str) -> str:
    """Sort key for song titles: leading article dropped, case folded to lower."""
    return strip_leading_article(title).lower()
