"""Tag normalization."""

import locale
import re
from collections.abc import Iterable

_WHITESPACE_RUN = re.compile(r"\s+")


def sort_tags(tags: Iterable[str]) -> list[str]:
    """Sort tags with locale-aware collation."""
    return sorted(tags, key=locale.strxfrm)


def normalize_tags(raw_tags: Iterable[str]) -> list[str]:
    """Canonicalize free-text tags.

    Strips each tag, drops empties, turns inner whitespace runs into a
    single hyphen, lowercases, removes duplicates and sorts. The result
    does not depend on input order, and normalizing an already normalized
    list returns it unchanged.

    Args:
        raw_tags: Tags as typed by the user

    Returns:
        Sorted list of unique normalized tags
    """
    cleaned = set()
    for tag in raw_tags:
        tag = tag.strip()
        if not tag:
            continue
        cleaned.add(_WHITESPACE_RUN.sub("-", tag).lower())
    return sort_tags(cleaned)
