"""Decide which character, if any, speaks a given script line.

Names are tried longest first so that ``KAMLA DEVI`` wins over ``KAMLA``.
A prefix only counts when the character right after it does not continue
a word, which keeps ``CHARACTER A`` from matching ``CHARACTER AB:``.
"""

from __future__ import annotations

import unicodedata
from collections.abc import Iterable

from .characters import Character, base_name, has_qualifier


def _continues_word(ch: str) -> bool:
    # combining marks extend the previous letter (Devanagari vowel signs)
    return ch.isalnum() or unicodedata.category(ch).startswith("M")


def starts_with_name(line: str, name: str) -> bool:
    """Return ``True`` if ``line`` begins with ``name`` on a word boundary.

    The comparison is case-insensitive. ``line`` must already be stripped.
    """
    target = name.casefold()
    if not target:
        return False
    # fold one character at a time; "ß" folds to "ss" so lengths differ
    folded = ""
    end = 0
    while end < len(line) and len(folded) < len(target):
        folded += line[end].casefold()
        end += 1
    if folded != target:
        return False
    return end == len(line) or not _continues_word(line[end])


def match_speaker(
    line: str,
    characters: Iterable[Character],
    *,
    strip_qualifiers: bool = True,
) -> Character | None:
    """Return the character speaking ``line`` or ``None``.

    Full names, qualifiers included, are tried first. When none matches and
    ``strip_qualifiers`` is set, qualified names are retried by their base
    name (``"Anjali (bahu)"`` matches a line starting ``Anjali:``).
    """
    stripped = line.strip()
    if not stripped:
        return None

    # sorted() is stable, so equal lengths keep the caller's order
    candidates = sorted(characters, key=lambda c: len(c.name), reverse=True)
    for char in candidates:
        if starts_with_name(stripped, char.name):
            return char

    if not strip_qualifiers:
        return None
    qualified = [(base_name(c.name), c) for c in candidates if has_qualifier(c.name)]
    qualified.sort(key=lambda item: len(item[0]), reverse=True)
    for base, char in qualified:
        if starts_with_name(stripped, base):
            return char
    return None


__all__ = ["match_speaker", "starts_with_name"]
