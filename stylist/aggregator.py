from __future__ import annotations

import logging
from collections.abc import Iterable

from .characters import Character, CharacterSet
from .matcher import match_speaker
from .script_parser import Script

logger = logging.getLogger(__name__)


def attribute_lines(
    script: Script,
    characters: Iterable[Character],
    *,
    strip_qualifiers: bool = True,
) -> list[Character | None]:
    """Return the speaker of every line of ``script`` in order."""
    chars = list(characters)
    return [match_speaker(line, chars, strip_qualifiers=strip_qualifiers) for line in script]


def count_dialogues(
    script: Script,
    characters: Iterable[Character],
    *,
    strip_qualifiers: bool = True,
) -> dict[str, int]:
    """Count the lines each character speaks.

    Every character in ``characters`` appears in the result, with zero if
    it never speaks. Only the characters passed in are counted, so a
    singleton set yields that character's count alone.
    """
    chars = list(characters)
    counts = {c.name: 0 for c in chars}
    for speaker in attribute_lines(script, chars, strip_qualifiers=strip_qualifiers):
        if speaker is not None:
            counts[speaker.name] += 1
    logger.debug("Counted dialogues for %d characters over %d lines", len(chars), len(script))
    return counts


def recount(
    script: Script,
    characters: CharacterSet,
    names: Iterable[str],
    *,
    strip_qualifiers: bool = True,
) -> CharacterSet:
    """Recount only ``names`` and merge the result into ``characters``.

    The named characters are matched against themselves alone, as after a
    manual add or a rename; all other counts are left as they were.
    """
    subset = [characters.get(name) for name in names]
    counts = count_dialogues(script, subset, strip_qualifiers=strip_qualifiers)
    return characters.with_counts(counts)


__all__ = ["attribute_lines", "count_dialogues", "recount"]
