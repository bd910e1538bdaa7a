"""Heuristic character discovery for scripts with ALL-CAPS speaker cues.

A line is a candidate cue when it is short, carries no lowercase ASCII
letters and does not open with a parenthesis. Lines without any letters
pass the caps test too, which lets the odd punctuation-only line through.
"""

from __future__ import annotations

import logging
import re

from ..characters import Character, CharacterSet
from ..script_parser import Script
from .base import DiscoveryBase, DiscoverySource

logger = logging.getLogger(__name__)

NO_LOWERCASE_RE = re.compile(r"^[^a-z]+$")
SLUG_RE = re.compile(
    r"^(?:INT\./EXT\.|INT\.|EXT\.|FADE IN:|FADE OUT:|CUT TO:|CONTINUED|BACK TO:|DISSOLVE TO:)",
    re.IGNORECASE,
)
TRAILING_PARENS_RE = re.compile(r"(?:\s*\([^()]*\))+\s*$")

RULE_CONFIDENCE = 0.8
MAX_CUE_LENGTH = 50


def cue_name(line: str, *, max_length: int = MAX_CUE_LENGTH) -> str | None:
    """Return the character name cued by ``line`` or ``None``."""
    stripped = line.strip()
    if not 0 < len(stripped) < max_length:
        return None
    if not NO_LOWERCASE_RE.match(stripped) or stripped.startswith("("):
        return None
    if SLUG_RE.match(stripped):
        return None
    name = TRAILING_PARENS_RE.sub("", stripped).strip()
    return name or None


class RuleBasedDiscovery(DiscoveryBase):
    """Discover characters from speaker cues without any model."""

    source = DiscoverySource.RULES

    def __init__(self, confidence: float = RULE_CONFIDENCE, max_length: int = MAX_CUE_LENGTH) -> None:
        self.confidence = confidence
        self.max_length = max_length

    def discover(self, script: Script) -> CharacterSet:
        # exact-string dedup: "JOHN" and "John" stay distinct
        names: dict[str, None] = {}
        for line in script:
            name = cue_name(line, max_length=self.max_length)
            if name is not None:
                names.setdefault(name)
        logger.debug("Rule-based discovery found %d candidates", len(names))
        return CharacterSet(Character(name, self.confidence) for name in names)

    @classmethod
    def is_available(cls) -> bool:
        return True


__all__ = ["RuleBasedDiscovery", "cue_name", "RULE_CONFIDENCE", "MAX_CUE_LENGTH"]
