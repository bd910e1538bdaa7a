"""End-to-end script analysis.

An :class:`Analysis` pairs a script with its character set. Every operation
here returns a new analysis; nothing is cached between calls.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace

from .aggregator import attribute_lines, count_dialogues, recount
from .characters import Character, CharacterSet
from .config import Config
from .discovery import DiscoverySource, discover_characters
from .discovery.ai import AIClient
from .script_parser import Script, parse_script

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Analysis:
    """A script together with the characters attributed in it."""

    script: Script = field(default_factory=Script)
    characters: CharacterSet = field(default_factory=CharacterSet)
    source: DiscoverySource | None = None
    fallback_reason: str | None = None
    config: Config = field(default_factory=Config, compare=False)

    @property
    def strip_qualifiers(self) -> bool:
        return self.config.matching.strip_qualifiers

    def attributions(self) -> list[Character | None]:
        return attribute_lines(self.script, self.characters, strip_qualifiers=self.strip_qualifiers)

    def counts(self) -> dict[str, int]:
        return count_dialogues(self.script, self.characters, strip_qualifiers=self.strip_qualifiers)


def analyze(
    text: str,
    *,
    ai_client: AIClient | None = None,
    config: Config | None = None,
    provider: str | None = None,
) -> Analysis:
    """Discover characters in ``text`` and count their dialogue lines.

    Characters are ordered by confidence, highest first. A blank script
    yields an empty analysis without running discovery.
    """
    cfg = config or Config()
    script = parse_script(text)
    if script.is_blank:
        logger.info("Blank script, skipping discovery")
        return Analysis(script=script, config=cfg)

    found = discover_characters(script, provider=provider, config=cfg, ai_client=ai_client)
    counts = count_dialogues(
        script, found.characters, strip_qualifiers=cfg.matching.strip_qualifiers
    )
    characters = found.characters.sorted_by_confidence().with_counts(counts)
    logger.info(
        "Analyzed %d lines: %d characters via %s", len(script), len(characters), found.source.value
    )
    return Analysis(script, characters, found.source, found.fallback_reason, cfg)


def load_script(analysis: Analysis, text: str) -> Analysis:
    """Replace the script and reset the character set."""
    return Analysis(script=parse_script(text), config=analysis.config)


def add_character(analysis: Analysis, name: str) -> Analysis:
    """Add a manually named character and count only its lines.

    Raises
    ------
    DuplicateCharacterError
        If ``name`` already exists, ignoring case.
    """
    char = Character(name, analysis.config.discovery.manual_confidence)
    characters = analysis.characters.add(char)
    characters = recount(
        analysis.script, characters, [char.name], strip_qualifiers=analysis.strip_qualifiers
    )
    return replace(analysis, characters=characters)


def rename_character(analysis: Analysis, old: str, new: str) -> Analysis:
    """Rename ``old`` to ``new`` and recount the renamed character only."""
    characters = analysis.characters.rename(old, new)
    renamed = characters.get(new)
    characters = recount(
        analysis.script, characters, [renamed.name], strip_qualifiers=analysis.strip_qualifiers
    )
    return replace(analysis, characters=characters)


def delete_character(analysis: Analysis, name: str) -> Analysis:
    """Remove the character named exactly ``name``."""
    return replace(analysis, characters=analysis.characters.remove(name))


def recount_all(analysis: Analysis) -> Analysis:
    """Recount every character against the full set and sort by count."""
    characters = analysis.characters.with_counts(analysis.counts()).sorted_by_dialogue()
    return replace(analysis, characters=characters)


__all__ = [
    "Analysis",
    "add_character",
    "analyze",
    "delete_character",
    "load_script",
    "recount_all",
    "rename_character",
]
