"""Character value objects.

A :class:`CharacterSet` is immutable: every mutation returns a new set so
the caller decides when to recompute attributions.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, replace

QUALIFIER_RE = re.compile(r"\s*\([^()]*\)\s*$")


class DuplicateCharacterError(ValueError):
    """Raised when a name collides case-insensitively with an existing one."""


def base_name(name: str) -> str:
    """Return ``name`` without its trailing parenthetical qualifier."""
    return QUALIFIER_RE.sub("", name).strip()


def has_qualifier(name: str) -> bool:
    return QUALIFIER_RE.search(name) is not None


def name_key(name: str) -> str:
    """Case-insensitive identity key for ``name``."""
    return name.strip().casefold()


@dataclass(frozen=True)
class Character:
    """A single speaking entity."""

    name: str
    confidence: float = 1.0
    dialogue_count: int = 0

    def __post_init__(self) -> None:
        name = self.name.strip() if isinstance(self.name, str) else ""
        if not name:
            raise ValueError("Character name must be non-empty")
        if not 0.0 <= self.confidence <= 1.0:
            raise ValueError(f"Confidence out of range for {name!r}: {self.confidence}")
        if self.dialogue_count < 0:
            raise ValueError(f"Negative dialogue count for {name!r}")
        object.__setattr__(self, "name", name)

    @property
    def key(self) -> str:
        return name_key(self.name)


class CharacterSet:
    """Ordered, immutable collection of :class:`Character` objects."""

    __slots__ = ("_items",)

    def __init__(self, characters: Iterable[Character] = ()) -> None:
        self._items: tuple[Character, ...] = tuple(characters)

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[str, float]]) -> CharacterSet:
        """Build a set from ``(name, confidence)`` pairs without de-duplicating."""
        return cls(Character(name, confidence) for name, confidence in pairs)

    def __iter__(self) -> Iterator[Character]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.find(name) is not None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CharacterSet):
            return NotImplemented
        return self._items == other._items

    def __repr__(self) -> str:
        return f"CharacterSet({list(self._items)!r})"

    @property
    def names(self) -> list[str]:
        return [c.name for c in self._items]

    def find(self, name: str) -> Character | None:
        """Return the member whose name equals ``name`` case-insensitively."""
        key = name_key(name)
        for char in self._items:
            if char.key == key:
                return char
        return None

    def get(self, name: str) -> Character:
        char = self.find(name)
        if char is None:
            raise KeyError(name)
        return char

    def add(self, character: Character) -> CharacterSet:
        if character.name in self:
            raise DuplicateCharacterError(f"Character already exists: {character.name}")
        return CharacterSet((*self._items, character))

    def rename(self, old: str, new: str) -> CharacterSet:
        """Rename ``old`` to ``new`` keeping its position and confidence.

        The renamed character's count is reset to zero; callers recount it.
        """
        target = self.get(old)
        clash = self.find(new)
        if clash is not None and clash is not target:
            raise DuplicateCharacterError(f"Character already exists: {clash.name}")
        renamed = Character(new, target.confidence)
        return CharacterSet(renamed if c is target else c for c in self._items)

    def remove(self, name: str) -> CharacterSet:
        """Drop the members named exactly ``name``; case-sensitive, unlike :meth:`find`."""
        kept = [c for c in self._items if c.name != name]
        if len(kept) == len(self._items):
            raise KeyError(name)
        return CharacterSet(kept)

    def with_counts(self, counts: Mapping[str, int]) -> CharacterSet:
        """Apply ``counts`` to named members; others keep their counts."""
        return CharacterSet(
            replace(c, dialogue_count=counts[c.name]) if c.name in counts else c
            for c in self._items
        )

    def sorted_by_confidence(self) -> CharacterSet:
        return CharacterSet(sorted(self._items, key=lambda c: -c.confidence))

    def sorted_by_dialogue(self) -> CharacterSet:
        return CharacterSet(sorted(self._items, key=lambda c: -c.dialogue_count))


__all__ = [
    "Character",
    "CharacterSet",
    "DuplicateCharacterError",
    "base_name",
    "has_qualifier",
    "name_key",
]
