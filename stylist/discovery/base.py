from __future__ import annotations

import enum
from abc import ABC, abstractmethod
from dataclasses import dataclass

from ..characters import CharacterSet
from ..script_parser import Script


class DiscoveryError(RuntimeError):
    """Raised when a discovery provider cannot produce characters."""


class DiscoverySource(str, enum.Enum):
    AI = "ai"
    RULES = "rules"


@dataclass(frozen=True)
class Discovered:
    """Characters found in a script and the provider that found them."""

    characters: CharacterSet
    source: DiscoverySource
    fallback_reason: str | None = None

    @property
    def degraded(self) -> bool:
        return self.source is DiscoverySource.RULES and self.fallback_reason is not None


class DiscoveryBase(ABC):
    """Abstract base class for character discovery providers."""

    source: DiscoverySource

    @abstractmethod
    def discover(self, script: Script) -> CharacterSet:
        """Return the characters found in *script*."""

    @classmethod
    @abstractmethod
    def is_available(cls) -> bool:
        """Return ``True`` if the provider can run without extra setup."""
