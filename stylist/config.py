"""Configuration helpers for Script Stylist."""

from __future__ import annotations

import json
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any


@dataclass
class DiscoverySettings:
    """Parameters for character discovery."""

    use_ai: bool = True
    rule_confidence: float = 0.8
    max_cue_length: int = 50
    manual_confidence: float = 1.0


@dataclass
class MatchingSettings:
    """Parameters for line-to-speaker matching."""

    strip_qualifiers: bool = True


@dataclass
class Config:
    """Root configuration object."""

    discovery: DiscoverySettings = field(default_factory=DiscoverySettings)
    matching: MatchingSettings = field(default_factory=MatchingSettings)


def _section(cls: type, raw: Any) -> Any:
    if not isinstance(raw, dict):
        return cls()
    known = {f.name for f in fields(cls)}
    return cls(**{k: v for k, v in raw.items() if k in known})


def load_config(path: str | Path = "config.json") -> Config:
    """Load configuration from ``path``.

    Only the ``discovery`` and ``matching`` sections are parsed; unknown
    keys are ignored. A missing file yields the defaults.
    """

    path = Path(path)
    if not path.exists():
        return Config()
    with open(path, encoding="utf-8") as fh:
        raw = json.load(fh)
    if not isinstance(raw, dict):
        return Config()

    return Config(
        discovery=_section(DiscoverySettings, raw.get("discovery")),
        matching=_section(MatchingSettings, raw.get("matching")),
    )


__all__ = ["Config", "DiscoverySettings", "MatchingSettings", "load_config"]
