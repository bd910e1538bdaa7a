from __future__ import annotations

import logging
import os

from ..config import Config
from ..script_parser import Script
from .ai import AIClient, AIDiscovery
from .base import DiscoveryBase, DiscoveryError, Discovered, DiscoverySource
from .rule_based import RuleBasedDiscovery

logger = logging.getLogger(__name__)

ENV_VAR = "STYLIST_DISCOVERY"

registry: dict[str, type[DiscoveryBase]] = {
    "rules": RuleBasedDiscovery,
    "ai": AIDiscovery,
}


def register_discovery(name: str, discovery_cls: type[DiscoveryBase]) -> None:
    registry[name.lower()] = discovery_cls


def available_providers() -> list[str]:
    return sorted(registry.keys())


def health_check() -> dict[str, bool]:
    return {name: cls.is_available() for name, cls in registry.items()}


def resolve_provider(name: str | None = None, config: Config | None = None) -> str:
    """Resolve the provider name from the argument, environment or config."""
    if not name:
        name = os.getenv(ENV_VAR)
    if not name:
        cfg = config or Config()
        name = "ai" if cfg.discovery.use_ai else "rules"
    key = name.lower()
    if key not in registry:
        logger.warning("Unknown discovery provider %r, using rules", name)
        return "rules"
    return key


def get_discovery(
    name: str | None = None,
    *,
    config: Config | None = None,
    ai_client: AIClient | None = None,
) -> DiscoveryBase:
    """Instantiate the discovery provider registered under ``name``."""
    cfg = config or Config()
    key = resolve_provider(name, cfg)
    cls = registry[key]
    if cls is RuleBasedDiscovery:
        return RuleBasedDiscovery(cfg.discovery.rule_confidence, cfg.discovery.max_cue_length)
    if cls is AIDiscovery:
        return AIDiscovery(ai_client)
    return cls()


def discover_characters(
    script: Script,
    *,
    provider: str | None = None,
    config: Config | None = None,
    ai_client: AIClient | None = None,
) -> Discovered:
    """Discover characters, falling back to the rule-based provider.

    The returned :class:`Discovered` names the provider that actually
    produced the characters and, after a fallback, why the first one failed.
    """
    cfg = config or Config()
    key = resolve_provider(provider, cfg)
    reason: str | None = None
    if key != "rules":
        discovery = get_discovery(key, config=cfg, ai_client=ai_client)
        try:
            characters = discovery.discover(script)
        except DiscoveryError as exc:
            reason = str(exc)
            logger.info('discovery.source=%s fallback=true reason="%s"', key, reason)
        else:
            logger.info(
                "discovery.source=%s fallback=false characters=%d", key, len(characters)
            )
            return Discovered(characters, discovery.source)

    characters = get_discovery("rules", config=cfg).discover(script)
    if reason is None:
        logger.info("discovery.source=rules fallback=false characters=%d", len(characters))
    return Discovered(characters, DiscoverySource.RULES, reason)


__all__ = [
    "ENV_VAR",
    "available_providers",
    "discover_characters",
    "get_discovery",
    "health_check",
    "register_discovery",
    "registry",
    "resolve_provider",
]
