"""Character discovery providers."""

from .ai import AIDiscovery, parse_response
from .base import DiscoveryBase, DiscoveryError, Discovered, DiscoverySource
from .registry import (
    available_providers,
    discover_characters,
    get_discovery,
    health_check,
    register_discovery,
    registry,
)
from .rule_based import RuleBasedDiscovery

__all__ = [
    "AIDiscovery",
    "DiscoveryBase",
    "DiscoveryError",
    "Discovered",
    "DiscoverySource",
    "RuleBasedDiscovery",
    "available_providers",
    "discover_characters",
    "get_discovery",
    "health_check",
    "parse_response",
    "register_discovery",
    "registry",
]
