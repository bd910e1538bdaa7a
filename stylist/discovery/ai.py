"""Boundary for model-based character discovery.

The model call itself is supplied by the caller as a plain callable; this
module only validates what comes back before it reaches a
:class:`CharacterSet`.
"""

from __future__ import annotations

import json
import logging
import math
import re
from collections.abc import Callable
from typing import Any

from pydantic import BaseModel, ValidationError, field_validator

from ..characters import Character, CharacterSet
from ..script_parser import Script
from .base import DiscoveryBase, DiscoveryError, DiscoverySource

logger = logging.getLogger(__name__)

AIClient = Callable[[str], Any]

CODE_FENCE_RE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL)


class AICharacter(BaseModel):
    name: str
    confidence: float

    @field_validator("name")
    @classmethod
    def _strip_name(cls, value: str) -> str:
        return value.strip()

    @field_validator("confidence")
    @classmethod
    def _clamp_confidence(cls, value: float) -> float:
        if math.isnan(value):
            raise ValueError("confidence is NaN")
        return min(max(value, 0.0), 1.0)


class AIResponse(BaseModel):
    characters: list[AICharacter]


def parse_response(raw: Any) -> list[AICharacter]:
    """Validate a raw model response into character records.

    ``raw`` may be a JSON string (optionally inside a Markdown code fence),
    a ``{"characters": [...]}`` mapping or a bare list of records. Records
    with an empty name are dropped.

    Raises
    ------
    DiscoveryError
        If the payload cannot be decoded or does not match the schema.
    """

    if isinstance(raw, (bytes, bytearray)):
        raw = raw.decode("utf-8", errors="replace")
    if isinstance(raw, str):
        text = raw.strip()
        fenced = CODE_FENCE_RE.match(text)
        if fenced:
            text = fenced.group(1)
        try:
            raw = json.loads(text)
        except json.JSONDecodeError as exc:
            logger.warning("AI output was not valid JSON: %s", raw)
            raise DiscoveryError("AI output was not valid JSON") from exc
    if isinstance(raw, list):
        raw = {"characters": raw}
    try:
        response = AIResponse.model_validate(raw)
    except ValidationError as exc:
        logger.warning("AI output failed validation: %s", exc)
        raise DiscoveryError("AI output did not match the character schema") from exc
    dropped = [c for c in response.characters if not c.name]
    if dropped:
        logger.warning("Dropping %d AI records without a name", len(dropped))
    return [c for c in response.characters if c.name]


class AIDiscovery(DiscoveryBase):
    """Discover characters through a caller-supplied model client."""

    source = DiscoverySource.AI

    def __init__(self, client: AIClient | None = None) -> None:
        self.client = client

    def discover(self, script: Script) -> CharacterSet:
        if self.client is None:
            raise DiscoveryError("No AI client configured")
        try:
            raw = self.client(script.text)
        except Exception as exc:
            raise DiscoveryError(f"AI request failed: {exc}") from exc
        records = parse_response(raw)
        if not records:
            raise DiscoveryError("AI returned no characters")
        return CharacterSet(Character(r.name, r.confidence) for r in records)

    @classmethod
    def is_available(cls) -> bool:
        return True


__all__ = ["AICharacter", "AIClient", "AIDiscovery", "AIResponse", "parse_response"]
