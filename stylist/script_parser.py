"""Utilities for turning raw script text into a :class:`Script`.

Every line is kept, including blank ones, so that line indices map one to
one onto the text the user uploaded.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass


@dataclass(frozen=True)
class Script:
    """An ordered, immutable sequence of script lines."""

    lines: tuple[str, ...] = ()

    def __iter__(self) -> Iterator[str]:
        return iter(self.lines)

    def __len__(self) -> int:
        return len(self.lines)

    @property
    def text(self) -> str:
        return "\n".join(self.lines)

    @property
    def is_blank(self) -> bool:
        return not any(line.strip() for line in self.lines)

    def non_empty_count(self) -> int:
        return sum(1 for line in self.lines if line.strip())


def parse_script(script: str) -> Script:
    """Split ``script`` on line breaks into a :class:`Script`.

    Parameters
    ----------
    script:
        Raw text as read from the uploaded document. ``\\r\\n``, ``\\r`` and
        ``\\n`` are all accepted as line separators.
    """

    if not script:
        return Script()
    return Script(tuple(script.replace("\r\n", "\n").replace("\r", "\n").split("\n")))


__all__ = ["Script", "parse_script"]
