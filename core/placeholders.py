"""Scanning and substitution of numbered ``%N`` placeholders."""

from __future__ import annotations

import re
from collections.abc import Sequence
from typing import Pattern

# Any percent-digit pair; used by validation so that "%0" can be reported
_ANY_TOKEN: Pattern[str] = re.compile(r"%(\d)")

# Substitution points proper: %1 .. %9
_TOKEN: Pattern[str] = re.compile(r"%([1-9])")


def placeholder_positions(text: str) -> frozenset[int]:
    """Return every position referenced by a ``%N`` token in ``text``.

    ``%0`` is reported as position ``0`` so callers can reject it.
    """

    return frozenset(int(match.group(1)) for match in _ANY_TOKEN.finditer(text))


def substitute(text: str, args: Sequence[str]) -> tuple[str, list[int]]:
    """Fill ``%N`` tokens in ``text`` from ``args`` by number.

    Tokens whose argument is missing stay literal and their positions are
    returned so the caller can report the arity mismatch. Replacement text is
    not rescanned, so arguments containing ``%1`` are inserted verbatim.
    """

    if "%" not in text:
        return text, []

    missing: list[int] = []

    def _replace(match: re.Match[str]) -> str:
        position = int(match.group(1))
        if position <= len(args):
            return str(args[position - 1])
        if position not in missing:
            missing.append(position)
        return match.group(0)

    return _TOKEN.sub(_replace, text), missing


__all__ = ["placeholder_positions", "substitute"]
