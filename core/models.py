"""Immutable value types for locales, messages and catalogs."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType


@dataclass(frozen=True, slots=True)
class Locale:
    """A language/region identifier with a human readable name.

    Two locales are equal when their codes are equal; the display name is
    presentation only.
    """

    code: str
    display_name: str = field(default="", compare=False)

    @property
    def language(self) -> str:
        return self.code.split("_", 1)[0]

    def __str__(self) -> str:
        return self.code


@dataclass(frozen=True, slots=True)
class Message:
    """A single catalog entry keyed by its canonical source text."""

    source_key: str
    translation: str
    placeholder_count: int = 0
    finished: bool = True

    @property
    def is_translated(self) -> bool:
        return bool(self.translation)


class Catalog:
    """Read-only table of messages for one locale, keyed by (context, source key)."""

    __slots__ = ("_locale", "_contexts", "_size")

    def __init__(self, locale: Locale, contexts: Mapping[str, Mapping[str, Message]]) -> None:
        self._locale = locale
        frozen = {name: MappingProxyType(dict(messages)) for name, messages in contexts.items()}
        self._contexts: Mapping[str, Mapping[str, Message]] = MappingProxyType(frozen)
        self._size = sum(len(messages) for messages in frozen.values())

    @property
    def locale(self) -> Locale:
        return self._locale

    @property
    def contexts(self) -> Mapping[str, Mapping[str, Message]]:
        return self._contexts

    def lookup(self, context: str, key: str) -> Message | None:
        """Return the message for ``(context, key)`` or ``None`` when absent."""

        messages = self._contexts.get(context)
        if messages is None:
            return None
        return messages.get(key)

    def context_names(self) -> tuple[str, ...]:
        return tuple(self._contexts)

    def keys(self) -> Iterator[tuple[str, str]]:
        """Yield every ``(context, source_key)`` pair in catalog order."""

        for context, messages in self._contexts.items():
            for key in messages:
                yield context, key

    def untranslated(self) -> list[tuple[str, str]]:
        """Return the ``(context, source_key)`` pairs with an empty translation."""

        return [
            (context, message.source_key)
            for context, messages in self._contexts.items()
            for message in messages.values()
            if not message.is_translated
        ]

    def coverage(self) -> float:
        """Fraction of messages carrying a non-empty translation."""

        if not self._size:
            return 1.0
        return (self._size - len(self.untranslated())) / self._size

    def __len__(self) -> int:
        return self._size

    def __contains__(self, item: object) -> bool:
        if not isinstance(item, tuple) or len(item) != 2:
            return False
        context, key = item
        return self.lookup(context, key) is not None

    def __iter__(self) -> Iterator[Message]:
        for messages in self._contexts.values():
            yield from messages.values()

    def __repr__(self) -> str:
        return f"Catalog(locale={self._locale.code!r}, contexts={len(self._contexts)}, messages={self._size})"


__all__ = ["Catalog", "Locale", "Message"]
