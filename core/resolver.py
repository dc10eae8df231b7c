"""Translate (context, key) pairs through the fallback chain."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum

from core.locale_controller import LocaleSwitchController
from core.models import Locale
from core.placeholders import substitute

logger = logging.getLogger(__name__)


class ResolutionSource(str, Enum):
    """Which tier of the fallback chain produced a string."""

    ACTIVE = "active"
    FALLBACK = "fallback"
    SOURCE = "source"


@dataclass(frozen=True, slots=True)
class Resolution:
    """Outcome of a lookup, for callers that want more than the text."""

    text: str
    source: ResolutionSource
    locale: Locale
    missing_args: tuple[int, ...] = field(default=())

    @property
    def complete(self) -> bool:
        return not self.missing_args


class Resolver:
    """Resolve display strings against the controller's active snapshot.

    Lookups never raise for missing keys: an untranslated or absent entry
    degrades to the fallback catalog and then to the key itself.
    """

    def __init__(self, controller: LocaleSwitchController) -> None:
        self._controller = controller

    def translate(self, context: str, key: str, args: Sequence[str] = ()) -> str:
        return self.resolve(context, key, args).text

    def resolve(self, context: str, key: str, args: Sequence[str] = ()) -> Resolution:
        if isinstance(args, str):
            args = (args,)

        # One read; a concurrent switch cannot mix two catalogs into this call
        state = self._controller.snapshot

        message = state.catalog.lookup(context, key)
        if message is not None and message.translation:
            text, source, locale = message.translation, ResolutionSource.ACTIVE, state.locale
        else:
            fallback = state.fallback.lookup(context, key)
            if fallback is not None and fallback.translation:
                text, source, locale = fallback.translation, ResolutionSource.FALLBACK, state.fallback.locale
            else:
                text, source, locale = key, ResolutionSource.SOURCE, state.fallback.locale
            logger.debug(
                "No %s translation for %s/%r; using %s text",
                state.locale.code,
                context,
                key,
                source.value,
            )

        text, missing = substitute(text, args)
        if missing:
            logger.warning(
                "Missing arguments %s for %s/%r (%d given)",
                ", ".join(f"%{position}" for position in missing),
                context,
                key,
                len(args),
            )
        return Resolution(text=text, source=source, locale=locale, missing_args=tuple(missing))


__all__ = ["Resolution", "ResolutionSource", "Resolver"]
