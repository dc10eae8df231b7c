"""Engine surface exposed to UI collaborators."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from pathlib import Path

from config import CONFIG, LocalizationConfig
from core.catalog_store import CatalogStore
from core.errors import SwitchError
from core.locale_controller import LocaleObserver, LocaleSwitchController
from core.models import Locale
from core.registry import LocaleRegistry
from core.resolver import Resolution, Resolver

logger = logging.getLogger(__name__)


class LocalizationEngine:
    """Wire the registry, catalog store, switch controller and resolver together."""

    def __init__(
        self,
        registry: LocaleRegistry | None = None,
        config: LocalizationConfig = CONFIG.localization,
    ) -> None:
        self._registry = registry or LocaleRegistry.default(config=config)
        self._store = CatalogStore(self._registry, config)
        self._controller = LocaleSwitchController(self._store, config.fallback_locale)
        self._resolver = Resolver(self._controller)

    @classmethod
    def from_directory(
        cls,
        directory: Path,
        config: LocalizationConfig = CONFIG.localization,
    ) -> LocalizationEngine:
        """Create an engine over the catalogs discovered in ``directory``."""

        return cls(LocaleRegistry.discover(directory, config), config)

    @property
    def registry(self) -> LocaleRegistry:
        return self._registry

    @property
    def store(self) -> CatalogStore:
        return self._store

    @property
    def controller(self) -> LocaleSwitchController:
        return self._controller

    @property
    def active_locale(self) -> Locale:
        return self._controller.active_locale

    def translate(self, context: str, key: str, args: Sequence[str] = ()) -> str:
        return self._resolver.translate(context, key, args)

    tr = translate

    def resolve(self, context: str, key: str, args: Sequence[str] = ()) -> Resolution:
        return self._resolver.resolve(context, key, args)

    def set_locale(self, code: str) -> Locale:
        return self._controller.set_locale(code)

    def available_locales(self) -> tuple[Locale, ...]:
        return self._controller.available_locales()

    def on_locale_changed(self, callback: LocaleObserver) -> Callable[[], None]:
        return self._controller.on_locale_changed(callback)

    def remove_observer(self, callback: LocaleObserver) -> None:
        self._controller.remove_observer(callback)

    def select_startup_locale(
        self,
        preferred: str | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> Locale:
        """Activate the best locale at startup and return it.

        Order: the preferred (configured) language, then the host's system
        locale, then the fallback locale. A failing candidate is logged and
        the next one is tried.
        """

        candidates: list[Locale] = []
        if preferred:
            matched = self._registry.match(preferred)
            if matched is None:
                logger.info("Configured language %r is not supported", preferred)
            else:
                candidates.append(matched)

        detected = self._registry.detect_system_locale(environ)
        if detected is not None:
            candidates.append(detected)

        for candidate in candidates:
            try:
                return self.set_locale(candidate.code)
            except SwitchError as exc:
                logger.warning("Unable to activate %s at startup: %s", candidate.code, exc)

        logger.info("Using fallback locale %s", self._controller.fallback_locale.code)
        return self.set_locale(self._controller.fallback_locale.code)


__all__ = ["LocalizationEngine"]
