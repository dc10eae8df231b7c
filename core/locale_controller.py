"""Process-wide active locale state and serialized locale switching."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from config import CONFIG
from core.catalog_store import CatalogStore
from core.errors import CatalogLoadError, InvalidCatalogError, UnknownLocaleError
from core.models import Catalog, Locale

logger = logging.getLogger(__name__)

LocaleObserver = Callable[[Locale], None]


class SwitchState(str, Enum):
    """Lifecycle of the switch path."""

    IDLE = "idle"
    SWITCHING = "switching"


@dataclass(frozen=True, slots=True)
class ActiveState:
    """Snapshot of the catalogs readers resolve against.

    Replaced wholesale on every switch so a reader holding one snapshot never
    sees half of two catalogs.
    """

    catalog: Catalog
    fallback: Catalog

    @property
    def locale(self) -> Locale:
        return self.catalog.locale


class LocaleSwitchController:
    """Own the active catalog and mediate switches between locales.

    Readers call :attr:`snapshot` and never block. Switches are serialized
    on a lock readers do not touch; the catalog load happens while holding
    it, and the new snapshot is installed with a single assignment.
    """

    def __init__(self, store: CatalogStore, fallback_locale: str | None = None) -> None:
        self._store = store
        code = fallback_locale or CONFIG.localization.fallback_locale
        if not store.registry.has_locale(code):
            raise UnknownLocaleError(f"Fallback locale {code!r} is not registered", code=code)

        # The fallback must always load; let CatalogLoadError reach the host
        fallback = store.load(code)
        self._snapshot = ActiveState(catalog=fallback, fallback=fallback)
        self._switch_lock = threading.RLock()
        self._observers_lock = threading.Lock()
        self._observers: list[LocaleObserver] = []
        self._state = SwitchState.IDLE

    @property
    def snapshot(self) -> ActiveState:
        return self._snapshot

    @property
    def active_locale(self) -> Locale:
        return self._snapshot.locale

    @property
    def active_catalog(self) -> Catalog:
        return self._snapshot.catalog

    @property
    def fallback_catalog(self) -> Catalog:
        return self._snapshot.fallback

    @property
    def fallback_locale(self) -> Locale:
        return self._snapshot.fallback.locale

    @property
    def state(self) -> SwitchState:
        return self._state

    def available_locales(self) -> tuple[Locale, ...]:
        return self._store.registry.available_locales()

    def set_locale(self, code: str) -> Locale:
        """Make ``code`` the active locale and notify observers.

        Raises:
            UnknownLocaleError: If ``code`` is not registered. Nothing changes.
            InvalidCatalogError: If the catalog fails to load. The previous
                catalog stays active.
        """

        target = self._store.registry.get_locale(code)
        if target is None:
            logger.warning("Rejected switch to unknown locale %r", code)
            raise UnknownLocaleError(f"Locale {code!r} is not available", code=code)

        with self._switch_lock:
            self._state = SwitchState.SWITCHING
            try:
                previous = self._snapshot
                if previous.locale == target:
                    logger.debug("Locale %s is already active", code)
                    return previous.locale

                try:
                    catalog = self._store.load(target)
                except CatalogLoadError as exc:
                    logger.warning("Switch to %s failed: %s", code, exc)
                    raise InvalidCatalogError(
                        f"Catalog for {code!r} failed validation: {exc}", code=code
                    ) from exc

                installed = ActiveState(catalog=catalog, fallback=previous.fallback)
                self._snapshot = installed
                logger.info("Active locale changed: %s -> %s", previous.locale.code, target.code)
                self._notify(installed)
            finally:
                self._state = SwitchState.IDLE
        return catalog.locale

    def on_locale_changed(self, callback: LocaleObserver) -> Callable[[], None]:
        """Register ``callback`` for successful switches; return an unsubscribe function."""

        with self._observers_lock:
            self._observers.append(callback)

        def _unsubscribe() -> None:
            self.remove_observer(callback)

        return _unsubscribe

    def remove_observer(self, callback: LocaleObserver) -> None:
        with self._observers_lock:
            try:
                self._observers.remove(callback)
            except ValueError:
                pass

    def _notify(self, installed: ActiveState) -> None:
        with self._observers_lock:
            observers = tuple(self._observers)
        for callback in observers:
            # An observer may switch again on this thread; that switch notifies everyone
            if self._snapshot is not installed:
                logger.debug("Locale %s superseded during notification", installed.locale.code)
                break
            try:
                callback(installed.locale)
            except Exception:  # noqa: BLE001 - observers are UI callbacks
                logger.exception("Locale change observer %r failed", callback)


__all__ = ["ActiveState", "LocaleObserver", "LocaleSwitchController", "SwitchState"]
