"""Internationalization (i18n) utility."""

from __future__ import annotations

from collections.abc import Callable, Sequence

from core.engine import LocalizationEngine
from core.locale_controller import LocaleObserver
from core.models import Locale
from utils.settings import SETTINGS


class I18n:
    """Process-wide access point to the localization engine."""

    _instance: I18n | None = None

    def __new__(cls) -> I18n:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._engine = LocalizationEngine()
            cls._instance._load_initial_locale()
        return cls._instance

    def _load_initial_locale(self) -> None:
        """Activate the language defined in settings, else the system language."""
        self._engine.select_startup_locale(SETTINGS.get().language or None)

    @property
    def engine(self) -> LocalizationEngine:
        return self._engine

    def set_locale(self, locale_code: str) -> Locale:
        """Switch the current locale, raising ``SwitchError`` on failure."""
        return self._engine.set_locale(locale_code)

    def get_locale(self) -> str:
        return self._engine.active_locale.code

    def available_locales(self) -> tuple[Locale, ...]:
        return self._engine.available_locales()

    def on_locale_changed(self, callback: LocaleObserver) -> Callable[[], None]:
        return self._engine.on_locale_changed(callback)

    def t(self, context: str, key: str, *args: str) -> str:
        """
        Get a translated string.
        Arguments fill numbered placeholders (e.g. "Version %1", "2.0").
        """
        return self._engine.translate(context, key, args)

    def translate(self, context: str, key: str, args: Sequence[str] = ()) -> str:
        return self._engine.translate(context, key, args)


# Global instance
I18N = I18n()
