"""Registry of locales that ship a message catalog."""

from __future__ import annotations

import locale as system_locale
import logging
import os
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from pathlib import Path

from bs4 import BeautifulSoup

from config import CONFIG, LocalizationConfig
from core.models import Locale
from utils.validation import ValidationError, language_of, validate_locale_code

logger = logging.getLogger(__name__)

DEFAULT_TRANSLATIONS_DIR = Path(__file__).resolve().parent / "translations"

# Checked in this order, matching how POSIX resolves message locale
_LOCALE_ENV_VARS: tuple[str, ...] = ("LC_ALL", "LC_MESSAGES", "LANG", "LANGUAGE")


@dataclass(frozen=True, slots=True)
class LocaleEntry:
    """A registered locale and the location of its catalog."""

    locale: Locale
    path: Path


class LocaleRegistry:
    """Enumerate available locales and where their catalogs live."""

    def __init__(self, entries: Iterable[LocaleEntry]) -> None:
        self._entries: dict[str, LocaleEntry] = {}
        for entry in entries:
            code = entry.locale.code
            if code in self._entries:
                logger.warning(
                    "Duplicate locale detected: %s (%s). Keeping the first catalog.",
                    code,
                    entry.path,
                )
                continue
            self._entries[code] = entry

    @classmethod
    def default(
        cls,
        translations_dir: Path | None = None,
        config: LocalizationConfig = CONFIG.localization,
    ) -> LocaleRegistry:
        """Build the registry of the catalogs shipped with the application."""

        directory = translations_dir or DEFAULT_TRANSLATIONS_DIR
        return cls(
            LocaleEntry(
                Locale(code, display_name),
                directory / f"{config.catalog_prefix}{language_of(code)}{config.catalog_suffix}",
            )
            for code, display_name in config.known_locales
        )

    @classmethod
    def discover(
        cls,
        directory: Path,
        config: LocalizationConfig = CONFIG.localization,
    ) -> LocaleRegistry:
        """Build a registry from the catalog files found in ``directory``.

        Each file's locale comes from the ``language`` attribute of its root
        element. Files are visited in name order so discovery is stable.
        """

        if not directory.exists():
            logger.warning("Translations directory %s does not exist", directory)
            return cls(())

        display_names = dict(config.known_locales)
        entries: list[LocaleEntry] = []
        for path in sorted(directory.glob(f"{config.catalog_prefix}*{config.catalog_suffix}")):
            code = _declared_locale(path)
            if code is None:
                logger.warning("Skipping catalog %s: no locale declared", path)
                continue
            entries.append(LocaleEntry(Locale(code, display_names.get(code, code)), path))
        return cls(entries)

    def available_locales(self) -> tuple[Locale, ...]:
        """Return registered locales in discovery order."""

        return tuple(entry.locale for entry in self._entries.values())

    def has_locale(self, code: str) -> bool:
        return code in self._entries

    def get_locale(self, code: str) -> Locale | None:
        entry = self._entries.get(code)
        return entry.locale if entry is not None else None

    def catalog_path(self, code: str) -> Path:
        """Return the catalog file for ``code``.

        Raises:
            KeyError: If the locale is not registered
        """

        return self._entries[code].path

    def match(self, code: str) -> Locale | None:
        """Resolve a loosely spelled locale code to a registered locale.

        Tries the exact normalized code first, then the first registered
        locale sharing the same language ("ru", "ru_UA" -> "ru_RU").
        """

        try:
            normalized = validate_locale_code(code)
        except ValidationError:
            return None

        exact = self.get_locale(normalized)
        if exact is not None:
            return exact

        language = language_of(normalized)
        for entry in self._entries.values():
            if entry.locale.language == language:
                return entry.locale
        return None

    def detect_system_locale(self, environ: Mapping[str, str] | None = None) -> Locale | None:
        """Return the registered locale best matching the host's settings."""

        env = os.environ if environ is None else environ
        candidates: list[str] = []
        for variable in _LOCALE_ENV_VARS:
            value = env.get(variable)
            if value:
                candidates.extend(part for part in value.split(":") if part)

        if environ is None:
            try:
                host_code = system_locale.getlocale()[0]
            except ValueError:
                host_code = None
            if host_code:
                candidates.append(host_code)

        for candidate in candidates:
            if candidate in {"C", "POSIX"} or candidate.startswith("C."):
                continue
            matched = self.match(candidate)
            if matched is not None:
                logger.debug("Detected system locale %s from %r", matched.code, candidate)
                return matched
        return None

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, code: object) -> bool:
        return code in self._entries


def _declared_locale(path: Path) -> str | None:
    try:
        soup = BeautifulSoup(path.read_bytes(), "xml")
    except OSError as exc:
        logger.warning("Unable to read catalog %s: %s", path, exc)
        return None

    root = soup.find("TS")
    declared = root.get("language") if root is not None else None
    if not declared:
        return None
    try:
        return validate_locale_code(declared)
    except ValidationError:
        logger.warning("Catalog %s declares invalid locale %r", path, declared)
        return None


__all__ = ["DEFAULT_TRANSLATIONS_DIR", "LocaleEntry", "LocaleRegistry"]
