"""Parse, validate and cache per-locale message catalogs."""

from __future__ import annotations

import logging
import threading

from bs4 import BeautifulSoup
from bs4.element import Tag
from lxml import etree
from packaging import version

from config import CONFIG, LocalizationConfig
from core.errors import CatalogLoadError
from core.models import Catalog, Locale, Message
from core.placeholders import placeholder_positions
from core.registry import LocaleRegistry
from utils.validation import ValidationError, validate_context_name, validate_locale_code

logger = logging.getLogger(__name__)

# Translation states that no longer belong to the shipped UI
_RETIRED_TYPES = frozenset({"obsolete", "vanished"})


def parse_catalog(
    data: bytes | str,
    locale: Locale,
    config: LocalizationConfig = CONFIG.localization,
) -> Catalog:
    """Build a :class:`Catalog` for ``locale`` from Linguist ``.ts`` data.

    Raises:
        CatalogLoadError: If the document is malformed or a message fails
            validation. The error names the offending context and key.
    """

    code = locale.code
    if isinstance(data, str):
        data = data.encode("utf-8")
    _check_well_formed(data, code)
    soup = BeautifulSoup(data, "xml")
    root = soup.find("TS")
    if root is None:
        raise CatalogLoadError("Missing <TS> root element", locale=code)

    _check_schema_version(root.get("version"), code, config)
    _check_declared_locale(root.get("language"), code)

    contexts: dict[str, dict[str, Message]] = {}
    for context_tag in root.find_all("context", recursive=False):
        name_tag = context_tag.find("name", recursive=False)
        try:
            name = validate_context_name(name_tag.get_text() if name_tag is not None else "")
        except ValidationError as exc:
            raise CatalogLoadError(str(exc), locale=code) from exc

        messages = contexts.setdefault(name, {})
        for message_tag in context_tag.find_all("message", recursive=False):
            message = _parse_message(message_tag, code, name)
            if message is None:
                continue
            if message.source_key in messages:
                raise CatalogLoadError(
                    "Duplicate message", locale=code, context=name, key=message.source_key
                )
            messages[message.source_key] = message

    return Catalog(locale, contexts)


def _check_well_formed(data: bytes, code: str) -> None:
    # BeautifulSoup's xml builder recovers from broken markup; refuse it up front
    parser = etree.XMLParser(recover=False, resolve_entities=False, no_network=True)
    try:
        etree.fromstring(data, parser)
    except etree.XMLSyntaxError as exc:
        raise CatalogLoadError(f"Malformed catalog: {exc}", locale=code) from exc


def _check_schema_version(declared: str | None, code: str, config: LocalizationConfig) -> None:
    if not declared:
        raise CatalogLoadError("Catalog does not declare a schema version", locale=code)
    try:
        parsed = version.parse(declared)
    except version.InvalidVersion as exc:
        raise CatalogLoadError(f"Invalid schema version {declared!r}", locale=code) from exc

    if parsed < version.parse(config.min_schema_version) or parsed.major > config.max_schema_major:
        raise CatalogLoadError(f"Unsupported schema version {declared}", locale=code)


def _check_declared_locale(declared: str | None, code: str) -> None:
    if not declared:
        return
    try:
        normalized = validate_locale_code(declared)
    except ValidationError as exc:
        raise CatalogLoadError(str(exc), locale=code) from exc
    if normalized != code:
        raise CatalogLoadError(f"Catalog declares locale {declared!r}", locale=code)


def _parse_message(tag: Tag, code: str, context: str) -> Message | None:
    source_tag = tag.find("source", recursive=False)
    if source_tag is None:
        raise CatalogLoadError("Message without <source>", locale=code, context=context)
    source = source_tag.get_text()

    if tag.get("numerus") == "yes":
        logger.debug("Skipping plural message %r in %s/%s", source, code, context)
        return None

    translation_tag = tag.find("translation", recursive=False)
    kind = translation_tag.get("type") if translation_tag is not None else None
    if kind in _RETIRED_TYPES:
        return None
    translation = translation_tag.get_text() if translation_tag is not None else ""

    source_positions = placeholder_positions(source)
    translation_positions = placeholder_positions(translation)
    if 0 in source_positions or 0 in translation_positions:
        raise CatalogLoadError(
            "Placeholder %0 is not a valid position", locale=code, context=context, key=source
        )

    extra = translation_positions - source_positions
    if extra:
        tokens = ", ".join(f"%{position}" for position in sorted(extra))
        raise CatalogLoadError(
            f"Translation references {tokens} not present in source",
            locale=code,
            context=context,
            key=source,
        )

    return Message(
        source_key=source,
        translation=translation,
        placeholder_count=len(source_positions),
        finished=kind != "unfinished",
    )


class CatalogStore:
    """Load catalogs for registered locales, caching each by locale code."""

    def __init__(
        self,
        registry: LocaleRegistry,
        config: LocalizationConfig = CONFIG.localization,
    ) -> None:
        self._registry = registry
        self._config = config
        self._lock = threading.Lock()
        self._cache: dict[str, Catalog] = {}

    @property
    def registry(self) -> LocaleRegistry:
        return self._registry

    def load(self, locale: Locale | str) -> Catalog:
        """Return the catalog for ``locale``, parsing it on first use.

        Raises:
            CatalogLoadError: If the locale is unregistered or its data is
                unreadable or invalid. Nothing is cached in that case.
        """

        code = locale.code if isinstance(locale, Locale) else locale
        cached = self._cache.get(code)
        if cached is not None:
            logger.debug("Catalog cache hit for %s", code)
            return cached

        with self._lock:
            cached = self._cache.get(code)
            if cached is not None:
                return cached

            target = self._registry.get_locale(code)
            if target is None:
                raise CatalogLoadError("Locale is not registered", locale=code)

            path = self._registry.catalog_path(code)
            try:
                data = path.read_bytes()
            except OSError as exc:
                raise CatalogLoadError(f"Unable to read catalog {path}: {exc}", locale=code) from exc

            catalog = parse_catalog(data, target, self._config)
            self._cache[code] = catalog

        logger.info(
            "Loaded catalog %s from %s (%d contexts, %d messages)",
            code,
            path,
            len(catalog.contexts),
            len(catalog),
        )
        return catalog

    def is_cached(self, code: str) -> bool:
        return code in self._cache

    def invalidate(self, code: str | None = None) -> None:
        """Forget one cached catalog, or all of them when ``code`` is ``None``."""

        with self._lock:
            if code is None:
                self._cache.clear()
            else:
                self._cache.pop(code, None)


__all__ = ["CatalogStore", "parse_catalog"]
