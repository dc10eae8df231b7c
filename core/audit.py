"""Cross-locale consistency checks for a directory of catalogs."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from config import CONFIG, LocalizationConfig
from core.catalog_store import CatalogStore
from core.errors import CatalogLoadError
from core.models import Catalog
from core.registry import LocaleRegistry

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class LocaleReport:
    """Findings for one locale compared with the base catalog."""

    code: str
    error: str | None = None
    missing: list[tuple[str, str]] = field(default_factory=list)
    extra: list[tuple[str, str]] = field(default_factory=list)
    untranslated: list[tuple[str, str]] = field(default_factory=list)
    coverage: float = 0.0

    @property
    def ok(self) -> bool:
        return self.error is None and not self.missing and not self.untranslated


@dataclass(slots=True)
class CatalogAudit:
    """Aggregate result of :func:`audit_directory`."""

    base: str
    reports: list[LocaleReport] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return bool(self.reports) and all(report.ok for report in self.reports)


def audit_directory(
    directory: Path,
    config: LocalizationConfig = CONFIG.localization,
) -> CatalogAudit:
    """Load every catalog in ``directory`` and compare it with the base locale."""

    registry = LocaleRegistry.discover(directory, config)
    store = CatalogStore(registry, config)
    audit = CatalogAudit(base=config.fallback_locale)

    base: Catalog | None = None
    if registry.has_locale(config.fallback_locale):
        try:
            base = store.load(config.fallback_locale)
        except CatalogLoadError as exc:
            logger.error("Base catalog failed to load: %s", exc)
    else:
        logger.error("Base locale %s has no catalog in %s", config.fallback_locale, directory)

    for locale in registry.available_locales():
        report = LocaleReport(code=locale.code)
        audit.reports.append(report)
        try:
            catalog = store.load(locale)
        except CatalogLoadError as exc:
            report.error = str(exc)
            continue

        report.untranslated = catalog.untranslated()
        report.coverage = catalog.coverage()
        if base is not None:
            keys = set(catalog.keys())
            base_keys = set(base.keys())
            report.missing = [pair for pair in base.keys() if pair not in keys]
            report.extra = [pair for pair in catalog.keys() if pair not in base_keys]

    if not registry.has_locale(config.fallback_locale):
        audit.reports.insert(0, LocaleReport(code=config.fallback_locale, error="Base catalog not found"))
    return audit


__all__ = ["CatalogAudit", "LocaleReport", "audit_directory"]
