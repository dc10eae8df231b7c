"""Localization engine: catalogs, locale registry, resolver and switch controller."""

from core.engine import LocalizationEngine
from core.errors import (
    CatalogLoadError,
    InvalidCatalogError,
    LocalizationError,
    SwitchError,
    UnknownLocaleError,
)
from core.models import Catalog, Locale, Message

__all__ = [
    "Catalog",
    "CatalogLoadError",
    "InvalidCatalogError",
    "Locale",
    "LocalizationEngine",
    "LocalizationError",
    "Message",
    "SwitchError",
    "UnknownLocaleError",
]
