"""Application configuration and constants."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class LocalizationConfig:
    """Configuration for catalog discovery and locale resolution."""

    # Base language; its catalog backs every other locale
    fallback_locale: str = "en_US"

    # Catalog file naming: veil_<language>.ts
    catalog_prefix: str = "veil_"
    catalog_suffix: str = ".ts"

    # Oldest Linguist schema accepted, and the major version we understand
    min_schema_version: str = "2.0"
    max_schema_major: int = 2

    # Shipped locales in discovery order
    known_locales: tuple[tuple[str, str], ...] = (
        ("en_US", "English"),
        ("ru_RU", "Русский"),
        ("zh_CN", "中文"),
    )


@dataclass(frozen=True)
class SettingsConfig:
    """Configuration for reading the user's preferred language."""

    settings_file: str = "settings.json"
    language_env_var: str = "VEIL_LANGUAGE"


@dataclass(frozen=True)
class AppConfig:
    """Main application configuration."""

    localization: LocalizationConfig = LocalizationConfig()
    settings: SettingsConfig = SettingsConfig()


# Global configuration instance
CONFIG = AppConfig()
