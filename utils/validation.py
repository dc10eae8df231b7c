"""Input validation and normalization utilities."""

from __future__ import annotations

import re
from typing import Pattern

# language[_-]REGION[.encoding][@modifier], e.g. "ru_RU.UTF-8", "zh-cn", "en"
_LOCALE_PATTERN: Pattern[str] = re.compile(
    r"^(?P<language>[A-Za-z]{2,3})"  # ISO 639 language
    r"(?:[-_](?P<region>[A-Za-z]{2}|\d{3}))?"  # optional ISO 3166 / UN M.49 region
    r"(?:\.[\w-]+)?"  # optional encoding
    r"(?:@\w+)?$",  # optional modifier
)

# Context names are identifiers such as "MainWindow" or "Ui::SettingsDialog"
_CONTEXT_PATTERN: Pattern[str] = re.compile(r"^[A-Za-z_][\w:.]*$")


class ValidationError(ValueError):
    """Raised when input validation fails."""


def validate_locale_code(code: str) -> str:
    """
    Validate and normalize a locale code.

    Accepts the spellings users and operating systems produce
    ("ru-RU", "ru_ru", "ru_RU.UTF-8", "ru") and returns the canonical
    ``language_REGION`` form, or the bare lowercase language when no
    region is given.

    Args:
        code: Locale code to validate

    Returns:
        Normalized locale code

    Raises:
        ValidationError: If the code is empty or malformed
    """
    if not code or not code.strip():
        raise ValidationError("Locale code cannot be empty")

    match = _LOCALE_PATTERN.match(code.strip())
    if match is None:
        raise ValidationError(f"Invalid locale code: {code!r}")

    language = match.group("language").lower()
    region = match.group("region")
    if region:
        return f"{language}_{region.upper()}"
    return language


def validate_context_name(name: str) -> str:
    """
    Validate a catalog context name.

    Raises:
        ValidationError: If the name is empty or not identifier-like
    """
    if not name or not name.strip():
        raise ValidationError("Context name cannot be empty")

    normalized = name.strip()
    if not _CONTEXT_PATTERN.match(normalized):
        raise ValidationError(f"Invalid context name: {name!r}")
    return normalized


def language_of(code: str) -> str:
    """Return the language part of a normalized locale code."""

    return code.split("_", 1)[0]
