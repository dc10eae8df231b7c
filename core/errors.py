"""Exception hierarchy for catalog loading and locale switching."""

from __future__ import annotations


class LocalizationError(Exception):
    """Base class for localization engine failures."""


class CatalogLoadError(LocalizationError):
    """Raised when catalog data is unreadable, malformed or fails validation."""

    def __init__(
        self,
        message: str,
        *,
        locale: str | None = None,
        context: str | None = None,
        key: str | None = None,
    ) -> None:
        self.locale = locale
        self.context = context
        self.key = key
        location = ", ".join(
            f"{label}={value!r}"
            for label, value in (("locale", locale), ("context", context), ("key", key))
            if value is not None
        )
        super().__init__(f"{message} ({location})" if location else message)


class SwitchError(LocalizationError):
    """Raised when the active locale cannot be changed."""

    def __init__(self, message: str, *, code: str) -> None:
        self.code = code
        super().__init__(message)


class UnknownLocaleError(SwitchError):
    """Requested locale is not registered."""


class InvalidCatalogError(SwitchError):
    """Requested locale is registered but its catalog failed to load."""


__all__ = [
    "CatalogLoadError",
    "InvalidCatalogError",
    "LocalizationError",
    "SwitchError",
    "UnknownLocaleError",
]
