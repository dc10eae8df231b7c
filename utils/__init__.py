"""Shared helpers: settings, logging, validation and the global I18N facade."""
