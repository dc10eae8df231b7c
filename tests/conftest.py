"""Shared fixtures for building throwaway catalogs."""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from pathlib import Path
from xml.sax.saxutils import escape

import pytest

Messages = Mapping[str, Sequence[tuple[str, str]]]


def make_ts(language: str | None, contexts: Messages, version: str | None = "2.1") -> str:
    """Render a Linguist document from ``{context: [(source, translation), ...]}``."""

    attrs = ""
    if version is not None:
        attrs += f' version="{version}"'
    if language is not None:
        attrs += f' language="{language}"'
    lines = ['<?xml version="1.0" encoding="utf-8"?>', "<!DOCTYPE TS>", f"<TS{attrs}>"]
    for name, messages in contexts.items():
        lines.append(f"<context>\n    <name>{escape(name)}</name>")
        for source, translation in messages:
            lines.append(
                "    <message>\n"
                f"        <source>{escape(source)}</source>\n"
                f"        <translation>{escape(translation)}</translation>\n"
                "    </message>"
            )
        lines.append("</context>")
    lines.append("</TS>")
    return "\n".join(lines)


BASE_MESSAGES: Messages = {
    "MainWindow": [("Connect", "Connect"), ("Disconnect", "Disconnect"), ("Status", "Status")],
    "UpdateDialog": [("Current version: %1", "Current version: %1")],
}

RUSSIAN_MESSAGES: Messages = {
    "MainWindow": [("Connect", "Подключиться"), ("Disconnect", ""), ("Status", "Статус")],
    "UpdateDialog": [("Current version: %1", "Текущая версия: %1")],
}


@pytest.fixture
def write_catalog(tmp_path: Path) -> Callable[..., Path]:
    """Return a function writing ``veil_<lang>.ts`` into a temporary directory."""

    def _write(language: str, contexts: Messages, version: str | None = "2.1", filename: str | None = None) -> Path:
        name = filename or f"veil_{language.split('_')[0]}.ts"
        path = tmp_path / name
        path.write_text(make_ts(language, contexts, version), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def translations_dir(tmp_path: Path, write_catalog: Callable[..., Path]) -> Path:
    """A directory with a complete English and a partial Russian catalog."""

    write_catalog("en_US", BASE_MESSAGES)
    write_catalog("ru_RU", RUSSIAN_MESSAGES)
    return tmp_path


@pytest.fixture
def ts_document() -> Callable[..., str]:
    """Return the Linguist document renderer."""

    return make_ts
