"""Tests for LocaleSwitchController."""

from __future__ import annotations

import threading

import pytest

from core.catalog_store import CatalogStore
from core.errors import CatalogLoadError, InvalidCatalogError, SwitchError, UnknownLocaleError
from core.locale_controller import LocaleSwitchController, SwitchState
from core.models import Locale
from core.registry import LocaleRegistry


def _controller(directory) -> LocaleSwitchController:
    return LocaleSwitchController(CatalogStore(LocaleRegistry.discover(directory)), "en_US")


class TestLocaleSwitchController:
    """Test cases for LocaleSwitchController."""

    def test_starts_on_fallback(self, translations_dir):
        """Test that the fallback catalog is active after construction."""
        controller = _controller(translations_dir)

        assert controller.active_locale == Locale("en_US")
        assert controller.fallback_locale == Locale("en_US")
        assert controller.active_catalog is controller.fallback_catalog
        assert controller.state == SwitchState.IDLE

    def test_set_locale(self, translations_dir):
        """Test switching to a registered locale."""
        controller = _controller(translations_dir)
        locale = controller.set_locale("ru_RU")

        assert locale == Locale("ru_RU")
        assert controller.active_locale == locale
        assert controller.active_catalog.lookup("MainWindow", "Connect").translation == "Подключиться"
        assert controller.fallback_locale == Locale("en_US")
        assert controller.state == SwitchState.IDLE

    def test_unknown_locale_rejected(self, translations_dir):
        """Test that unknown locales leave the state unchanged."""
        controller = _controller(translations_dir)
        controller.set_locale("ru_RU")
        before = controller.snapshot

        with pytest.raises(UnknownLocaleError) as excinfo:
            controller.set_locale("xx_XX")

        assert excinfo.value.code == "xx_XX"
        assert isinstance(excinfo.value, SwitchError)
        assert controller.snapshot is before

    def test_invalid_catalog_rejected(self, write_catalog, tmp_path):
        """Test that a catalog failing validation is never installed."""
        write_catalog("en_US", {"UpdateDialog": [("Current version: %1", "Current version: %1")]})
        write_catalog("zh_CN", {"UpdateDialog": [("Current version: %1", "当前版本：%2")]})
        controller = _controller(tmp_path)
        before = controller.snapshot

        with pytest.raises(InvalidCatalogError) as excinfo:
            controller.set_locale("zh_CN")

        assert isinstance(excinfo.value.__cause__, CatalogLoadError)
        assert controller.snapshot is before
        assert controller.active_locale == Locale("en_US")
        assert controller.state == SwitchState.IDLE

    def test_truncated_catalog_never_installed(self, write_catalog, tmp_path):
        write_catalog("en_US", {"SystemTray": [("Exit", "Exit")]})
        path = write_catalog("ru_RU", {"SystemTray": [("Connect", "Подключиться"), ("Exit", "Выход")]})
        text = path.read_text(encoding="utf-8")
        path.write_text(text[: text.index("Выход")], encoding="utf-8")
        controller = _controller(tmp_path)

        with pytest.raises(InvalidCatalogError):
            controller.set_locale("ru_RU")

        assert controller.active_locale == Locale("en_US")
        assert not controller._store.is_cached("ru_RU")

    def test_unknown_fallback(self, translations_dir):
        store = CatalogStore(LocaleRegistry.discover(translations_dir))
        with pytest.raises(UnknownLocaleError):
            LocaleSwitchController(store, "zh_CN")

    def test_broken_fallback_propagates(self, write_catalog, tmp_path):
        write_catalog("en_US", {"MainWindow": [("Item %0", "Item %0")]})
        with pytest.raises(CatalogLoadError):
            _controller(tmp_path)

    def test_observers_notified(self, translations_dir):
        """Test that observers receive the new locale after the swap."""
        controller = _controller(translations_dir)
        seen: list[tuple[Locale, Locale]] = []
        controller.on_locale_changed(lambda locale: seen.append((locale, controller.active_locale)))

        controller.set_locale("ru_RU")
        controller.set_locale("en_US")

        assert seen == [
            (Locale("ru_RU"), Locale("ru_RU")),
            (Locale("en_US"), Locale("en_US")),
        ]

    def test_observers_not_notified_on_failure_or_noop(self, translations_dir):
        controller = _controller(translations_dir)
        seen: list[Locale] = []
        controller.on_locale_changed(seen.append)

        controller.set_locale("en_US")
        with pytest.raises(UnknownLocaleError):
            controller.set_locale("xx_XX")

        assert seen == []

    def test_unsubscribe(self, translations_dir):
        controller = _controller(translations_dir)
        seen: list[Locale] = []
        unsubscribe = controller.on_locale_changed(seen.append)

        unsubscribe()
        unsubscribe()
        controller.set_locale("ru_RU")

        assert seen == []

    def test_failing_observer_does_not_block_others(self, translations_dir):
        controller = _controller(translations_dir)
        seen: list[Locale] = []

        def _broken(locale: Locale) -> None:
            raise RuntimeError("widget already destroyed")

        controller.on_locale_changed(_broken)
        controller.on_locale_changed(seen.append)

        assert controller.set_locale("ru_RU") == Locale("ru_RU")
        assert seen == [Locale("ru_RU")]
        assert controller.active_locale == Locale("ru_RU")

    @pytest.mark.parametrize("redirect_first", [True, False])
    def test_observer_switching_again_leaves_last_notification_current(
        self, translations_dir, write_catalog, redirect_first
    ):
        """Test that a switch made from inside an observer is the last thing observers hear."""
        write_catalog("zh_CN", {"MainWindow": [("Connect", "连接")]})
        controller = _controller(translations_dir)
        seen: list[Locale] = []

        def _redirect(locale: Locale) -> None:
            if locale == Locale("ru_RU"):
                controller.set_locale("zh_CN")

        if redirect_first:
            controller.on_locale_changed(_redirect)
            controller.on_locale_changed(seen.append)
        else:
            controller.on_locale_changed(seen.append)
            controller.on_locale_changed(_redirect)

        controller.set_locale("ru_RU")

        assert controller.active_locale == Locale("zh_CN")
        assert seen[-1] == controller.active_locale
        assert seen.count(Locale("zh_CN")) == 1
        assert controller.state == SwitchState.IDLE

    def test_available_locales(self, translations_dir):
        controller = _controller(translations_dir)
        before = controller.available_locales()
        controller.set_locale("ru_RU")
        assert controller.available_locales() == before

    def test_concurrent_switches_are_serialized(self, translations_dir):
        """Test that notification order matches the order catalogs were installed."""
        controller = _controller(translations_dir)
        installed: list[str] = []
        controller.on_locale_changed(lambda locale: installed.append(locale.code))
        barrier = threading.Barrier(8)

        def _switch(code: str) -> None:
            barrier.wait()
            controller.set_locale(code)

        threads = [
            threading.Thread(target=_switch, args=("ru_RU" if index % 2 else "en_US",))
            for index in range(8)
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        # Last completed switch wins and every notification matched a real change
        assert controller.state == SwitchState.IDLE
        if installed:
            assert installed[-1] == controller.active_locale.code
        for previous, current in zip(installed, installed[1:]):
            assert previous != current
