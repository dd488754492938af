"""Tests for the package-level convenience functions."""

from __future__ import annotations

from pathlib import Path

import pytest

import universal_i18n
from tests.helpers.locale_files import write_locale
from universal_i18n import api
from universal_i18n.host import HostContext


class TestCreateI18n:
    """create_i18n() returns an initialized resolver."""

    def test_initialized(self, host: HostContext) -> None:
        i18n = universal_i18n.create_i18n(
            host, locale="en", fallback_locale="ko", messages={"ko": {"a": "가"}, "en": {}}
        )
        assert i18n.is_initialized()
        assert i18n.t("a") == "가"

    def test_independent_instances(self, host: HostContext) -> None:
        assert universal_i18n.create_i18n(host) is not universal_i18n.create_i18n(host)


class TestGetI18n:
    """Process-wide shared resolver."""

    @pytest.fixture(autouse=True)
    def _reset_shared(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(api, "_shared_resolver", None)

    def test_created_once(self, host: HostContext) -> None:
        first = universal_i18n.get_i18n(host, locale="en")
        second = universal_i18n.get_i18n(host, locale="ko")
        assert first is second
        assert second.get_current_locale() == "en"


class TestEnvironmentHelpers:
    """Detection and loading shortcuts."""

    def test_get_environment_info(self) -> None:
        info = universal_i18n.get_environment_info(
            HostContext(markers={"__NEXT_DATA__": {}})
        )
        assert info.framework_id == "next"
        assert info.build_tool_id == "webpack"

    def test_discover_available_locales(self, tmp_path: Path) -> None:
        write_locale(tmp_path / "locales", "en", {"x": "y"})
        host = HostContext(project_root=tmp_path)
        assert universal_i18n.discover_available_locales(host) == ["en"]

    def test_preload_all(self, tmp_path: Path) -> None:
        write_locale(tmp_path / "locales", "en", {"x": "y"})
        write_locale(tmp_path / "locales", "ko", {"x": "와이"})
        host = HostContext(project_root=tmp_path)
        assert set(universal_i18n.preload_locales(host=host)) == {"ko", "en"}

    def test_preload_selected(self, tmp_path: Path) -> None:
        write_locale(tmp_path / "locales", "en", {"x": "y"})
        write_locale(tmp_path / "locales", "ko", {"x": "와이"})
        host = HostContext(project_root=tmp_path)
        assert universal_i18n.preload_locales(["en", "fr"], host) == {"en": {"x": "y"}}


class TestPackageExports:
    """Top-level namespace."""

    def test_all_names_importable(self) -> None:
        for name in universal_i18n.__all__:
            assert hasattr(universal_i18n, name), name

    def test_version(self) -> None:
        assert isinstance(universal_i18n.__version__, str)
        assert universal_i18n.__version__
