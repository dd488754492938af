"""Tests for the built-in adapters and their host runtime delegation."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import pytest

from universal_i18n.adapters.base import Adapter, BaseAdapter
from universal_i18n.adapters.next import NextI18nAdapter
from universal_i18n.adapters.react import ReactI18nAdapter, to_i18next_resources
from universal_i18n.adapters.vanilla import VanillaI18nAdapter
from universal_i18n.adapters.vue import VueI18nAdapter
from universal_i18n.config import LocalizationConfig
from universal_i18n.diagnostics import AdapterInitializationError, DiagnosticCode
from universal_i18n.host import HostContext

MESSAGES = {
    "ko": {"a": {"b": "안녕"}, "hello": "안녕 {name}"},
    "en": {"hello": "Hello {name}"},
}


def _config(locale: str = "en", fallback: str = "ko") -> LocalizationConfig:
    return LocalizationConfig(locale=locale, fallback_locale=fallback, messages=MESSAGES)


class FakeComposer:
    """Stands in for the vue-i18n global composer."""

    def __init__(self, options: Mapping[str, Any]) -> None:
        self.options = options
        self.locale: str = options["locale"]
        self.calls: list[tuple[str, Any]] = []

    @property
    def available_locales(self) -> list[str]:
        return list(self.options["messages"])

    def t(self, key: str, params: Mapping[str, Any] | None = None) -> str:
        self.calls.append((key, params))
        return f"vue:{self.locale}:{key}"


class FakeVueI18n:
    """Stands in for the instance ``createI18n`` returns."""

    def __init__(self, options: Mapping[str, Any]) -> None:
        self.options = options
        # ``global`` is a keyword, so the attribute can only be set dynamically.
        setattr(self, "global", FakeComposer(options))

    @property
    def composer(self) -> FakeComposer:
        return getattr(self, "global")

    def t(self, key: str, params: Mapping[str, Any] | None = None) -> str:
        msg = "translation must go through the global composer"
        raise AssertionError(msg)


class FakeI18next:
    """Stands in for an i18next instance."""

    def __init__(self) -> None:
        self.language = ""
        self.languages: list[str] = []
        self.options: Mapping[str, Any] = {}

    def init(self, options: Mapping[str, Any]) -> None:
        self.options = options
        self.language = options["lng"]
        self.languages = [options["lng"], options["fallbackLng"]]

    def t(self, key: str, params: Mapping[str, Any] | None = None) -> str:
        return f"i18next:{self.language}:{key}"

    def change_language(self, locale: str) -> None:
        self.language = locale


class FailingInitI18next(FakeI18next):
    """i18next instance whose init() raises."""

    def init(self, options: Mapping[str, Any]) -> None:
        msg = "i18next init failed"
        raise RuntimeError(msg)


class FailingChangeI18next(FakeI18next):
    """i18next instance whose change_language() raises."""

    def change_language(self, locale: str) -> None:
        msg = "backend unavailable"
        raise RuntimeError(msg)


class TestBaseAdapter:
    """Canonical adapter behavior shared by every built-in adapter."""

    def test_satisfies_protocol(self) -> None:
        assert isinstance(VanillaI18nAdapter(), Adapter)

    def test_construction_does_no_setup(self) -> None:
        adapter = VanillaI18nAdapter()
        assert not adapter.initialized
        assert adapter.config is None
        assert adapter.available_locales() == []

    def test_translate_before_initialize_returns_key(self) -> None:
        assert VanillaI18nAdapter().translate("a.b") == "a.b"

    def test_initialize_returns_handle_and_activates_locale(self) -> None:
        adapter = VanillaI18nAdapter()
        assert adapter.initialize(_config()) is adapter
        assert adapter.initialized
        assert adapter.current_locale() == "en"
        assert adapter.available_locales() == ["ko", "en"]

    def test_translate_with_fallback_and_params(self) -> None:
        adapter = VanillaI18nAdapter()
        adapter.initialize(_config())
        assert adapter.translate("a.b") == "안녕"
        assert adapter.t("hello", {"name": "Kim"}) == "Hello Kim"
        assert adapter.translate("a.c") == "a.c"

    def test_change_locale(self) -> None:
        adapter = VanillaI18nAdapter()
        adapter.initialize(_config())
        adapter.change_locale("ko")
        assert adapter.current_locale() == "ko"
        assert adapter.translate("hello", {"name": "Kim"}) == "안녕 Kim"

    def test_unknown_locale_keeps_current(self, caplog: pytest.LogCaptureFixture) -> None:
        adapter = VanillaI18nAdapter()
        adapter.initialize(_config())
        with caplog.at_level("WARNING", logger="universal_i18n.adapters.base"):
            adapter.change_locale("fr")
        assert adapter.current_locale() == "en"
        assert "Locale 'fr' not found" in caplog.text

    def test_config_is_not_mutated_by_change_locale(self) -> None:
        adapter = VanillaI18nAdapter()
        config = _config()
        adapter.initialize(config)
        adapter.change_locale("ko")
        assert config.locale == "en"

    def test_failed_setup_leaves_adapter_uninitialized(self) -> None:
        class Broken(BaseAdapter):
            def _setup(self, config: LocalizationConfig, host: HostContext | None) -> object:
                raise RuntimeError("boom")

        adapter = Broken()
        with pytest.raises(RuntimeError, match="boom"):
            adapter.initialize(_config())
        assert not adapter.initialized


class TestVueAdapter:
    """Delegation to the host's vue-i18n runtime."""

    def test_requires_factory(self) -> None:
        adapter = VueI18nAdapter()
        with pytest.raises(AdapterInitializationError) as exc_info:
            adapter.initialize(_config(), host=HostContext())
        assert exc_info.value.code == DiagnosticCode.ADAPTER_INIT_FAILED
        assert exc_info.value.framework_id == "vue"
        assert not adapter.initialized

    def test_rejects_non_callable_factory(self) -> None:
        with pytest.raises(AdapterInitializationError):
            VueI18nAdapter().initialize(_config(), host=HostContext(markers={"createI18n": 1}))

    def test_no_host_fails(self) -> None:
        with pytest.raises(AdapterInitializationError):
            VueI18nAdapter().initialize(_config())

    def test_instance_without_global_composer_fails(self) -> None:
        adapter = VueI18nAdapter()
        host = HostContext(markers={"createI18n": lambda options: object()})
        with pytest.raises(AdapterInitializationError) as exc_info:
            adapter.initialize(_config(), host=host)
        assert exc_info.value.code == DiagnosticCode.ADAPTER_INIT_FAILED
        assert not adapter.initialized

    def test_creates_instance_with_config(self) -> None:
        instances: list[FakeVueI18n] = []

        def create_i18n(options: Mapping[str, Any]) -> FakeVueI18n:
            instances.append(FakeVueI18n(options))
            return instances[-1]

        adapter = VueI18nAdapter()
        handle = adapter.initialize(_config(), host=HostContext(markers={"createI18n": create_i18n}))
        (instance,) = instances
        assert handle is instance
        assert instance.options["legacy"] is False
        assert instance.options["locale"] == "en"
        assert instance.options["fallbackLocale"] == "ko"
        assert instance.options["messages"]["ko"] == MESSAGES["ko"]

    def test_delegates_through_global_composer(self) -> None:
        adapter = VueI18nAdapter()
        handle = adapter.initialize(_config(), host=HostContext(markers={"createI18n": FakeVueI18n}))
        assert isinstance(handle, FakeVueI18n)
        assert adapter.translate("hello", {"name": "Kim"}) == "vue:en:hello"
        assert handle.composer.calls == [("hello", {"name": "Kim"})]
        adapter.change_locale("ko")
        assert handle.composer.locale == "ko"
        assert adapter.current_locale() == "ko"
        assert adapter.translate("hello") == "vue:ko:hello"
        assert adapter.available_locales() == ["ko", "en"]

    def test_unknown_locale_not_forwarded(self) -> None:
        adapter = VueI18nAdapter()
        handle = adapter.initialize(_config(), host=HostContext(markers={"createI18n": FakeVueI18n}))
        adapter.change_locale("fr")
        assert adapter.current_locale() == "en"
        assert isinstance(handle, FakeVueI18n)
        assert handle.composer.locale == "en"

    def test_translate_before_initialize_returns_key(self) -> None:
        assert VueI18nAdapter().translate("a.b") == "a.b"


class TestReactAdapter:
    """i18next delegation with canonical fallback."""

    def test_simple_mode_without_i18next(self) -> None:
        adapter = ReactI18nAdapter()
        assert adapter.initialize(_config(), host=HostContext()) is adapter
        assert not adapter.uses_i18next
        assert adapter.translate("a.b") == "안녕"
        assert adapter.translate("hello", {"name": "Kim"}) == "Hello Kim"

    def test_initializes_i18next(self) -> None:
        runtime = FakeI18next()
        adapter = ReactI18nAdapter()
        handle = adapter.initialize(_config(), host=HostContext(markers={"i18next": runtime}))
        assert handle is runtime
        assert adapter.uses_i18next
        assert runtime.options["lng"] == "en"
        assert runtime.options["fallbackLng"] == "ko"
        assert runtime.options["interpolation"] == {"escapeValue": False}
        assert runtime.options["resources"]["en"] == {"translation": MESSAGES["en"]}

    def test_delegates_to_i18next(self) -> None:
        runtime = FakeI18next()
        adapter = ReactI18nAdapter()
        adapter.initialize(_config(), host=HostContext(markers={"i18next": runtime}))
        assert adapter.translate("hello") == "i18next:en:hello"
        adapter.change_locale("ko")
        assert runtime.language == "ko"
        assert adapter.current_locale() == "ko"
        assert adapter.available_locales() == ["en", "ko"]

    def test_unknown_locale_not_forwarded_to_i18next(self) -> None:
        runtime = FakeI18next()
        adapter = ReactI18nAdapter()
        adapter.initialize(_config(), host=HostContext(markers={"i18next": runtime}))
        adapter.change_locale("fr")
        assert runtime.language == "en"

    def test_failed_i18next_init_falls_back_to_simple_mode(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        adapter = ReactI18nAdapter()
        host = HostContext(markers={"i18next": FailingInitI18next()})
        with caplog.at_level("WARNING", logger="universal_i18n.adapters.react"):
            handle = adapter.initialize(_config(), host=host)
        assert handle is adapter
        assert adapter.initialized
        assert not adapter.uses_i18next
        assert adapter.translate("hello", {"name": "Kim"}) == "Hello Kim"
        assert "i18next init failed" in caplog.text

    def test_failed_change_language_keeps_current_locale(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        runtime = FailingChangeI18next()
        adapter = ReactI18nAdapter()
        adapter.initialize(_config(), host=HostContext(markers={"i18next": runtime}))
        with caplog.at_level("WARNING", logger="universal_i18n.adapters.react"):
            adapter.change_locale("ko")
        assert adapter.current_locale() == "en"
        assert runtime.language == "en"
        assert "backend unavailable" in caplog.text

    def test_resources_shape(self) -> None:
        assert to_i18next_resources({"en": {"a": "b"}}) == {"en": {"translation": {"a": "b"}}}


class TestNextAdapter:
    """React behavior plus locale-prefixed paths."""

    def test_is_react_adapter(self) -> None:
        adapter = NextI18nAdapter()
        adapter.initialize(_config(), host=HostContext(markers={"__NEXT_DATA__": {}}))
        assert isinstance(adapter, ReactI18nAdapter)
        assert adapter.translate("a.b") == "안녕"

    @pytest.mark.parametrize(
        ("path", "locale", "expected"),
        [
            ("about", "ko", "/ko/about"),
            ("/about", "ko", "/ko/about"),
            ("/", "ko", "/ko/"),
            ("/about", None, "/en/about"),
        ],
    )
    def test_localized_path(self, path: str, locale: str | None, expected: str) -> None:
        adapter = NextI18nAdapter()
        adapter.initialize(_config())
        assert adapter.localized_path(path, locale) == expected
