"""Vue adapter delegating to the host's vue-i18n runtime.

The host exposes vue-i18n's ``createI18n`` factory as a global marker. The
adapter creates an i18n instance from it and delegates translation and locale
state to the instance's ``global`` composer. Without the factory the adapter
cannot initialize.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from typing import TYPE_CHECKING, Any, ClassVar, Protocol

from universal_i18n.adapters.base import BaseAdapter
from universal_i18n.diagnostics import (
    AdapterInitializationError,
    Diagnostic,
    DiagnosticCode,
)
from universal_i18n.enums import Framework

if TYPE_CHECKING:
    from universal_i18n.config import LocalizationConfig
    from universal_i18n.host import HostContext
    from universal_i18n.types import LocaleCode, MessageKey, TranslationParams

__all__ = ["VUE_I18N_FACTORY_MARKER", "VueI18nAdapter", "VueI18nComposer"]

logger = logging.getLogger(__name__)

VUE_I18N_FACTORY_MARKER = "createI18n"

# Attribute of the vue-i18n instance holding the global composer.
_GLOBAL_COMPOSER = "global"


class VueI18nComposer(Protocol):
    """Subset of the vue-i18n global composer the adapter relies on.

    Reached as ``instance.global`` on the object ``createI18n`` returns.
    """

    locale: str

    @property
    def available_locales(self) -> Sequence[str]:
        """Locales the runtime holds messages for."""
        ...

    def t(self, key: str, params: Mapping[str, Any] | None = None) -> str:
        """Translate a key."""
        ...


class VueI18nAdapter(BaseAdapter):
    """Adapter for Vue hosts."""

    framework_id: ClassVar[str] = Framework.VUE

    __slots__ = ("_composer",)

    def __init__(self) -> None:
        super().__init__()
        self._composer: VueI18nComposer | None = None

    def _init_failed(self, message: str) -> AdapterInitializationError:
        diagnostic = Diagnostic(
            code=DiagnosticCode.ADAPTER_INIT_FAILED,
            message=message,
            hint=f"Expose vue-i18n's {VUE_I18N_FACTORY_MARKER} on the host",
            framework_id=self.framework_id,
        )
        return AdapterInitializationError(diagnostic, framework_id=self.framework_id)

    def _setup(self, config: LocalizationConfig, host: HostContext | None) -> object:
        factory: Callable[[Mapping[str, Any]], object] | None = (
            host.get_marker(VUE_I18N_FACTORY_MARKER) if host is not None else None
        )
        if not callable(factory):
            raise self._init_failed("vue-i18n runtime not available")

        instance = factory(
            {
                "legacy": False,
                "globalInjection": False,
                "locale": config.locale,
                "fallbackLocale": config.fallback_locale,
                "messages": config.messages,
            }
        )
        composer = getattr(instance, _GLOBAL_COMPOSER, None)
        if composer is None:
            raise self._init_failed(
                f"{VUE_I18N_FACTORY_MARKER}() returned an instance without a global composer"
            )
        self._composer = composer
        logger.debug("VueI18nAdapter bound to host vue-i18n runtime")
        return instance

    def translate(self, key: MessageKey, params: TranslationParams | None = None) -> str:
        """Translate through the vue-i18n composer; ``key`` before initialization."""
        if self._composer is None:
            return key
        return self._composer.t(key, params)

    def change_locale(self, locale: LocaleCode) -> None:
        """Set the composer's locale; unknown locales are logged and ignored."""
        if self._composer is None or self._config is None:
            return
        if not self._config.has_locale(locale):
            self._warn_locale_not_found(locale)
            return
        self._composer.locale = locale
        self._current_locale = locale

    def current_locale(self) -> LocaleCode:
        """Return the composer's locale once bound."""
        if self._composer is not None:
            return self._composer.locale
        return self._current_locale

    def available_locales(self) -> list[LocaleCode]:
        """Return the composer's locales once bound."""
        if self._composer is not None:
            return list(self._composer.available_locales)
        return super().available_locales()
