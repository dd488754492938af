"""React adapter with optional i18next delegation.

When the host exposes an ``i18next`` instance, the adapter initializes it
with the loaded messages and delegates translation to it. Otherwise it uses
the canonical in-memory resolution, so a React host without i18next still
gets working translations.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any, ClassVar, Protocol

from universal_i18n.adapters.base import BaseAdapter
from universal_i18n.enums import Framework

if TYPE_CHECKING:
    from universal_i18n.config import LocalizationConfig
    from universal_i18n.host import HostContext
    from universal_i18n.types import LocaleCode, LocaleTree, MessageKey, TranslationParams

__all__ = ["I18NEXT_MARKER", "I18nextRuntime", "ReactI18nAdapter"]

logger = logging.getLogger(__name__)

I18NEXT_MARKER = "i18next"


class I18nextRuntime(Protocol):
    """Subset of the i18next instance API the adapter relies on."""

    language: str
    languages: Sequence[str]

    def init(self, options: Mapping[str, Any]) -> object:
        """Initialize with resources and language options."""
        ...

    def t(self, key: str, params: Mapping[str, Any] | None = None) -> str:
        """Translate a key."""
        ...

    def change_language(self, locale: str) -> object:
        """Switch the active language."""
        ...


def to_i18next_resources(
    messages: Mapping[LocaleCode, LocaleTree],
) -> dict[LocaleCode, dict[str, LocaleTree]]:
    """Wrap each locale tree in i18next's default ``translation`` namespace."""
    return {locale: {"translation": tree} for locale, tree in messages.items()}


class ReactI18nAdapter(BaseAdapter):
    """Adapter for React hosts."""

    framework_id: ClassVar[str] = Framework.REACT

    __slots__ = ("_i18next",)

    def __init__(self) -> None:
        super().__init__()
        self._i18next: I18nextRuntime | None = None

    @property
    def uses_i18next(self) -> bool:
        """Whether translation is delegated to a host i18next instance."""
        return self._i18next is not None

    def _setup(self, config: LocalizationConfig, host: HostContext | None) -> object:
        runtime = host.get_marker(I18NEXT_MARKER) if host is not None else None
        if runtime is None:
            logger.debug("%s initialized with simple implementation", type(self).__name__)
            return self

        try:
            runtime.init(
                {
                    "lng": config.locale,
                    "fallbackLng": config.fallback_locale,
                    "interpolation": {"escapeValue": False},
                    "resources": to_i18next_resources(config.messages),
                }
            )
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.warning(
                "%s: i18next initialization failed, using simple implementation: %s",
                type(self).__name__,
                e,
            )
            return self
        self._i18next = runtime
        logger.debug("%s initialized with i18next", type(self).__name__)
        return runtime

    def translate(self, key: MessageKey, params: TranslationParams | None = None) -> str:
        """Translate through i18next when bound, else canonical resolution."""
        if self._i18next is not None:
            return self._i18next.t(key, params)
        return super().translate(key, params)

    def change_locale(self, locale: LocaleCode) -> None:
        """Switch locale; a rejected i18next switch keeps the current locale."""
        if self._config is None:
            return
        if not self._config.has_locale(locale):
            self._warn_locale_not_found(locale)
            return
        if self._i18next is not None:
            try:
                self._i18next.change_language(locale)
            except Exception as e:  # pylint: disable=broad-exception-caught
                logger.warning(
                    "i18next rejected locale change to %r, keeping %r: %s",
                    locale,
                    self._current_locale,
                    e,
                )
                return
        self._current_locale = locale

    def current_locale(self) -> LocaleCode:
        """Return i18next's language when bound."""
        if self._i18next is not None:
            return self._i18next.language
        return self._current_locale

    def available_locales(self) -> list[LocaleCode]:
        """Return i18next's languages when bound and non-empty."""
        if self._i18next is not None and self._i18next.languages:
            return list(self._i18next.languages)
        return super().available_locales()
