"""Adapter contract and the shared canonical adapter implementation.

Every framework adapter exposes the same capability set to the resolver:
initialize, translate, change_locale, current_locale and available_locales.
BaseAdapter implements all of them on top of the canonical resolution
algorithm in universal_i18n.translation; framework adapters subclass it and
override only what their host runtime does differently.

Adapters are constructed without arguments and must not do any work in
__init__; all setup happens in initialize().

Python 3.13+.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, ClassVar, Protocol, runtime_checkable

from universal_i18n.constants import DEFAULT_LOCALE
from universal_i18n.diagnostics import Diagnostic, DiagnosticCode
from universal_i18n.translation import resolve

if TYPE_CHECKING:
    from universal_i18n.config import LocalizationConfig
    from universal_i18n.host import HostContext
    from universal_i18n.types import LocaleCode, MessageKey, TranslationParams

__all__ = ["Adapter", "BaseAdapter"]

logger = logging.getLogger(__name__)


@runtime_checkable
class Adapter(Protocol):
    """Protocol every framework adapter satisfies.

    This is a Protocol (structural typing) rather than an ABC so third-party
    adapters registered at runtime need not inherit from BaseAdapter.
    """

    def initialize(self, config: LocalizationConfig, *, host: HostContext | None = None) -> object:
        """Set up the adapter and return its internal handle."""
        ...

    def translate(self, key: MessageKey, params: TranslationParams | None = None) -> str:
        """Resolve a key in the active locale."""
        ...

    def change_locale(self, locale: LocaleCode) -> None:
        """Switch the active locale."""
        ...

    def current_locale(self) -> LocaleCode:
        """Return the active locale."""
        ...

    def available_locales(self) -> list[LocaleCode]:
        """Return the locale codes that have messages."""
        ...


class BaseAdapter:
    """Canonical adapter backed by an in-memory message mapping.

    Attributes:
        framework_id: Framework this adapter serves (class-level)
    """

    framework_id: ClassVar[str] = ""

    __slots__ = ("_config", "_current_locale")

    def __init__(self) -> None:
        self._config: LocalizationConfig | None = None
        self._current_locale: LocaleCode = DEFAULT_LOCALE

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return (
            f"{type(self).__name__}(locale={self._current_locale!r}, "
            f"initialized={self.initialized})"
        )

    @property
    def initialized(self) -> bool:
        """Whether initialize() has completed."""
        return self._config is not None

    @property
    def config(self) -> LocalizationConfig | None:
        """Configuration passed to initialize(), or None before it."""
        return self._config

    def initialize(self, config: LocalizationConfig, *, host: HostContext | None = None) -> object:
        """Store the configuration and activate its locale.

        Subclasses hook into setup via _setup(); if it raises, the adapter
        stays uninitialized.

        Args:
            config: Locale, fallback locale and messages
            host: Host context, for adapters that delegate to a host runtime

        Returns:
            The adapter's internal handle (the adapter itself by default)
        """
        handle = self._setup(config, host)
        self._config = config
        self._current_locale = config.locale
        logger.debug(
            "%s initialized: locale=%s fallback=%s locales=%s",
            type(self).__name__,
            config.locale,
            config.fallback_locale,
            list(config.messages),
        )
        return handle

    def _setup(self, config: LocalizationConfig, host: HostContext | None) -> object:  # noqa: ARG002
        """Framework-specific setup; returns the adapter handle."""
        return self

    def translate(self, key: MessageKey, params: TranslationParams | None = None) -> str:
        """Resolve a key with the canonical algorithm.

        Returns ``key`` unchanged before initialization or on a miss.
        """
        if self._config is None:
            return key
        return resolve(
            self._config.messages,
            self._current_locale,
            self._config.fallback_locale,
            key,
            params,
        )

    def t(self, key: MessageKey, params: TranslationParams | None = None) -> str:
        """Shorthand for translate()."""
        return self.translate(key, params)

    def change_locale(self, locale: LocaleCode) -> None:
        """Switch the active locale if messages exist for it.

        An unknown locale is logged and ignored; the current locale is kept.
        """
        if self._config is None or not self._config.has_locale(locale):
            self._warn_locale_not_found(locale)
            return
        self._current_locale = locale

    def current_locale(self) -> LocaleCode:
        """Return the active locale."""
        return self._current_locale

    def available_locales(self) -> list[LocaleCode]:
        """Return locale codes present in the configured messages."""
        if self._config is None:
            return []
        return list(self._config.available_locales)

    def _warn_locale_not_found(self, locale: LocaleCode) -> None:
        diagnostic = Diagnostic(
            code=DiagnosticCode.LOCALE_NOT_FOUND,
            message=f"Locale '{locale}' not found",
            hint="Add a locale file for it or pass its messages to init()",
            framework_id=self.framework_id or None,
            locale=locale,
            severity="warning",
        )
        logger.warning("[%s] %s", type(self).__name__, diagnostic)
