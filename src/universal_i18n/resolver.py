"""Localization resolver: environment detection, message loading and adapter orchestration.

LocalizationResolver composes the EnvironmentProbe, MessageLoader and
AdapterRegistry. init() loads messages, creates the adapter for the detected
framework (retrying once with the registry's fallback adapter) and
initializes it. translate() is a plain delegation to the active adapter.

Lifecycle:
    UNINITIALIZED -> INITIALIZING -> READY

    There is no error state. If init() fails the exception propagates and
    the resolver returns to UNINITIALIZED with no adapter; it never ends up
    partially ready.

Uninitialized use:
    translate() before init() logs a warning and returns the key, so reads
    never crash the caller. change_locale() before init() raises
    NotInitializedError, so state-mutating calls fail loudly.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from universal_i18n.adapters.registry import AdapterRegistry
from universal_i18n.config import LocalizationConfig
from universal_i18n.diagnostics import (
    AdapterError,
    Diagnostic,
    DiagnosticCode,
    NoAdapterAvailableError,
    NotInitializedError,
)
from universal_i18n.enums import ResolverState
from universal_i18n.environment import EnvironmentInfo, EnvironmentProbe
from universal_i18n.host import HostContext
from universal_i18n.loading import MessageLoader

if TYPE_CHECKING:
    from universal_i18n.adapters.base import Adapter
    from universal_i18n.adapters.registry import AdapterDescriptor, DependencyReport
    from universal_i18n.types import (
        FrameworkId,
        LocaleCode,
        LocaleTree,
        MessageKey,
        TranslationParams,
    )

__all__ = ["LocalizationResolver"]

logger = logging.getLogger(__name__)


class LocalizationResolver:
    """Framework-independent translation entry point.

    The environment is detected once, at construction, and never re-detected.

    Example:
        >>> i18n = LocalizationResolver()
        >>> i18n.init(messages={"ko": {"hi": "안녕 {name}"}, "en": {"hi": "Hi {name}"}})
        >>> i18n.translate("hi", {"name": "Kim"})
        '안녕 Kim'
        >>> i18n.change_locale("en")
        >>> i18n.t("hi", {"name": "Kim"})
        'Hi Kim'
    """

    __slots__ = (
        "_adapter",
        "_config",
        "_environment",
        "_host",
        "_loader",
        "_probe",
        "_registry",
        "_state",
    )

    def __init__(
        self,
        host: HostContext | None = None,
        *,
        registry: AdapterRegistry | None = None,
        loader: MessageLoader | None = None,
    ) -> None:
        """Detect the environment and prepare the loader.

        Args:
            host: Host context (default: the current process)
            registry: Adapter registry (default: the shared registry)
            loader: Message loader (default: one built for the detected
                environment)
        """
        self._host = host if host is not None else HostContext.from_process()
        self._registry = registry if registry is not None else AdapterRegistry.get_instance()
        self._probe = EnvironmentProbe(self._host, self._registry)
        self._environment: EnvironmentInfo = self._probe.get_environment()
        self._loader = (
            loader if loader is not None else MessageLoader(self._environment, self._host)
        )
        self._adapter: Adapter | None = None
        self._config: LocalizationConfig | None = None
        self._state = ResolverState.UNINITIALIZED

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return (
            f"LocalizationResolver(state={self._state.value}, "
            f"framework={self._environment.framework_id!r}, "
            f"build_tool={self._environment.build_tool_id!r})"
        )

    @property
    def state(self) -> ResolverState:
        """Current lifecycle state."""
        return self._state

    @property
    def adapter(self) -> Adapter | None:
        """Active adapter, or None before init() completes."""
        return self._adapter

    @property
    def config(self) -> LocalizationConfig | None:
        """Configuration the active adapter was initialized with."""
        return self._config

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def init(
        self,
        *,
        locale: LocaleCode | None = None,
        fallback_locale: LocaleCode | None = None,
        messages: Mapping[LocaleCode, LocaleTree] | None = None,
    ) -> None:
        """Load messages, create the adapter and initialize it.

        Explicit arguments override the loader's discovered values. Calling
        init() on a ready resolver re-initializes it with a new adapter.

        Args:
            locale: Initial locale (default: I18N_LOCALE)
            fallback_locale: Fallback locale (default: I18N_FALLBACK_LOCALE)
            messages: Locale trees (default: loaded by the MessageLoader)

        Raises:
            NoAdapterAvailableError: If neither the detected nor the fallback
                adapter can be created
            AdapterError: If adapter creation or initialization fails
        """
        previous_state = self._state
        self._state = ResolverState.INITIALIZING
        try:
            config = LocalizationConfig(
                locale=locale or self._loader.get_default_locale(),
                fallback_locale=fallback_locale or self._loader.get_fallback_locale(),
                messages=messages if messages is not None else self._loader.load_messages(),
            )
            adapter = self.create_adapter()
            adapter.initialize(config, host=self._host)
        except Exception as e:
            logger.error("Initialization failed: %s", e)  # noqa: TRY400
            self._adapter = None
            self._config = None
            self._state = ResolverState.UNINITIALIZED
            raise

        self._adapter = adapter
        self._config = config
        self._state = ResolverState.READY
        logger.info(
            "Initialized with %s framework (adapter=%s): locale=%s, locales=%s, build_tool=%s%s",
            self._environment.framework_id,
            type(adapter).__name__,
            config.locale,
            list(config.messages),
            self._environment.build_tool_id,
            " (re-initialized)" if previous_state == ResolverState.READY else "",
        )

    def create_adapter(self) -> Adapter:
        """Create the adapter for the detected framework.

        On failure the registry's fallback adapter is tried exactly once,
        unless it is the same framework.

        Raises:
            NoAdapterAvailableError: If the fallback adapter also fails
            AdapterError: If the detected adapter fails and it already is
                the fallback
        """
        framework_id = self._environment.framework_id
        try:
            return self._registry.create_adapter(framework_id)
        except AdapterError as error:
            fallback_id = self._registry.get_fallback_adapter()
            if fallback_id == framework_id:
                raise
            logger.warning(
                "Failed to load %s adapter, trying fallback %s: %s",
                framework_id,
                fallback_id,
                error,
            )
            try:
                return self._registry.create_adapter(fallback_id)
            except AdapterError as fallback_error:
                logger.error("Fallback adapter also failed: %s", fallback_error)  # noqa: TRY400
                diagnostic = Diagnostic(
                    code=DiagnosticCode.NO_ADAPTER_AVAILABLE,
                    message=f"Failed to load any adapter. Last error: {fallback_error}",
                    framework_id=framework_id,
                )
                raise NoAdapterAvailableError(
                    diagnostic, framework_id=framework_id
                ) from fallback_error

    # ------------------------------------------------------------------
    # Translation
    # ------------------------------------------------------------------

    def translate(self, key: MessageKey, params: TranslationParams | None = None) -> str:
        """Translate a key in the active locale.

        Never raises for missing keys: a miss returns ``key`` unchanged.
        Before init() completes, logs a warning and returns ``key``.
        """
        if self._state != ResolverState.READY or self._adapter is None:
            logger.warning("Not initialized yet; returning key %r", key)
            return key
        return self._adapter.translate(key, params)

    def t(self, key: MessageKey, params: TranslationParams | None = None) -> str:
        """Shorthand for translate()."""
        return self.translate(key, params)

    def change_locale(self, locale: LocaleCode) -> None:
        """Switch the active locale.

        A locale without messages is logged by the adapter and ignored.

        Raises:
            NotInitializedError: If init() has not completed
        """
        if self._state != ResolverState.READY or self._adapter is None:
            diagnostic = Diagnostic(
                code=DiagnosticCode.NOT_INITIALIZED,
                message="Not initialized yet",
                hint="Call init() before change_locale()",
                locale=locale,
            )
            raise NotInitializedError(diagnostic)
        self._adapter.change_locale(locale)

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    def is_initialized(self) -> bool:
        """Whether init() has completed."""
        return self._state == ResolverState.READY

    def get_current_locale(self) -> LocaleCode:
        """Return the active locale (the configured default before init())."""
        if self._adapter is not None:
            return self._adapter.current_locale()
        if self._config is not None:
            return self._config.locale
        return self._loader.get_default_locale()

    def get_available_locales(self) -> list[LocaleCode]:
        """Return the locale codes with messages (empty before init())."""
        if self._adapter is not None:
            return self._adapter.available_locales()
        if self._config is not None:
            return list(self._config.messages)
        return []

    def get_environment_info(self) -> EnvironmentInfo:
        """Return the environment detected at construction."""
        return self._environment

    def get_available_adapters(self) -> list[FrameworkId]:
        """Return all framework ids known to the registry."""
        return self._registry.get_available_adapters()

    def get_current_adapter_info(self) -> AdapterDescriptor | None:
        """Return the registry descriptor of the detected framework."""
        return self._registry.get_adapter_info(self._environment.framework_id)

    def check_adapter_dependencies(
        self,
        framework_id: FrameworkId | None = None,
    ) -> DependencyReport:
        """Check an adapter's host dependencies (default: the detected framework)."""
        target = framework_id or self._environment.framework_id
        return self._registry.check_dependencies(target, self._host)

    def get_discovered_locales(self) -> list[LocaleCode]:
        """Return the locale codes the loader can load right now."""
        return self._loader.get_available_locales()

    def get_loader_info(self) -> dict[str, Any]:
        """Return the loader's environment and locale defaults (for debugging)."""
        return {
            "environment": self._environment,
            "default_locale": self._loader.get_default_locale(),
            "fallback_locale": self._loader.get_fallback_locale(),
            "load_summary": self._loader.get_load_summary(),
        }
