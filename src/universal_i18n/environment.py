"""Host environment detection.

Reports which front-end framework and build tool the host runs, and
collects the build-tool-specific environment variables into one flat
mapping.

Framework detection walks the registry's detection order and returns the
first framework whose predicate matches (first match wins, not most
specific). Each predicate is a pure function over a HostContext, so any
environment can be fabricated in tests.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from universal_i18n.adapters.registry import AdapterRegistry
from universal_i18n.constants import (
    DEFAULT_LOCALE,
    ENV_FALLBACK_LOCALE_KEY,
    ENV_LOCALE_KEY,
    NUXT_ENV_PREFIXES,
    PROCESS_ENV_PREFIXES,
    VITE_ENV_PREFIXES,
)
from universal_i18n.enums import BuildTool, Framework
from universal_i18n.host import HostContext
from universal_i18n.types import BuildToolId, FrameworkId

__all__ = [
    "FRAMEWORK_PREDICATES",
    "EnvironmentInfo",
    "EnvironmentProbe",
    "FrameworkPredicate",
]

logger = logging.getLogger(__name__)

type FrameworkPredicate = Callable[[HostContext], bool]


def _any_marker(host: HostContext, *names: str) -> bool:
    return any(host.has_marker(name) for name in names)


def _any_selector(host: HostContext, *selectors: str) -> bool:
    return any(host.matches(selector) for selector in selectors)


def is_next(host: HostContext) -> bool:
    """Next.js: page data injected by the Next runtime."""
    return host.has_marker("__NEXT_DATA__")


def is_nuxt(host: HostContext) -> bool:
    """Nuxt: server state payload or the root Nuxt instance."""
    return _any_marker(host, "__NUXT__", "$nuxt")


def is_vue(host: HostContext) -> bool:
    """Vue: global constructor, devtools flag, or scoped-style DOM markers."""
    return _any_marker(host, "Vue", "__VUE__") or _any_selector(host, "[data-v-]", ".vue-app")


def is_react(host: HostContext) -> bool:
    """React: global, devtools hook, or a React root element."""
    return _any_marker(host, "React", "__REACT_DEVTOOLS_GLOBAL_HOOK__") or _any_selector(
        host, "[data-reactroot]", "#root"
    )


def is_svelte(host: HostContext) -> bool:
    """Svelte: dev-mode global."""
    return host.has_marker("__SVELTE__")


def is_angular(host: HostContext) -> bool:
    """Angular: debugging globals."""
    return _any_marker(host, "ng", "getAllAngularRootElements")


FRAMEWORK_PREDICATES: Mapping[FrameworkId, FrameworkPredicate] = MappingProxyType(
    {
        Framework.NEXT: is_next,
        Framework.NUXT: is_nuxt,
        Framework.VUE: is_vue,
        Framework.REACT: is_react,
        Framework.SVELTE: is_svelte,
        Framework.ANGULAR: is_angular,
    }
)
"""Built-in framework predicates keyed by framework id."""


@dataclass(frozen=True, slots=True)
class EnvironmentInfo:
    """Snapshot of the detected host environment.

    Attributes:
        framework_id: Detected framework (or the registry's fallback id)
        build_tool_id: Detected build tool (or ``unknown``)
        env_vars: Prefix-stripped environment variables; always contains
            I18N_LOCALE and I18N_FALLBACK_LOCALE
    """

    framework_id: FrameworkId
    build_tool_id: BuildToolId
    env_vars: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Store ids as plain strings and freeze env_vars."""
        object.__setattr__(self, "framework_id", str(self.framework_id))
        object.__setattr__(self, "build_tool_id", str(self.build_tool_id))
        object.__setattr__(self, "env_vars", MappingProxyType(dict(self.env_vars)))


def _scan_namespace(
    namespace: Mapping[str, Any],
    prefixes: Iterable[str],
    into: dict[str, str],
) -> None:
    """Copy prefixed variables into ``into`` with the prefix stripped.

    Keys already present are kept; earlier namespaces take precedence.
    """
    for name, value in namespace.items():
        for prefix in prefixes:
            if name.startswith(prefix):
                bare = name.removeprefix(prefix)
                if bare and bare not in into:
                    into[bare] = "" if value is None else str(value)
                break


class EnvironmentProbe:
    """Detects framework, build tool and environment variables of a host.

    Example:
        >>> host = HostContext(markers={"React": object()})
        >>> probe = EnvironmentProbe(host)
        >>> probe.detect_framework()
        'react'
        >>> probe.detect_build_tool()
        'unknown'
    """

    __slots__ = ("_host", "_predicates", "_registry")

    def __init__(
        self,
        host: HostContext | None = None,
        registry: AdapterRegistry | None = None,
        *,
        predicates: Mapping[FrameworkId, FrameworkPredicate] | None = None,
    ) -> None:
        """Initialize the probe.

        Args:
            host: Host context to inspect (default: the current process)
            registry: Registry supplying detection order and fallback id
                (default: the shared registry)
            predicates: Framework predicates (default: the built-in set)
        """
        self._host = host if host is not None else HostContext.from_process()
        self._registry = registry if registry is not None else AdapterRegistry.get_instance()
        self._predicates: dict[FrameworkId, FrameworkPredicate] = dict(
            FRAMEWORK_PREDICATES if predicates is None else predicates
        )

    @property
    def host(self) -> HostContext:
        """Host context being inspected."""
        return self._host

    def register_predicate(self, framework_id: FrameworkId, predicate: FrameworkPredicate) -> None:
        """Add or replace the detection predicate for a framework.

        The framework is only considered if it also appears in the registry's
        detection order.
        """
        self._predicates[framework_id] = predicate

    def detect_framework(self) -> FrameworkId:
        """Return the first framework in detection order whose predicate matches.

        Frameworks without a predicate never match. When nothing matches, the
        registry's fallback framework id is returned.
        """
        for framework_id in self._registry.get_detection_order():
            predicate = self._predicates.get(framework_id)
            if predicate is not None and predicate(self._host):
                logger.debug("Detected framework: %s", framework_id)
                return framework_id
        fallback = self._registry.get_fallback_adapter()
        logger.debug("No framework detected, using %s", fallback)
        return fallback

    def detect_build_tool(self) -> BuildToolId:
        """Return the build tool, checked in fixed priority order.

        Priority:
        1. vite: module-meta object with hot module replacement
        2. webpack: webpack runtime global, or Next.js page data
        3. unknown
        """
        host = self._host
        if host.import_meta is not None and host.import_meta.get("hot"):
            return BuildTool.VITE
        if host.has_marker("__webpack_require__"):
            return BuildTool.WEBPACK
        # Next.js bundles with webpack even when its runtime global is hidden.
        if host.has_marker("__NEXT_DATA__"):
            return BuildTool.WEBPACK
        return BuildTool.UNKNOWN

    def collect_env_vars(self) -> dict[str, str]:
        """Merge build-tool env namespaces into one prefix-stripped mapping.

        Namespaces are scanned in order: module-meta env (VITE_), process env
        (REACT_APP_, NEXT_PUBLIC_), Nuxt runtime config (NUXT_PUBLIC_). On
        collisions the first namespace scanned keeps its value.

        Returns:
            Mapping that always contains I18N_LOCALE and I18N_FALLBACK_LOCALE
        """
        host = self._host
        env: dict[str, str] = {}

        _scan_namespace(host.import_meta_env, VITE_ENV_PREFIXES, env)
        _scan_namespace(host.process_env, PROCESS_ENV_PREFIXES, env)

        nuxt = host.get_marker("$nuxt")
        nuxt_config = nuxt.get("$config") if isinstance(nuxt, Mapping) else None
        if isinstance(nuxt_config, Mapping):
            _scan_namespace(nuxt_config, NUXT_ENV_PREFIXES, env)

        for key in (ENV_LOCALE_KEY, ENV_FALLBACK_LOCALE_KEY):
            if not env.get(key):
                env[key] = DEFAULT_LOCALE
        return env

    def get_environment(self) -> EnvironmentInfo:
        """Run all detections and return an EnvironmentInfo snapshot."""
        return EnvironmentInfo(
            framework_id=self.detect_framework(),
            build_tool_id=self.detect_build_tool(),
            env_vars=self.collect_env_vars(),
        )
