"""universal-i18n - framework-independent localization resolver.

Detects the host front-end framework and build tool, loads locale message
trees with a build-tool-specific strategy, and resolves dot-separated
translation keys with locale fallback and ``{param}`` interpolation through a
framework-specific adapter.

Public API:
    LocalizationResolver - Orchestrator: init, translate, change_locale
    create_i18n - Create and initialize a resolver
    get_i18n - Process-wide shared resolver
    HostContext - Explicit snapshot of the host runtime
    LocalizationConfig - Locale, fallback locale and messages for an adapter
    AdapterRegistry - Adapter descriptors, lazy loading and registration
    EnvironmentProbe - Framework/build tool detection
    MessageLoader - Locale file loading
    resolve - Canonical key resolution algorithm

Exceptions:
    I18nError - Base exception class
    AdapterError - Adapter lookup, import or initialization failures
    NotInitializedError - State-mutating call before init()

Submodules:
    universal_i18n.adapters - Adapter contract, registry and built-in adapters
    universal_i18n.diagnostics - Error types and structured diagnostics
    universal_i18n.locale_utils - Locale negotiation and display names
"""

from .adapters import AdapterDescriptor, AdapterRegistry, BaseAdapter, DependencyReport
from .api import (
    create_i18n,
    discover_available_locales,
    get_environment_info,
    get_i18n,
    preload_locales,
)
from .config import LocalizationConfig
from .diagnostics import AdapterError, I18nError, NotInitializedError
from .enums import BuildTool, Framework, ResolverState
from .environment import EnvironmentInfo, EnvironmentProbe
from .host import HostContext
from .loading import MessageLoader
from .locale_utils import describe_locale, detect_preferred_locale
from .resolver import LocalizationResolver
from .translation import resolve

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("universal-i18n")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "AdapterDescriptor",
    "AdapterError",
    "AdapterRegistry",
    "BaseAdapter",
    "BuildTool",
    "DependencyReport",
    "EnvironmentInfo",
    "EnvironmentProbe",
    "Framework",
    "HostContext",
    "I18nError",
    "LocalizationConfig",
    "LocalizationResolver",
    "MessageLoader",
    "NotInitializedError",
    "ResolverState",
    "__version__",
    "create_i18n",
    "describe_locale",
    "detect_preferred_locale",
    "discover_available_locales",
    "get_environment_info",
    "get_i18n",
    "preload_locales",
    "resolve",
]
