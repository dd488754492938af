"""Enumerations for universal-i18n type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, so they compare equal to the plain
identifiers found in descriptor tables and user code.

Python 3.13+.
"""

from enum import StrEnum


class Framework(StrEnum):
    """Built-in host framework identifiers.

    Framework ids are open-ended (third-party adapters may register any
    string); this enum only names the ones known out of the box.
    """

    VANILLA = "vanilla"
    """No framework detected."""

    VUE = "vue"
    REACT = "react"
    NEXT = "next"
    NUXT = "nuxt"
    SVELTE = "svelte"
    ANGULAR = "angular"


class BuildTool(StrEnum):
    """Build tool identifiers, used to select a message loading strategy."""

    VITE = "vite"
    WEBPACK = "webpack"
    UNKNOWN = "unknown"
    """Sentinel returned when no build tool marker is present."""


class ResolverState(StrEnum):
    """Lifecycle state of a LocalizationResolver.

    StrEnum provides automatic string conversion: str(ResolverState.READY) == "ready"
    """

    UNINITIALIZED = "uninitialized"
    INITIALIZING = "initializing"
    READY = "ready"


class LoadStatus(StrEnum):
    """Outcome of loading a single locale file."""

    SUCCESS = "success"
    NOT_FOUND = "not_found"
    ERROR = "error"


class LoadStrategy(StrEnum):
    """Message loading strategy actually used by MessageLoader."""

    EAGER_GLOB = "eager_glob"
    CONTEXT = "context"
    PROBING = "probing"
    BUILTIN = "builtin"
    """Terminal fallback: the built-in minimal message set."""


__all__ = [
    "BuildTool",
    "Framework",
    "LoadStatus",
    "LoadStrategy",
    "ResolverState",
]
