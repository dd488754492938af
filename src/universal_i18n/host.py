"""Host context: the observable surface of the runtime the resolver runs in.

Framework and build tool detection never read ambient global state directly.
Instead every probe is a pure function over a HostContext value, which the
caller builds explicitly (tests, embedding applications) or derives from the
current process with HostContext.from_process().

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any

__all__ = ["HostContext"]

_EMPTY: Mapping[str, Any] = MappingProxyType({})


@dataclass(frozen=True, slots=True)
class HostContext:
    """Immutable snapshot of host runtime signals.

    Attributes:
        markers: Global runtime markers keyed by name (the ``window`` /
            ``globalThis`` analogue). Presence of a key is the signal; values
            may be runtime objects that adapters delegate to, such as an
            ``i18next`` instance or a ``createI18n`` factory.
        dom: DOM selectors that match in the host document.
        import_meta: Module-meta object of an ESM dev server, or None when
            not running under one. Recognized keys: ``hot`` and ``env``.
        process_env: Process environment variables.
        project_root: Directory locale files are looked up from.
        locale_package: Importable package whose resources contain
            ``<locale>.json`` files, enumerated by the context strategy.

    Example:
        >>> host = HostContext(markers={"__NEXT_DATA__": {}}, dom={"#root"})
        >>> host.has_marker("__NEXT_DATA__")
        True
    """

    markers: Mapping[str, Any] = field(default_factory=dict)
    dom: frozenset[str] = frozenset()
    import_meta: Mapping[str, Any] | None = None
    process_env: Mapping[str, str] = field(default_factory=dict)
    project_root: Path = field(default_factory=Path.cwd)
    locale_package: str | None = None

    def __post_init__(self) -> None:
        """Freeze mutable inputs so probes observe a stable snapshot.

        Raises:
            TypeError: If markers, import_meta or process_env is not a Mapping
        """
        for name in ("markers", "process_env"):
            value = getattr(self, name)
            if not isinstance(value, Mapping):
                msg = f"HostContext.{name} must be a Mapping, got {type(value).__name__}"
                raise TypeError(msg)
        if self.import_meta is not None and not isinstance(self.import_meta, Mapping):
            msg = (
                "HostContext.import_meta must be a Mapping or None, "
                f"got {type(self.import_meta).__name__}"
            )
            raise TypeError(msg)
        object.__setattr__(self, "markers", MappingProxyType(dict(self.markers)))
        object.__setattr__(self, "process_env", MappingProxyType(dict(self.process_env)))
        object.__setattr__(self, "dom", frozenset(self.dom))
        object.__setattr__(self, "project_root", Path(self.project_root))

    @classmethod
    def from_process(
        cls,
        *,
        project_root: Path | str | None = None,
        locale_package: str | None = None,
    ) -> HostContext:
        """Build a host context for the current Python process.

        A plain Python process exposes no front-end framework markers, no DOM
        and no module-meta object; only the process environment is observable.

        Args:
            project_root: Locale lookup root (default: current directory)
            locale_package: Package holding locale JSON resources (optional)

        Returns:
            HostContext reflecting ``os.environ``
        """
        return cls(
            process_env=dict(os.environ),
            project_root=Path(project_root) if project_root is not None else Path.cwd(),
            locale_package=locale_package,
        )

    def has_marker(self, name: str) -> bool:
        """Check whether a global runtime marker is present."""
        return name in self.markers

    def get_marker(self, name: str) -> Any:
        """Get a global runtime marker value, or None if absent."""
        return self.markers.get(name)

    def matches(self, selector: str) -> bool:
        """Check whether a DOM selector matches in the host document."""
        return selector in self.dom

    @property
    def import_meta_env(self) -> Mapping[str, Any]:
        """Env namespace of the module-meta object (empty if absent)."""
        if self.import_meta is None:
            return _EMPTY
        env = self.import_meta.get("env")
        return env if isinstance(env, Mapping) else _EMPTY
