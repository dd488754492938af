"""Adapter registry: descriptor table, lazy adapter loading and caching.

The registry owns the static descriptor table (framework id -> how to load
its adapter) together with the framework detection order and the fallback
framework. Adapter modules are imported on first use and the adapter class
is cached for the lifetime of the process, so loading the same framework id
twice returns the identical class object.

Thread Safety:
    Singleton creation, descriptor registration and cache publication are
    guarded by a lock. Module import happens outside the lock. A class is
    published first-writer-wins: once a class is cached for an id (by a load
    or by register_adapter), a concurrent load finishing later returns the
    cached class instead of replacing it.

Python 3.13+.
"""

from __future__ import annotations

import importlib
import json
import logging
import threading
from collections.abc import Mapping
from dataclasses import dataclass, field
from importlib import resources
from typing import TYPE_CHECKING, Any, ClassVar

from universal_i18n.diagnostics import (
    AdapterExportMissingError,
    AdapterLoadError,
    AdapterNotFoundError,
    Diagnostic,
    DiagnosticCode,
)
from universal_i18n.enums import Framework
from universal_i18n.host import HostContext

if TYPE_CHECKING:
    from universal_i18n.adapters.base import Adapter
    from universal_i18n.types import FrameworkId

__all__ = [
    "AdapterDescriptor",
    "AdapterRegistry",
    "DependencyReport",
    "load_descriptor_table",
]

logger = logging.getLogger(__name__)

_DESCRIPTOR_TABLE_RESOURCE = "adapters.json"


@dataclass(frozen=True, slots=True)
class AdapterDescriptor:
    """Static metadata describing how to load and validate one adapter.

    Attributes:
        id: Framework id the adapter serves
        module_ref: Dotted module path containing the adapter class
        export_name: Name of the adapter class inside the module
        required_deps: Host globals the adapter needs
        optional_deps: Host globals the adapter uses when present
        supported_environments: Execution environments (browser, ssr, ...)
        supported_build_tools: Build tools the adapter was tested under
        description: Human-readable summary
    """

    id: str
    module_ref: str
    export_name: str
    required_deps: tuple[str, ...] = ()
    optional_deps: tuple[str, ...] = ()
    supported_environments: tuple[str, ...] = ()
    supported_build_tools: tuple[str, ...] = ()
    description: str = ""

    def __post_init__(self) -> None:
        """Validate identity fields and normalize sequences to tuples.

        Raises:
            ValueError: If id, module_ref or export_name is empty
        """
        for name in ("id", "module_ref", "export_name"):
            if not getattr(self, name):
                msg = f"AdapterDescriptor.{name} cannot be empty"
                raise ValueError(msg)
        for name in (
            "required_deps",
            "optional_deps",
            "supported_environments",
            "supported_build_tools",
        ):
            object.__setattr__(self, name, tuple(getattr(self, name)))

    @classmethod
    def from_mapping(cls, framework_id: str, data: Mapping[str, Any]) -> AdapterDescriptor:
        """Build a descriptor from a descriptor-table entry.

        Table entries use the camelCase keys of the adapters.json format:
        ``name``, ``module``, ``dependencies``, ``optionalDependencies``,
        ``environments``, ``bundlers`` and ``description``.

        Raises:
            KeyError: If ``name`` or ``module`` is missing
        """
        return cls(
            id=framework_id,
            module_ref=data["module"],
            export_name=data["name"],
            required_deps=tuple(data.get("dependencies", ())),
            optional_deps=tuple(data.get("optionalDependencies", ())),
            supported_environments=tuple(data.get("environments", ())),
            supported_build_tools=tuple(data.get("bundlers", ())),
            description=data.get("description", ""),
        )


@dataclass(frozen=True, slots=True)
class DependencyReport:
    """Advisory result of an adapter dependency check.

    Attributes:
        available: True when no required dependency is missing
        missing: Required dependencies not found on the host
        optional: Optional dependencies not found on the host
    """

    available: bool
    missing: tuple[str, ...] = field(default=())
    optional: tuple[str, ...] = field(default=())


def load_descriptor_table() -> dict[str, Any]:
    """Read the built-in descriptor table shipped with the package."""
    text = (
        resources.files("universal_i18n.adapters")
        .joinpath(_DESCRIPTOR_TABLE_RESOURCE)
        .read_text(encoding="utf-8")
    )
    table: dict[str, Any] = json.loads(text)
    return table


class AdapterRegistry:
    """Process-wide registry of framework adapters.

    Use get_instance() for the shared registry. Constructing an
    AdapterRegistry directly with an explicit table yields an independent
    registry, which is how tests and embedding applications inject one.

    Example:
        >>> registry = AdapterRegistry.get_instance()
        >>> registry.get_fallback_adapter()
        'vanilla'
        >>> adapter = registry.create_adapter("vanilla")
    """

    _instance: ClassVar[AdapterRegistry | None] = None
    _instance_lock: ClassVar[threading.Lock] = threading.Lock()

    __slots__ = ("_adapters", "_detection_order", "_fallback_adapter", "_loaded", "_lock")

    def __init__(self, table: Mapping[str, Any] | None = None) -> None:
        """Initialize the registry from a descriptor table.

        Args:
            table: Descriptor table with ``adapters``, ``detectionOrder`` and
                ``fallbackAdapter`` keys (default: the built-in table)
        """
        if table is None:
            table = load_descriptor_table()

        self._lock = threading.Lock()
        self._adapters: dict[FrameworkId, AdapterDescriptor] = {
            framework_id: AdapterDescriptor.from_mapping(framework_id, entry)
            for framework_id, entry in table.get("adapters", {}).items()
        }
        self._detection_order: tuple[FrameworkId, ...] = tuple(table.get("detectionOrder", ()))
        self._fallback_adapter: FrameworkId = table.get("fallbackAdapter") or Framework.VANILLA
        self._loaded: dict[FrameworkId, type[Adapter]] = {}

    @classmethod
    def get_instance(cls) -> AdapterRegistry:
        """Return the process-wide registry, creating it on first access.

        The shared registry is never reset.
        """
        if cls._instance is None:
            with cls._instance_lock:
                if cls._instance is None:
                    cls._instance = cls()
        return cls._instance

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return (
            f"AdapterRegistry(adapters={list(self._adapters)}, "
            f"loaded={list(self._loaded)}, fallback={self._fallback_adapter!r})"
        )

    def get_available_adapters(self) -> list[FrameworkId]:
        """Return all registered framework ids."""
        return list(self._adapters)

    def get_adapter_info(self, framework_id: FrameworkId) -> AdapterDescriptor | None:
        """Return the descriptor for a framework id, or None if unregistered."""
        return self._adapters.get(framework_id)

    def get_detection_order(self) -> list[FrameworkId]:
        """Return framework ids in detection priority order."""
        return list(self._detection_order)

    def get_fallback_adapter(self) -> FrameworkId:
        """Return the framework id used when detection finds nothing."""
        return self._fallback_adapter

    def is_loaded(self, framework_id: FrameworkId) -> bool:
        """Check whether an adapter class is already cached."""
        return framework_id in self._loaded

    def load_adapter(self, framework_id: FrameworkId) -> type[Adapter]:
        """Return the adapter class for a framework, importing it on first use.

        Args:
            framework_id: Framework id with a registered descriptor

        Returns:
            The adapter class (identical object on every call)

        Raises:
            AdapterNotFoundError: If no descriptor is registered for the id
            AdapterLoadError: If the adapter module cannot be imported
            AdapterExportMissingError: If the module lacks the adapter class
        """
        cached = self._loaded.get(framework_id)
        if cached is not None:
            return cached

        descriptor = self.get_adapter_info(framework_id)
        if descriptor is None:
            diagnostic = Diagnostic(
                code=DiagnosticCode.ADAPTER_NOT_FOUND,
                message=f"Unknown adapter: '{framework_id}'",
                hint="Register the adapter with AdapterRegistry.register_adapter()",
                framework_id=framework_id,
            )
            raise AdapterNotFoundError(diagnostic, framework_id=framework_id)

        try:
            module = importlib.import_module(descriptor.module_ref)
        except ImportError as e:
            logger.warning("[AdapterRegistry] Failed to load adapter %s: %s", framework_id, e)
            diagnostic = Diagnostic(
                code=DiagnosticCode.ADAPTER_LOAD_FAILED,
                message=f"Cannot import adapter module '{descriptor.module_ref}': {e}",
                framework_id=framework_id,
                source_path=descriptor.module_ref,
            )
            raise AdapterLoadError(diagnostic, framework_id=framework_id) from e

        adapter_class = getattr(module, descriptor.export_name, None)
        if adapter_class is None:
            diagnostic = Diagnostic(
                code=DiagnosticCode.ADAPTER_EXPORT_MISSING,
                message=(
                    f"Adapter class {descriptor.export_name} not found "
                    f"in {descriptor.module_ref}"
                ),
                framework_id=framework_id,
                source_path=descriptor.module_ref,
            )
            raise AdapterExportMissingError(diagnostic, framework_id=framework_id)

        with self._lock:
            # First writer wins: keep a class cached while we were importing.
            cached = self._loaded.setdefault(framework_id, adapter_class)
        logger.debug("Loaded adapter %s from %s", framework_id, descriptor.module_ref)
        return cached

    def create_adapter(self, framework_id: FrameworkId) -> Adapter:
        """Load the adapter class for a framework and instantiate it.

        Construction takes no arguments; setup happens in initialize().

        Raises:
            AdapterNotFoundError, AdapterLoadError, AdapterExportMissingError:
                As raised by load_adapter()
        """
        adapter_class = self.load_adapter(framework_id)
        return adapter_class()

    def register_adapter(
        self,
        framework_id: FrameworkId,
        descriptor: AdapterDescriptor,
        adapter_class: type[Adapter] | None = None,
    ) -> None:
        """Add or override an adapter descriptor at runtime.

        The class cache is never evicted: a class already loaded for the id
        stays cached when only the descriptor is replaced. Supplying a class
        pre-seeds (or replaces) the cached entry.

        Args:
            framework_id: Framework id to register
            descriptor: How to load the adapter
            adapter_class: Adapter class to cache immediately (optional)
        """
        with self._lock:
            self._adapters[framework_id] = descriptor
            if adapter_class is not None:
                self._loaded[framework_id] = adapter_class
        logger.info("[AdapterRegistry] Registered custom adapter: %s", framework_id)

    def check_dependencies(
        self,
        framework_id: FrameworkId,
        host: HostContext | None = None,
    ) -> DependencyReport:
        """Check which of an adapter's dependencies the host exposes.

        Advisory only: the result never blocks adapter loading.

        Args:
            framework_id: Framework id to check
            host: Host context to probe (default: the current process)

        Returns:
            DependencyReport; for an unknown framework id the id itself is
            reported missing
        """
        descriptor = self.get_adapter_info(framework_id)
        if descriptor is None:
            return DependencyReport(available=False, missing=(framework_id,))

        if host is None:
            host = HostContext.from_process()

        missing = tuple(dep for dep in descriptor.required_deps if not host.has_marker(dep))
        optional = tuple(dep for dep in descriptor.optional_deps if not host.has_marker(dep))
        if missing:
            logger.debug(
                "%s: adapter %s is missing dependencies %s",
                DiagnosticCode.DEPENDENCY_MISSING.name,
                framework_id,
                list(missing),
            )
        return DependencyReport(available=not missing, missing=missing, optional=optional)
