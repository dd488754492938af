"""Framework adapters and the adapter registry.

Concrete adapters (vanilla, vue, react, next) are not imported here; the
registry imports each one on first use.

Python 3.13+.
"""

from .base import Adapter, BaseAdapter
from .registry import AdapterDescriptor, AdapterRegistry, DependencyReport

__all__ = [
    "Adapter",
    "AdapterDescriptor",
    "AdapterRegistry",
    "BaseAdapter",
    "DependencyReport",
]
