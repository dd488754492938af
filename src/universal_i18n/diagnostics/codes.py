"""Diagnostic codes and data structures.

Defines error codes and structured diagnostic messages attached to
universal-i18n exceptions and log records.

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
]


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Adapter errors (registry lookup, import, initialization)
        2000-2999: Resolver usage errors (lifecycle, locale selection)
        3000-3999: Message loading errors
        4000-4999: Advisory findings (dependency checks)
    """

    # Adapter errors (1000-1999)
    ADAPTER_NOT_FOUND = 1001
    ADAPTER_EXPORT_MISSING = 1002
    ADAPTER_LOAD_FAILED = 1003
    ADAPTER_INIT_FAILED = 1004
    NO_ADAPTER_AVAILABLE = 1005

    # Resolver usage errors (2000-2999)
    NOT_INITIALIZED = 2001
    LOCALE_NOT_FOUND = 2002

    # Message loading errors (3000-3999)
    MESSAGE_LOAD_FAILED = 3001
    LOCALE_FILE_INVALID = 3002
    LOCALE_CODE_INVALID = 3003

    # Advisory (4000-4999)
    DEPENDENCY_MISSING = 4001


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        hint: Suggestion for fixing the error
        framework_id: Framework whose adapter was involved (adapter errors)
        locale: Locale code involved (locale and loading errors)
        source_path: File or module the error originated from
        severity: Error severity level
    """

    code: DiagnosticCode
    message: str
    hint: str | None = None
    framework_id: str | None = None
    locale: str | None = None
    source_path: str | None = None
    severity: Literal["error", "warning"] = "error"

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic like a compiler error.

        Example output:
            error[ADAPTER_NOT_FOUND]: Unknown adapter: 'solid'
              = framework: solid
              = help: Register the adapter with AdapterRegistry.register_adapter()

        Returns:
            Formatted error message
        """
        from .formatter import DiagnosticFormatter  # noqa: PLC0415 - circular

        return DiagnosticFormatter().format(self)
