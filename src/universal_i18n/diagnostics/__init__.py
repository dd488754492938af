"""Diagnostic system for universal-i18n errors.

Provides the exception hierarchy and structured diagnostics with codes and
hints.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode
from .errors import (
    AdapterError,
    AdapterExportMissingError,
    AdapterInitializationError,
    AdapterLoadError,
    AdapterNotFoundError,
    I18nError,
    LocaleFileError,
    NoAdapterAvailableError,
    NotInitializedError,
)
from .formatter import DiagnosticFormatter, OutputFormat

__all__ = [
    "AdapterError",
    "AdapterExportMissingError",
    "AdapterInitializationError",
    "AdapterLoadError",
    "AdapterNotFoundError",
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticFormatter",
    "I18nError",
    "LocaleFileError",
    "NoAdapterAvailableError",
    "NotInitializedError",
    "OutputFormat",
]
