"""universal-i18n exception hierarchy with structured diagnostics.

All exceptions optionally store a Diagnostic for rich error information.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode

__all__ = [
    "AdapterError",
    "AdapterExportMissingError",
    "AdapterInitializationError",
    "AdapterLoadError",
    "AdapterNotFoundError",
    "I18nError",
    "LocaleFileError",
    "NoAdapterAvailableError",
    "NotInitializedError",
]


class I18nError(Exception):
    """Base exception for all universal-i18n errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize I18nError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.format_error())
        else:
            self.diagnostic = None
            super().__init__(message)

    @property
    def code(self) -> DiagnosticCode | None:
        """Diagnostic code, if this error carries a diagnostic."""
        return self.diagnostic.code if self.diagnostic is not None else None


class AdapterError(I18nError):
    """Base for failures resolving, importing or initializing an adapter.

    Attributes:
        framework_id: Framework whose adapter failed
    """

    def __init__(self, message: str | Diagnostic, *, framework_id: str = "") -> None:
        super().__init__(message)
        self.framework_id = framework_id


class AdapterNotFoundError(AdapterError):
    """No descriptor is registered for the requested framework id."""


class AdapterExportMissingError(AdapterError):
    """The adapter module imported but lacks the expected export."""


class AdapterLoadError(AdapterError):
    """The adapter module could not be imported."""


class AdapterInitializationError(AdapterError):
    """The adapter was constructed but its initialize() call failed.

    Raised, for example, when an adapter that delegates to a host
    localization runtime cannot find that runtime.
    """


class NoAdapterAvailableError(AdapterError):
    """Neither the detected adapter nor the fallback adapter could be created."""


class NotInitializedError(I18nError):
    """A state-mutating resolver call was made before init() completed."""


class LocaleFileError(I18nError):
    """A locale file exists but does not contain a locale tree.

    Raised internally by loading strategies and caught there; a rejected file
    makes its locale absent rather than failing the load.

    Attributes:
        source_path: Path of the rejected file
    """

    def __init__(self, message: str | Diagnostic, *, source_path: str = "") -> None:
        super().__init__(message)
        self.source_path = source_path
