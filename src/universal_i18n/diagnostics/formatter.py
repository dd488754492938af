"""Diagnostic formatting service.

Centralizes diagnostic output formatting with configurable options.
Python 3.13+. Zero external dependencies.
"""

import json
from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum

from .codes import Diagnostic

__all__ = [
    "DiagnosticFormatter",
    "OutputFormat",
]


class OutputFormat(StrEnum):
    """Output format options for diagnostic formatting."""

    RUST = "rust"  # Compiler-style multi-line output (default)
    SIMPLE = "simple"  # Single-line format
    JSON = "json"  # JSON format for tooling integration


def _escape_control_chars(text: str) -> str:
    """Escape control characters so diagnostics cannot forge log lines."""
    return "".join(
        ch if ch.isprintable() else ch.encode("unicode_escape").decode("ascii")
        for ch in text
    )


@dataclass(frozen=True, slots=True)
class DiagnosticFormatter:
    """Diagnostic formatting service.

    Attributes:
        output_format: Output style (rust, simple, json)

    Example:
        >>> formatter = DiagnosticFormatter(output_format=OutputFormat.SIMPLE)
        >>> print(formatter.format(diagnostic))
        ADAPTER_NOT_FOUND: Unknown adapter: 'solid'
    """

    output_format: OutputFormat = OutputFormat.RUST

    def format(self, diagnostic: Diagnostic) -> str:
        """Format a single diagnostic.

        Args:
            diagnostic: Diagnostic to format

        Returns:
            Formatted diagnostic string
        """
        match self.output_format:
            case OutputFormat.RUST:
                return self._format_rust(diagnostic)
            case OutputFormat.SIMPLE:
                return self._format_simple(diagnostic)
            case OutputFormat.JSON:
                return self._format_json(diagnostic)

    def format_all(self, diagnostics: Iterable[Diagnostic]) -> str:
        """Format multiple diagnostics separated by blank lines."""
        return "\n\n".join(self.format(d) for d in diagnostics)

    def _format_rust(self, diagnostic: Diagnostic) -> str:
        lines = [
            f"{diagnostic.severity}[{diagnostic.code.name}]: "
            f"{_escape_control_chars(diagnostic.message)}"
        ]
        if diagnostic.source_path:
            lines.append(f"  --> {_escape_control_chars(diagnostic.source_path)}")
        if diagnostic.framework_id:
            lines.append(f"  = framework: {_escape_control_chars(diagnostic.framework_id)}")
        if diagnostic.locale:
            lines.append(f"  = locale: {_escape_control_chars(diagnostic.locale)}")
        if diagnostic.hint:
            lines.append(f"  = help: {_escape_control_chars(diagnostic.hint)}")
        return "\n".join(lines)

    @staticmethod
    def _format_simple(diagnostic: Diagnostic) -> str:
        return f"{diagnostic.code.name}: {_escape_control_chars(diagnostic.message)}"

    @staticmethod
    def _format_json(diagnostic: Diagnostic) -> str:
        payload = {
            "code": diagnostic.code.name,
            "message": diagnostic.message,
            "severity": diagnostic.severity,
            "hint": diagnostic.hint,
            "framework_id": diagnostic.framework_id,
            "locale": diagnostic.locale,
            "source_path": diagnostic.source_path,
        }
        return json.dumps(payload, ensure_ascii=False)
