"""Type aliases for the localization domain.

Provides semantic type aliases used throughout the package and by user code
when annotating resolver call sites.

Python 3.13+. Zero external dependencies.
"""

from collections.abc import Mapping

__all__ = [
    "BuildToolId",
    "FrameworkId",
    "LocaleCode",
    "LocaleTree",
    "MessageKey",
    "Messages",
    "TranslationParams",
]

type LocaleCode = str
"""Locale code (e.g., 'ko', 'en', 'en-US')."""

type MessageKey = str
"""Dot-separated path into a locale tree (e.g., 'common.loading')."""

type FrameworkId = str
"""Host framework identifier (e.g., 'vue', 'react', 'vanilla')."""

type BuildToolId = str
"""Build tool identifier (e.g., 'vite', 'webpack', 'unknown')."""

type LocaleTree = Mapping[str, LocaleTree | str]
"""Nested message tree for a single locale; leaves are message templates."""

type Messages = Mapping[LocaleCode, LocaleTree]
"""All loaded locale trees keyed by locale code."""

type TranslationParams = Mapping[str, object]
"""Values substituted into `{name}` placeholders."""
