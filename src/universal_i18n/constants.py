"""Shared constants for universal-i18n.

Centralizes the values the environment probe, message loader and adapters
agree on. Placing them here avoids circular imports between the loader and
the registry and gives a single source of truth.

Constants are grouped by domain:
- Locale defaults: codes used when nothing is discovered
- Environment: namespace prefixes and contractual keys
- Loading: file discovery patterns and the probing base list
- Fallback messages: built-in minimal message set

Python 3.13+. Zero external dependencies.
"""

import re
from types import MappingProxyType

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Locale defaults
    "DEFAULT_LOCALE",
    "DEFAULT_DISCOVERED_LOCALES",
    # Environment
    "ENV_LOCALE_KEY",
    "ENV_FALLBACK_LOCALE_KEY",
    "ENV_SUPPORTED_LOCALES_KEY",
    "VITE_ENV_PREFIXES",
    "PROCESS_ENV_PREFIXES",
    "NUXT_ENV_PREFIXES",
    # Loading
    "LOCALES_DIR",
    "LOCALE_FILE_SUFFIX",
    "LOCALE_GLOB_PATTERN",
    "LOCALE_GLOB_ROOT",
    "LOCALE_FILENAME_PATTERN",
    "LOCALE_PATH_CANDIDATES",
    "BASE_LOCALES",
    # Translation
    "PLACEHOLDER_PATTERN",
    "KEY_SEPARATOR",
    # Fallback messages
    "BUILTIN_MESSAGES",
]

# ============================================================================
# LOCALE DEFAULTS
# ============================================================================

DEFAULT_LOCALE = "ko"
"""Locale used for I18N_LOCALE / I18N_FALLBACK_LOCALE when not configured."""

DEFAULT_DISCOVERED_LOCALES: tuple[str, ...] = ("ko", "en")
"""Result of locale discovery when no locale file can be found."""

# ============================================================================
# ENVIRONMENT
# ============================================================================

ENV_LOCALE_KEY = "I18N_LOCALE"
ENV_FALLBACK_LOCALE_KEY = "I18N_FALLBACK_LOCALE"
ENV_SUPPORTED_LOCALES_KEY = "SUPPORTED_LOCALES"

# Namespaces are scanned in this order: module-meta env, process env, runtime config.
VITE_ENV_PREFIXES: tuple[str, ...] = ("VITE_",)
PROCESS_ENV_PREFIXES: tuple[str, ...] = ("REACT_APP_", "NEXT_PUBLIC_")
NUXT_ENV_PREFIXES: tuple[str, ...] = ("NUXT_PUBLIC_",)

# ============================================================================
# LOADING
# ============================================================================

LOCALES_DIR = "locales"
LOCALE_FILE_SUFFIX = ".json"

LOCALE_GLOB_ROOT = "src"
"""Directory (relative to the project root) the eager-glob strategy scans from."""

LOCALE_GLOB_PATTERN = f"{LOCALES_DIR}/*{LOCALE_FILE_SUFFIX}"

LOCALE_FILENAME_PATTERN = re.compile(r"(?:^|/)([A-Za-z0-9_-]+)\.json$", re.IGNORECASE)
"""Captures the filename stem of a locale file as its locale code."""

LOCALE_PATH_CANDIDATES: tuple[str, ...] = (
    "src/locales/{locale}.json",
    "locales/{locale}.json",
    "public/locales/{locale}.json",
    "assets/locales/{locale}.json",
)
"""Candidate paths tried, in order, by the probing strategy."""

BASE_LOCALES: tuple[str, ...] = ("ko", "en", "ja", "zh", "es", "fr", "de", "it", "pt", "ru")

# ============================================================================
# TRANSLATION
# ============================================================================

KEY_SEPARATOR = "."

PLACEHOLDER_PATTERN = re.compile(r"\{(\w+)\}")

# ============================================================================
# FALLBACK MESSAGES
# ============================================================================

BUILTIN_MESSAGES = MappingProxyType(
    {
        "ko": MappingProxyType(
            {
                "common": MappingProxyType(
                    {
                        "loading": "로딩 중...",
                        "error": "오류가 발생했습니다.",
                        "success": "성공했습니다.",
                        "cancel": "취소",
                        "confirm": "확인",
                    }
                )
            }
        ),
        "en": MappingProxyType(
            {
                "common": MappingProxyType(
                    {
                        "loading": "Loading...",
                        "error": "An error occurred.",
                        "success": "Success!",
                        "cancel": "Cancel",
                        "confirm": "Confirm",
                    }
                )
            }
        ),
    }
)
"""Minimal two-locale message set returned when no locale file can be loaded.

Read-only; MessageLoader hands out deep copies.
"""
