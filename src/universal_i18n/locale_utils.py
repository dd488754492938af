"""Locale utilities: normalization, system locale, negotiation, display names.

Locale files use BCP-47 style codes (``en-US``) while Babel expects POSIX
style (``en_US``); normalize at the Babel boundary with normalize_locale().

Python 3.13+.
"""

from __future__ import annotations

import functools
import os
from collections.abc import Iterable
from typing import TYPE_CHECKING

from babel import Locale, UnknownLocaleError, negotiate_locale

from universal_i18n.constants import DEFAULT_DISCOVERED_LOCALES, DEFAULT_LOCALE

if TYPE_CHECKING:
    from universal_i18n.types import LocaleCode

__all__ = [
    "describe_locale",
    "detect_preferred_locale",
    "get_babel_locale",
    "get_system_locale",
    "normalize_locale",
]


def normalize_locale(locale_code: str) -> str:
    """Convert a BCP-47 locale code to POSIX format for Babel.

    Example:
        >>> normalize_locale("en-US")
        'en_US'
        >>> normalize_locale("ko")
        'ko'
    """
    return locale_code.replace("-", "_")


@functools.lru_cache(maxsize=128)
def get_babel_locale(locale_code: str) -> Locale:
    """Get a Babel Locale object with caching.

    Args:
        locale_code: Locale code (BCP-47 or POSIX format accepted)

    Returns:
        Babel Locale object

    Raises:
        babel.UnknownLocaleError: If locale is not recognized
        ValueError: If locale format is invalid
    """
    return Locale.parse(normalize_locale(locale_code))


def get_system_locale() -> str | None:
    """Detect the user's locale from the process environment.

    Detection order follows POSIX precedence: LC_ALL, LC_MESSAGES, LANG.
    The "C" and "POSIX" pseudo-locales are ignored and encoding suffixes
    (".UTF-8") are stripped.

    Returns:
        Locale code in POSIX format, or None if not determinable

    Example:
        >>> os.environ["LANG"] = "ko_KR.UTF-8"
        >>> get_system_locale()
        'ko_KR'
    """
    for var in ("LC_ALL", "LC_MESSAGES", "LANG"):
        value = os.environ.get(var)
        if value and value not in ("C", "POSIX"):
            code = value.split(".")[0].split("@")[0]
            if code and code not in ("C", "POSIX"):
                return normalize_locale(code)
    return None


def detect_preferred_locale(
    available: Iterable[LocaleCode] = DEFAULT_DISCOVERED_LOCALES,
    preferred: Iterable[str] | None = None,
    *,
    default: LocaleCode = DEFAULT_LOCALE,
) -> LocaleCode:
    """Pick the available locale best matching the user's preferences.

    Only the language part of each preferred locale is compared, so
    ``ko_KR`` and ``ko-KR`` both select ``ko``.

    Args:
        available: Locale codes that have messages
        preferred: Preferred locales, most preferred first (default: the
            system locale)
        default: Returned when nothing matches

    Returns:
        A member of ``available``, or ``default``

    Example:
        >>> detect_preferred_locale(["ko", "en"], ["en-GB"])
        'en'
        >>> detect_preferred_locale(["ko", "en"], ["fr"])
        'ko'
    """
    if preferred is None:
        system = get_system_locale()
        preferred = [system] if system else []

    languages = [
        normalize_locale(code).split("_")[0].lower() for code in preferred if code
    ]
    if not languages:
        return default

    candidates = list(available)
    matched = negotiate_locale(languages, [code.lower() for code in candidates], sep="-")
    if matched is None:
        return default
    for code in candidates:
        if code.lower() == matched.lower():
            return code
    return default


def describe_locale(locale_code: LocaleCode, display_locale: LocaleCode | None = None) -> str:
    """Return a human-readable name for a locale code.

    Args:
        locale_code: Locale to describe
        display_locale: Language of the description (default: the locale
            itself, e.g. '한국어' for 'ko')

    Returns:
        Display name, or ``locale_code`` itself for codes Babel does not know

    Example:
        >>> describe_locale("ko", "en")
        'Korean'
    """
    try:
        locale = get_babel_locale(locale_code)
        target = get_babel_locale(display_locale) if display_locale else locale
    except (UnknownLocaleError, ValueError):
        return locale_code
    name = locale.get_display_name(target)
    return name if name else locale_code
