"""Canonical key resolution shared by every adapter.

Implements nested-path lookup with a single fallback locale and
``{name}`` placeholder interpolation. The functions here are pure: the result
depends only on the arguments, so adapters differ only in where messages and
the active locale come from.

Resolution rules:
    1. The key is split on "." into path segments.
    2. The segments are walked through the active locale's tree. If a step
       does not land on a mapping containing the next segment, the walk is
       restarted against the fallback locale's tree.
    3. If the fallback walk also fails, the key itself is returned.
    4. If the walk ends on anything other than a string (e.g. an
       intermediate mapping), the key itself is returned.
    5. Placeholders whose names appear in params are substituted; unknown
       placeholders stay in the output verbatim.

Missing keys are expected and frequent, so misses are never logged or raised.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence

from universal_i18n.constants import KEY_SEPARATOR, PLACEHOLDER_PATTERN
from universal_i18n.types import LocaleCode, MessageKey, Messages, TranslationParams

__all__ = [
    "interpolate",
    "lookup",
    "resolve",
]

_MISS = object()


def _walk(tree: object, segments: Sequence[str]) -> object:
    """Follow path segments through a locale tree.

    Returns:
        The value at the end of the path, or the _MISS sentinel if a step
        does not land on a mapping containing the next segment
    """
    value = tree
    for segment in segments:
        if not isinstance(value, Mapping) or segment not in value:
            return _MISS
        value = value[segment]
    return value


def lookup(
    messages: Messages,
    locale: LocaleCode,
    fallback_locale: LocaleCode,
    key: MessageKey,
) -> str | None:
    """Find the raw message template for a key, honoring the fallback locale.

    Args:
        messages: Locale trees keyed by locale code
        locale: Active locale
        fallback_locale: Locale consulted when the key is missing in ``locale``
        key: Dot-separated message path

    Returns:
        The template string, or None if neither locale resolves the key
        to a string
    """
    segments = key.split(KEY_SEPARATOR)
    value = _walk(messages.get(locale), segments)
    if value is _MISS:
        value = _walk(messages.get(fallback_locale), segments)
    if not isinstance(value, str):
        return None
    return value


def interpolate(template: str, params: TranslationParams) -> str:
    """Substitute ``{name}`` placeholders with values from params.

    Placeholders without a matching param are left untouched.

    Example:
        >>> interpolate("Hello {name}", {"name": "Kim"})
        'Hello Kim'
        >>> interpolate("Hello {name}", {})
        'Hello {name}'
    """

    def _replace(match: re.Match[str]) -> str:
        name = match.group(1)
        if name in params:
            return str(params[name])
        return match.group(0)

    return PLACEHOLDER_PATTERN.sub(_replace, template)


def resolve(
    messages: Messages,
    locale: LocaleCode,
    fallback_locale: LocaleCode,
    key: MessageKey,
    params: TranslationParams | None = None,
) -> str:
    """Resolve a translation key to its (interpolated) message.

    Args:
        messages: Locale trees keyed by locale code
        locale: Active locale
        fallback_locale: Locale consulted when the key is missing in ``locale``
        key: Dot-separated message path (e.g., 'common.loading')
        params: Placeholder values (optional)

    Returns:
        The resolved message, or ``key`` unchanged on a miss

    Raises:
        TypeError: If key is not a string or params is not a Mapping

    Example:
        >>> messages = {"ko": {"a": {"b": "안녕"}}, "en": {}}
        >>> resolve(messages, "en", "ko", "a.b")
        '안녕'
        >>> resolve(messages, "en", "ko", "a.c")
        'a.c'
    """
    if not isinstance(key, str):
        msg = f"Translation key must be a string, got {type(key).__name__}"
        raise TypeError(msg)
    if params is not None and not isinstance(params, Mapping):
        msg = f"Translation params must be a Mapping, got {type(params).__name__}"
        raise TypeError(msg)
    template = lookup(messages, locale, fallback_locale, key)
    if template is None:
        return key
    if params is not None:
        return interpolate(template, params)
    return template
