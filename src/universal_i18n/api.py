"""Convenience entry points.

Python 3.13+.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING

from universal_i18n.environment import EnvironmentInfo, EnvironmentProbe
from universal_i18n.host import HostContext
from universal_i18n.loading import MessageLoader
from universal_i18n.resolver import LocalizationResolver

if TYPE_CHECKING:
    from universal_i18n.types import LocaleCode, LocaleTree

__all__ = [
    "create_i18n",
    "discover_available_locales",
    "get_environment_info",
    "get_i18n",
    "preload_locales",
]

logger = logging.getLogger(__name__)

_shared_resolver: LocalizationResolver | None = None
_shared_lock = threading.Lock()


def create_i18n(
    host: HostContext | None = None,
    *,
    locale: LocaleCode | None = None,
    fallback_locale: LocaleCode | None = None,
    messages: Mapping[LocaleCode, LocaleTree] | None = None,
) -> LocalizationResolver:
    """Create and initialize a new resolver.

    Raises:
        AdapterError: If no adapter can be created or initialized
    """
    resolver = LocalizationResolver(host)
    resolver.init(locale=locale, fallback_locale=fallback_locale, messages=messages)
    return resolver


def get_i18n(
    host: HostContext | None = None,
    *,
    locale: LocaleCode | None = None,
    fallback_locale: LocaleCode | None = None,
    messages: Mapping[LocaleCode, LocaleTree] | None = None,
) -> LocalizationResolver:
    """Return the process-wide resolver, creating it on first call.

    Arguments are only used by the call that creates the resolver; later
    calls return the existing instance unchanged.
    """
    global _shared_resolver  # noqa: PLW0603 - process-wide shared resolver
    if _shared_resolver is None:
        with _shared_lock:
            if _shared_resolver is None:
                _shared_resolver = create_i18n(
                    host,
                    locale=locale,
                    fallback_locale=fallback_locale,
                    messages=messages,
                )
    return _shared_resolver


def get_environment_info(host: HostContext | None = None) -> EnvironmentInfo:
    """Detect and return the host environment."""
    return EnvironmentProbe(host).get_environment()


def discover_available_locales(host: HostContext | None = None) -> list[LocaleCode]:
    """Return the locale codes that can be loaded on this host."""
    return MessageLoader(host=host).get_available_locales()


def preload_locales(
    locales: Iterable[LocaleCode] | None = None,
    host: HostContext | None = None,
) -> dict[LocaleCode, LocaleTree]:
    """Load locale trees ahead of init().

    Args:
        locales: Locale codes to keep (default: all loaded locales)
        host: Host context (default: the current process)

    Returns:
        Loaded trees, restricted to ``locales`` when given; requested codes
        without messages are omitted
    """
    messages = MessageLoader(host=host).load_messages()
    if locales is None:
        return messages
    selected = {code: messages[code] for code in locales if code in messages}
    logger.debug("Preloaded locales: %s", list(selected))
    return selected
