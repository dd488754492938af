"""Localization configuration handed to adapters.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from universal_i18n.types import LocaleCode, LocaleTree

__all__ = ["LocalizationConfig"]


@dataclass(frozen=True, slots=True)
class LocalizationConfig:
    """Immutable configuration for an adapter.

    The active locale starts at ``locale`` but is tracked separately by the
    adapter afterwards; changing it never mutates the config.

    Attributes:
        locale: Initial active locale
        fallback_locale: Locale consulted for keys missing in the active one
        messages: Locale trees keyed by locale code

    Example:
        >>> config = LocalizationConfig(
        ...     locale="en",
        ...     fallback_locale="ko",
        ...     messages={"ko": {"hello": "안녕"}, "en": {"hello": "Hello"}},
        ... )
        >>> config.available_locales
        ('ko', 'en')
    """

    locale: LocaleCode
    fallback_locale: LocaleCode
    messages: Mapping[LocaleCode, LocaleTree] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Validate fields and freeze the top-level messages mapping.

        Raises:
            ValueError: If locale or fallback_locale is empty
            TypeError: If messages is not a Mapping
        """
        if not self.locale:
            msg = "LocalizationConfig.locale cannot be empty"
            raise ValueError(msg)
        if not self.fallback_locale:
            msg = "LocalizationConfig.fallback_locale cannot be empty"
            raise ValueError(msg)
        if not isinstance(self.messages, Mapping):
            msg = (
                "LocalizationConfig.messages must be a Mapping, "
                f"got {type(self.messages).__name__}"
            )
            raise TypeError(msg)
        object.__setattr__(self, "messages", MappingProxyType(dict(self.messages)))

    @property
    def available_locales(self) -> tuple[LocaleCode, ...]:
        """Locale codes present in messages, in insertion order."""
        return tuple(self.messages)

    def has_locale(self, locale: LocaleCode) -> bool:
        """Check whether messages contain a tree for the locale."""
        return locale in self.messages
