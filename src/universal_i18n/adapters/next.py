"""Next.js adapter.

Behaves like the React adapter and adds locale-prefixed path building for
Next.js' sub-path routing.

Python 3.13+.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

from universal_i18n.adapters.react import ReactI18nAdapter
from universal_i18n.enums import Framework

if TYPE_CHECKING:
    from universal_i18n.types import LocaleCode

__all__ = ["NextI18nAdapter"]


class NextI18nAdapter(ReactI18nAdapter):
    """Adapter for Next.js hosts."""

    framework_id: ClassVar[str] = Framework.NEXT

    __slots__ = ()

    def localized_path(self, path: str, locale: LocaleCode | None = None) -> str:
        """Prefix a route path with a locale segment.

        Args:
            path: Route path, with or without a leading slash
            locale: Locale to use (default: the active locale)

        Returns:
            Path of the form ``/<locale>/<path>``

        Example:
            >>> adapter.localized_path("about", "en")
            '/en/about'
        """
        target = locale or self.current_locale()
        normalized = path if path.startswith("/") else f"/{path}"
        return f"/{target}{normalized}"
