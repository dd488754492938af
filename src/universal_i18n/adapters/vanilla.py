"""Adapter for hosts without a front-end framework.

Uses the canonical resolution algorithm with no host runtime.

Python 3.13+.
"""

from typing import ClassVar

from universal_i18n.adapters.base import BaseAdapter
from universal_i18n.enums import Framework

__all__ = ["VanillaI18nAdapter"]


class VanillaI18nAdapter(BaseAdapter):
    """Plain in-memory adapter; the registry's default fallback."""

    framework_id: ClassVar[str] = Framework.VANILLA

    __slots__ = ()
