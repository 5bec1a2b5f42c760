"""
Catalogman configuration.

Usage in settings.py:
    CATALOGMAN = {
        "ADDON_TYPE_NAMES": ["food"],
        "PLACEHOLDER_IMAGE": "/placeholder.svg",
        "PRICE_QUANTUM": None,  # e.g. "0.01" to round totals half-up
    }
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

from django.conf import settings


@dataclass
class CatalogmanSettings:
    """Catalogman configuration settings."""

    ADDON_TYPE_NAMES: list[str] = field(default_factory=lambda: ["food"])
    PLACEHOLDER_IMAGE: str = "/placeholder.svg"
    PRICE_QUANTUM: str | None = None

    @property
    def price_quantum(self) -> Decimal | None:
        """PRICE_QUANTUM as Decimal, or None when totals are not rounded."""
        if self.PRICE_QUANTUM is None:
            return None
        return Decimal(str(self.PRICE_QUANTUM))


def get_catalogman_settings() -> CatalogmanSettings:
    """Load settings from Django settings."""
    user_settings: dict[str, Any] = getattr(settings, "CATALOGMAN", {})
    return CatalogmanSettings(**user_settings)


class _LazySettings:
    """Lazy proxy that re-reads settings on every attribute access."""

    def __getattr__(self, name):
        return getattr(get_catalogman_settings(), name)


catalogman_settings = _LazySettings()
