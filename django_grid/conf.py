"""Runtime access to django-grid configuration defaults."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from django.conf import settings as django_settings

__all__ = ["settings", "DjangoGridSettings"]


@dataclass
class DjangoGridSettings:
    """Proxy object exposing Django settings with sensible fallbacks."""

    defaults: dict[str, Any]

    def __getattr__(self, attr: str) -> Any:  # pragma: no cover - simple delegation
        if attr in self.defaults:
            return getattr(django_settings, attr, self.defaults[attr])
        return getattr(django_settings, attr)


settings = DjangoGridSettings(
    defaults={
        "GRID_PAGE_SIZES": [10, 20, 30, 40, 50, 100],
        "GRID_PER_PAGE": 20,
        "GRID_MAX_PER_PAGE": 200,
        "GRID_DATA_PARAM": "get_data",
        "GRID_QUICK_SEARCH_PARAM": "quick_search",
        "GRID_STRICT_RELATIONS": False,
        "GRID_PAGE_BACKGROUND": True,
    }
)
