"""
Storeman configuration.

Usage in settings.py:
    STOREMAN = {
        "DEFAULT_LOW_STOCK_THRESHOLD": 5,
        "TOP_SELLERS_DAYS": 30,
        "RECEIVABLE_STATUSES": ["confirmed"],
        "DEFAULT_PAGE_SIZE": 10,
    }
"""

from dataclasses import dataclass, field
from typing import Any

from django.conf import settings


@dataclass
class StoremanSettings:
    """Storeman configuration settings."""

    # Threshold applied to new variants when none is given
    DEFAULT_LOW_STOCK_THRESHOLD: int = 5

    # Dashboard windows
    TOP_SELLERS_DAYS: int = 30
    TOP_SELLERS_LIMIT: int = 5
    MOVEMENT_GRAPH_DAYS: int = 7

    # Purchase order statuses that accept receipts
    RECEIVABLE_STATUSES: list[str] = field(default_factory=lambda: ["confirmed"])

    # Product listing pagination
    DEFAULT_PAGE_SIZE: int = 10
    MAX_PAGE_SIZE: int = 100


def get_storeman_settings() -> StoremanSettings:
    """Load settings from Django settings."""
    user_settings: dict[str, Any] = getattr(settings, "STOREMAN", {})
    return StoremanSettings(**{
        k: v for k, v in user_settings.items()
        if k in StoremanSettings.__dataclass_fields__
    })


class _LazySettings:
    """Lazy proxy that re-reads settings on every attribute access."""

    def __getattr__(self, name):
        return getattr(get_storeman_settings(), name)


storeman_settings = _LazySettings()
