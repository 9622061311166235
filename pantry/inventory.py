"""Grouping, sorting and expiry queries over inventory items.

All functions return new collections and never mutate their input.
"""

from __future__ import annotations

import logging
import unicodedata
from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, Sequence

from .categories import OTHER_CATEGORY
from .dates import (
    URGENT_MAX_DAYS,
    WARNING_MAX_DAYS,
    ExpiryStatus,
    classify_expiry,
    parse_iso_date,
)
from .models import InventoryItem

logger = logging.getLogger(__name__)


@dataclass
class InventorySummary:
    """Counts over an inventory snapshot.

    ``urgent`` includes expired items; ``invalid_dates`` counts items whose
    expiry date could not be parsed (they are in no bucket).
    """

    total: int = 0
    expired: int = 0
    urgent: int = 0
    warning: int = 0
    safe: int = 0
    invalid_dates: int = 0
    categories: dict[str, int] = field(default_factory=dict)


def group_by_category(
    items: Iterable[InventoryItem], default: str = OTHER_CATEGORY
) -> dict[str, list[InventoryItem]]:
    """Partition items by category, keeping first-seen category order.

    Items with an empty category go to ``default``.
    """
    groups: dict[str, list[InventoryItem]] = {}
    for item in items:
        groups.setdefault(item.category or default, []).append(item)
    return groups


def _expiry_key(item: InventoryItem) -> tuple[bool, date]:
    # Unparsable dates sort after every valid date
    parsed = parse_iso_date(item.expiry_date)
    if parsed is None:
        return (True, date.max)
    return (False, parsed)


def _collation_key(text: str) -> tuple[str, str, str]:
    """Accent- and case-insensitive primary key ("Äpfel" next to "Apfel")."""
    decomposed = unicodedata.normalize("NFKD", text)
    base = "".join(c for c in decomposed if not unicodedata.combining(c))
    return (base.casefold(), text.casefold(), text)


def sort_by_expiry_date(items: Sequence[InventoryItem]) -> list[InventoryItem]:
    """Return items ordered by expiry date, earliest first (stable)."""
    return sorted(items, key=_expiry_key)


def sort_by_name(items: Sequence[InventoryItem]) -> list[InventoryItem]:
    return sorted(items, key=lambda item: _collation_key(item.name))


def sort_by_category(items: Sequence[InventoryItem]) -> list[InventoryItem]:
    return sorted(items, key=lambda item: _collation_key(item.category))


def get_expiring_soon(
    items: Iterable[InventoryItem], days: int = 3, today: date | None = None
) -> list[InventoryItem]:
    """Return items expiring within ``days`` days, including expired ones."""
    today = today or date.today()
    result: list[tuple[date, InventoryItem]] = []
    for item in items:
        expiry = parse_iso_date(item.expiry_date)
        if expiry is None:
            logger.debug("Ablaufdatum fehlt oder ungültig: %s", item.name)
            continue
        if (expiry - today).days <= days:
            result.append((expiry, item))
    result.sort(key=lambda pair: pair[0])
    return [item for _, item in result]


def get_expired(
    items: Iterable[InventoryItem], today: date | None = None
) -> list[InventoryItem]:
    """Return items whose expiry date lies before today."""
    return get_expiring_soon(items, days=-1, today=today)


def summarize_inventory(
    items: Iterable[InventoryItem],
    today: date | None = None,
    urgent_max_days: int = URGENT_MAX_DAYS,
    warning_max_days: int = WARNING_MAX_DAYS,
) -> InventorySummary:
    today = today or date.today()
    summary = InventorySummary()
    for item in items:
        summary.total += 1
        category = item.category or OTHER_CATEGORY
        summary.categories[category] = summary.categories.get(category, 0) + 1

        expiry = parse_iso_date(item.expiry_date)
        if expiry is None:
            summary.invalid_dates += 1
            continue
        days = (expiry - today).days
        if days < 0:
            summary.expired += 1
        match classify_expiry(days, urgent_max_days, warning_max_days):
            case ExpiryStatus.URGENT:
                summary.urgent += 1
            case ExpiryStatus.WARNING:
                summary.warning += 1
            case ExpiryStatus.SAFE:
                summary.safe += 1
    return summary
