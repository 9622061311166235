"""Food categories, keyword-based category guessing and default shelf life."""

from __future__ import annotations

import calendar
from datetime import date, timedelta
from typing import Iterable

from .models import DetectedItem, InventoryItem

OTHER_CATEGORY = "Other"

FOOD_CATEGORIES: tuple[str, ...] = (
    "Fruit",
    "Vegetables",
    "Dairy",
    "Meat",
    "Fish",
    "Bakery",
    "Frozen",
    "Canned",
    "Spices",
    "Beverages",
    OTHER_CATEGORY,
)

# Keyword → category mapping; fish precedes fruit ("meeresfrüchte")
_CATEGORY_KEYWORDS: dict[str, list[str]] = {
    "Fish": ["fisch", "meeresfrüchte", "fish", "seafood"],
    "Fruit": ["obst", "früchte", "fruit"],
    "Vegetables": ["gemüse", "vegetable"],
    "Meat": ["fleisch", "wurst", "meat", "sausage"],
    "Dairy": ["milch", "käse", "joghurt", "dairy", "cheese", "yogurt", "milk"],
    "Bakery": ["brot", "backwaren", "gebäck", "bread", "bakery"],
    "Frozen": ["tiefkühl", "frozen"],
    "Canned": ["konserve", "canned"],
    "Spices": ["gewürz", "spice", "herb"],
    "Beverages": ["getränk", "saft", "beverage", "drink", "juice"],
}

# Shelf life per category used when no expiry date is known
_SHELF_LIFE_DAYS: dict[str, int] = {
    "Fruit": 7,
    "Vegetables": 7,
    "Dairy": 10,
    "Meat": 3,
    "Fish": 3,
    "Bakery": 5,
}
_SHELF_LIFE_MONTHS: dict[str, int] = {
    "Frozen": 3,
    "Canned": 12,
    "Spices": 12,
    "Beverages": 12,
}
_DEFAULT_SHELF_LIFE_DAYS = 14


def guess_category(labels: Iterable[str]) -> str:
    """Guess a food category from product category labels.

    Labels are checked in order; the first label containing a known keyword
    decides the category.
    """
    for label in labels:
        lowered = label.lower()
        for category, keywords in _CATEGORY_KEYWORDS.items():
            if any(keyword in lowered for keyword in keywords):
                return category
    return OTHER_CATEGORY


def _add_months(day: date, months: int) -> date:
    month_index = day.month - 1 + months
    year = day.year + month_index // 12
    month = month_index % 12 + 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))


def default_expiry_date(category: str, today: date | None = None) -> str:
    """Return a default ISO expiry date for a category."""
    today = today or date.today()
    if category in _SHELF_LIFE_MONTHS:
        expiry = _add_months(today, _SHELF_LIFE_MONTHS[category])
    else:
        days = _SHELF_LIFE_DAYS.get(category, _DEFAULT_SHELF_LIFE_DAYS)
        expiry = today + timedelta(days=days)
    return expiry.isoformat()


def detected_to_inventory(
    detected: DetectedItem,
    item_id: str,
    owner_id: str = "",
    today: date | None = None,
) -> InventoryItem:
    """Turn a recognised item into an inventory item, filling defaults."""
    category = detected.category or OTHER_CATEGORY
    return InventoryItem(
        id=item_id,
        name=detected.name,
        category=category,
        amount=detected.amount or "1",
        expiry_date=detected.expiry_date or default_expiry_date(category, today),
        image_url=detected.image_url,
        owner_id=owner_id,
        product_info=detected.product_info,
    )
