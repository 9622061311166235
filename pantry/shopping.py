"""In-memory shopping list with name-keyed de-duplication."""

from __future__ import annotations

import logging
import uuid
from typing import Iterable

from .models import InventoryItem, Recipe, ShoppingListItem
from .recipes import find_missing_ingredients

logger = logging.getLogger(__name__)


class ShoppingListError(KeyError):
    """Raised when a shopping list entry id is unknown."""


class ShoppingList:
    """Shopping list of one owner.

    The item name is the natural key: adding a name that already exists
    updates its amount and marks it as not purchased again.
    """

    def __init__(
        self, owner_id: str = "", items: Iterable[ShoppingListItem] | None = None
    ) -> None:
        self.owner_id = owner_id
        self._items: list[ShoppingListItem] = list(items or [])

    @property
    def items(self) -> list[ShoppingListItem]:
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def _find_by_name(self, name: str) -> ShoppingListItem | None:
        for item in self._items:
            if item.name == name:
                return item
        return None

    def _find_by_id(self, item_id: str) -> ShoppingListItem:
        for item in self._items:
            if item.id == item_id:
                return item
        raise ShoppingListError(item_id)

    def add_item(self, name: str, amount: str = "") -> ShoppingListItem:
        """Add an entry, or refresh the existing entry with the same name."""
        existing = self._find_by_name(name)
        if existing is not None:
            logger.debug("Eintrag bereits vorhanden, aktualisiert: %s", name)
            existing.amount = amount
            existing.purchased = False
            return existing

        item = ShoppingListItem(
            id=uuid.uuid4().hex,
            name=name,
            amount=amount,
            purchased=False,
            owner_id=self.owner_id,
        )
        self._items.append(item)
        return item

    def add_items(self, entries: Iterable[tuple[str, str]]) -> list[ShoppingListItem]:
        """Add several ``(name, amount)`` entries."""
        return [self.add_item(name, amount) for name, amount in entries]

    def add_missing_ingredients(
        self, recipes: Iterable[Recipe], inventory: Iterable[InventoryItem]
    ) -> list[ShoppingListItem]:
        """Put every recipe ingredient not covered by the inventory on the list."""
        missing = find_missing_ingredients(recipes, inventory)
        return self.add_items((name, "") for name in missing)

    def toggle(self, item_id: str, purchased: bool) -> ShoppingListItem:
        item = self._find_by_id(item_id)
        item.purchased = purchased
        return item

    def delete(self, item_id: str) -> None:
        item = self._find_by_id(item_id)
        self._items.remove(item)

    def clear_purchased(self) -> int:
        """Remove all purchased entries.

        Returns:
            Number of entries removed.
        """
        before = len(self._items)
        self._items = [item for item in self._items if not item.purchased]
        return before - len(self._items)

    def pending(self) -> list[ShoppingListItem]:
        return [item for item in self._items if not item.purchased]
