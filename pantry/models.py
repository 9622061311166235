"""Data models for inventory items, recipes and shopping list entries."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

# Remote document keys (English camelCase and the legacy German keys) → field
_ITEM_KEYS: dict[str, str] = {
    "kategorie": "category",
    "menge": "amount",
    "expiryDate": "expiry_date",
    "haltbarBis": "expiry_date",
    "imageUrl": "image_url",
    "bildUrl": "image_url",
    "ownerId": "owner_id",
    "userId": "owner_id",
    "createdAt": "created_at",
    "erstelltAm": "created_at",
    "productInfo": "product_info",
}

_RECIPE_KEYS: dict[str, str] = {
    "titel": "title",
    "prepTime": "prep_time",
    "zubereitungszeit": "prep_time",
    "zutaten": "ingredients",
    "anleitung": "instructions",
    "ownerId": "owner_id",
    "userId": "owner_id",
    "createdAt": "created_at",
    "erstelltAm": "created_at",
}

_SHOPPING_KEYS: dict[str, str] = {
    "menge": "amount",
    "gekauft": "purchased",
    "ownerId": "owner_id",
    "userId": "owner_id",
}


def _normalize_keys(
    data: dict[str, Any], aliases: dict[str, str], allowed: set[str]
) -> dict[str, Any]:
    """Map remote document keys onto dataclass field names, dropping unknowns."""
    result: dict[str, Any] = {}
    for key, value in data.items():
        name = aliases.get(key, key)
        if name in allowed:
            result[name] = value
    return result


def _text_fields(fields: dict[str, Any], *names: str) -> None:
    """Coerce text fields to str; missing or null values become ""."""
    for name in names:
        value = fields.get(name)
        fields[name] = "" if value is None else str(value)


def _parse_timestamp(value: Any) -> datetime | None:
    if value is None or isinstance(value, datetime):
        return value
    try:
        return datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        return None


def _format_timestamp(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


@dataclass
class InventoryItem:
    """A stored perishable item."""

    id: str
    name: str
    category: str
    amount: str  # free text, e.g. "3 Stk." or "1 L"
    expiry_date: str  # ISO date, YYYY-MM-DD
    image_url: str | None = None
    owner_id: str = ""
    created_at: datetime | None = None
    product_info: dict | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> InventoryItem:
        fields = _normalize_keys(
            data,
            _ITEM_KEYS,
            {
                "id", "name", "category", "amount", "expiry_date",
                "image_url", "owner_id", "created_at", "product_info",
            },
        )
        _text_fields(
            fields, "id", "name", "category", "amount", "expiry_date", "owner_id"
        )
        fields["created_at"] = _parse_timestamp(fields.get("created_at"))
        return cls(**fields)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "amount": self.amount,
            "expiryDate": self.expiry_date,
            "imageUrl": self.image_url,
            "ownerId": self.owner_id,
            "createdAt": _format_timestamp(self.created_at),
            "productInfo": self.product_info,
        }


@dataclass
class DetectedItem:
    """An item recognised from a photo or barcode, not stored yet."""

    name: str
    category: str = ""
    amount: str = ""
    expiry_date: str = ""
    image_url: str | None = None
    product_info: dict | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DetectedItem:
        fields = _normalize_keys(
            data,
            _ITEM_KEYS,
            {"name", "category", "amount", "expiry_date", "image_url", "product_info"},
        )
        _text_fields(fields, "name", "category", "amount", "expiry_date")
        return cls(**fields)


@dataclass
class Recipe:
    """A recipe with free-text ingredient lines ("200g Mehl")."""

    id: str
    title: str
    ingredients: list[str] = field(default_factory=list)
    instructions: str = ""
    prep_time: str | None = None
    owner_id: str = ""
    created_at: datetime | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Recipe:
        fields = _normalize_keys(
            data,
            _RECIPE_KEYS,
            {
                "id", "title", "ingredients", "instructions", "prep_time",
                "owner_id", "created_at",
            },
        )
        _text_fields(fields, "id", "title", "instructions", "owner_id")
        fields["ingredients"] = [str(i) for i in fields.get("ingredients") or []]
        fields["created_at"] = _parse_timestamp(fields.get("created_at"))
        return cls(**fields)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "prepTime": self.prep_time,
            "ingredients": list(self.ingredients),
            "instructions": self.instructions,
            "ownerId": self.owner_id,
            "createdAt": _format_timestamp(self.created_at),
        }


@dataclass
class ShoppingListItem:
    """A shopping list entry. The name is the dedup key within one list."""

    id: str
    name: str
    amount: str = ""
    purchased: bool = False
    owner_id: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ShoppingListItem:
        fields = _normalize_keys(
            data, _SHOPPING_KEYS, {"id", "name", "amount", "purchased", "owner_id"}
        )
        _text_fields(fields, "id", "name", "amount", "owner_id")
        fields["purchased"] = bool(fields.get("purchased", False))
        return cls(**fields)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "amount": self.amount,
            "purchased": self.purchased,
            "ownerId": self.owner_id,
        }
