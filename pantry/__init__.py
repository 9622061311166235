"""Household food inventory: expiry tracking, recipe matching and shopping lists."""

from .categories import (
    FOOD_CATEGORIES,
    OTHER_CATEGORY,
    default_expiry_date,
    detected_to_inventory,
    guess_category,
)
from .config import (
    ConfigError,
    ExpiryConfig,
    InventoryConfig,
    NotificationSettings,
    PantryConfig,
    ThemeConfig,
    load_config,
)
from .dates import (
    DARK_PALETTE,
    LIGHT_PALETTE,
    ExpiryPalette,
    ExpiryStatus,
    InvalidDateError,
    classify_expiry,
    days_until_expiry,
    expiry_status_color,
    format_date,
    parse_iso_date,
)
from .inventory import (
    InventorySummary,
    get_expired,
    get_expiring_soon,
    group_by_category,
    sort_by_category,
    sort_by_expiry_date,
    sort_by_name,
    summarize_inventory,
)
from .models import DetectedItem, InventoryItem, Recipe, ShoppingListItem
from .recipes import (
    extract_ingredient_name,
    extract_ingredients,
    find_missing_ingredients,
    missing_for_recipe,
)
from .reminders import (
    DailyDigest,
    ExpiryReminder,
    plan_daily_digest,
    plan_expiry_reminders,
)
from .shopping import ShoppingList, ShoppingListError

__all__ = [
    "InventoryItem",
    "Recipe",
    "ShoppingListItem",
    "DetectedItem",
    "group_by_category",
    "sort_by_expiry_date",
    "sort_by_name",
    "sort_by_category",
    "get_expiring_soon",
    "get_expired",
    "summarize_inventory",
    "InventorySummary",
    "extract_ingredient_name",
    "extract_ingredients",
    "find_missing_ingredients",
    "missing_for_recipe",
    "days_until_expiry",
    "classify_expiry",
    "expiry_status_color",
    "format_date",
    "parse_iso_date",
    "ExpiryStatus",
    "ExpiryPalette",
    "LIGHT_PALETTE",
    "DARK_PALETTE",
    "InvalidDateError",
    "FOOD_CATEGORIES",
    "OTHER_CATEGORY",
    "guess_category",
    "default_expiry_date",
    "detected_to_inventory",
    "ShoppingList",
    "ShoppingListError",
    "ExpiryReminder",
    "DailyDigest",
    "plan_expiry_reminders",
    "plan_daily_digest",
    "PantryConfig",
    "InventoryConfig",
    "ExpiryConfig",
    "ThemeConfig",
    "NotificationSettings",
    "ConfigError",
    "load_config",
]
