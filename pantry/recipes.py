"""Recipe ingredient parsing and inventory matching."""

from __future__ import annotations

import logging
import re
import unicodedata
from typing import Iterable

from .models import InventoryItem, Recipe

logger = logging.getLogger(__name__)

# Leading quantity with optional unit word, e.g. "200g Mehl", "3 Äpfel", "1 Prise Salz"
_QTY_PATTERN = re.compile(r"[0-9]+\s*[a-zA-ZäöüÄÖÜß]*\s+(.*)")


def _fold(text: str) -> str:
    """Lower-case and strip diacritics so "äpfel" and "apfel" compare equal."""
    decomposed = unicodedata.normalize("NFKD", text.lower())
    return "".join(c for c in decomposed if not unicodedata.combining(c))


def extract_ingredient_name(line: str) -> str:
    """Strip the quantity from one ingredient line.

    Lines without a recognisable quantity are kept verbatim. The result is
    always lower-cased and trimmed.
    """
    m = _QTY_PATTERN.search(line)
    if m and m.group(1).strip():
        return m.group(1).strip().lower()
    return line.strip().lower()


def extract_ingredients(recipe: Recipe) -> list[str]:
    """Return the lower-cased ingredient names of a recipe, one per line."""
    return [extract_ingredient_name(line) for line in recipe.ingredients]


def _is_covered(ingredient: str, inventory_names: list[str]) -> bool:
    """Bidirectional substring match against inventory names."""
    folded = _fold(ingredient)
    return any(name in folded or folded in name for name in inventory_names)


def find_missing_ingredients(
    recipes: Iterable[Recipe], inventory: Iterable[InventoryItem]
) -> list[str]:
    """Return ingredients of ``recipes`` not covered by ``inventory``.

    An ingredient counts as present if any inventory name is a substring of
    it or it is a substring of any inventory name. Names are de-duplicated
    in first-seen order and returned with a capitalised first letter.
    """
    all_ingredients: list[str] = []
    for recipe in recipes:
        all_ingredients.extend(extract_ingredients(recipe))
    unique = [i for i in dict.fromkeys(all_ingredients) if i]

    inventory_names: list[str] = []
    for item in inventory:
        name = _fold(item.name.strip())
        if not name:
            logger.debug("Inventareintrag ohne Namen ignoriert: %s", item.id)
            continue
        inventory_names.append(name)

    missing = [i for i in unique if not _is_covered(i, inventory_names)]
    return [i[:1].upper() + i[1:] for i in missing]


def missing_for_recipe(recipe: Recipe, inventory: Iterable[InventoryItem]) -> list[str]:
    return find_missing_ingredients([recipe], inventory)
