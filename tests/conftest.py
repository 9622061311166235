"""Shared fixtures: the inventory and recipe used throughout the suite."""

from datetime import datetime

import pytest

from pantry.models import InventoryItem, Recipe


@pytest.fixture
def inventory():
    """Apfel, Milch and Brot with different categories and expiry dates."""
    created = datetime(2023, 5, 20)
    return [
        InventoryItem(
            id="1",
            name="Apfel",
            category="Obst",
            amount="3 Stk.",
            expiry_date="2023-06-01",
            owner_id="user1",
            created_at=created,
        ),
        InventoryItem(
            id="2",
            name="Milch",
            category="Milchprodukte",
            amount="1 L",
            expiry_date="2023-05-25",
            owner_id="user1",
            created_at=created,
        ),
        InventoryItem(
            id="3",
            name="Brot",
            category="Backwaren",
            amount="1 Stk.",
            expiry_date="2023-05-23",
            owner_id="user1",
            created_at=created,
        ),
    ]


@pytest.fixture
def apple_pie():
    return Recipe(
        id="1",
        title="Apfelkuchen",
        prep_time="45 Minuten",
        ingredients=["3 Äpfel", "200g Mehl", "100g Zucker", "2 Eier"],
        instructions="Schritt 1: Äpfel schälen...",
        owner_id="user1",
        created_at=datetime(2023, 5, 20),
    )
