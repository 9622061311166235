"""Planning of expiry reminders and the daily digest.

Only the schedule and the texts are computed here; delivering notifications
is left to the platform.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Iterable

from .config import NotificationSettings
from .dates import parse_iso_date
from .inventory import get_expiring_soon
from .models import InventoryItem

logger = logging.getLogger(__name__)


@dataclass
class ExpiryReminder:
    item_id: str
    item_name: str
    days_before: int
    remind_at: datetime
    title: str
    body: str


@dataclass
class DailyDigest:
    title: str
    body: str
    items: list[InventoryItem] = field(default_factory=list)


def _when(days_before: int) -> str:
    return "morgen" if days_before == 1 else f"in {days_before} Tagen"


def plan_expiry_reminders(
    item: InventoryItem,
    settings: NotificationSettings,
    now: datetime | None = None,
) -> list[ExpiryReminder]:
    """Plan one reminder per configured offset before the item's expiry.

    Reminders that would fire at or before ``now`` are skipped.
    """
    if not settings.enabled:
        return []

    expiry = parse_iso_date(item.expiry_date)
    if expiry is None:
        logger.debug("Keine Erinnerung für %s: ungültiges Datum", item.name)
        return []

    now = now or datetime.now()
    at = settings.digest_time()
    reminders: list[ExpiryReminder] = []
    for days_before in settings.days_before_expiry:
        remind_at = datetime.combine(expiry - timedelta(days=days_before), at)
        if remind_at <= now:
            continue
        when = _when(days_before)
        reminders.append(
            ExpiryReminder(
                item_id=item.id,
                item_name=item.name,
                days_before=days_before,
                remind_at=remind_at,
                title=f"Lebensmittel läuft {when} ab!",
                body=(
                    f"{item.name} läuft {when} ab. "
                    "Vergiss nicht, es zu verbrauchen!"
                ),
            )
        )
    return reminders


def plan_daily_digest(
    items: Iterable[InventoryItem],
    settings: NotificationSettings,
    today: date | None = None,
) -> DailyDigest | None:
    """Build the daily summary of items expiring within the largest offset.

    Returns None when the digest is disabled or nothing is expiring.
    """
    if not settings.enabled or not settings.daily_digest:
        return None

    window = max(settings.days_before_expiry, default=0)
    expiring = get_expiring_soon(items, days=window, today=today)
    if not expiring:
        return None

    names = ", ".join(item.name for item in expiring)
    return DailyDigest(
        title="Tägliche Übersicht: Ablaufende Lebensmittel",
        body=f"{len(expiring)} Lebensmittel laufen bald ab: {names}",
        items=expiring,
    )
