"""Expiry date helpers: parsing, formatting and severity classification."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from datetime import date, datetime

logger = logging.getLogger(__name__)

URGENT_MAX_DAYS = 2
WARNING_MAX_DAYS = 5


class InvalidDateError(ValueError):
    """Raised when an expiry date is not a valid ISO calendar date."""


class ExpiryStatus(enum.Enum):
    URGENT = "red"
    WARNING = "yellow"
    SAFE = "green"


@dataclass(frozen=True)
class ExpiryPalette:
    expiry_red: str
    expiry_yellow: str
    expiry_green: str

    def color_for(self, status: ExpiryStatus) -> str:
        match status:
            case ExpiryStatus.URGENT:
                return self.expiry_red
            case ExpiryStatus.WARNING:
                return self.expiry_yellow
            case _:
                return self.expiry_green


LIGHT_PALETTE = ExpiryPalette(
    expiry_red="#E53935",
    expiry_yellow="#FFA726",
    expiry_green="#43A047",
)

DARK_PALETTE = ExpiryPalette(
    expiry_red="#EF5350",
    expiry_yellow="#FFCA28",
    expiry_green="#66BB6A",
)

PALETTES: dict[str, ExpiryPalette] = {
    "light": LIGHT_PALETTE,
    "dark": DARK_PALETTE,
}


def parse_iso_date(value: str | date | None) -> date | None:
    """Parse an ISO date (or the date part of an ISO timestamp).

    Returns None for empty or malformed input instead of raising.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    if not text:
        return None
    # Keep the date part of a timestamp; any other trailing text is invalid
    if len(text) > 10 and text[10] in "T ":
        text = text[:10]
    try:
        return date.fromisoformat(text)
    except ValueError:
        logger.debug("Ungültiges Datum ignoriert: %r", value)
        return None


def days_until_expiry(expiry_date: str | date, today: date | None = None) -> int:
    """Return the calendar-day difference between today and the expiry date.

    Positive values lie in the future, zero means today, negative values
    mean the item has already expired.

    Raises:
        InvalidDateError: If expiry_date is not a valid ISO date.
    """
    expiry = parse_iso_date(expiry_date)
    if expiry is None:
        raise InvalidDateError(f"Ungültiges Ablaufdatum: {expiry_date!r}")
    today = today or date.today()
    return (expiry - today).days


def classify_expiry(
    days: int,
    urgent_max_days: int = URGENT_MAX_DAYS,
    warning_max_days: int = WARNING_MAX_DAYS,
) -> ExpiryStatus:
    """Map days-until-expiry to a severity bucket.

    Expired items and items expiring within urgent_max_days are URGENT.
    """
    if days <= urgent_max_days:
        return ExpiryStatus.URGENT
    if days <= warning_max_days:
        return ExpiryStatus.WARNING
    return ExpiryStatus.SAFE


def expiry_status_color(
    days: int,
    palette: ExpiryPalette = LIGHT_PALETTE,
    urgent_max_days: int = URGENT_MAX_DAYS,
    warning_max_days: int = WARNING_MAX_DAYS,
) -> str:
    """Return the palette color for the expiry bucket of ``days``."""
    status = classify_expiry(days, urgent_max_days, warning_max_days)
    return palette.color_for(status)


def format_date(value: str | date) -> str:
    """Format a date as dd.mm.yyyy (e.g. "01.05.2023").

    Raises:
        InvalidDateError: If a string value cannot be parsed.
    """
    parsed = parse_iso_date(value)
    if parsed is None:
        raise InvalidDateError(f"Ungültiges Datum: {value!r}")
    return parsed.strftime("%d.%m.%Y")
