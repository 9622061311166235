"""TOML configuration loader."""

from __future__ import annotations

import os
import re
import sys
from dataclasses import dataclass, field
from datetime import time
from pathlib import Path

from .categories import OTHER_CATEGORY
from .dates import PALETTES, ExpiryPalette

if sys.version_info >= (3, 11):
    import tomllib
else:
    try:
        import tomli as tomllib
    except ImportError:
        tomllib = None  # type: ignore[assignment]

_TIME_PATTERN = re.compile(r"^([01]?\d|2[0-3]):([0-5]\d)$")


class ConfigError(ValueError):
    """Raised for configuration values that cannot be used."""


@dataclass
class InventoryConfig:
    default_category: str = OTHER_CATEGORY
    expiring_days: int = 3


@dataclass
class ExpiryConfig:
    urgent_max_days: int = 2
    warning_max_days: int = 5


@dataclass
class ThemeConfig:
    mode: str = "light"

    @property
    def palette(self) -> ExpiryPalette:
        return PALETTES[self.mode]


@dataclass
class NotificationSettings:
    enabled: bool = True
    days_before_expiry: list[int] = field(default_factory=lambda: [1, 3, 7])
    daily_digest: bool = True
    daily_digest_time: str = "08:00"

    def digest_time(self) -> time:
        m = _TIME_PATTERN.match(self.daily_digest_time)
        if m is None:
            raise ConfigError(
                f"Ungültige Uhrzeit: {self.daily_digest_time!r} (Format HH:MM)"
            )
        return time(int(m.group(1)), int(m.group(2)))


@dataclass
class PantryConfig:
    inventory: InventoryConfig = field(default_factory=InventoryConfig)
    expiry: ExpiryConfig = field(default_factory=ExpiryConfig)
    theme: ThemeConfig = field(default_factory=ThemeConfig)
    notifications: NotificationSettings = field(default_factory=NotificationSettings)


def _validate(config: PantryConfig) -> None:
    if config.theme.mode not in PALETTES:
        raise ConfigError(
            f"Unbekanntes Farbschema: {config.theme.mode!r} "
            f"({' / '.join(PALETTES)} wählen)"
        )
    if config.expiry.warning_max_days < config.expiry.urgent_max_days:
        raise ConfigError(
            "expiry.warning_max_days muss >= expiry.urgent_max_days sein"
        )
    if any(d < 0 for d in config.notifications.days_before_expiry):
        raise ConfigError("notifications.days_before_expiry darf nicht negativ sein")
    config.notifications.digest_time()


def load_config(path: str | Path | None = None) -> PantryConfig:
    """Load configuration from a TOML file.

    Falls back to defaults if no path is given or the file doesn't exist.
    The theme mode can be overridden via the PANTRY_THEME environment
    variable when the file does not set it.

    Raises:
        ConfigError: If a value is out of range.
    """
    raw: dict = {}

    if path is not None:
        p = Path(path)
        if p.exists():
            if tomllib is None:
                raise ImportError(
                    "tomli is required on Python < 3.11: pip install tomli"
                )
            with open(p, "rb") as f:
                raw = tomllib.load(f)

    inv = raw.get("inventory", {})
    exp = raw.get("expiry", {})
    thm = raw.get("theme", {})
    ntf = raw.get("notifications", {})

    # Resolve theme: config file → environment variable → default
    mode = thm.get("mode", "") or os.environ.get("PANTRY_THEME", "") or "light"

    config = PantryConfig(
        inventory=InventoryConfig(
            default_category=inv.get("default_category", OTHER_CATEGORY),
            expiring_days=inv.get("expiring_days", 3),
        ),
        expiry=ExpiryConfig(
            urgent_max_days=exp.get("urgent_max_days", 2),
            warning_max_days=exp.get("warning_max_days", 5),
        ),
        theme=ThemeConfig(mode=mode),
        notifications=NotificationSettings(
            enabled=ntf.get("enabled", True),
            days_before_expiry=list(ntf.get("days_before_expiry", [1, 3, 7])),
            daily_digest=ntf.get("daily_digest", True),
            daily_digest_time=ntf.get("daily_digest_time", "08:00"),
        ),
    )
    _validate(config)
    return config
