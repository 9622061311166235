"""CLI entry point for the pantry module."""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from datetime import date
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from .config import ConfigError, PantryConfig, load_config
from .dates import (
    InvalidDateError,
    days_until_expiry,
    expiry_status_color,
    format_date,
)
from .inventory import (
    get_expiring_soon,
    group_by_category,
    sort_by_category,
    sort_by_expiry_date,
    sort_by_name,
    summarize_inventory,
)
from .models import InventoryItem, Recipe
from .recipes import find_missing_ingredients
from .reminders import plan_daily_digest, plan_expiry_reminders

logger = logging.getLogger(__name__)

_SORTERS = {
    "expiry": sort_by_expiry_date,
    "name": sort_by_name,
    "category": sort_by_category,
}


class InputError(Exception):
    """Raised when an input JSON file cannot be read."""


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="pantry",
        description="Vorratsverwaltung: Lebensmittel, Ablaufdaten und Einkaufsliste",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        default=None,
        help="Pfad zur Konfigurationsdatei (TOML)",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Debug-Ausgaben anzeigen"
    )

    sub = parser.add_subparsers(dest="command")

    # list
    list_parser = sub.add_parser("list", help="Vorrat anzeigen")
    list_parser.add_argument("inventory", help="Vorrat als JSON-Datei")
    list_parser.add_argument(
        "--sort", choices=sorted(_SORTERS), default="expiry", help="Sortierung"
    )
    list_parser.add_argument(
        "--group", action="store_true", help="Nach Kategorie gruppieren"
    )
    list_parser.add_argument("--json", action="store_true", help="JSON-Ausgabe")

    # expiring
    exp_parser = sub.add_parser("expiring", help="Bald ablaufende Lebensmittel")
    exp_parser.add_argument("inventory", help="Vorrat als JSON-Datei")
    exp_parser.add_argument(
        "--days", type=int, default=None, help="Zeitraum in Tagen"
    )
    exp_parser.add_argument("--json", action="store_true", help="JSON-Ausgabe")

    # missing
    miss_parser = sub.add_parser("missing", help="Fehlende Zutaten für Rezepte")
    miss_parser.add_argument("inventory", help="Vorrat als JSON-Datei")
    miss_parser.add_argument("recipes", help="Rezepte als JSON-Datei")
    miss_parser.add_argument("--json", action="store_true", help="JSON-Ausgabe")

    # summary
    sum_parser = sub.add_parser("summary", help="Statistik zum Vorrat")
    sum_parser.add_argument("inventory", help="Vorrat als JSON-Datei")
    sum_parser.add_argument("--json", action="store_true", help="JSON-Ausgabe")

    # reminders
    rem_parser = sub.add_parser("reminders", help="Geplante Erinnerungen anzeigen")
    rem_parser.add_argument("inventory", help="Vorrat als JSON-Datei")
    rem_parser.add_argument("--json", action="store_true", help="JSON-Ausgabe")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    load_dotenv()
    try:
        config = load_config(args.config or os.environ.get("PANTRY_CONFIG"))
    except ConfigError as e:
        print(f"Konfigurationsfehler: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        items = _load_inventory(args.inventory)
        match args.command:
            case "list":
                _cmd_list(config, items, args)
            case "expiring":
                _cmd_expiring(config, items, args)
            case "missing":
                _cmd_missing(items, _load_recipes(args.recipes), args)
            case "summary":
                _cmd_summary(config, items, args)
            case "reminders":
                _cmd_reminders(config, items, args)
    except InputError as e:
        print(str(e), file=sys.stderr)
        sys.exit(1)


def _load_documents(path: str) -> list[dict[str, Any]]:
    """Read a JSON export: a list of documents or a mapping id → document."""
    p = Path(path)
    try:
        with open(p, encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        raise InputError(f"Datei nicht gefunden: {p}") from None
    except UnicodeDecodeError:
        raise InputError(f"Datei ist nicht UTF-8-kodiert: {p}") from None
    except json.JSONDecodeError as e:
        raise InputError(f"Ungültiges JSON in {p}: {e}") from None
    except OSError as e:
        raise InputError(
            f"Datei kann nicht gelesen werden: {p} ({e.strerror})"
        ) from None

    if isinstance(data, dict):
        return [
            {"id": doc_id, **doc} for doc_id, doc in data.items() if isinstance(doc, dict)
        ]
    if isinstance(data, list):
        return [doc for doc in data if isinstance(doc, dict)]
    raise InputError(f"Unerwartetes Format in {p}: Liste oder Objekt erwartet")


def _load_inventory(path: str) -> list[InventoryItem]:
    return [InventoryItem.from_dict(doc) for doc in _load_documents(path)]


def _load_recipes(path: str) -> list[Recipe]:
    return [Recipe.from_dict(doc) for doc in _load_documents(path)]


def _describe(item: InventoryItem) -> str:
    try:
        days = days_until_expiry(item.expiry_date)
        expiry = format_date(item.expiry_date)
    except InvalidDateError:
        logger.debug("Ungültiges Ablaufdatum bei %s: %r", item.name, item.expiry_date)
        return f"  {item.name:<20} {item.amount:<10} Ablaufdatum unbekannt"

    if days < 0:
        status = f"seit {-days} Tagen abgelaufen"
    elif days == 0:
        status = "läuft heute ab"
    else:
        status = f"noch {days} Tage"
    return f"  {item.name:<20} {item.amount:<10} {expiry}  ({status})"


def _item_json(item: InventoryItem, config: PantryConfig) -> dict[str, Any]:
    data = item.to_dict()
    try:
        days = days_until_expiry(item.expiry_date)
    except InvalidDateError:
        data["daysUntilExpiry"] = None
        data["statusColor"] = None
        return data
    data["daysUntilExpiry"] = days
    data["statusColor"] = expiry_status_color(
        days,
        config.theme.palette,
        config.expiry.urgent_max_days,
        config.expiry.warning_max_days,
    )
    return data


def _cmd_list(config: PantryConfig, items: list[InventoryItem], args) -> None:
    ordered = _SORTERS[args.sort](items)

    if args.json:
        if args.group:
            grouped = group_by_category(ordered, config.inventory.default_category)
            data: Any = {
                cat: [_item_json(i, config) for i in group] for cat, group in grouped.items()
            }
        else:
            data = [_item_json(i, config) for i in ordered]
        print(json.dumps(data, ensure_ascii=False, indent=2))
        return

    if not ordered:
        print("Der Vorrat ist leer.")
        return

    if args.group:
        grouped = group_by_category(ordered, config.inventory.default_category)
        for category, group in grouped.items():
            print(f"{category} ({len(group)})")
            for item in group:
                print(_describe(item))
            print()
    else:
        for item in ordered:
            print(_describe(item))


def _cmd_expiring(config: PantryConfig, items: list[InventoryItem], args) -> None:
    days = args.days if args.days is not None else config.inventory.expiring_days
    expiring = get_expiring_soon(items, days=days)

    if args.json:
        print(json.dumps([_item_json(i, config) for i in expiring], ensure_ascii=False, indent=2))
        return

    if not expiring:
        print(f"Keine Lebensmittel laufen in den nächsten {days} Tagen ab.")
        return
    print(f"Bald ablaufend ({len(expiring)}):")
    for item in expiring:
        print(_describe(item))


def _cmd_missing(items: list[InventoryItem], recipes: list[Recipe], args) -> None:
    missing = find_missing_ingredients(recipes, items)

    if args.json:
        print(json.dumps(missing, ensure_ascii=False, indent=2))
        return

    if not missing:
        print("Alle Zutaten sind vorrätig.")
        return
    print(f"Fehlende Zutaten ({len(missing)}):")
    for name in missing:
        print(f"  - {name}")


def _cmd_summary(config: PantryConfig, items: list[InventoryItem], args) -> None:
    summary = summarize_inventory(
        items,
        urgent_max_days=config.expiry.urgent_max_days,
        warning_max_days=config.expiry.warning_max_days,
    )

    if args.json:
        data = {
            "total": summary.total,
            "expired": summary.expired,
            "urgent": summary.urgent,
            "warning": summary.warning,
            "safe": summary.safe,
            "invalidDates": summary.invalid_dates,
            "categories": summary.categories,
        }
        print(json.dumps(data, ensure_ascii=False, indent=2))
        return

    print(f"Lebensmittel gesamt: {summary.total}")
    print(f"  abgelaufen:        {summary.expired}")
    print(f"  dringend:          {summary.urgent}")
    print(f"  bald:              {summary.warning}")
    print(f"  haltbar:           {summary.safe}")
    if summary.invalid_dates:
        print(f"  ohne Datum:        {summary.invalid_dates}")
    if summary.categories:
        print()
        for category, count in summary.categories.items():
            print(f"  {category:<18} {count}")


def _cmd_reminders(config: PantryConfig, items: list[InventoryItem], args) -> None:
    settings = config.notifications
    reminders = [r for item in items for r in plan_expiry_reminders(item, settings)]
    reminders.sort(key=lambda r: r.remind_at)
    digest = plan_daily_digest(items, settings, today=date.today())

    if args.json:
        data = {
            "reminders": [
                {
                    "itemId": r.item_id,
                    "itemName": r.item_name,
                    "daysBefore": r.days_before,
                    "remindAt": r.remind_at.isoformat(),
                    "title": r.title,
                    "body": r.body,
                }
                for r in reminders
            ],
            "dailyDigest": (
                {"title": digest.title, "body": digest.body} if digest else None
            ),
        }
        print(json.dumps(data, ensure_ascii=False, indent=2))
        return

    if not settings.enabled:
        print("Benachrichtigungen sind deaktiviert.")
        return
    if not reminders:
        print("Keine Erinnerungen geplant.")
    for r in reminders:
        print(f"  {r.remind_at:%d.%m.%Y %H:%M}  {r.title}  ({r.item_name})")
    if digest is not None:
        print()
        print(f"{digest.title}")
        print(f"  {digest.body}")
