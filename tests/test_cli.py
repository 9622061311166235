"""Tests for the pantry CLI."""

import json
from datetime import date, timedelta

import pytest

from pantry.cli import main


def _in_days(n: int) -> str:
    return (date.today() + timedelta(days=n)).isoformat()


@pytest.fixture
def inventory_file(tmp_path):
    docs = [
        {"id": "1", "name": "Apfel", "kategorie": "Obst", "menge": "3 Stk.",
         "haltbarBis": _in_days(10)},
        {"id": "2", "name": "Milch", "kategorie": "Milchprodukte", "menge": "1 L",
         "haltbarBis": _in_days(4)},
        {"id": "3", "name": "Brot", "kategorie": "", "menge": "1 Stk.",
         "haltbarBis": _in_days(-1)},
    ]
    path = tmp_path / "inventory.json"
    path.write_text(json.dumps(docs), encoding="utf-8")
    return path


@pytest.fixture
def recipes_file(tmp_path):
    docs = {
        "r1": {"titel": "Apfelkuchen",
               "zutaten": ["3 Äpfel", "200g Mehl", "100g Zucker", "2 Eier"]},
    }
    path = tmp_path / "recipes.json"
    path.write_text(json.dumps(docs), encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def _no_env_config(monkeypatch, tmp_path):
    monkeypatch.delenv("PANTRY_CONFIG", raising=False)
    monkeypatch.delenv("PANTRY_THEME", raising=False)
    monkeypatch.chdir(tmp_path)


def test_no_command_exits(capsys):
    """Running without a command prints help and exits with status 1."""
    with pytest.raises(SystemExit) as exc:
        main([])
    assert exc.value.code == 1


def test_list_sorted_by_expiry(inventory_file, capsys):
    """list orders items by expiry date by default."""
    main(["list", str(inventory_file)])
    out = capsys.readouterr().out.splitlines()

    assert "Brot" in out[0]
    assert "abgelaufen" in out[0]
    assert "Milch" in out[1]
    assert "Apfel" in out[2]


def test_list_grouped_json(inventory_file, capsys):
    """list --group --json groups items and adds status colours."""
    main(["list", str(inventory_file), "--group", "--json"])
    data = json.loads(capsys.readouterr().out)

    assert list(data) == ["Other", "Milchprodukte", "Obst"]
    brot = data["Other"][0]
    assert brot["daysUntilExpiry"] == -1
    assert brot["statusColor"] == "#E53935"
    assert data["Milchprodukte"][0]["statusColor"] == "#FFA726"
    assert data["Obst"][0]["statusColor"] == "#43A047"


def test_list_uses_dark_palette_from_config(inventory_file, tmp_path, capsys):
    """The dark theme from the config file changes the status colours."""
    cfg = tmp_path / "pantry.toml"
    cfg.write_text('[theme]\nmode = "dark"\n', encoding="utf-8")

    main(["--config", str(cfg), "list", str(inventory_file), "--json"])
    data = json.loads(capsys.readouterr().out)

    assert data[0]["statusColor"] == "#EF5350"


def test_list_sort_by_name(inventory_file, capsys):
    """list --sort name orders items alphabetically."""
    main(["list", str(inventory_file), "--sort", "name", "--json"])
    data = json.loads(capsys.readouterr().out)
    assert [d["name"] for d in data] == ["Apfel", "Brot", "Milch"]


def test_expiring(inventory_file, capsys):
    """expiring lists items within the given number of days."""
    main(["expiring", str(inventory_file), "--days", "5", "--json"])
    data = json.loads(capsys.readouterr().out)
    assert [d["name"] for d in data] == ["Brot", "Milch"]


def test_expiring_none(inventory_file, capsys):
    """expiring reports when nothing expires in the window."""
    main(["expiring", str(inventory_file), "--days", "-5"])
    assert "Keine Lebensmittel" in capsys.readouterr().out


def test_missing(inventory_file, recipes_file, capsys):
    """missing lists recipe ingredients not in stock."""
    main(["missing", str(inventory_file), str(recipes_file), "--json"])
    assert set(json.loads(capsys.readouterr().out)) == {"Mehl", "Zucker", "Eier"}


def test_summary(inventory_file, capsys):
    """summary counts items per expiry status."""
    main(["summary", str(inventory_file), "--json"])
    data = json.loads(capsys.readouterr().out)

    assert data["total"] == 3
    assert data["expired"] == 1
    assert data["urgent"] == 1
    assert data["warning"] == 1
    assert data["safe"] == 1


def test_reminders(inventory_file, capsys):
    """reminders skips expired items and builds the daily digest."""
    main(["reminders", str(inventory_file), "--json"])
    data = json.loads(capsys.readouterr().out)

    names = {r["itemName"] for r in data["reminders"]}
    assert "Brot" not in names
    assert "Apfel" in names
    assert data["dailyDigest"] is not None


def test_missing_file(tmp_path, capsys):
    """A missing input file exits with status 1."""
    with pytest.raises(SystemExit) as exc:
        main(["list", str(tmp_path / "nope.json")])
    assert exc.value.code == 1
    assert "nicht gefunden" in capsys.readouterr().err


def test_invalid_json(tmp_path, capsys):
    """Invalid JSON exits with status 1."""
    path = tmp_path / "broken.json"
    path.write_text("{kaputt", encoding="utf-8")
    with pytest.raises(SystemExit) as exc:
        main(["summary", str(path)])
    assert exc.value.code == 1
    assert "Ungültiges JSON" in capsys.readouterr().err


def test_invalid_config(inventory_file, tmp_path, capsys):
    """An invalid config file exits with status 1."""
    cfg = tmp_path / "pantry.toml"
    cfg.write_text('[theme]\nmode = "neon"\n', encoding="utf-8")
    with pytest.raises(SystemExit) as exc:
        main(["--config", str(cfg), "list", str(inventory_file)])
    assert exc.value.code == 1
    assert "Konfigurationsfehler" in capsys.readouterr().err


def test_non_utf8_file(tmp_path, capsys):
    """A file that is not UTF-8 exits with status 1."""
    path = tmp_path / "latin1.json"
    path.write_bytes('[{"name": "Käse"}]'.encode("latin-1"))
    with pytest.raises(SystemExit) as exc:
        main(["list", str(path)])
    assert exc.value.code == 1
    assert "UTF-8" in capsys.readouterr().err


def test_directory_instead_of_file(tmp_path, capsys):
    """A directory given as input file exits with status 1."""
    with pytest.raises(SystemExit) as exc:
        main(["summary", str(tmp_path)])
    assert exc.value.code == 1
    assert "kann nicht gelesen werden" in capsys.readouterr().err


def test_mapping_skips_non_document_values(tmp_path, capsys):
    """Non-object values in an id → document mapping are skipped."""
    path = tmp_path / "inventory.json"
    docs = {
        "1": {"name": "Apfel", "haltbarBis": _in_days(10)},
        "2": "kein Dokument",
        "3": None,
    }
    path.write_text(json.dumps(docs), encoding="utf-8")

    main(["list", str(path), "--json"])
    data = json.loads(capsys.readouterr().out)
    assert [(d["id"], d["name"]) for d in data] == [("1", "Apfel")]


def test_list_with_null_fields(tmp_path, capsys):
    """Documents with null name or amount are listed."""
    path = tmp_path / "inventory.json"
    docs = [
        {"id": "1", "name": None, "menge": None, "haltbarBis": _in_days(3)},
        {"id": "2", "name": "Milch", "menge": None, "haltbarBis": None},
    ]
    path.write_text(json.dumps(docs), encoding="utf-8")

    main(["list", str(path), "--sort", "name"])
    out = capsys.readouterr().out
    assert "noch 3 Tage" in out
    assert "Ablaufdatum unbekannt" in out


def test_missing_with_null_inventory_name(tmp_path, recipes_file, capsys):
    """An inventory item with a null name covers no ingredient."""
    path = tmp_path / "inventory.json"
    path.write_text(json.dumps([{"id": "1", "name": None}]), encoding="utf-8")

    main(["missing", str(path), str(recipes_file), "--json"])
    assert json.loads(capsys.readouterr().out) == ["Äpfel", "Mehl", "Zucker", "Eier"]
