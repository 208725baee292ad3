"""Tests for the interactive edit session."""

import json
from decimal import Decimal

import httpx
import pytest

from daybook.cli.main import cli


@pytest.fixture
def session(cli_runner, data_dir, monkeypatch):
    """Run an edit session on 2025-01-15, feeding it the given lines."""
    monkeypatch.delenv("DAYBOOK_DATA_DIR", raising=False)

    def _session(*lines, args=("--no-refresh",), obj=None):
        return cli_runner.invoke(
            cli,
            ["--data-dir", str(data_dir), "edit", "2025-01-15", *args],
            input="\n".join(lines) + "\n",
            obj=obj,
        )

    return _session


def test_changes_are_recorded_and_undone(session, store, sample_date):
    result = session(
        "a", "Coffee", "4.50", "",
        "a", "Lunch", "", "141600",
        "e 2", "Big lunch", "", "",
        "d 1", "y",
        "s", "1h30m",
        "j", "Good food.",
        "u", "u", "u", "u",
        "q",
    )

    assert result.exit_code == 0, result.output
    assert "Added 'Coffee'" in result.output
    assert "Updated 'Big lunch'" in result.output
    assert "Deleted 'Coffee'" in result.output
    assert "Undo: Restored journal" in result.output
    assert "Undo: Restored screen time to ''" in result.output
    assert "Undo: Restored 'Coffee'" in result.output
    assert "Undo: Reverted 'Lunch'" in result.output

    day = store.load_day(sample_date)
    assert [(e.description, e.cad, e.idr) for e in day.entries] == [
        ("Lunch", Decimal("12.00"), Decimal("141600")),
        ("Coffee", Decimal("4.50"), Decimal("53100")),
    ]
    assert day.screen_time == ""
    assert not store.journal_exists(sample_date)


def test_undo_everything_leaves_no_files(session, store, sample_date):
    result = session("a", "Coffee", "4.50", "", "j", "Notes", "u", "u", "u", "q")

    assert result.exit_code == 0, result.output
    assert "Nothing to undo" in result.output
    assert not store.day_has_data(sample_date)


def test_edit_reconverts_changed_amount(session, store, sample_date):
    result = session("a", "Coffee", "4.50", "53100", "e 1", "", "5.00", "", "q")

    assert result.exit_code == 0, result.output
    entry = store.load_day(sample_date).entries[0]
    assert (entry.description, entry.cad, entry.idr) == ("Coffee", Decimal("5.00"), Decimal("59000"))


def test_declined_delete_keeps_entry(session, store, sample_date):
    result = session("a", "Coffee", "4.50", "", "d 1", "n", "u", "q")

    assert result.exit_code == 0, result.output
    assert "Undo: Removed 'Coffee'" in result.output
    assert store.load_day(sample_date).entries == []


def test_bad_input_keeps_session_running(session, store, sample_date):
    result = session(
        "d 9",
        "e x",
        "zz",
        "a", "Huge", "1e30", "",
        "a", "Coffee", "", "",
        "q",
    )

    assert result.exit_code == 0, result.output
    assert "No entry at row 9" in result.output
    assert "Row must be a number" in result.output
    assert "Unknown command 'zz'" in result.output
    assert "too large" in result.output
    assert "Provide a CAD or IDR amount" in result.output
    assert not store.file_exists(sample_date)


def test_session_refreshes_rate_in_background(session, data_dir, rate_client_factory):
    def handler(request):
        return httpx.Response(200, json={"rates": {"IDR": 11900.0}})

    result = session("q", args=(), obj={"rate_client": rate_client_factory(handler)})

    assert result.exit_code == 0, result.output
    cache = json.loads((data_dir / ".rate_cache.json").read_text(encoding="utf-8"))
    assert cache["cad_to_idr"] == 11900.0


def test_session_shows_existing_day(session, ledger, sample_day):
    ledger.save_day(sample_day)
    sample_day.journal = "Quiet day."
    ledger.save_day(sample_day)

    result = session("q")

    assert result.exit_code == 0
    assert "Screen time: 1h00m" in result.output
    assert "Coffee" in result.output
    assert "Quiet day." in result.output
