"""Tests for the ledger service and its day cache."""

from datetime import date, datetime
from decimal import Decimal

from daybook.domain.entities import DateRange, Day
from daybook.domain.ledger import LedgerService


class TestDayCache:
    def test_get_day_returns_shared_instance(self, ledger, sample_date):
        first = ledger.get_day(sample_date)
        second = ledger.get_day(sample_date)
        assert first is second

    def test_time_of_day_is_ignored(self, ledger):
        morning = ledger.get_day(datetime(2025, 1, 15, 8, 0))
        evening = ledger.get_day(datetime(2025, 1, 15, 22, 30))
        assert morning is evening is ledger.get_day(date(2025, 1, 15))
        assert morning.date == date(2025, 1, 15)

    def test_mutation_visible_to_all_holders(self, ledger, sample_date):
        view_a = ledger.get_day(sample_date)
        view_a.journal = "Seen by everyone"
        assert ledger.get_day(sample_date).journal == "Seen by everyone"

    def test_save_empty_day_updates_cache_only(self, ledger, store, sample_day):
        store.save_day(sample_day)
        day = ledger.get_day(sample_day.date)
        assert len(day.entries) == 2

        replacement = Day(date=sample_day.date)
        ledger.save_day(replacement)

        # Disk still holds the old file, but readers see the cached empty day
        assert store.file_exists(sample_day.date)
        assert ledger.get_day(sample_day.date) is replacement

    def test_invalidate_cache_reloads_from_disk(self, ledger, sample_day):
        ledger.save_day(sample_day)
        cached = ledger.get_day(sample_day.date)

        ledger.invalidate_cache(sample_day.date)
        reloaded = ledger.get_day(sample_day.date)

        assert reloaded is not cached
        assert [e.description for e in reloaded.entries] == ["Coffee", "Lunch"]

    def test_clear_cache(self, ledger, sample_day):
        ledger.save_day(sample_day)
        ledger.clear_cache()
        assert ledger.get_day(sample_day.date) is not sample_day

    def test_invalidate_unknown_date_is_noop(self, ledger):
        ledger.invalidate_cache(date(1999, 1, 1))


class TestRanges:
    def test_get_date_range_bypasses_cache(self, ledger, sample_day):
        ledger.save_day(sample_day)
        # Unsaved in-memory change
        sample_day.entries.pop()

        date_range = ledger.get_date_range(date(2025, 1, 1), date(2025, 1, 31))

        assert isinstance(date_range, DateRange)
        assert [e.description for e in date_range.all_entries()] == ["Coffee", "Lunch"]

    def test_list_available_dates(self, ledger, sample_day):
        assert ledger.list_available_dates() == []
        ledger.save_day(sample_day)
        assert ledger.list_available_dates() == [sample_day.date]
        assert ledger.day_has_data(sample_day.date)

    def test_export_default_filename(self, ledger, data_dir, sample_day):
        ledger.save_day(sample_day)
        date_range = ledger.get_date_range(date(2025, 1, 1), date(2025, 1, 31))

        path = ledger.export_date_range(date_range)

        assert path == data_dir / "2025-01-01_to_2025-01-31.csv"
        assert len(path.read_text(encoding="utf-8").splitlines()) == 3


class TestEntryOperations:
    def test_add_entry_persists(self, ledger, store, sample_date):
        entry = ledger.add_entry(sample_date, "Coffee", Decimal("4.50"), Decimal("53100"), "1h")

        assert entry in ledger.get_day(sample_date).entries
        assert entry.screen_time == "1h"
        loaded = store.load_day(sample_date)
        assert [(e.description, e.cad) for e in loaded.entries] == [("Coffee", Decimal("4.50"))]

    def test_add_entry_keeps_existing_screen_time(self, ledger, sample_day):
        ledger.save_day(sample_day)
        entry = ledger.add_entry(sample_day.date, "Snack", Decimal("2"), Decimal("23600"))
        assert entry.screen_time == "1h00m"

    def test_remove_last_entry_deletes_file(self, ledger, store, sample_date):
        entry = ledger.add_entry(sample_date, "Coffee", Decimal("4.50"), Decimal("53100"))

        removed = ledger.remove_entry(sample_date, entry.id)

        assert removed is entry
        assert not store.file_exists(sample_date)
        ledger.clear_cache()
        assert ledger.get_day(sample_date).entries == []

    def test_remove_unknown_entry(self, ledger, sample_day):
        ledger.save_day(sample_day)
        assert ledger.remove_entry(sample_day.date, "missing") is None

    def test_update_entry(self, ledger, store, sample_day):
        ledger.save_day(sample_day)
        edited = sample_day.entries[0].clone()
        edited.description = "Espresso"

        assert ledger.update_entry(sample_day.date, edited) is True
        assert store.load_day(sample_day.date).entries[0].description == "Espresso"

    def test_set_screen_time(self, ledger, store, sample_day):
        ledger.save_day(sample_day)
        ledger.set_screen_time(sample_day.date, "2h30m")

        assert store.load_day(sample_day.date).screen_time == "2h30m"

    def test_set_and_clear_journal(self, ledger, store, sample_date):
        ledger.set_journal(sample_date, "Dear diary")
        assert store.load_journal(sample_date) == "Dear diary"

        ledger.set_journal(sample_date, "")
        assert not store.journal_exists(sample_date)


def test_end_to_end_day_scenario(store, sample_day):
    """Totals, removal and reload of the two-entry sample day."""
    ledger = LedgerService(store)
    ledger.save_day(sample_day)

    assert sample_day.total_cad() == Decimal("16.50")
    assert sample_day.total_idr() == Decimal("194700")

    coffee = sample_day.entries[0]
    sample_day.remove_entry(coffee.id)
    ledger.save_day(sample_day)
    ledger.clear_cache()

    reloaded = ledger.get_day(sample_day.date)
    assert [e.description for e in reloaded.entries] == ["Lunch"]
    lines = store.csv_path(sample_day.date).read_text(encoding="utf-8").splitlines()
    assert len(lines) == 2
