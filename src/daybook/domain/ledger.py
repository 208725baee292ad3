"""Ledger domain service."""

import logging
from datetime import date, datetime
from decimal import Decimal
from pathlib import Path
from typing import Optional

from daybook.domain.entities import Day, DateRange, Entry
from daybook.storage.base import DayStore
from daybook.utils.date_parser import as_day
from daybook.utils.formatting import format_date_iso

logger = logging.getLogger(__name__)


class LedgerService:
    """Single point of access for reading and writing days.

    Days are cached per calendar date. get_day() returns the cached Day
    itself, not a copy: every caller asking for the same date shares one
    instance, and mutations made through any of them are seen by all.
    The cache is not thread-safe; drive it from one thread at a time.
    """

    def __init__(self, store: DayStore):
        """Initialize ledger service.

        Args:
            store: Day store used for persistence
        """
        self.store = store
        self._cache: dict[date, Day] = {}

    def get_day(self, day: date | datetime) -> Day:
        """Return the shared Day for a date, loading it on first use.

        Raises:
            StorageError: If stored data exists but cannot be read
        """
        key = as_day(day)
        cached = self._cache.get(key)
        if cached is not None:
            return cached

        loaded = self.store.load_day(key)
        self._cache[key] = loaded
        return loaded

    def get_today(self) -> Day:
        return self.get_day(date.today())

    def save_day(self, day: Day) -> None:
        """Cache the day, then persist it.

        An empty day is cached but writes nothing.

        Raises:
            StorageError: If writing fails
        """
        self._cache[as_day(day.date)] = day
        if day.is_empty():
            return
        self.store.save_day(day)

    def sync_day(self, day: Day) -> None:
        """Save the day and delete stored files for the parts that are now empty.

        Used after removals, so a day whose last entry or journal was removed
        does not come back from disk on the next run.
        """
        self.save_day(day)
        if not day.entries:
            logger.debug("No entries left for %s, removing stored data file", day.date)
            self.store.delete_day(day.date)
        if not day.journal:
            self.store.delete_journal(day.date)

    def day_has_data(self, day: date) -> bool:
        return self.store.day_has_data(as_day(day))

    def get_date_range(self, start: date, end: date) -> DateRange:
        """Load a date range straight from the store, bypassing the cache."""
        return self.store.load_date_range(as_day(start), as_day(end))

    def list_available_dates(self) -> list[date]:
        return self.store.list_available_dates()

    def export_date_range(self, date_range: DateRange, filename: Optional[str] = None) -> Path:
        """Export a range to one CSV under the data directory.

        Args:
            date_range: Range to export
            filename: Target file name; defaults to <start>_to_<end>.csv

        Returns:
            Path of the written file
        """
        if filename is None:
            filename = (
                f"{format_date_iso(date_range.start)}_to_{format_date_iso(date_range.end)}.csv"
            )
        return self.store.export_date_range(date_range, filename)

    def invalidate_cache(self, day: date) -> None:
        self._cache.pop(as_day(day), None)

    def clear_cache(self) -> None:
        self._cache.clear()

    # Entry-level operations

    def add_entry(
        self,
        day: date,
        description: str,
        cad: Decimal,
        idr: Decimal,
        screen_time: Optional[str] = None,
    ) -> Entry:
        """Create an entry on a date and persist the day.

        Args:
            day: Date of the entry
            description: Free text description
            cad: CAD amount
            idr: IDR amount
            screen_time: Screen time for the whole day; None keeps the current one

        Returns:
            The new entry (already part of the cached day)
        """
        target = self.get_day(day)
        if screen_time is not None:
            target.set_screen_time(screen_time)
        entry = Entry(
            date=target.date,
            description=description,
            cad=cad,
            idr=idr,
            screen_time=target.screen_time,
        )
        target.add_entry(entry)
        self.save_day(target)
        return entry

    def remove_entry(self, day: date, entry_id: str) -> Optional[Entry]:
        """Remove an entry by id and persist. Returns the removed entry or None."""
        target = self.get_day(day)
        removed = target.remove_entry(entry_id)
        if removed is None:
            return None
        self.sync_day(target)
        return removed

    def update_entry(self, day: date, entry: Entry) -> bool:
        """Replace the entry with the same id and persist. False if absent."""
        target = self.get_day(day)
        if not target.update_entry(entry):
            return False
        self.save_day(target)
        return True

    def set_screen_time(self, day: date, screen_time: str) -> None:
        target = self.get_day(day)
        target.set_screen_time(screen_time)
        self.save_day(target)

    def set_journal(self, day: date, journal: str) -> None:
        """Replace a day's journal; an empty journal removes the stored file."""
        target = self.get_day(day)
        target.journal = journal
        self.sync_day(target)
