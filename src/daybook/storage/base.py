"""Abstract day store interface."""

from abc import ABC, abstractmethod
from datetime import date
from pathlib import Path

# Import entities directly to avoid circular import through domain/__init__.py
from daybook.domain.entities import Day, DateRange


class DayStore(ABC):
    """Persistence boundary for days, journals and date ranges.

    Absent files mean "no data yet" and never raise. Any other I/O failure
    raises StorageError.
    """

    @property
    @abstractmethod
    def data_dir(self) -> Path:
        """Base directory holding all persisted data."""
        pass

    @abstractmethod
    def load_day(self, day: date) -> Day:
        """Load a day; returns an empty Day when nothing is stored."""
        pass

    @abstractmethod
    def save_day(self, day: Day) -> None:
        """Persist a day's entries (if any) and journal (if non-empty)."""
        pass

    @abstractmethod
    def delete_day(self, day: date) -> None:
        """Remove the stored entries for a date. Idempotent."""
        pass

    @abstractmethod
    def delete_journal(self, day: date) -> None:
        """Remove the stored journal for a date. Idempotent."""
        pass

    @abstractmethod
    def file_exists(self, day: date) -> bool:
        """Whether entries are stored for a date."""
        pass

    @abstractmethod
    def journal_exists(self, day: date) -> bool:
        """Whether a journal is stored for a date."""
        pass

    def day_has_data(self, day: date) -> bool:
        """Whether a date has stored entries or a stored journal."""
        return self.file_exists(day) or self.journal_exists(day)

    @abstractmethod
    def load_date_range(self, start: date, end: date) -> DateRange:
        """Load every non-empty stored day in [start, end]."""
        pass

    @abstractmethod
    def export_date_range(self, date_range: DateRange, filename: str) -> Path:
        """Write all entries of a range into one file. Returns its path."""
        pass

    @abstractmethod
    def list_available_dates(self) -> list[date]:
        """All dates with stored entries or journal, ascending."""
        pass
