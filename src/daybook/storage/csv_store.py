"""CSV and markdown journal day store.

Layout under the data directory::

    <YYYY>/<MM>/<DD>/data.csv   date,description,cad,idr,screen_time
    <YYYY>/<MM>/<DD>/entry.md   raw journal text
"""

import csv
import logging
import re
import threading
from datetime import date
from decimal import Decimal, InvalidOperation
from pathlib import Path

from daybook.domain.entities import Day, DateRange, Entry
from daybook.domain.errors import StorageError, storage_failure
from daybook.storage.base import DayStore
from daybook.utils.date_parser import iter_days
from daybook.utils.formatting import (
    format_date_iso,
    format_plain_cad,
    format_plain_idr,
    is_storable_amount,
)

logger = logging.getLogger(__name__)

CSV_HEADER = ["date", "description", "cad", "idr", "screen_time"]
CSV_FILE_NAME = "data.csv"
JOURNAL_FILE_NAME = "entry.md"
DATE_FORMAT = "%Y-%m-%d"


def _parse_decimal(text: str) -> Decimal:
    """Parse a stored amount; anything unreadable counts as zero."""
    try:
        value = Decimal(text.strip())
    except InvalidOperation:
        return Decimal("0")
    if not is_storable_amount(value):
        return Decimal("0")
    return value


def _parse_row(row: list[str]) -> Entry | None:
    """Build an entry from a CSV row, or None if the row must be skipped."""
    if len(row) < len(CSV_HEADER):
        return None
    try:
        entry_date = date.fromisoformat(row[0].strip())
    except ValueError:
        return None
    return Entry(
        date=entry_date,
        description=row[1],
        cad=_parse_decimal(row[2]),
        idr=_parse_decimal(row[3]),
        screen_time=row[4],
    )


def _entry_row(entry: Entry, screen_time: str) -> list[str]:
    return [
        format_date_iso(entry.date),
        entry.description,
        format_plain_cad(entry.cad),
        format_plain_idr(entry.idr),
        screen_time,
    ]


class CSVDayStore(DayStore):
    """Day store writing one CSV file and one journal file per day.

    Saves are full-file rewrites serialized by a lock, so two saves never
    interleave their writes.
    """

    def __init__(self, data_dir: str | Path):
        """Initialize the store.

        Args:
            data_dir: Base directory; created lazily on first write
        """
        self._data_dir = Path(data_dir)
        self._write_lock = threading.Lock()

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    def day_dir(self, day: date) -> Path:
        """Directory for a date: <data_dir>/YYYY/MM/DD."""
        return self._data_dir / f"{day.year:04d}" / f"{day.month:02d}" / f"{day.day:02d}"

    def csv_path(self, day: date) -> Path:
        return self.day_dir(day) / CSV_FILE_NAME

    def journal_path(self, day: date) -> Path:
        return self.day_dir(day) / JOURNAL_FILE_NAME

    def file_exists(self, day: date) -> bool:
        return self.csv_path(day).is_file()

    def journal_exists(self, day: date) -> bool:
        return self.journal_path(day).is_file()

    # Reading

    def _read_rows(self, path: Path) -> list[list[str]]:
        try:
            with open(path, "r", encoding="utf-8", newline="") as f:
                return list(csv.reader(f))
        except FileNotFoundError:
            return []
        except (OSError, UnicodeDecodeError, csv.Error) as e:
            raise StorageError(storage_failure("read", path, e)) from e

    def load_journal(self, day: date) -> str:
        """Return the journal text for a date, or "" if there is none."""
        path = self.journal_path(day)
        try:
            with open(path, "r", encoding="utf-8", newline="") as f:
                return f.read()
        except FileNotFoundError:
            return ""
        except (OSError, UnicodeDecodeError) as e:
            raise StorageError(storage_failure("read", path, e)) from e

    def load_day(self, day: date) -> Day:
        result = Day(date=day)
        path = self.csv_path(day)

        # First row is the header
        for row_num, row in enumerate(self._read_rows(path)[1:], start=2):
            entry = _parse_row(row)
            if entry is None:
                if row:
                    logger.warning("Skipping malformed row %d in %s", row_num, path)
                continue
            result.add_entry(entry)
            # All rows carry the same screen time; the first non-empty one wins
            if not result.screen_time and row[4]:
                result.set_screen_time(row[4])

        result.journal = self.load_journal(day)
        return result

    def load_date_range(self, start: date, end: date) -> DateRange:
        date_range = DateRange(start=start, end=end)
        for current in iter_days(start, end):
            if not self.file_exists(current):
                continue
            day = self.load_day(current)
            if not day.is_empty():
                date_range.add_day(day)
        return date_range

    def list_available_dates(self) -> list[date]:
        try:
            years = sorted(self._data_dir.iterdir())
        except FileNotFoundError:
            return []
        except OSError as e:
            raise StorageError(storage_failure("list", self._data_dir, e)) from e

        dates = []
        for year_dir in years:
            if not year_dir.is_dir() or not re.fullmatch(r"\d{4}", year_dir.name):
                continue
            for month_dir in _sorted_subdirs(year_dir, r"\d{2}"):
                for day_dir in _sorted_subdirs(month_dir, r"\d{2}"):
                    try:
                        found = date(int(year_dir.name), int(month_dir.name), int(day_dir.name))
                    except ValueError:
                        continue
                    if self.day_has_data(found):
                        dates.append(found)
        return dates

    # Writing

    def _write_csv(self, path: Path, rows: list[list[str]]) -> None:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "w", encoding="utf-8", newline="") as f:
                writer = csv.writer(f, lineterminator="\n")
                writer.writerow(CSV_HEADER)
                writer.writerows(rows)
        except OSError as e:
            raise StorageError(storage_failure("write", path, e)) from e

    def save_journal(self, day: date, content: str) -> None:
        path = self.journal_path(day)
        with self._write_lock:
            try:
                path.parent.mkdir(parents=True, exist_ok=True)
                with open(path, "w", encoding="utf-8", newline="") as f:
                    f.write(content)
            except OSError as e:
                raise StorageError(storage_failure("write", path, e)) from e

    def save_day(self, day: Day) -> None:
        if day.entries:
            rows = [_entry_row(entry, day.screen_time) for entry in day.entries]
            with self._write_lock:
                self._write_csv(self.csv_path(day.date), rows)
            logger.debug("Saved %d entries for %s", len(rows), day.date)

        if day.journal:
            self.save_journal(day.date, day.journal)

    def _unlink(self, path: Path) -> None:
        with self._write_lock:
            try:
                path.unlink(missing_ok=True)
            except OSError as e:
                raise StorageError(storage_failure("delete", path, e)) from e

    def delete_day(self, day: date) -> None:
        self._unlink(self.csv_path(day))

    def delete_journal(self, day: date) -> None:
        self._unlink(self.journal_path(day))

    def export_date_range(self, date_range: DateRange, filename: str) -> Path:
        path = self._data_dir / filename
        rows = [
            _entry_row(entry, day.screen_time)
            for day in date_range.days
            for entry in day.entries
        ]
        with self._write_lock:
            self._write_csv(path, rows)
        logger.info("Exported %d entries to %s", len(rows), path)
        return path


def _sorted_subdirs(parent: Path, name_pattern: str) -> list[Path]:
    """Subdirectories whose names match the pattern; unreadable parents yield none."""
    try:
        children = sorted(parent.iterdir())
    except OSError:
        return []
    return [
        child
        for child in children
        if child.is_dir() and re.fullmatch(name_pattern, child.name)
    ]
