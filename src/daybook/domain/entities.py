"""Domain model entities for daybook.

An Entry is one dated transaction carrying both a CAD and an IDR amount. A Day
groups the entries recorded for a calendar date together with the day's
screen time and journal text. A DateRange is an ordered collection of Days.

Days are mutable and are shared by reference: the ledger service hands the
same Day instance to every caller asking for that date, so an edit made
through one holder is visible to all others.
"""

import bisect
import uuid
from dataclasses import dataclass, field, replace
from datetime import date
from decimal import Decimal

from daybook.utils.formatting import (
    format_cad,
    format_date_display,
    format_date_human,
    format_date_iso,
    format_date_short,
    format_date_short_numeric,
    format_idr,
    format_plain_cad,
    format_plain_idr,
)


def new_entry_id() -> str:
    """Return a fresh opaque entry identifier."""
    return uuid.uuid4().hex


@dataclass
class Entry:
    """A single ledger transaction."""

    date: date
    description: str
    cad: Decimal
    idr: Decimal
    screen_time: str = ""
    id: str = field(default_factory=new_entry_id)

    def clone(self) -> "Entry":
        """Return an independent copy with the same id."""
        return replace(self)

    def format_cad(self) -> str:
        return format_cad(self.cad)

    def format_idr(self) -> str:
        return format_idr(self.idr)

    def date_string(self) -> str:
        return format_date_iso(self.date)

    def date_display(self) -> str:
        return format_date_display(self.date)

    def format_date_display(self) -> str:
        return format_date_human(self.date)


def _date_search_forms(day: date) -> list[str]:
    return [
        format_date_display(day),
        format_date_short_numeric(day),
        format_date_human(day).lower(),
        format_date_short(day).lower(),
    ]


def entry_matches_query(entry: Entry, query: str) -> bool:
    """Check whether an entry matches a search query.

    The query is matched case-insensitively against the description, the
    entry date in several display formats, the CAD amount (two decimals) and
    the IDR amount (whole number). An empty query matches everything.
    """
    if not query:
        return True

    query = query.lower()
    if query in entry.description.lower():
        return True
    if any(query in form for form in _date_search_forms(entry.date)):
        return True
    if query in format_plain_cad(entry.cad):
        return True
    return query in format_plain_idr(entry.idr)


def filter_entries(entries: list[Entry], query: str) -> list[Entry]:
    """Return the entries matching query, preserving order."""
    if not query:
        return list(entries)
    return [entry for entry in entries if entry_matches_query(entry, query)]


@dataclass
class Day:
    """All entries, screen time and journal text for one calendar date."""

    date: date
    entries: list[Entry] = field(default_factory=list)
    screen_time: str = ""
    journal: str = ""

    def has_journal(self) -> bool:
        return self.journal != ""

    def is_empty(self) -> bool:
        """A day with no entries and no journal is never persisted."""
        return not self.entries and not self.journal

    def add_entry(self, entry: Entry) -> None:
        """Append an entry; it takes on the day's screen time."""
        entry.screen_time = self.screen_time
        self.entries.append(entry)

    def remove_entry(self, entry_id: str) -> Entry | None:
        """Remove an entry by id. Removing an unknown id does nothing."""
        for index, entry in enumerate(self.entries):
            if entry.id == entry_id:
                return self.entries.pop(index)
        return None

    def get_entry(self, entry_id: str) -> Entry | None:
        for entry in self.entries:
            if entry.id == entry_id:
                return entry
        return None

    def update_entry(self, entry: Entry) -> bool:
        """Replace the entry sharing entry.id. Returns False if absent."""
        for index, existing in enumerate(self.entries):
            if existing.id == entry.id:
                self.entries[index] = entry
                return True
        return False

    def set_screen_time(self, screen_time: str) -> None:
        """Set the day's screen time and copy it onto every entry."""
        self.screen_time = screen_time
        for entry in self.entries:
            entry.screen_time = screen_time

    def total_cad(self) -> Decimal:
        return sum((entry.cad for entry in self.entries), Decimal("0"))

    def total_idr(self) -> Decimal:
        return sum((entry.idr for entry in self.entries), Decimal("0"))

    def filter(self, query: str) -> list[Entry]:
        return filter_entries(self.entries, query)

    def filtered_total_cad(self, query: str) -> Decimal:
        return sum((entry.cad for entry in self.filter(query)), Decimal("0"))

    def filtered_total_idr(self, query: str) -> Decimal:
        return sum((entry.idr for entry in self.filter(query)), Decimal("0"))

    def date_string(self) -> str:
        return format_date_iso(self.date)

    def date_display(self) -> str:
        return format_date_display(self.date)

    def format_date_display(self) -> str:
        return format_date_human(self.date)


def day_matches_query(day: Day, query: str) -> bool:
    """Check whether a whole day matches: its date, screen time or any entry."""
    if not query:
        return True

    query = query.lower()
    if any(query in form for form in _date_search_forms(day.date)[:3]):
        return True
    if query in day.screen_time.lower():
        return True
    return any(entry_matches_query(entry, query) for entry in day.entries)


@dataclass
class DateRange:
    """Days between start and end (inclusive), kept sorted by date."""

    start: date
    end: date
    days: list[Day] = field(default_factory=list)

    def add_day(self, day: Day) -> None:
        bisect.insort(self.days, day, key=lambda d: d.date)

    def total_cad(self) -> Decimal:
        return sum((day.total_cad() for day in self.days), Decimal("0"))

    def total_idr(self) -> Decimal:
        return sum((day.total_idr() for day in self.days), Decimal("0"))

    def all_entries(self, query: str = "") -> list[Entry]:
        """Entries of every day in date order, optionally filtered."""
        entries = []
        for day in self.days:
            entries.extend(day.filter(query))
        return entries

    def filtered_total_cad(self, query: str) -> Decimal:
        return sum((day.filtered_total_cad(query) for day in self.days), Decimal("0"))

    def filtered_total_idr(self, query: str) -> Decimal:
        return sum((day.filtered_total_idr(query) for day in self.days), Decimal("0"))

    def format_range_display(self) -> str:
        return f"{format_date_display(self.start)} - {format_date_display(self.end)}"
