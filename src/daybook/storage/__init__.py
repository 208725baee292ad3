"""Persistence layer for daybook."""

from daybook.storage.base import DayStore
from daybook.storage.csv_store import CSVDayStore
from daybook.storage.factories import create_csv_store, resolve_data_dir

__all__ = ["DayStore", "CSVDayStore", "create_csv_store", "resolve_data_dir"]
