"""Factory functions for creating day store instances."""

import os
from pathlib import Path
from typing import Optional

from daybook.storage.csv_store import CSVDayStore

DATA_DIR_ENV = "DAYBOOK_DATA_DIR"


def resolve_data_dir(data_dir: Optional[str | Path] = None) -> Path:
    """Resolve the base data directory.

    Args:
        data_dir: Explicit directory. If None, checks the DAYBOOK_DATA_DIR
            environment variable, then defaults to ~/.daybook

    Returns:
        Path of the data directory (not created here)
    """
    if data_dir is None:
        data_dir = os.environ.get(DATA_DIR_ENV)

    if not data_dir:
        return Path.home() / ".daybook"

    return Path(data_dir).expanduser()


def create_csv_store(data_dir: Optional[str | Path] = None) -> CSVDayStore:
    """Create a CSV day store rooted at the resolved data directory."""
    return CSVDayStore(resolve_data_dir(data_dir))
