"""Shared pytest fixtures for daybook tests."""

import json
from datetime import date
from decimal import Decimal

import httpx
import pytest

from daybook.domain.entities import Day, Entry
from daybook.domain.ledger import LedgerService
from daybook.domain.undo import UndoManager
from daybook.rates.client import RateClient
from daybook.storage.factories import create_csv_store


@pytest.fixture
def data_dir(tmp_path):
    """Return an empty data directory for one test."""
    path = tmp_path / "ledger-data"
    path.mkdir()
    return path


@pytest.fixture
def store(data_dir):
    """Create a CSV day store rooted at the temporary data directory."""
    return create_csv_store(data_dir)


@pytest.fixture
def ledger(store):
    """Create a LedgerService over the temporary store."""
    return LedgerService(store)


@pytest.fixture
def undo_manager(ledger):
    """Create an UndoManager bound to the ledger service."""
    return UndoManager(ledger)


@pytest.fixture
def sample_date():
    return date(2025, 1, 15)


@pytest.fixture
def sample_day(sample_date):
    """A day with two entries sharing the day's screen time."""
    day = Day(date=sample_date, screen_time="1h00m")
    day.add_entry(Entry(sample_date, "Coffee", Decimal("4.50"), Decimal("53100")))
    day.add_entry(Entry(sample_date, "Lunch", Decimal("12.00"), Decimal("141600")))
    return day


@pytest.fixture
def write_rate_cache(data_dir):
    """Write a .rate_cache.json into the data directory."""

    def _write(content):
        path = data_dir / ".rate_cache.json"
        if isinstance(content, str):
            path.write_text(content, encoding="utf-8")
        else:
            path.write_text(json.dumps(content), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def rate_client_factory():
    """Build a RateClient whose HTTP traffic is answered by a handler."""

    def _factory(handler):
        return RateClient(base_url="https://rates.test", transport=httpx.MockTransport(handler))

    return _factory


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
