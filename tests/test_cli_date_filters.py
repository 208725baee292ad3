"""Tests for CLI date filter helpers."""

from datetime import date

import click
import pytest

from daybook.cli.date_filters import parse_date_or_exit, resolve_cli_date_range
from daybook.utils.date_parser import get_date_range


def _ctx() -> click.Context:
    return click.Context(click.Command("test"))


def test_parse_date_or_exit_defaults_to_today():
    assert parse_date_or_exit(_ctx(), None) == date.today()


def test_parse_date_or_exit_invalid(capsys):
    with pytest.raises(click.exceptions.Exit) as excinfo:
        parse_date_or_exit(_ctx(), "someday soon")

    assert excinfo.value.exit_code == 1
    assert "Invalid date" in capsys.readouterr().err


def test_resolve_cli_date_range_rejects_multiple_periods(capsys):
    with pytest.raises(click.exceptions.Exit) as excinfo:
        resolve_cli_date_range(
            _ctx(),
            start_date=None,
            end_date=None,
            period_flags={"this-month": True, "last-month": True},
        )

    assert excinfo.value.exit_code == 1
    assert "Only one period option" in capsys.readouterr().err


def test_resolve_cli_date_range_rejects_period_with_start_end(capsys):
    with pytest.raises(click.exceptions.Exit) as excinfo:
        resolve_cli_date_range(
            _ctx(),
            start_date="2024-01-01",
            end_date=None,
            period_flags={"this-month": True},
        )

    assert excinfo.value.exit_code == 1
    assert "cannot be combined" in capsys.readouterr().err


def test_resolve_cli_date_range_returns_period_range():
    start, end = resolve_cli_date_range(
        _ctx(),
        start_date=None,
        end_date=None,
        period_flags={"last-month": True},
    )

    assert (start, end) == get_date_range("last-month")


def test_resolve_cli_date_range_parses_explicit_dates():
    start, end = resolve_cli_date_range(
        _ctx(),
        start_date="2024-01-02",
        end_date="01/05/2024",
        period_flags={},
    )

    assert (start, end) == (date(2024, 1, 2), date(2024, 1, 5))


def test_resolve_cli_date_range_defaults_to_this_month():
    start, end = resolve_cli_date_range(
        _ctx(),
        start_date=None,
        end_date=None,
        period_flags={},
    )

    assert (start, end) == get_date_range("this-month")


def test_resolve_cli_date_range_rejects_reversed_range(capsys):
    with pytest.raises(click.exceptions.Exit):
        resolve_cli_date_range(
            _ctx(),
            start_date="2024-02-01",
            end_date="2024-01-01",
            period_flags={},
        )

    assert "must not be after" in capsys.readouterr().err
