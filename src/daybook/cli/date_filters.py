"""CLI helpers for date resolution."""

from datetime import date

import click

from daybook.utils.date_parser import get_date_range, parse_date


def parse_date_or_exit(ctx, value: str | None, label: str = "date") -> date:
    """Parse a CLI date argument, defaulting to today."""
    if not value:
        return date.today()
    try:
        return parse_date(value)
    except ValueError as e:
        click.echo(f"Error: Invalid {label}: {e}", err=True)
        ctx.exit(1)


def resolve_cli_date_range(
    ctx,
    *,
    start_date: str | None,
    end_date: str | None,
    period_flags: dict[str, bool],
    default_period: str = "this-month",
) -> tuple[date, date]:
    """Resolve a date range from period flags or explicit dates.

    A missing start defaults to the start of default_period, a missing end
    to today.
    """
    selected = [period for period, is_set in period_flags.items() if is_set]

    if len(selected) > 1:
        click.echo(
            "Error: Only one period option (--this-week, --this-month, --this-year, "
            "--last-week, --last-month, --last-year) can be specified at a time.",
            err=True,
        )
        ctx.exit(1)

    if selected and (start_date or end_date):
        click.echo(
            "Error: Period options cannot be combined with --start-date or --end-date.",
            err=True,
        )
        ctx.exit(1)

    if selected:
        return get_date_range(selected[0])

    default_start, _ = get_date_range(default_period)
    start = parse_date_or_exit(ctx, start_date, "start date") if start_date else default_start
    end = parse_date_or_exit(ctx, end_date, "end date")

    if start > end:
        click.echo("Error: Start date must not be after end date.", err=True)
        ctx.exit(1)

    return start, end
