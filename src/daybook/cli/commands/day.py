"""Single-day commands: show, add, delete, screen time and journal."""

import click

from daybook.cli.context import get_converter, get_ledger
from daybook.cli.date_filters import parse_date_or_exit
from daybook.cli.error_handling import domain_errors
from daybook.domain.entities import Day
from daybook.domain.errors import DomainError, NotFoundError, row_not_found
from daybook.utils.amount_parser import parse_amount
from daybook.utils.formatting import format_cad, format_idr

DATE_HELP = "Date (YYYY-MM-DD, MM/DD/YYYY or relative like 'today', 'yesterday')"


def render_day(day: Day, query: str = "") -> None:
    """Print a day's entries with 1-based row numbers and totals."""
    click.echo(f"\n{day.format_date_display()}")
    if day.screen_time:
        click.echo(f"Screen time: {day.screen_time}")

    entries = day.filter(query)
    if not entries:
        click.echo("No entries found.")
    else:
        click.echo("-" * 72)
        click.echo(f"{'#':<4} {'Description':<36} {'CAD':>12} {'IDR':>16}")
        click.echo("-" * 72)
        for entry in entries:
            row = day.entries.index(entry) + 1
            click.echo(
                f"{row:<4} {entry.description[:36]:<36} "
                f"{entry.format_cad():>12} {entry.format_idr():>16}"
            )
        click.echo("-" * 72)
        click.echo(
            f"{'Total':<41} {format_cad(day.filtered_total_cad(query)):>12} "
            f"{format_idr(day.filtered_total_idr(query)):>16}"
        )

    if day.has_journal():
        click.echo("\nJournal:")
        click.echo(day.journal)


@click.command("show")
@click.argument("day_date", required=False)
@click.option("--search", "-s", default="", help="Only show entries matching this text")
@click.pass_context
def show_day(ctx, day_date: str | None, search: str):
    """Show entries, screen time and journal for a day (default today)."""
    target = parse_date_or_exit(ctx, day_date)
    with domain_errors(ctx):
        day = get_ledger(ctx).get_day(target)
    render_day(day, search)


@click.command("add")
@click.argument("description")
@click.option("--date", "day_date", help=DATE_HELP)
@click.option("--cad", help="CAD amount (e.g., 4.50 or -4.50)")
@click.option("--idr", help="IDR amount (e.g., 53100)")
@click.option("--refresh-rate", is_flag=True, help="Fetch the latest rate before converting")
@click.pass_context
def add_entry(
    ctx,
    description: str,
    day_date: str | None,
    cad: str | None,
    idr: str | None,
    refresh_rate: bool,
):
    """Add an entry. A missing amount is converted from the other one.

    Examples:
        daybook add "Coffee" --cad 4.50
        daybook add "Nasi goreng" --idr 35000 --date yesterday
    """
    target = parse_date_or_exit(ctx, day_date)
    if not description.strip():
        click.echo("Error: Description must not be empty", err=True)
        ctx.exit(1)
    if cad is None and idr is None:
        click.echo("Error: Provide --cad, --idr or both", err=True)
        ctx.exit(1)

    try:
        cad_amount = parse_amount(cad) if cad is not None else None
        idr_amount = parse_amount(idr) if idr is not None else None
    except DomainError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    if cad_amount is None or idr_amount is None:
        converter = get_converter(ctx)
        if refresh_rate and not converter.refresh_rate():
            click.echo(f"Warning: {converter.status_message()}", err=True)
        with domain_errors(ctx):
            cad_amount, idr_amount = converter.fill_amounts(cad_amount, idr_amount)

    with domain_errors(ctx):
        entry = get_ledger(ctx).add_entry(target, description.strip(), cad_amount, idr_amount)

    click.echo(f"Added '{entry.description}' on {entry.date_display()}")
    click.echo(f"  CAD: {entry.format_cad()}")
    click.echo(f"  IDR: {entry.format_idr()}")


@click.command("delete")
@click.argument("row", type=int)
@click.option("--date", "day_date", help=DATE_HELP)
@click.pass_context
def delete_entry(ctx, row: int, day_date: str | None):
    """Delete the entry shown at ROW by 'show'."""
    target = parse_date_or_exit(ctx, day_date)
    ledger = get_ledger(ctx)
    with domain_errors(ctx):
        day = ledger.get_day(target)
        if not 1 <= row <= len(day.entries):
            raise NotFoundError(row_not_found(row, target))
        removed = ledger.remove_entry(target, day.entries[row - 1].id)
    click.echo(f"Deleted '{removed.description}'")


@click.command("screen-time")
@click.argument("value")
@click.option("--date", "day_date", help=DATE_HELP)
@click.pass_context
def set_screen_time(ctx, value: str, day_date: str | None):
    """Set the screen time for a day (e.g., 3h45m)."""
    target = parse_date_or_exit(ctx, day_date)
    ledger = get_ledger(ctx)
    with domain_errors(ctx):
        ledger.set_screen_time(target, value.strip())
    if not ledger.get_day(target).entries:
        click.echo("Note: screen time is stored with entries; add an entry to keep it.")
    click.echo(f"Screen time set to '{value.strip()}'")


@click.command("journal")
@click.argument("text", required=False)
@click.option("--date", "day_date", help=DATE_HELP)
@click.option("--clear", is_flag=True, help="Remove the journal for the day")
@click.pass_context
def journal(ctx, text: str | None, day_date: str | None, clear: bool):
    """Show, replace or clear the journal for a day."""
    target = parse_date_or_exit(ctx, day_date)
    ledger = get_ledger(ctx)

    if text is None and not clear:
        with domain_errors(ctx):
            day = ledger.get_day(target)
        click.echo(day.journal if day.has_journal() else "No journal entry.")
        return

    with domain_errors(ctx):
        ledger.set_journal(target, "" if clear else text)
    click.echo("Journal cleared" if clear else "Journal saved")


def register_commands(cli):
    """Register day commands with main CLI."""
    cli.add_command(show_day)
    cli.add_command(add_entry)
    cli.add_command(delete_entry)
    cli.add_command(set_screen_time)
    cli.add_command(journal)
