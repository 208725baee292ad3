"""Date range commands."""

import click

from daybook.cli.context import get_ledger
from daybook.cli.date_filters import resolve_cli_date_range
from daybook.cli.error_handling import domain_errors
from daybook.utils.formatting import format_cad, format_idr


@click.command("range")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative)")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative), default today")
@click.option("--this-week", is_flag=True, help="Monday of this week through today")
@click.option("--this-month", is_flag=True, help="First of this month through today")
@click.option("--this-year", is_flag=True, help="January 1 through today")
@click.option("--last-week", is_flag=True, help="Previous Monday through Sunday")
@click.option("--last-month", is_flag=True, help="The whole previous month")
@click.option("--last-year", is_flag=True, help="The whole previous year")
@click.option("--search", "-s", default="", help="Only include entries matching this text")
@click.option("--export", "export_file", is_flag=False, flag_value="", default=None,
              help="Write the range to one CSV in the data directory (optional file name)")
@click.pass_context
def view_range(
    ctx,
    start_date: str | None,
    end_date: str | None,
    this_week: bool,
    this_month: bool,
    this_year: bool,
    last_week: bool,
    last_month: bool,
    last_year: bool,
    search: str,
    export_file: str | None,
):
    """List entries across a date range with totals (default this month)."""
    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags={
            "this-week": this_week,
            "this-month": this_month,
            "this-year": this_year,
            "last-week": last_week,
            "last-month": last_month,
            "last-year": last_year,
        },
    )

    ledger = get_ledger(ctx)
    with domain_errors(ctx):
        date_range = ledger.get_date_range(start, end)

    entries = date_range.all_entries(search)
    click.echo(f"\n{date_range.format_range_display()}")
    if not entries:
        click.echo("No entries found.")
    else:
        click.echo(f"Found {len(entries)} entr{'y' if len(entries) == 1 else 'ies'}:")
        click.echo("-" * 84)
        click.echo(f"{'Date':<12} {'Description':<36} {'CAD':>12} {'IDR':>16}")
        click.echo("-" * 84)
        for entry in entries:
            click.echo(
                f"{entry.date_display():<12} {entry.description[:36]:<36} "
                f"{entry.format_cad():>12} {entry.format_idr():>16}"
            )
        click.echo("-" * 84)
        click.echo(
            f"{'Total':<49} {format_cad(date_range.filtered_total_cad(search)):>12} "
            f"{format_idr(date_range.filtered_total_idr(search)):>16}"
        )

    if export_file is not None:
        with domain_errors(ctx):
            path = ledger.export_date_range(date_range, export_file or None)
        click.echo(f"Exported to {path}")


@click.command("dates")
@click.pass_context
def list_dates(ctx):
    """List every date that has entries or a journal."""
    with domain_errors(ctx):
        dates = get_ledger(ctx).list_available_dates()

    if not dates:
        click.echo("No data yet.")
        return
    for found in dates:
        click.echo(found.isoformat())


def register_commands(cli):
    """Register range commands with main CLI."""
    cli.add_command(view_range)
    cli.add_command(list_dates)
