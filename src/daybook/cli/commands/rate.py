"""Exchange rate command."""

import click

from daybook.cli.context import get_converter
from daybook.domain.errors import DomainError
from daybook.utils.amount_parser import parse_amount
from daybook.utils.formatting import format_cad, format_idr


@click.command("rate")
@click.option("--refresh", is_flag=True, help="Fetch the latest CAD to IDR rate")
@click.option("--cad", help="Convert this CAD amount to IDR")
@click.option("--idr", help="Convert this IDR amount to CAD")
@click.pass_context
def show_rate(ctx, refresh: bool, cad: str | None, idr: str | None):
    """Show the cached exchange rate, optionally refreshing or converting."""
    converter = get_converter(ctx)

    if refresh and not converter.refresh_rate():
        click.echo(f"Warning: {converter.last_error()}", err=True)

    click.echo(converter.status_message())
    click.echo(f"Last updated: {converter.last_updated_string()}")

    try:
        if cad is not None:
            amount = parse_amount(cad)
            click.echo(f"{format_cad(amount)} = {format_idr(converter.cad_to_idr(amount))}")
        if idr is not None:
            amount = parse_amount(idr)
            click.echo(f"{format_idr(amount)} = {format_cad(converter.idr_to_cad(amount))}")
    except DomainError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)


def register_commands(cli):
    """Register rate command with main CLI."""
    cli.add_command(show_rate)
