"""Main CLI entry point."""

import logging

import click

from daybook.domain.ledger import LedgerService
from daybook.storage.factories import DATA_DIR_ENV, create_csv_store

# Import and register all commands at module level
from daybook.cli.commands import day, edit, range_cmd, rate


@click.group()
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False),
    help=f"Directory holding ledger data (overrides {DATA_DIR_ENV} environment variable)",
    envvar=DATA_DIR_ENV,
)
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
@click.pass_context
def cli(ctx, data_dir: str | None, verbose: bool):
    """Daybook - daily CAD/IDR ledger, screen time and journal.

    Each day is stored as <data-dir>/YYYY/MM/DD/data.csv plus entry.md.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s - %(name)s - %(message)s",
    )

    store = create_csv_store(data_dir)
    ctx.obj["store"] = store
    ctx.obj["ledger"] = LedgerService(store)


# Register all commands
day.register_commands(cli)
edit.register_commands(cli)
range_cmd.register_commands(cli)
rate.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
