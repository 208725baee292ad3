"""Access to the services stored on the click context."""

import click

from daybook.domain.currency import CurrencyConverter
from daybook.domain.ledger import LedgerService


def get_ledger(ctx: click.Context) -> LedgerService:
    return ctx.obj["ledger"]


def get_converter(ctx: click.Context) -> CurrencyConverter:
    """Return the converter for this invocation, created on first use.

    The rate cache sits in the data directory next to the day folders. A
    RateClient placed in ctx.obj["rate_client"] replaces the default one.
    """
    if "converter" not in ctx.obj:
        ctx.obj["converter"] = CurrencyConverter(
            ctx.obj["store"].data_dir, client=ctx.obj.get("rate_client")
        )
    return ctx.obj["converter"]
