"""Turn domain failures into CLI error output."""

import logging
from contextlib import contextmanager

import click

from daybook.domain.errors import DomainError, StorageError

logger = logging.getLogger(__name__)


def handle_domain_error(ctx: click.Context, error: DomainError) -> None:
    """Render a domain error and exit with failure."""
    logger.debug("Command failed", exc_info=error)
    click.echo(f"Error: {error}", err=True)
    if isinstance(error, StorageError):
        click.echo("Check that the data directory (--data-dir) is readable and writable.", err=True)
    ctx.exit(1)


@contextmanager
def domain_errors(ctx: click.Context):
    """Report any DomainError raised in the block and exit."""
    try:
        yield
    except DomainError as e:
        handle_domain_error(ctx, e)
