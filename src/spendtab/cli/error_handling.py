"""CLI error handling helpers."""

import click

from spendtab.domain.errors import DomainError
from spendtab.storage.base import StoreFailure


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a domain error and exit with failure."""
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)


def report_store_failures(failures: list[StoreFailure]) -> None:
    """Warn about ledgers that could not be persisted or read.

    The command itself still succeeds; storage is best effort.
    """
    for failure in failures:
        click.echo(f"Warning: {failure}", err=True)
