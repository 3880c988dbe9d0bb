"""Main CLI entry point."""

import logging

import click
from spendtab.cli.error_handling import report_store_failures
from spendtab.domain.tabs import TabService
from spendtab.storage.base import StorageLayout
from spendtab.storage.factories import create_json_store

# Import and register all commands at module level
from spendtab.cli.commands import expense, tab


@click.group()
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False),
    help="Directory holding tab files (overrides SPENDTAB_DATA_DIR environment variable)",
    envvar="SPENDTAB_DATA_DIR",
)
@click.option(
    "--layout",
    type=click.Choice([layout.value for layout in StorageLayout]),
    help="Store one file per tab or all tabs in tabs.json",
    envvar="SPENDTAB_STORAGE_LAYOUT",
)
@click.option("--verbose", "-v", is_flag=True, help="Log storage activity")
@click.pass_context
def cli(ctx, data_dir: str | None, layout: str | None, verbose: bool):
    """Spendtab - Running totals for your spending tabs.

    Keep a tab per category or person, add and subtract expenses, and see
    each tab's total at a glance. Tabs are stored as JSON files.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.ERROR,
        format="%(levelname)s %(name)s: %(message)s",
    )

    # Load tabs only when actually running a command (not when showing help)
    if ctx.invoked_subcommand is not None:
        store = create_json_store(storage_dir=data_dir, layout=layout)
        service = TabService(store)
        result = service.load()
        report_store_failures(result.failures)
        ctx.obj["service"] = service


# Register all commands
tab.register_commands(cli)
expense.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
