"""Tab management commands."""

import click
from spendtab.cli.error_handling import handle_domain_error, report_store_failures
from spendtab.domain.entities import format_amount
from spendtab.domain.errors import DomainError


@click.group()
def tab_group():
    """Manage tabs."""
    pass


@tab_group.command("create")
@click.argument("name", metavar="TAB_NAME")
@click.option("--reasons", is_flag=True, help="Record a reason with every expense")
@click.option("--track-changes", is_flag=True, help="Keep a log of every change to the total")
@click.pass_context
def create_tab(ctx, name: str, reasons: bool, track_changes: bool):
    """Create a new, empty tab.

    Examples:
        spendtab tab create "Groceries"
        spendtab tab create "Alice" --reasons
        spendtab tab create "Trip" --reasons --track-changes
    """
    service = ctx.obj["service"]

    try:
        _, result = service.create_tab(name, track_reasons=reasons, track_changes=track_changes)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created tab '{name}'")
    report_store_failures(result.failures)


@tab_group.command("list")
@click.pass_context
def list_tabs(ctx):
    """List all tabs with their totals."""
    service = ctx.obj["service"]

    tabs = service.list_tabs()
    if not tabs:
        click.echo("No tabs found.")
        return

    click.echo("\nTabs:")
    click.echo("-" * 40)
    for ledger in tabs:
        click.echo(f"{ledger.name:25s} ${ledger.formatted_total():>12}")


@tab_group.command("show")
@click.argument("name", metavar="TAB_NAME")
@click.pass_context
def show_tab(ctx, name: str):
    """Show a tab's expenses and total.

    Expenses are numbered from 0; use these numbers with 'edit' and 'remove'.
    """
    service = ctx.obj["service"]

    try:
        ledger = service.get_tab(name)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"\n{ledger.name}")
    click.echo(f"Total Amount: ${ledger.formatted_total()}")
    click.echo("-" * 40)
    if not ledger.expenses:
        click.echo("No expenses.")
    for index, amount in enumerate(ledger.expenses):
        line = f"[{index}] ${format_amount(amount):>12}"
        if ledger.reasons is not None and ledger.reasons[index]:
            line += f"  {ledger.reasons[index]}"
        click.echo(line)

    if ledger.total_changes:
        click.echo("\nChanges to total:")
        click.echo(", ".join(f"{delta:+.2f}" for delta in ledger.total_changes))


@tab_group.command("delete")
@click.argument("name", metavar="TAB_NAME")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_tab(ctx, name: str, yes: bool) -> None:
    """Delete a tab and its stored expenses.

    Examples:
        spendtab tab delete "Trip"
        spendtab tab delete "Trip" --yes
    """
    service = ctx.obj["service"]

    try:
        ledger = service.get_tab(name)
    except DomainError as e:
        handle_domain_error(ctx, e)

    # Confirm deletion
    if not yes and not click.confirm(
        f"Are you sure you want to delete tab '{ledger.name}' (total ${ledger.formatted_total()})?"
    ):
        click.echo("Deletion cancelled.")
        return

    result = service.delete_tab(name)
    click.echo(f"Deleted tab '{name}'")
    report_store_failures(result.failures)


def register_commands(cli):
    """Register tab commands with main CLI."""
    cli.add_command(tab_group, name="tab")
