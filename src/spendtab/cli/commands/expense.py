"""Expense commands: add, subtract, edit and remove entries on a tab."""

import click
from spendtab.cli.error_handling import handle_domain_error, report_store_failures
from spendtab.domain.errors import DomainError
from spendtab.utils.amount_parser import parse_amount

# Lets "-2.50" through as an AMOUNT instead of being read as an option
_AMOUNT_SETTINGS = {"ignore_unknown_options": True}


def _parse_amount_or_exit(ctx: click.Context, amount: str):
    try:
        return parse_amount(amount)
    except ValueError as e:
        click.echo(f"Error: Invalid amount: {e}", err=True)
        ctx.exit(1)


def _echo_total(ctx: click.Context, name: str) -> None:
    ledger = ctx.obj["service"].get_tab(name)
    click.echo(f"  Total Amount: ${ledger.formatted_total()}")


@click.command("add", context_settings=_AMOUNT_SETTINGS)
@click.argument("name", metavar="TAB_NAME")
@click.argument("amount", metavar="AMOUNT")
@click.option("--reason", help="What the expense was for (tabs created with --reasons)")
@click.pass_context
def add_expense(ctx, name: str, amount: str, reason: str | None):
    """Add an expense to a tab.

    Examples:
        spendtab add "Groceries" 12.50
        spendtab add "Alice" 8 --reason "Lunch"
    """
    service = ctx.obj["service"]
    value = _parse_amount_or_exit(ctx, amount)

    try:
        result = service.add_expense(name, value, reason)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Added ${value:,.2f} to '{name}'")
    _echo_total(ctx, name)
    report_store_failures(result.failures)


@click.command("subtract", context_settings=_AMOUNT_SETTINGS)
@click.argument("name", metavar="TAB_NAME")
@click.argument("amount", metavar="AMOUNT")
@click.option("--reason", help="What the refund or payment was for")
@click.pass_context
def subtract_expense(ctx, name: str, amount: str, reason: str | None):
    """Subtract an amount from a tab.

    The amount is recorded as a negative expense.

    Examples:
        spendtab subtract "Groceries" 2.00
        spendtab subtract "Alice" 20 --reason "Paid back"
    """
    service = ctx.obj["service"]
    value = _parse_amount_or_exit(ctx, amount)

    try:
        result = service.subtract_expense(name, value, reason)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Subtracted ${value:,.2f} from '{name}'")
    _echo_total(ctx, name)
    report_store_failures(result.failures)


@click.command("edit", context_settings=_AMOUNT_SETTINGS)
@click.argument("name", metavar="TAB_NAME")
@click.argument("index", type=int)
@click.argument("amount", metavar="AMOUNT")
@click.option("--reason", help="Replace the expense's reason")
@click.pass_context
def edit_expense(ctx, name: str, index: int, amount: str, reason: str | None):
    """Change the expense at INDEX (as shown by 'tab show').

    Examples:
        spendtab edit "Groceries" 0 15.00
    """
    service = ctx.obj["service"]
    value = _parse_amount_or_exit(ctx, amount)

    try:
        result = service.update_expense(name, index, value, reason)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Updated expense {index} of '{name}' to ${value:,.2f}")
    _echo_total(ctx, name)
    report_store_failures(result.failures)


@click.command("remove")
@click.argument("name", metavar="TAB_NAME")
@click.argument("indices", metavar="INDEX...", type=int, nargs=-1, required=True)
@click.pass_context
def remove_expenses(ctx, name: str, indices: tuple[int, ...]):
    """Remove one or more expenses by INDEX (as shown by 'tab show').

    Examples:
        spendtab remove "Groceries" 1
        spendtab remove "Groceries" 0 2 3
    """
    service = ctx.obj["service"]

    try:
        result = service.remove_expenses(name, indices)
    except DomainError as e:
        handle_domain_error(ctx, e)

    count = len(set(indices))
    click.echo(f"Removed {count} expense{'s' if count != 1 else ''} from '{name}'")
    _echo_total(ctx, name)
    report_store_failures(result.failures)


def register_commands(cli):
    """Register expense commands with main CLI."""
    cli.add_command(add_expense)
    cli.add_command(subtract_expense)
    cli.add_command(edit_expense)
    cli.add_command(remove_expenses)
