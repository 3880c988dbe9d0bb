"""Tests for CLI commands."""

import json
import pytest

from spendtab.cli.main import cli


@pytest.fixture
def run(cli_runner, storage_dir):
    """Invoke the CLI against the temporary storage directory."""

    def invoke(*args, input=None):
        return cli_runner.invoke(cli, ["--data-dir", str(storage_dir), *args], input=input)

    return invoke


def test_tab_list_empty(run):
    """Test listing tabs when none exist."""
    result = run("tab", "list")
    assert result.exit_code == 0
    assert "No tabs found" in result.output


def test_tab_create_and_list(run):
    """Test created tabs are listed alphabetically with totals."""
    assert run("tab", "create", "Bob").exit_code == 0
    result = run("tab", "create", "Alice")
    assert result.exit_code == 0
    assert "Created tab 'Alice'" in result.output

    result = run("tab", "list")
    assert result.exit_code == 0
    assert result.output.index("Alice") < result.output.index("Bob")
    assert "$0.00" in result.output.replace(" ", "")


def test_tab_create_duplicate(run):
    """Test creating a duplicate tab fails."""
    run("tab", "create", "Groceries")
    result = run("tab", "create", "Groceries")
    assert result.exit_code == 1
    assert "already exists" in result.output


def test_add_and_subtract(run, storage_dir):
    """Test add and subtract update the stored total."""
    run("tab", "create", "Groceries")

    result = run("add", "Groceries", "12.50")
    assert result.exit_code == 0
    assert "Added $12.50 to 'Groceries'" in result.output

    result = run("subtract", "Groceries", "2")
    assert result.exit_code == 0
    assert "Total Amount: $10.50" in result.output

    record = json.loads((storage_dir / "Groceries.json").read_text(encoding="utf-8"))
    assert record["expenses"] == [12.5, -2]
    assert record["totalAmount"] == 10.5


def test_add_negative_amount(run):
    """Test a negative amount can be added after '--'."""
    run("tab", "create", "Misc")
    result = run("add", "Misc", "--", "-4.25")
    assert result.exit_code == 0
    assert "Total Amount: $-4.25" in result.output


def test_add_with_reason(run):
    """Test reasons are shown for tabs that track them."""
    run("tab", "create", "Alice", "--reasons")
    run("add", "Alice", "8", "--reason", "Lunch")

    result = run("tab", "show", "Alice")
    assert result.exit_code == 0
    assert "Lunch" in result.output
    assert "Total Amount: $8.00" in result.output


def test_add_invalid_amount(run):
    """Test an unparsable amount is rejected."""
    run("tab", "create", "Misc")
    result = run("add", "Misc", "lots")
    assert result.exit_code == 1
    assert "Invalid amount" in result.output


def test_add_unknown_tab(run):
    """Test adding to a missing tab fails."""
    result = run("add", "Nope", "1")
    assert result.exit_code == 1
    assert "not found" in result.output


def test_edit_expense(run):
    """Test editing an expense changes the total by the difference."""
    run("tab", "create", "Misc", "--track-changes")
    run("add", "Misc", "10.00")

    result = run("edit", "Misc", "0", "15.00")
    assert result.exit_code == 0
    assert "Total Amount: $15.00" in result.output

    result = run("tab", "show", "Misc")
    assert "+10.00, +5.00" in result.output


def test_edit_out_of_range(run):
    """Test editing a missing index fails and leaves the total unchanged."""
    run("tab", "create", "Misc")
    run("add", "Misc", "1")
    run("add", "Misc", "2")

    result = run("edit", "Misc", "5", "1.0")
    assert result.exit_code == 1
    assert "out of range" in result.output

    result = run("tab", "show", "Misc")
    assert "Total Amount: $3.00" in result.output


def test_remove_expenses(run):
    """Test removing expenses updates the total."""
    run("tab", "create", "Misc")
    for amount in ["1", "2", "3"]:
        run("add", "Misc", amount)

    result = run("remove", "Misc", "0", "2")
    assert result.exit_code == 0
    assert "Removed 2 expenses from 'Misc'" in result.output
    assert "Total Amount: $2.00" in result.output


def test_show_unknown_tab(run):
    """Test showing a missing tab fails."""
    result = run("tab", "show", "Nope")
    assert result.exit_code == 1
    assert "not found" in result.output


def test_delete_tab(run, storage_dir):
    """Test deleting a tab removes its file after confirmation."""
    run("tab", "create", "Trip")
    result = run("tab", "delete", "Trip", input="y\n")
    assert result.exit_code == 0
    assert "Deleted tab 'Trip'" in result.output
    assert not (storage_dir / "Trip.json").exists()

    result = run("tab", "list")
    assert "Trip" not in result.output


def test_delete_tab_cancelled(run, storage_dir):
    """Test declining the confirmation keeps the tab."""
    run("tab", "create", "Trip")
    result = run("tab", "delete", "Trip", input="n\n")
    assert result.exit_code == 0
    assert "Deletion cancelled" in result.output
    assert (storage_dir / "Trip.json").exists()


def test_collection_layout(cli_runner, storage_dir):
    """Test the --layout option stores tabs in tabs.json."""
    args = ["--data-dir", str(storage_dir), "--layout", "collection"]
    cli_runner.invoke(cli, [*args, "tab", "create", "Home"])
    cli_runner.invoke(cli, [*args, "add", "Home", "20"])

    assert [p.name for p in storage_dir.iterdir()] == ["tabs.json"]
    result = cli_runner.invoke(cli, [*args, "tab", "show", "Home"])
    assert "Total Amount: $20.00" in result.output


def test_data_dir_from_environment(cli_runner, storage_dir, monkeypatch):
    """Test SPENDTAB_DATA_DIR selects the storage directory."""
    monkeypatch.setenv("SPENDTAB_DATA_DIR", str(storage_dir))
    result = cli_runner.invoke(cli, ["tab", "create", "Env"])
    assert result.exit_code == 0
    assert (storage_dir / "Env.json").exists()


def test_corrupt_file_warns(run, storage_dir):
    """Test an unreadable tab file is reported but does not stop the command."""
    run("tab", "create", "Good")
    (storage_dir / "Bad.json").write_text("{", encoding="utf-8")

    result = run("tab", "list")
    assert result.exit_code == 0
    assert "Warning:" in result.output
    assert "Good" in result.output
