"""End-to-end tests for the command line interface."""

import pytest
from farmledger.cli.main import cli
from farmledger.database.sqlalchemy_db import SQLAlchemyDatabase
from farmledger.domain.errors import StoreError


@pytest.fixture
def run(cli_runner, temp_db):
    """Invoke the CLI against the temporary database."""

    def _run(*args, **kwargs):
        return cli_runner.invoke(cli, ["--db-path", temp_db.database_path, *args], **kwargs)

    return _run


def test_help_does_not_need_database(cli_runner):
    result = cli_runner.invoke(cli, ["--help"])
    assert result.exit_code == 0
    assert "copras" in result.output
    assert "fishpond" in result.output


def test_area_workflow(run):
    result = run("area", "create", "Hillside", "--last-harvest", "2025-01-15")
    assert result.exit_code == 0
    assert "Created area 'Hillside' (ID: 1)" in result.output
    assert "Next harvest expected on 2025-05-15" in result.output

    result = run("area", "harvest", "Hillside", "--date", "2025-02-10")
    assert result.exit_code == 0
    assert "Next harvest expected on 2025-06-10" in result.output

    result = run("area", "list")
    assert result.exit_code == 0
    assert "Hillside" in result.output
    assert "2025-06-10" in result.output


def test_duplicate_area(run):
    run("area", "create", "North Field")
    result = run("area", "create", "North Field")
    assert result.exit_code == 1
    assert "already exists" in result.output


def test_copras_workflow(run):
    run("area", "create", "North Field")
    run("area", "create", "Hillside")

    result = run(
        "copras", "add",
        "--date", "2025-01-15",
        "--area", "North Field",
        "--farmer", "Juan",
        "--sales", "12000",
        "--expenses", "3000",
        "--weight", "400",
    )
    assert result.exit_code == 0
    assert "Created copras record 1" in result.output
    assert "Net income: ₱9,000.00" in result.output
    assert "Price/kilo: ₱30.00" in result.output

    result = run(
        "copras", "add", "--date", "2025-01-20", "--area", "Hillside", "--farmer", "Pedro",
        "--sales", "5000",
    )
    assert result.exit_code == 0

    result = run("copras", "list")
    assert result.exit_code == 0
    assert "Juan" in result.output
    assert "Pedro" in result.output
    assert "Best Area (Sales): North Field (₱12,000.00)" in result.output

    result = run("copras", "--net-split", "2", "summary")
    assert result.exit_code == 0
    assert "Total Net Income: ₱7,000.00" in result.output
    assert "Best Area (Net Income): North Field (₱4,500.00)" in result.output

    result = run("copras", "list", "--area", "Hillside")
    assert "Pedro" in result.output
    assert "Juan" not in result.output


def test_copras_edit_and_delete(run):
    run("area", "create", "North Field")
    run("copras", "add", "--date", "2025-01-15", "--area", "North Field", "--farmer", "Juan", "--sales", "100")

    result = run("copras", "edit", "1", "--sales", "250", "--expenses", "50")
    assert result.exit_code == 0
    assert "Updated copras record 1" in result.output

    result = run("copras", "summary")
    assert "Total Net Income: ₱200.00" in result.output

    result = run("copras", "delete", "1", input="n\n")
    assert "Deletion cancelled." in result.output

    result = run("copras", "delete", "1", "--yes")
    assert result.exit_code == 0
    assert "No records found." in run("copras", "list").output


def test_copras_errors(run):
    run("area", "create", "North Field")

    result = run("copras", "add", "--date", "2025-01-15", "--area", "Nowhere", "--farmer", "Juan")
    assert result.exit_code == 1
    assert "Area 'Nowhere' not found" in result.output

    result = run(
        "copras", "add", "--date", "2025-01-15", "--area", "North Field", "--farmer", "Juan",
        "--sales", "lots",
    )
    assert result.exit_code == 1
    assert "Could not parse sales" in result.output

    result = run("copras", "delete", "9", "--yes")
    assert result.exit_code == 1
    assert "Copras record 9 not found" in result.output


def test_fishpond_workflow(run):
    result = run("fishpond", "start", "--date", "2025-01-01")
    assert result.exit_code == 0
    assert "Started cropping 1 on 2025-01-01" in result.output

    result = run("fishpond", "expense", "1", "--name", "Feeds", "--amount", "2500")
    assert result.exit_code == 0
    assert "Added expense 'Feeds' of ₱2,500.00 to cropping 1" in result.output

    result = run("fishpond", "sale", "1", "--fish-type", "Bangus", "--kilos", "12.5", "--price", "40")
    assert result.exit_code == 0
    assert "= ₱500.00" in result.output

    result = run("fishpond", "list")
    assert result.exit_code == 0
    assert "since Buhi - January 1, 2025" in result.output
    assert "Net Income: -₱2,000.00" in result.output

    result = run("fishpond", "complete", "1", "--date", "2025-04-01")
    assert result.exit_code == 0

    result = run("fishpond", "expense", "1", "--name", "Feeds", "--amount", "10")
    assert result.exit_code == 1
    assert "already completed" in result.output

    result = run("fishpond", "list", "--ongoing")
    assert "No croppings found." in result.output


def test_rental_workflow(run):
    for name, tax in (("Store 1", "100"), ("Store 2", "150"), ("Store 3", "200")):
        result = run("tenant", "add", name, "--tax", tax)
        assert result.exit_code == 0

    result = run("tenant", "add", "Store 1", "--tax", "1")
    assert result.exit_code == 1

    result = run("rental", "create", "--month", "3", "--year", "2025", "--paid", "Store 1", "--paid", "Store 2")
    assert result.exit_code == 0
    assert "Tenants: 3" in result.output
    assert "Collected: ₱250.00" in result.output

    result = run("rental", "set-status", "3", "PAID")
    assert result.exit_code == 0
    assert "Rental record 3 marked paid" in result.output

    result = run("rental", "list")
    assert "Collected: ₱450.00 of ₱450.00" in result.output

    result = run("rental", "create", "--paid", "Store 9")
    assert result.exit_code == 1
    assert "Tenant 'Store 9' not found" in result.output


def test_activity_log_workflow(run):
    assert run("log", "add", "Fed the fishpond").exit_code == 0
    assert run("log", "add", "Repaired the dike").exit_code == 0

    output = run("log", "list").output
    assert output.index("Repaired the dike") < output.index("Fed the fishpond")

    assert run("log", "delete", "1").exit_code == 0
    assert "Fed the fishpond" not in run("log", "list").output

    result = run("log", "add", " ")
    assert result.exit_code == 1
    assert "Action is required" in result.output


def test_dashboard(run):
    run("area", "create", "North Field")
    run("copras", "add", "--date", "2025-01-15", "--area", "North Field", "--farmer", "Juan", "--sales", "1000")
    run("fishpond", "start")
    run("log", "add", "Started a cropping")

    result = run("dashboard", "--net-split", "2")
    assert result.exit_code == 0
    assert "1 area(s), 1 record(s)" in result.output
    assert "Net income: ₱500.00" in result.output
    assert "Mango Farm    no records tracked" in result.output
    assert "1 ongoing, 0 completed" in result.output
    assert "1 entries" in result.output


def test_net_split_from_environment(run, monkeypatch):
    run("area", "create", "North Field")
    run("copras", "add", "--date", "2025-01-15", "--area", "North Field", "--farmer", "Juan", "--sales", "900")

    monkeypatch.setenv("FARMLEDGER_NET_SPLIT", "3")
    result = run("copras", "summary")
    assert "Total Net Income: ₱300.00" in result.output


def _fail_after_first_call(monkeypatch, method_name):
    """Make a store list method fail on every call after the first."""
    original = getattr(SQLAlchemyDatabase, method_name)
    calls = []

    def flaky(self, *args, **kwargs):
        calls.append(args)
        if len(calls) > 1:
            raise StoreError("Could not list records: disk I/O error")
        return original(self, *args, **kwargs)

    monkeypatch.setattr(SQLAlchemyDatabase, method_name, flaky)


def test_copras_add_reports_failed_reload(run, monkeypatch):
    run("area", "create", "North Field")
    _fail_after_first_call(monkeypatch, "list_copras_records")

    result = run("copras", "add", "--date", "2025-01-15", "--area", "North Field", "--farmer", "Juan", "--sales", "100")
    assert result.exit_code == 1
    assert "saved but could not be reloaded" in result.output
    assert not isinstance(result.exception, AttributeError)

    monkeypatch.undo()
    assert "Juan" in run("copras", "list").output


def test_rental_create_reports_failed_reload(run, monkeypatch):
    run("tenant", "add", "Store 1", "--tax", "100")
    _fail_after_first_call(monkeypatch, "list_rental_records")

    result = run("rental", "create", "--month", "3", "--year", "2025")
    assert result.exit_code == 1
    assert "saved but could not be reloaded" in result.output
    assert not isinstance(result.exception, StopIteration)

    monkeypatch.undo()
    assert "Store 1" in run("rental", "list").output


def test_rental_create_rejects_paid_and_exempt_overlap(run):
    run("tenant", "add", "Store 1", "--tax", "100")

    result = run("rental", "create", "--paid", "Store 1", "--exempt", "Store 1")
    assert result.exit_code == 2
    assert "cannot be both paid and exempted" in result.output
    assert "No rental records found." in run("rental", "list").output


def test_copras_add_by_numeric_area_name(run):
    run("area", "create", "North Field")
    run("area", "create", "2025")

    result = run("copras", "add", "--date", "2025-01-15", "--area", "2025", "--farmer", "Juan")
    assert result.exit_code == 0
    assert "Area: 2025" in result.output
