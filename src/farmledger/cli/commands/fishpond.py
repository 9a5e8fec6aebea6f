"""Fishpond cropping commands."""

import click
from farmledger.cli.error_handling import handle_domain_error
from farmledger.cli.formatting import format_currency, format_long_date
from farmledger.domain.errors import DomainError
from farmledger.utils.date_parser import parse_date
from farmledger.views.fishpond import FishpondPage


def _open_page(ctx) -> FishpondPage:
    page = FishpondPage(ctx.obj["db"])
    page.load()
    if page.error:
        click.echo(f"Error: {page.error}", err=True)
        ctx.exit(1)
    return page


def _parse_date_or_exit(ctx, value: str | None):
    if value is None:
        return None
    try:
        return parse_date(value)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)


@click.group()
def fishpond_group():
    """Manage fishpond croppings."""
    pass


@fishpond_group.command("start")
@click.option("--date", "start_date", default="today", show_default=True, help="Stocking date")
@click.pass_context
def start_cropping(ctx, start_date: str):
    """Start a new cropping."""
    page = _open_page(ctx)
    parsed = _parse_date_or_exit(ctx, start_date)
    try:
        cropping_id = page.start_cropping(parsed)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Started cropping {cropping_id} on {parsed}")


@fishpond_group.command("expense")
@click.argument("cropping_id", type=int)
@click.option("--name", required=True, help="Expense name (e.g., 'Feeds')")
@click.option("--amount", required=True, help="Expense amount")
@click.option("--date", "expense_date", help="Expense date (defaults to today)")
@click.pass_context
def add_expense(ctx, cropping_id: int, name: str, amount: str, expense_date: str | None):
    """Add an expense to a cropping.

    Examples:
        farmledger fishpond expense 1 --name "Feeds" --amount 2500
    """
    page = _open_page(ctx)
    try:
        page.open_expense(cropping_id)
        expense = page.submit_expense(name=name, amount=amount, date=expense_date)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Added expense '{expense.name}' of {format_currency(expense.amount)} to cropping {cropping_id}")


@fishpond_group.command("sale")
@click.argument("cropping_id", type=int)
@click.option("--fish-type", required=True, help="Fish type (e.g., 'Bangus')")
@click.option("--kilos", required=True, help="Kilos sold")
@click.option("--price", "price_per_kilo", required=True, help="Price per kilo")
@click.option("--date", "sale_date", help="Sale date (defaults to today)")
@click.pass_context
def add_sale(ctx, cropping_id: int, fish_type: str, kilos: str, price_per_kilo: str, sale_date: str | None):
    """Add a sale to a cropping.

    Examples:
        farmledger fishpond sale 1 --fish-type Bangus --kilos 12.5 --price 40
    """
    page = _open_page(ctx)
    try:
        page.open_sale(cropping_id)
        sale = page.submit_sale(
            fish_type=fish_type, kilos=kilos, price_per_kilo=price_per_kilo, date=sale_date
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(
        f"Added sale of {sale.kilos}kg {sale.fish_type} @ {format_currency(sale.price_per_kilo)} "
        f"= {format_currency(sale.total)} to cropping {cropping_id}"
    )


@fishpond_group.command("complete")
@click.argument("cropping_id", type=int)
@click.option("--date", "completed_at", default="today", show_default=True, help="Completion date")
@click.pass_context
def complete_cropping(ctx, cropping_id: int, completed_at: str):
    """Mark a cropping as harvested."""
    page = _open_page(ctx)
    parsed = _parse_date_or_exit(ctx, completed_at)
    try:
        page.complete(cropping_id, parsed)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Completed cropping {cropping_id}")


@fishpond_group.command("list")
@click.option("--ongoing", is_flag=True, help="Only show croppings that are not completed")
@click.pass_context
def list_croppings(ctx, ongoing: bool):
    """Show croppings with their expenses, sales and totals."""
    page = _open_page(ctx)
    cards = [card for card in page.cards() if not (ongoing and card.cropping.completed)]
    if not cards:
        click.echo("No croppings found.")
        return

    for card in cards:
        c = card.cropping
        status = f"completed {c.completed_at}" if c.completed else "ongoing"
        click.echo(f"\nCropping {c.id} ({status})")
        click.echo(f"  Day {card.day_count} since Buhi - {format_long_date(c.start_date)}")
        click.echo("  Expenses:")
        if not c.expenses:
            click.echo("    No expenses yet")
        for e in c.expenses:
            click.echo(f"    {e.name}: {format_currency(e.amount)} ({e.date})")
        click.echo("  Sales:")
        if not c.sales:
            click.echo("    No sales yet")
        for s in c.sales:
            click.echo(
                f"    {s.fish_type} - {s.kilos}kg @ {format_currency(s.price_per_kilo)} = "
                f"{format_currency(s.total)} ({s.date})"
            )
        click.echo(f"  Total Expenses: {format_currency(card.totals.expenses)}")
        click.echo(f"  Total Sales: {format_currency(card.totals.sales)}")
        click.echo(f"  Net Income: {format_currency(card.totals.net)}")


@fishpond_group.command("delete")
@click.argument("cropping_id", type=int)
@click.option("--yes", is_flag=True, help="Skip confirmation")
@click.pass_context
def delete_cropping(ctx, cropping_id: int, yes: bool):
    """Delete a cropping and its line items."""
    page = _open_page(ctx)
    if not yes and not click.confirm(f"Are you sure you want to delete cropping {cropping_id}?"):
        click.echo("Deletion cancelled.")
        return
    try:
        page.delete(cropping_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted cropping {cropping_id}")


def register_commands(cli):
    """Register fishpond commands with main CLI."""
    cli.add_command(fishpond_group, name="fishpond")
