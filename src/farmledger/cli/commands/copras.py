"""Copras record commands."""

import click
from farmledger.cli.error_handling import exit_if_reload_failed, handle_domain_error
from farmledger.cli.formatting import format_currency
from farmledger.domain.area import AreaService
from farmledger.domain.entities import CoprasSummary, NetIncomePolicy
from farmledger.domain.errors import DomainError
from farmledger.views.copras import CoprasPage


def _resolve_area_id(ctx, area: str | None) -> int | None:
    if area is None:
        return None
    try:
        return AreaService(ctx.obj["db"]).resolve_area(area).id
    except DomainError as e:
        handle_domain_error(ctx, e)


def _open_page(ctx, area_id: int | None = None) -> CoprasPage:
    page = CoprasPage(ctx.obj["db"], ctx.obj["net_income_policy"], area_id=area_id)
    page.load()
    if page.error:
        click.echo(f"Error: {page.error}", err=True)
        ctx.exit(1)
    return page


def _display_summary(summary: CoprasSummary) -> None:
    click.echo(f"Total Sales:     {format_currency(summary.totals.sales)}")
    click.echo(f"Total Expenses:  {format_currency(summary.totals.expenses)}")
    click.echo(f"Total Net Income: {format_currency(summary.totals.net)}")

    best_sales = summary.best_sales_area
    best_net = summary.best_net_area
    if best_sales is None:
        click.echo("Best Area (Sales): N/A")
    else:
        click.echo(f"Best Area (Sales): {best_sales.area_name} ({format_currency(best_sales.sales)})")
    if best_net is None:
        click.echo("Best Area (Net Income): N/A")
    else:
        click.echo(f"Best Area (Net Income): {best_net.area_name} ({format_currency(best_net.net)})")


@click.group()
@click.option(
    "--net-split",
    type=click.IntRange(min=1),
    default=1,
    envvar="FARMLEDGER_NET_SPLIT",
    help="Divide net income between this many owners in summaries",
)
@click.pass_context
def copras_group(ctx, net_split: int):
    """Manage copras records."""
    ctx.obj["net_income_policy"] = NetIncomePolicy(split=net_split)


@copras_group.command("add")
@click.option("--date", "record_date", required=True, help="Record date (YYYY-MM-DD or 'today')")
@click.option("--area", required=True, help="Area name or ID")
@click.option("--farmer", required=True, help="Farmer name")
@click.option("--sales", default="0", help="Sales amount")
@click.option("--expenses", default="0", help="Expenses amount")
@click.option("--weight", default="0", help="Weight in kilos")
@click.pass_context
def add_record(ctx, record_date: str, area: str, farmer: str, sales: str, expenses: str, weight: str):
    """Add a copras record.

    Examples:
        farmledger copras add --date 2025-01-15 --area "North Field" --farmer "Juan" --sales 12000 --expenses 3000 --weight 400
    """
    area_id = _resolve_area_id(ctx, area)
    page = _open_page(ctx)
    page.add()
    try:
        record_id = page.submit(
            date=record_date,
            area_id=area_id,
            farmer=farmer,
            sales=sales,
            expenses=expenses,
            weight=weight,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    exit_if_reload_failed(ctx, page)
    record = page.find_record(record_id)
    click.echo(f"Created copras record {record_id}")
    click.echo(f"  Area: {record.area_name}")
    click.echo(f"  Net income: {format_currency(record.net_income)}")
    click.echo(f"  Price/kilo: {format_currency(record.price_per_kilo)}")


@copras_group.command("edit")
@click.argument("record_id", type=int)
@click.option("--date", "record_date", help="Record date")
@click.option("--area", help="Area name or ID")
@click.option("--farmer", help="Farmer name")
@click.option("--sales", help="Sales amount")
@click.option("--expenses", help="Expenses amount")
@click.option("--weight", help="Weight in kilos")
@click.pass_context
def edit_record(
    ctx,
    record_id: int,
    record_date: str | None,
    area: str | None,
    farmer: str | None,
    sales: str | None,
    expenses: str | None,
    weight: str | None,
):
    """Edit a copras record.

    Updates only the fields that are provided.

    Examples:
        farmledger copras edit 3 --sales 15000
    """
    area_id = _resolve_area_id(ctx, area)
    page = _open_page(ctx)

    changes = {
        "date": record_date,
        "area_id": area_id,
        "farmer": farmer,
        "sales": sales,
        "expenses": expenses,
        "weight": weight,
    }
    try:
        page.edit(record_id)
        page.submit(**{name: value for name, value in changes.items() if value is not None})
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated copras record {record_id}")


@copras_group.command("list")
@click.option("--area", help="Only show records for this area (name or ID)")
@click.pass_context
def list_records(ctx, area: str | None):
    """List copras records with summary figures."""
    page = _open_page(ctx, _resolve_area_id(ctx, area))

    if not page.records:
        click.echo("No records found.")
        return

    click.echo(f"\n{page.title}:")
    click.echo("-" * 118)
    click.echo(
        f"{'ID':<5} {'Date':<12} {'Area':<16} {'Farmer':<16} {'Sales':>14} {'Expenses':>14} "
        f"{'Net Income':>14} {'Weight':>9} {'Price/Kilo':>11}"
    )
    click.echo("-" * 118)
    for r in page.records:
        click.echo(
            f"{r.id:<5} {str(r.date):<12} {(r.area_name or '')[:16]:<16} {r.farmer[:16]:<16} "
            f"{format_currency(r.sales):>14} {format_currency(r.expenses):>14} "
            f"{format_currency(r.net_income):>14} {r.weight:>9,.2f} {format_currency(r.price_per_kilo):>11}"
        )
    click.echo("-" * 118)
    _display_summary(page.summary)


@copras_group.command("summary")
@click.pass_context
def summary(ctx):
    """Show totals, per-area subtotals and best areas."""
    page = _open_page(ctx)
    result = page.summary
    _display_summary(result)

    if result.areas:
        click.echo("\nBy area:")
        for area in result.areas:
            click.echo(
                f"  {area.area_name:<20} {area.count:3d} record(s)  "
                f"Sales {format_currency(area.sales):>14}  Net {format_currency(area.net):>14}"
            )


@copras_group.command("delete")
@click.argument("record_id", type=int)
@click.option("--yes", is_flag=True, help="Skip confirmation")
@click.pass_context
def delete_record(ctx, record_id: int, yes: bool):
    """Delete a copras record."""
    page = _open_page(ctx)
    if page.find_record(record_id) is None:
        click.echo(f"Error: Copras record {record_id} not found", err=True)
        ctx.exit(1)

    if not yes and not click.confirm(f"Are you sure you want to delete copras record {record_id}?"):
        click.echo("Deletion cancelled.")
        return

    try:
        page.delete(record_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted copras record {record_id}")


def register_commands(cli):
    """Register copras commands with main CLI."""
    cli.add_command(copras_group, name="copras")
