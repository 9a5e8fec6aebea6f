"""Area management commands."""

import click
from farmledger.cli.error_handling import handle_domain_error
from farmledger.cli.formatting import format_date
from farmledger.domain.aggregation import days_since
from farmledger.domain.area import AreaService
from farmledger.domain.entities import DEFAULT_CYCLE_MONTHS
from farmledger.domain.errors import DomainError
from farmledger.utils.date_parser import parse_date


@click.group()
def area_group():
    """Manage copra areas and harvests."""
    pass


@area_group.command("create")
@click.argument("name", metavar="AREA_NAME")
@click.option(
    "--cycle-months",
    type=click.IntRange(min=1),
    default=DEFAULT_CYCLE_MONTHS,
    show_default=True,
    help="Months between harvests",
)
@click.option("--last-harvest", help="Date of the most recent harvest (YYYY-MM-DD)")
@click.pass_context
def create_area(ctx, name: str, cycle_months: int, last_harvest: str | None):
    """Create a new area.

    Examples:
        farmledger area create "North Field"
        farmledger area create "Hillside" --cycle-months 3 --last-harvest 2025-01-15
    """
    service = AreaService(ctx.obj["db"])

    last_date = None
    if last_harvest:
        try:
            last_date = parse_date(last_harvest)
        except ValueError as e:
            click.echo(f"Error: Invalid date format: {e}", err=True)
            ctx.exit(1)

    try:
        area_id = service.create_area(name, cycle_months=cycle_months, last_harvest_date=last_date)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created area '{name}' (ID: {area_id})")
    area = service.get_area(area_id)
    if area.next_harvest_date is not None:
        click.echo(f"Next harvest expected on {format_date(area.next_harvest_date)}")


@area_group.command("list")
@click.pass_context
def list_areas(ctx):
    """List areas with their harvest schedule."""
    service = AreaService(ctx.obj["db"])
    areas = service.list_areas()
    if not areas:
        click.echo("No areas found.")
        return

    click.echo("\nAreas:")
    click.echo("-" * 80)
    click.echo(f"{'ID':<5} {'Name':<20} {'Last Harvest':<14} {'Next Harvest':<14} {'Cycle':<7} {'Days Since':<10}")
    click.echo("-" * 80)
    for area in areas:
        since = str(days_since(area.last_harvest_date)) if area.last_harvest_date else "-"
        click.echo(
            f"{area.id:<5} {area.area_name:<20} {format_date(area.last_harvest_date):<14} "
            f"{format_date(area.next_harvest_date):<14} {str(area.cycle_months) + ' mo':<7} {since:<10}"
        )


@area_group.command("harvest")
@click.argument("area", metavar="AREA")
@click.option("--date", "harvest_date", default="today", show_default=True, help="Harvest date")
@click.pass_context
def record_harvest(ctx, area: str, harvest_date: str):
    """Record a harvest for an area.

    AREA can be an area name or ID.

    Examples:
        farmledger area harvest "North Field" --date 2025-01-15
    """
    service = AreaService(ctx.obj["db"])

    try:
        parsed_date = parse_date(harvest_date)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)

    try:
        area_obj = service.resolve_area(area)
        harvest_id = service.record_harvest(area_obj.id, parsed_date)
    except DomainError as e:
        handle_domain_error(ctx, e)

    updated = service.get_area(area_obj.id)
    click.echo(f"Recorded harvest {harvest_id} for '{updated.area_name}' on {parsed_date}")
    click.echo(f"Next harvest expected on {format_date(updated.next_harvest_date)}")


def register_commands(cli):
    """Register area commands with main CLI."""
    cli.add_command(area_group, name="area")
