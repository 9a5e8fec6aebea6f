"""Dashboard command."""

import click
from farmledger.cli.formatting import format_currency
from farmledger.domain.entities import NetIncomePolicy
from farmledger.views.dashboard import DashboardPage


@click.command("dashboard")
@click.option(
    "--net-split",
    type=click.IntRange(min=1),
    default=1,
    envvar="FARMLEDGER_NET_SPLIT",
    help="Divide copras net income between this many owners",
)
@click.pass_context
def dashboard(ctx, net_split: int):
    """Show a summary of every line of business."""
    db = ctx.obj["db"]
    page = DashboardPage(db, NetIncomePolicy(split=net_split))
    page.load()
    if page.error:
        click.echo(f"Error: {page.error}", err=True)
        ctx.exit(1)

    summary = page.summary
    click.echo("\nLim Cruz Business Record")
    click.echo("=" * 60)
    click.echo(f"Copras        {summary.areas:3d} area(s), {summary.copras_records} record(s)")
    click.echo(f"              Net income: {format_currency(summary.copras_totals.net)}")
    click.echo("Mango Farm    no records tracked")
    click.echo(
        f"Fishpond      {summary.ongoing_croppings:3d} ongoing, "
        f"{summary.completed_croppings} completed cropping(s)"
    )
    click.echo(f"Rental        {summary.tenants:3d} tenant(s), {summary.unpaid_rentals} unpaid")
    click.echo(f"Activity Log  {summary.activity_logs:3d} entries")


def register_commands(cli):
    """Register dashboard command with main CLI."""
    cli.add_command(dashboard)
