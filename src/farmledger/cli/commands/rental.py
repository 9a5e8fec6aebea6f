"""Tenant and rental record commands."""

from datetime import date

import click
from farmledger.cli.error_handling import exit_if_reload_failed, handle_domain_error
from farmledger.cli.formatting import format_currency
from farmledger.domain.entities import PaymentStatus
from farmledger.domain.errors import DomainError
from farmledger.views.rental import RentalPage

STATUS_CHOICES = [s.value for s in PaymentStatus]


def _open_page(ctx) -> RentalPage:
    page = RentalPage(ctx.obj["db"])
    page.load()
    if page.error:
        click.echo(f"Error: {page.error}", err=True)
        ctx.exit(1)
    return page


@click.group()
def tenant_group():
    """Manage tenants."""
    pass


@tenant_group.command("add")
@click.argument("name", metavar="TENANT_NAME")
@click.option("--tax", "tax_amount", required=True, help="Fixed monthly tax amount")
@click.pass_context
def add_tenant(ctx, name: str, tax_amount: str):
    """Add a tenant.

    Examples:
        farmledger tenant add "Store 1" --tax 1500
    """
    page = _open_page(ctx)
    page.add_tenant()
    try:
        tenant_id = page.submit_tenant(name=name, tax_amount=tax_amount)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created tenant '{name}' (ID: {tenant_id})")


@tenant_group.command("list")
@click.pass_context
def list_tenants(ctx):
    """List tenants."""
    page = _open_page(ctx)
    if not page.tenants:
        click.echo("No tenants found.")
        return

    click.echo("\nTenants:")
    click.echo("-" * 50)
    for tenant in page.tenants:
        click.echo(f"ID: {tenant.id:3d} | {tenant.name:20s} | Tax: {format_currency(tenant.tax_amount)}")


@click.group()
def rental_group():
    """Manage monthly rental records."""
    pass


@rental_group.command("create")
@click.option("--month", type=click.IntRange(1, 12), default=lambda: date.today().month, help="Month (1-12)")
@click.option("--year", type=int, default=lambda: date.today().year, help="Year")
@click.option("--paid", multiple=True, metavar="TENANT", help="Tenant who has paid (repeatable)")
@click.option("--exempt", multiple=True, metavar="TENANT", help="Tenant exempted this month (repeatable)")
@click.pass_context
def create_transaction(ctx, month: int, year: int, paid: tuple[str, ...], exempt: tuple[str, ...]):
    """Create one rental record per tenant for a month.

    Every tenant starts as unpaid unless listed with --paid or --exempt.

    Examples:
        farmledger rental create --month 3 --year 2025 --paid "Store 1"
    """
    overlap = sorted(set(paid) & set(exempt))
    if overlap:
        raise click.BadParameter(
            f"Tenant '{overlap[0]}' cannot be both paid and exempted", param_hint="'--paid' / '--exempt'"
        )

    statuses: dict[str, PaymentStatus] = {}
    for name in paid:
        statuses[name] = PaymentStatus.PAID
    for name in exempt:
        statuses[name] = PaymentStatus.EXEMPTED

    page = _open_page(ctx)
    try:
        transaction_id = page.create_transaction(month, year, statuses)
    except DomainError as e:
        handle_domain_error(ctx, e)

    exit_if_reload_failed(ctx, page)
    transaction = next(t for t in page.transactions if t.transaction_id == transaction_id)
    click.echo(f"Created rental transaction {transaction_id} for {month:02d}/{year}")
    click.echo(f"  Tenants: {len(transaction.records)}")
    click.echo(f"  Collected: {format_currency(transaction.collected)}")


@rental_group.command("list")
@click.pass_context
def list_transactions(ctx):
    """List rental records grouped by transaction."""
    page = _open_page(ctx)
    transactions = page.transactions
    if not transactions:
        click.echo("No rental records found.")
        return

    for transaction in transactions:
        click.echo(f"\nTransaction {transaction.transaction_id} - {transaction.month:02d}/{transaction.year}")
        click.echo("-" * 60)
        for record in transaction.records:
            click.echo(
                f"  {record.id:<5} {record.tenant_name:<20} {format_currency(record.tax_amount):>14} "
                f"{record.status.value:<9}"
            )
        click.echo(
            f"  Collected: {format_currency(transaction.collected)} of {format_currency(transaction.total_due)}"
        )


@rental_group.command("set-status")
@click.argument("record_id", type=int)
@click.argument("status", type=click.Choice(STATUS_CHOICES, case_sensitive=False))
@click.pass_context
def set_status(ctx, record_id: int, status: str):
    """Set the payment status of a rental record."""
    page = _open_page(ctx)
    try:
        page.set_status(record_id, status)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Rental record {record_id} marked {status.lower()}")


def register_commands(cli):
    """Register tenant and rental commands with main CLI."""
    cli.add_command(tenant_group, name="tenant")
    cli.add_command(rental_group, name="rental")
