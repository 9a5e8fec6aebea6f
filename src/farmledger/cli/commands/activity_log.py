"""Activity log commands."""

import click
from farmledger.cli.error_handling import handle_domain_error
from farmledger.domain.errors import DomainError
from farmledger.views.activity_log import ActivityLogPage


def _open_page(ctx) -> ActivityLogPage:
    page = ActivityLogPage(ctx.obj["db"])
    page.load()
    if page.error:
        click.echo(f"Error: {page.error}", err=True)
        ctx.exit(1)
    return page


@click.group()
def log_group():
    """Record day-to-day activities."""
    pass


@log_group.command("add")
@click.argument("action")
@click.pass_context
def add_log(ctx, action: str):
    """Add an activity.

    Examples:
        farmledger log add "Fed the fishpond"
    """
    page = _open_page(ctx)
    try:
        log_id = page.add(action)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Added activity {log_id}")


@log_group.command("list")
@click.pass_context
def list_logs(ctx):
    """List activities, newest first."""
    page = _open_page(ctx)
    if not page.logs:
        click.echo("No activities found.")
        return

    click.echo("\nActivity Log:")
    click.echo("-" * 60)
    for log in page.logs:
        click.echo(f"{log.id:<5} {log.created_at:%Y-%m-%d %H:%M}  {log.action}")


@log_group.command("delete")
@click.argument("log_id", type=int)
@click.pass_context
def delete_log(ctx, log_id: int):
    """Delete an activity."""
    page = _open_page(ctx)
    try:
        page.delete(log_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted activity {log_id}")


def register_commands(cli):
    """Register activity log commands with main CLI."""
    cli.add_command(log_group, name="log")
