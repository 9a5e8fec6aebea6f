"""CLI error handling helpers."""

import click

from farmledger.domain.errors import DomainError


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a domain error and exit with failure."""
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)


def exit_if_reload_failed(ctx: click.Context, page) -> None:
    """Exit with failure when a page could not refetch after a successful write."""
    if page.error:
        click.echo(f"Error: Changes were saved but could not be reloaded: {page.error}", err=True)
        ctx.exit(1)
