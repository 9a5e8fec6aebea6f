"""Main CLI entry point."""

import logging

import click
from farmledger.database.factories import create_sqlite_database

# Import and register all commands at module level
from farmledger.cli.commands import (
    activity_log,
    area,
    copras,
    dashboard,
    fishpond,
    rental,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides FARMLEDGER_DB_PATH environment variable)",
    envvar="FARMLEDGER_DB_PATH",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    show_default=True,
    envvar="FARMLEDGER_LOG_LEVEL",
    help="Logging verbosity",
)
@click.pass_context
def cli(ctx, db_path: str | None, log_level: str):
    """Farmledger - Family agribusiness records.

    Track income and expenses for copra areas, fishpond croppings and
    property rentals, with an activity log and a summary dashboard.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
dashboard.register_commands(cli)
area.register_commands(cli)
copras.register_commands(cli)
fishpond.register_commands(cli)
rental.register_commands(cli)
activity_log.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
