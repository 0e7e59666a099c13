"""Main CLI entry point."""

import logging

import click
from tabkeeper.database.factories import create_database

# Import and register all commands at module level
from tabkeeper.cli.commands import (
    user,
    category,
    product,
    account,
    note,
    item,
)


def configure_logging(verbosity: int) -> None:
    """Configure root logging for a CLI run (-v for INFO, -vv for DEBUG)."""
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to SQLite database file (overrides TABKEEPER_DB_PATH environment variable)",
    envvar="TABKEEPER_DB_PATH",
)
@click.option(
    "--db-url",
    help="SQLAlchemy database URL, takes precedence over --db-path",
    envvar="TABKEEPER_DB_URL",
)
@click.option("-v", "--verbose", count=True, help="Increase log output (repeat for debug)")
@click.pass_context
def cli(ctx, db_path: str | None, db_url: str | None, verbose: int):
    """Tabkeeper - Restaurant point-of-sale backend.

    Open tables, take orders on tickets and keep product stock in step
    with every item added, changed or removed.
    """
    ctx.ensure_object(dict)
    configure_logging(verbose)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_database(database_url=db_url, database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
user.register_commands(cli)
category.register_commands(cli)
product.register_commands(cli)
account.register_commands(cli)
note.register_commands(cli)
item.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
