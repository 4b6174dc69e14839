"""Main CLI entry point."""

import logging
import os

import click
from smsledger.database.factories import create_sqlite_database

# Import and register all commands at module level
from smsledger.cli.commands import (
    parse,
    rule,
    bank,
    category,
    pending,
)


def configure_logging(verbose: bool) -> None:
    """Configure root logging from --verbose or SMSLEDGER_LOG_LEVEL."""
    if verbose:
        level = logging.DEBUG
    else:
        level_name = os.environ.get("SMSLEDGER_LOG_LEVEL", "WARNING").upper()
        level = getattr(logging, level_name, logging.WARNING)
    logging.basicConfig(
        level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides SMSLEDGER_DB_PATH environment variable)",
    envvar="SMSLEDGER_DB_PATH",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx, db_path: str | None, verbose: bool):
    """smsledger - Bank notification to transaction extraction.

    Parse bank and UPI notification text into categorized transactions,
    manage custom rules, and review detected transactions before they are
    booked.
    """
    ctx.ensure_object(dict)
    configure_logging(verbose)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
parse.register_commands(cli)
rule.register_commands(cli)
bank.register_commands(cli)
category.register_commands(cli)
pending.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
