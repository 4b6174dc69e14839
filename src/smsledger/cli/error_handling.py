"""Rendering of domain errors for smsledger commands."""

import click

from smsledger.domain.errors import DomainError, PersistenceError

DB_PATH_HINT = "Check that the database set by --db-path or SMSLEDGER_DB_PATH is writable."


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Print a domain error to stderr and stop the command with exit code 1.

    Storage failures get a hint about the database location, since they
    usually mean the ledger file is read-only or corrupt.
    """
    click.echo(f"Error: {error}", err=True)
    if isinstance(error, PersistenceError):
        click.echo(DB_PATH_HINT, err=True)
    ctx.exit(1)
