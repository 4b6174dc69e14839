"""CLI helpers for candidate account options."""

from __future__ import annotations

import click

from smsledger.domain.entities import Account
from smsledger.domain.errors import ValidationError, invalid_account_spec


def parse_account_spec(spec: str) -> Account:
    """Parse an ID:NAME[:NUMBER] account option.

    Raises:
        ValidationError: If ID or NAME is missing
    """
    parts = [part.strip() for part in spec.split(":", 2)]
    if len(parts) < 2 or not parts[0] or not parts[1]:
        raise ValidationError(invalid_account_spec(spec))
    account_number = parts[2] if len(parts) == 3 and parts[2] else None
    return Account(id=parts[0], name=parts[1], account_number=account_number)


def accounts_callback(
    ctx: click.Context, param: click.Parameter, value: tuple[str, ...]
) -> list[Account]:
    """Click callback turning repeated --account options into Account entities."""
    try:
        return [parse_account_spec(spec) for spec in value]
    except ValidationError as exc:
        raise click.BadParameter(str(exc), ctx=ctx, param=param)


account_option = click.option(
    "--account",
    "accounts",
    multiple=True,
    callback=accounts_callback,
    metavar="ID:NAME[:NUMBER]",
    help="Candidate account (repeatable); the first one is the fallback",
)
