"""Bank identification and bank to account mapping commands."""

import click
from smsledger.cli.error_handling import handle_domain_error
from smsledger.domain.account_resolution import AccountResolver
from smsledger.domain.bank import BankIdentifier
from smsledger.domain.errors import DomainError
from smsledger.domain.rules import RuleService


@click.group()
def bank_group():
    """Identify banks and remember their accounts."""
    pass


@bank_group.command("identify")
@click.argument("text")
@click.option("--sender", help="SMS sender ID (e.g. VM-HDFCBK)")
@click.pass_context
def identify_bank(ctx, text: str, sender: str | None):
    """Name the bank or payment app behind a message."""
    db = ctx.obj["db"]
    identifier = BankIdentifier(RuleService(db))

    bank_name = identifier.identify(text, sender=sender)
    if bank_name is None:
        click.echo("No bank identified")
        return
    click.echo(bank_name)


@bank_group.command("map")
@click.argument("bank_name")
@click.argument("account_id")
@click.pass_context
def map_bank(ctx, bank_name: str, account_id: str):
    """Remember that messages from BANK_NAME belong to ACCOUNT_ID.

    Examples:
        smsledger bank map HDFC 1
    """
    db = ctx.obj["db"]
    resolver = AccountResolver(db)

    try:
        resolver.remember_bank(bank_name, account_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Messages from '{bank_name}' will use account {account_id}")


@bank_group.command("mappings")
@click.pass_context
def list_mappings(ctx):
    """List remembered bank to account mappings."""
    db = ctx.obj["db"]
    resolver = AccountResolver(db)

    mappings = resolver.list_bank_mappings()
    if not mappings:
        click.echo("No bank mappings found.")
        return

    click.echo("\nBank mappings:")
    for bank_key, account_id in sorted(mappings.items()):
        click.echo(f"  {bank_key:20s} -> {account_id}")


def register_commands(cli):
    """Register bank commands with main CLI."""
    cli.add_command(bank_group, name="bank")
