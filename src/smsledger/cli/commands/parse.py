"""Parse and detect commands."""

import click
from smsledger.cli.account_options import account_option
from smsledger.cli.error_handling import handle_domain_error
from smsledger.domain.detector import TransactionDetector
from smsledger.domain.entities import MESSAGE_SOURCES
from smsledger.domain.errors import DomainError


def echo_transaction(formatted) -> None:
    """Print a formatted transaction."""
    click.echo(f"  Date:        {formatted.date.isoformat()}")
    click.echo(f"  Description: {formatted.description}")
    click.echo(f"  Amount:      {formatted.amount}")
    click.echo(f"  Type:        {formatted.type}")
    click.echo(f"  Category:    {formatted.category} ({formatted.category_confidence:.0%})")
    click.echo(f"  Account:     {formatted.account_id or '-'}")
    click.echo(f"  Bank:        {formatted.bank_name or '-'}")
    click.echo(f"  Confidence:  {formatted.confidence}")


@click.command("parse")
@click.argument("text")
@click.option("--sender", help="SMS sender ID (e.g. VM-HDFCBK)")
@account_option
@click.pass_context
def parse_text(ctx, text: str, sender: str | None, accounts):
    """Extract a transaction from notification text without saving it.

    Examples:
        smsledger parse "Rs.500.00 debited from A/c XX1234 on 26-01-26 to VPA swiggy@upi"
        smsledger parse "INR 15000 credited to your account" --account "1:HDFC Savings:50100001234"
    """
    db = ctx.obj["db"]
    detector = TransactionDetector(db)

    extraction = detector.parse_message(text, sender=sender)
    if extraction is None:
        click.echo("No transaction detected")
        return

    click.echo("\nExtraction:")
    click.echo(f"  Merchant:    {extraction.merchant or '-'}")
    click.echo(f"  Account:     {'XX' + extraction.account_last4 if extraction.account_last4 else '-'}")
    click.echo(f"  Category:    {extraction.category}")

    formatted = detector.format_parsed_transaction(extraction, accounts)
    click.echo("\nTransaction:")
    echo_transaction(formatted)


@click.command("detect")
@click.argument("text")
@click.option(
    "--source",
    type=click.Choice(MESSAGE_SOURCES, case_sensitive=False),
    default="manual",
    help="Where the text came from (default: manual)",
)
@click.option("--sender", help="SMS sender ID (e.g. VM-HDFCBK)")
@account_option
@click.pass_context
def detect_text(ctx, text: str, source: str, sender: str | None, accounts):
    """Detect a transaction and queue it for confirmation."""
    db = ctx.obj["db"]
    detector = TransactionDetector(db)

    try:
        formatted = detector.detect_from_text(text, source=source.lower(), accounts=accounts, sender=sender)
        if formatted is None:
            click.echo("No transaction detected")
            return
        entry = detector.pending.add(formatted, source=source.lower())
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    if entry is None:
        click.echo("Skipped: a matching transaction is already pending")
        return

    click.echo(f"Queued pending transaction {entry.id}:")
    echo_transaction(formatted)


def register_commands(cli):
    """Register parse and detect commands with main CLI."""
    cli.add_command(parse_text)
    cli.add_command(detect_text)
