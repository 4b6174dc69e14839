"""Custom rule management commands."""

import click
from smsledger.cli.error_handling import handle_domain_error
from smsledger.domain.errors import DomainError
from smsledger.domain.rules import RuleService


@click.group()
def rule_group():
    """Manage custom parsing rules."""
    pass


@rule_group.command("list")
@click.pass_context
def list_rules(ctx):
    """List custom rules in the order they are applied."""
    db = ctx.obj["db"]
    service = RuleService(db)

    rules = service.list_rules()
    if not rules:
        click.echo("No custom rules found.")
        return

    click.echo("\nCustom rules:")
    click.echo("-" * 60)
    for r in rules:
        kind = "regex" if r.is_regex else "text"
        extras = []
        if r.account_id:
            extras.append(f"account {r.account_id}")
        if r.bank_name:
            extras.append(f"bank {r.bank_name}")
        if r.description:
            extras.append(f"'{r.description}'")
        suffix = f" | {', '.join(extras)}" if extras else ""
        click.echo(f"ID: {r.id:3d} | {kind:5s} | {r.pattern} -> {r.type}, {r.category}{suffix}")


@rule_group.command("add")
@click.argument("pattern")
@click.option("--regex", "is_regex", is_flag=True, help="Treat PATTERN as a regular expression")
@click.option(
    "--type",
    "txn_type",
    type=click.Choice(["expense", "income"], case_sensitive=False),
    default="expense",
    help="Transaction type (default: expense)",
)
@click.option("--category", help="Category to assign (default: Other)")
@click.option("--account-id", help="Account to book matching transactions against")
@click.option("--bank", "bank_name", help="Bank name to report for matching messages")
@click.option("--description", help="Description for matching transactions")
@click.pass_context
def add_rule(ctx, pattern: str, is_regex: bool, txn_type: str, category: str | None,
             account_id: str | None, bank_name: str | None, description: str | None):
    """Add a custom rule. Rules are checked before generic parsing.

    Examples:
        smsledger rule add netflix --category Entertainment --description "Netflix Subscription"
        smsledger rule add "salary.*?rs\\.?\\s*([\\d,]+)" --regex --type income --category Salary
    """
    db = ctx.obj["db"]
    service = RuleService(db)

    try:
        rule = service.add_rule(
            pattern=pattern,
            is_regex=is_regex,
            type=txn_type.lower(),
            category=category,
            account_id=account_id,
            bank_name=bank_name,
            description=description,
        )
        click.echo(f"Created rule {rule.id} for pattern '{rule.pattern}'")
    except DomainError as e:
        handle_domain_error(ctx, e)


@rule_group.command("delete")
@click.argument("rule_id", type=int)
@click.pass_context
def delete_rule(ctx, rule_id: int):
    """Delete a custom rule."""
    db = ctx.obj["db"]
    service = RuleService(db)

    try:
        service.delete_rule(rule_id)
        click.echo(f"Deleted rule {rule_id}")
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register rule commands with main CLI."""
    cli.add_command(rule_group, name="rule")
