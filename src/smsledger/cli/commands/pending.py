"""Pending transaction review commands."""

import click
from smsledger.cli.error_handling import handle_domain_error
from smsledger.domain.errors import DomainError
from smsledger.domain.pending import PendingQueue


@click.group()
def pending_group():
    """Review detected transactions awaiting confirmation."""
    pass


@pending_group.command("list")
@click.option("--all", "include_resolved", is_flag=True, help="Include confirmed and dismissed entries")
@click.pass_context
def list_pending(ctx, include_resolved: bool):
    """List pending transactions, newest first."""
    db = ctx.obj["db"]
    queue = PendingQueue(db)

    entries = queue.list_pending(include_resolved=include_resolved)
    if not entries:
        click.echo("No pending transactions.")
        return

    click.echo("\nPending transactions:")
    click.echo("-" * 80)
    for entry in entries:
        status = f" [{entry.status}]" if include_resolved else ""
        click.echo(
            f"ID: {entry.id:3d} | {entry.date.isoformat()} | {entry.amount:>10} | "
            f"{entry.description[:25]:25s} | {entry.category}{status}"
        )


@pending_group.command("confirm")
@click.argument("pending_id", type=int)
@click.pass_context
def confirm_pending(ctx, pending_id: int):
    """Mark a pending transaction as confirmed."""
    db = ctx.obj["db"]
    queue = PendingQueue(db)

    try:
        queue.confirm(pending_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Pending transaction {pending_id} confirmed")


@pending_group.command("dismiss")
@click.argument("pending_id", type=int)
@click.pass_context
def dismiss_pending(ctx, pending_id: int):
    """Mark a pending transaction as dismissed."""
    db = ctx.obj["db"]
    queue = PendingQueue(db)

    try:
        queue.dismiss(pending_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Pending transaction {pending_id} dismissed")


@pending_group.command("remove")
@click.argument("pending_id", type=int)
@click.pass_context
def remove_pending(ctx, pending_id: int):
    """Remove a pending transaction."""
    db = ctx.obj["db"]
    queue = PendingQueue(db)

    queue.remove(pending_id)
    click.echo(f"Removed pending transaction {pending_id}")


@pending_group.command("clear")
@click.confirmation_option(prompt="Remove all pending transactions?")
@click.pass_context
def clear_pending(ctx):
    """Remove all pending transactions."""
    db = ctx.obj["db"]
    queue = PendingQueue(db)

    queue.clear()
    click.echo("Cleared pending transactions")


def register_commands(cli):
    """Register pending commands with main CLI."""
    cli.add_command(pending_group, name="pending")
