"""Category prediction and learning commands."""

from decimal import Decimal

import click
from smsledger.cli.error_handling import handle_domain_error
from smsledger.domain.classifier import CategoryClassifier
from smsledger.domain.errors import DomainError


@click.group()
def category_group():
    """Predict categories and teach the classifier."""
    pass


@category_group.command("predict")
@click.argument("description")
@click.option("--amount", type=click.FLOAT, help="Transaction amount")
@click.pass_context
def predict_category(ctx, description: str, amount: float | None):
    """Predict the category for a description."""
    db = ctx.obj["db"]
    classifier = CategoryClassifier(db)

    prediction = classifier.predict(
        description, Decimal(str(amount)) if amount is not None else None
    )
    click.echo(f"{prediction.category} (confidence {prediction.confidence:.1f})")


@category_group.command("learn")
@click.argument("description")
@click.argument("category")
@click.pass_context
def learn_category(ctx, description: str, category: str):
    """Teach the classifier that DESCRIPTION belongs to CATEGORY.

    Examples:
        smsledger category learn "zepto quick order" Groceries
    """
    db = ctx.obj["db"]
    classifier = CategoryClassifier(db)

    try:
        classifier.learn(description, category)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Learned '{description}' -> '{category}'")


@category_group.command("model")
@click.pass_context
def show_model(ctx):
    """Show the learned mappings and category frequencies."""
    db = ctx.obj["db"]
    model = CategoryClassifier(db).model

    if not model.mappings:
        click.echo("Nothing learned yet.")
        return

    click.echo("\nLearned mappings:")
    for description, category in sorted(model.mappings.items()):
        click.echo(f"  {description} -> {category}")

    click.echo("\nCategory frequencies:")
    for category, count in sorted(model.frequencies.items(), key=lambda item: -item[1]):
        click.echo(f"  {category}: {count}")


def register_commands(cli):
    """Register category commands with main CLI."""
    cli.add_command(category_group, name="category")
