"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic so services only ever see frozen
domain entities.
"""

from datetime import UTC

from smsledger.domain import entities as domain
from smsledger.database.models import (
    CustomRule as ORMCustomRule,
    CategoryMapping as ORMCategoryMapping,
    CategoryFrequency as ORMCategoryFrequency,
    PendingTransaction as ORMPendingTransaction,
)


def rule_to_domain(orm_rule: ORMCustomRule) -> domain.CustomRule:
    """Convert SQLAlchemy CustomRule model to domain CustomRule entity."""
    return domain.CustomRule(
        id=orm_rule.id,
        pattern=orm_rule.pattern,
        is_regex=bool(orm_rule.is_regex),
        type=orm_rule.type or domain.EXPENSE,
        category=orm_rule.category or domain.DEFAULT_CATEGORY,
        account_id=orm_rule.account_id,
        bank_name=orm_rule.bank_name,
        description=orm_rule.description,
        created_at=orm_rule.created_at,
    )


def classifier_model_to_domain(
    orm_mappings: list[ORMCategoryMapping], orm_frequencies: list[ORMCategoryFrequency]
) -> domain.ClassifierModel:
    """Convert learned mapping and frequency rows to a domain ClassifierModel."""
    return domain.ClassifierModel(
        mappings={row.description: row.category for row in orm_mappings},
        frequencies={row.category: row.count for row in orm_frequencies},
    )


def pending_to_domain(orm_pending: ORMPendingTransaction) -> domain.PendingTransaction:
    """Convert SQLAlchemy PendingTransaction model to domain PendingTransaction entity."""
    created_at = orm_pending.created_at
    # SQLite drops the timezone on the way back
    if created_at is not None and created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=UTC)

    return domain.PendingTransaction(
        id=orm_pending.id,
        date=orm_pending.date,
        description=orm_pending.description,
        amount=orm_pending.amount,
        category=orm_pending.category,
        account_id=orm_pending.account_id,
        type=orm_pending.type,
        confidence=orm_pending.confidence,
        category_confidence=orm_pending.category_confidence,
        bank_name=orm_pending.bank_name,
        raw_text=orm_pending.raw_text,
        source=orm_pending.source,
        status=orm_pending.status,
        created_at=created_at,
    )
