"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class PersistenceError(DomainError):
    """Rules, learned mappings or pending candidates could not be read or written."""


def pending_not_found(pending_id: int) -> str:
    """Return message for missing pending transaction."""
    return f"Pending transaction {pending_id} not found"


def invalid_transaction_type(value: str) -> str:
    """Return message for an unknown transaction type."""
    return f"Invalid transaction type '{value}'. Expected 'expense' or 'income'"


def invalid_rule_pattern(pattern: str, reason: str) -> str:
    """Return message for a rule regex that does not compile."""
    return f"Invalid regex pattern '{pattern}': {reason}"


def invalid_account_spec(spec: str) -> str:
    """Return message for an account option that cannot be parsed."""
    return f"Invalid account '{spec}'. Expected ID:NAME or ID:NAME:NUMBER"
