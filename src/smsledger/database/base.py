"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional
from datetime import date, datetime
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from smsledger.domain.entities import (
    CustomRule,
    ClassifierModel,
    PendingTransaction,
)


class Database(ABC):
    """Abstract database interface for smsledger.

    Holds the three persisted documents (custom rules, bank to account
    mappings, classifier model) plus the pending transaction queue.
    Implementations raise PersistenceError when storage fails.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Custom rule operations
    @abstractmethod
    def create_rule(
        self,
        pattern: str,
        is_regex: bool,
        type: str,
        category: str,
        account_id: Optional[str] = None,
        bank_name: Optional[str] = None,
        description: Optional[str] = None,
    ) -> CustomRule:
        """Append a custom rule. Returns the stored rule."""
        pass

    @abstractmethod
    def list_rules(self) -> list[CustomRule]:
        """List custom rules, oldest first."""
        pass

    @abstractmethod
    def delete_rule(self, rule_id: int) -> None:
        """Delete a custom rule. Missing IDs are ignored."""
        pass

    # Bank to account mapping operations
    @abstractmethod
    def set_bank_account_mapping(self, bank_key: str, account_id: str) -> None:
        """Create or replace the account remembered for a bank."""
        pass

    @abstractmethod
    def get_bank_account_mappings(self) -> dict[str, str]:
        """Get all bank to account mappings keyed by lowercased bank name."""
        pass

    # Classifier model operations
    @abstractmethod
    def get_classifier_model(self) -> ClassifierModel:
        """Get learned description mappings and category frequencies."""
        pass

    @abstractmethod
    def save_category_mapping(self, description: str, category: str) -> None:
        """Store a learned mapping and count it towards the category frequency."""
        pass

    # Pending transaction operations
    @abstractmethod
    def create_pending_transaction(
        self,
        date: date,
        description: str,
        amount: Decimal,
        category: str,
        account_id: Optional[str],
        type: str,
        confidence: int,
        category_confidence: float,
        bank_name: Optional[str],
        raw_text: str,
        source: str,
        created_at: datetime,
    ) -> PendingTransaction:
        """Create a pending transaction. Returns the stored entry."""
        pass

    @abstractmethod
    def get_pending_transaction(self, pending_id: int) -> Optional[PendingTransaction]:
        """Get pending transaction by ID."""
        pass

    @abstractmethod
    def list_pending_transactions(self, status: Optional[str] = None) -> list[PendingTransaction]:
        """List pending transactions, newest first, optionally filtered by status."""
        pass

    @abstractmethod
    def update_pending_status(self, pending_id: int, status: str) -> None:
        """Update the status of a pending transaction."""
        pass

    @abstractmethod
    def delete_pending_transaction(self, pending_id: int) -> None:
        """Delete a pending transaction. Missing IDs are ignored."""
        pass

    @abstractmethod
    def clear_pending_transactions(self) -> None:
        """Delete every pending transaction."""
        pass
