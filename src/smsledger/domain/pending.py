"""Pending transaction queue: detected candidates awaiting confirmation."""

import logging
import re
from datetime import datetime, timedelta, UTC
from typing import Callable, Optional

from smsledger.database.base import Database
from smsledger.domain.entities import (
    CONFIRMED,
    DISMISSED,
    PENDING,
    FormattedTransaction,
    MESSAGE_SOURCES,
    PendingTransaction,
)
from smsledger.domain.errors import (
    NotFoundError,
    PersistenceError,
    ValidationError,
    pending_not_found,
)
from smsledger.domain.observable import Observable

logger = logging.getLogger(__name__)

DUPLICATE_WINDOW = timedelta(hours=2)


def _normalize(text: str) -> str:
    return re.sub(r"\s+", " ", text.lower()).strip()


class PendingQueue(Observable):
    """Service holding formatted candidates until the user confirms them."""

    def __init__(
        self,
        db: Database,
        now: Callable[[], datetime] = lambda: datetime.now(UTC),
        duplicate_window: timedelta = DUPLICATE_WINDOW,
    ):
        """Initialize pending queue.

        Args:
            db: Database instance
            now: Clock used for created_at and the duplicate window
            duplicate_window: How far back an amount/date match counts as a duplicate
        """
        super().__init__()
        self.db = db
        self.now = now
        self.duplicate_window = duplicate_window

    def list_pending(self, include_resolved: bool = False) -> list[PendingTransaction]:
        """List queued candidates, newest first.

        Args:
            include_resolved: Also return confirmed and dismissed entries

        Returns:
            List of pending transaction entities (empty if unreadable)
        """
        try:
            return self.db.list_pending_transactions(None if include_resolved else PENDING)
        except PersistenceError as e:
            logger.warning("Pending transactions unavailable: %s", e)
            return []

    def count(self) -> int:
        """Number of candidates still awaiting confirmation."""
        return len(self.list_pending())

    def get(self, pending_id: int) -> Optional[PendingTransaction]:
        """Get a queued candidate by ID."""
        return self.db.get_pending_transaction(pending_id)

    def is_duplicate(self, transaction: FormattedTransaction) -> bool:
        """Check a candidate against what is already pending.

        A candidate is a duplicate when its raw text equals or contains (or is
        contained in) a pending entry's raw text, or when an entry created
        within the duplicate window has the same amount and date.
        """
        pending = self.list_pending()
        raw = _normalize(transaction.raw_text) if transaction.raw_text else ""

        if raw:
            for entry in pending:
                existing = _normalize(entry.raw_text) if entry.raw_text else ""
                if existing and (existing == raw or existing in raw or raw in existing):
                    return True

        cutoff = self.now() - self.duplicate_window
        for entry in pending:
            if entry.created_at < cutoff:
                continue
            if abs(entry.amount) == abs(transaction.amount) and entry.date == transaction.date:
                return True
        return False

    def add(self, transaction: FormattedTransaction, source: str = "manual") -> Optional[PendingTransaction]:
        """Queue a candidate unless it duplicates one already pending.

        Args:
            transaction: Formatted candidate
            source: Where the text came from (sms, clipboard, manual, notification)

        Returns:
            The queued entry, or None if it was a duplicate

        Raises:
            ValidationError: If source is unknown
            PersistenceError: If the entry could not be saved
        """
        if source not in MESSAGE_SOURCES:
            raise ValidationError(f"Unknown message source '{source}'")

        if self.is_duplicate(transaction):
            logger.info("Skipping duplicate pending transaction: %s", transaction.description)
            return None

        entry = self.db.create_pending_transaction(
            date=transaction.date,
            description=transaction.description,
            amount=transaction.amount,
            category=transaction.category,
            account_id=transaction.account_id,
            type=transaction.type,
            confidence=transaction.confidence,
            category_confidence=transaction.category_confidence,
            bank_name=transaction.bank_name,
            raw_text=transaction.raw_text,
            source=source,
            created_at=self.now(),
        )
        logger.info("Queued pending transaction %s: %s", entry.id, entry.description)
        self._notify(self.list_pending())
        return entry

    def _set_status(self, pending_id: int, status: str) -> PendingTransaction:
        if self.db.get_pending_transaction(pending_id) is None:
            raise NotFoundError(pending_not_found(pending_id))
        self.db.update_pending_status(pending_id, status)
        self._notify(self.list_pending())
        return self.db.get_pending_transaction(pending_id)

    def confirm(self, pending_id: int) -> PendingTransaction:
        """Mark a candidate as confirmed.

        Raises:
            NotFoundError: If the ID is unknown
        """
        return self._set_status(pending_id, CONFIRMED)

    def dismiss(self, pending_id: int) -> PendingTransaction:
        """Mark a candidate as dismissed.

        Raises:
            NotFoundError: If the ID is unknown
        """
        return self._set_status(pending_id, DISMISSED)

    def remove(self, pending_id: int) -> None:
        """Remove a candidate. Unknown IDs are ignored."""
        self.db.delete_pending_transaction(pending_id)
        self._notify(self.list_pending())

    def clear(self) -> None:
        """Remove every candidate."""
        self.db.clear_pending_transactions()
        self._notify(self.list_pending())
