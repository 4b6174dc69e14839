"""Domain model entities for smsledger.

These are pure data classes describing what flows through the extraction
pipeline, independent of how rules, learned mappings and pending candidates
are stored.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from typing import Optional

from smsledger.domain.errors import ValidationError

EXPENSE = "expense"
INCOME = "income"
TRANSACTION_TYPES = (EXPENSE, INCOME)

MESSAGE_SOURCES = ("sms", "clipboard", "manual", "notification")

DEFAULT_CATEGORY = "Other"

PENDING = "pending"
CONFIRMED = "confirmed"
DISMISSED = "dismissed"


@dataclass(frozen=True)
class RawMessage:
    """Notification text together with where it came from."""

    text: str
    source: str = "manual"

    def __post_init__(self):
        if self.source not in MESSAGE_SOURCES:
            raise ValidationError(
                f"Unknown message source '{self.source}'. "
                f"Expected one of: {', '.join(MESSAGE_SOURCES)}"
            )


@dataclass(frozen=True)
class CustomRule:
    """User-authored override rule.

    Optional members are None when the user left them unset; the first
    non-empty override wins over anything the generic parser finds.
    """

    id: int
    pattern: str
    is_regex: bool = False
    type: str = EXPENSE
    category: str = DEFAULT_CATEGORY
    account_id: Optional[str] = None
    bank_name: Optional[str] = None
    description: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class ExtractionResult:
    """Structured fields pulled out of one message.

    amount is None only for custom-rule matches that named no amount; the
    generic parser returns None instead of a result when it finds none.
    """

    amount: Optional[Decimal]
    type: str
    merchant: Optional[str]
    description: str
    category: str
    date: date
    account_last4: Optional[str]
    account_id: Optional[str]
    bank_name: Optional[str]
    raw_text: str
    confidence: int


@dataclass(frozen=True)
class Account:
    """Account the caller can book a transaction against (read-only here)."""

    id: str
    name: str
    account_number: Optional[str] = None
    type: Optional[str] = None


@dataclass(frozen=True)
class CategoryPrediction:
    """Classifier output; confidence is on a 0..1 scale."""

    category: str
    confidence: float


@dataclass(frozen=True)
class ClassifierModel:
    """Learned classifier state."""

    mappings: dict[str, str] = field(default_factory=dict)
    frequencies: dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class FormattedTransaction:
    """Canonical transaction candidate handed to the pending queue.

    amount is signed: negative for expenses, positive for income.
    """

    date: date
    description: str
    amount: Decimal
    category: str
    account_id: Optional[str]
    type: str
    confidence: int
    category_confidence: float
    bank_name: Optional[str]
    raw_text: str


@dataclass(frozen=True)
class PendingTransaction:
    """Formatted candidate waiting for user confirmation."""

    id: int
    date: date
    description: str
    amount: Decimal
    category: str
    account_id: Optional[str]
    type: str
    confidence: int
    category_confidence: float
    bank_name: Optional[str]
    raw_text: str
    source: str
    status: str
    created_at: datetime
