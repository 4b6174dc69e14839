"""Transaction detector: the public surface of the extraction pipeline.

Wires the rule store, bank identifier, classifier, extraction engine,
account resolver, formatter and pending queue around one Database, and
exposes parse, format, identify, rule and classifier operations plus
detection into the pending queue.
"""

import dataclasses
import logging
from datetime import date
from decimal import Decimal
from typing import Callable, Iterable, Optional

from smsledger.database.base import Database
from smsledger.domain.account_resolution import AccountResolver
from smsledger.domain.bank import BankIdentifier
from smsledger.domain.classifier import CategoryClassifier
from smsledger.domain.entities import (
    Account,
    CategoryPrediction,
    CustomRule,
    DEFAULT_CATEGORY,
    ExtractionResult,
    FormattedTransaction,
    INCOME,
    PendingTransaction,
    RawMessage,
)
from smsledger.domain.extraction import ExtractionEngine
from smsledger.domain.formatter import CLASSIFIER_OVERRIDE_CONFIDENCE, TransactionFormatter
from smsledger.domain.pending import PendingQueue
from smsledger.domain.rules import RuleService, match_rule

logger = logging.getLogger(__name__)

MIN_DETECT_LENGTH = 10
RAW_TEXT_LIMIT = 200


class TransactionDetector:
    """Service turning notification text into pending transaction candidates."""

    def __init__(self, db: Database, today: Callable[[], date] = date.today, pending: Optional[PendingQueue] = None):
        """Initialize the detector and its collaborators.

        Args:
            db: Database instance shared by every collaborator
            today: Clock supplying the default transaction date
            pending: Pending queue to feed (default: one backed by db)
        """
        self.db = db
        self.rules = RuleService(db)
        self.bank_identifier = BankIdentifier(self.rules)
        self.classifier = CategoryClassifier(db)
        self.engine = ExtractionEngine(self.rules, self.bank_identifier, today=today)
        self.account_resolver = AccountResolver(db)
        self.formatter = TransactionFormatter(self.classifier)
        self.pending = pending or PendingQueue(db)

    # Extraction
    def parse_message(self, text: str, sender: Optional[str] = None) -> Optional[ExtractionResult]:
        """Extract a transaction from text, or None if there is none."""
        return self.engine.parse_message(text, sender=sender)

    def format_parsed_transaction(
        self, extraction: Optional[ExtractionResult], accounts: Optional[list[Account]] = None
    ) -> Optional[FormattedTransaction]:
        """Resolve the account for an extraction and format it.

        Args:
            extraction: Extraction result (None passes through)
            accounts: Candidate accounts

        Returns:
            FormattedTransaction, or None if extraction is None
        """
        if extraction is None:
            return None
        account_id = self.account_resolver.resolve(extraction, accounts or [])
        return self.formatter.format(extraction, account_id)

    def identify_bank(self, text: str, sender: Optional[str] = None) -> Optional[str]:
        """Name the bank or payment app behind a message."""
        return self.bank_identifier.identify(text, sender=sender)

    # Rules
    def list_rules(self) -> list[CustomRule]:
        """List custom rules, oldest first."""
        return self.rules.list_rules()

    def add_rule(self, pattern: str, **fields) -> CustomRule:
        """Add a custom rule. See RuleService.add_rule for the fields."""
        return self.rules.add_rule(pattern, **fields)

    def delete_rule(self, rule_id: int) -> None:
        """Delete a custom rule. Unknown IDs are ignored."""
        self.rules.delete_rule(rule_id)

    # Classifier
    def predict_category(self, description: str, amount: Optional[Decimal] = None) -> CategoryPrediction:
        """Predict a category for a description."""
        return self.classifier.predict(description, amount)

    def learn_category(self, description: str, category: str) -> None:
        """Teach the classifier the category a user picked."""
        self.classifier.learn(description, category)

    def suggest_category(self, merchant: Optional[str], txn_type: str) -> str:
        """Suggest a category for a merchant when the parser found none.

        Args:
            merchant: Merchant or description text
            txn_type: "expense" or "income"

        Returns:
            The classifier's category when it is confident, else "Salary"
            for income and "Other" for expenses
        """
        fallback = "Salary" if txn_type == INCOME else DEFAULT_CATEGORY
        if not merchant:
            return fallback
        prediction = self.classifier.predict(merchant)
        if prediction.confidence > CLASSIFIER_OVERRIDE_CONFIDENCE:
            return prediction.category
        return fallback

    # Detection
    def detect_from_text(
        self,
        text: str,
        source: str = "manual",
        accounts: Optional[list[Account]] = None,
        sender: Optional[str] = None,
    ) -> Optional[FormattedTransaction]:
        """Detect a transaction candidate in text from any source.

        Args:
            text: Notification, SMS, clipboard or manually entered text
            source: One of sms, clipboard, manual, notification
            accounts: Candidate accounts
            sender: Optional SMS sender ID

        Returns:
            FormattedTransaction, or None if the text holds no transaction
            or a custom rule matched without a detectable amount

        Raises:
            ValidationError: If source is unknown
        """
        message = RawMessage(text=text if isinstance(text, str) else "", source=source)
        if len(message.text) < MIN_DETECT_LENGTH:
            return None

        extraction = self.parse_message(message.text, sender=sender)
        # Rule hits without an amount are reported by parse, never queued
        if extraction is None or extraction.amount is None:
            return None
        formatted = self.format_parsed_transaction(extraction, accounts)

        category = formatted.category
        category_confidence = formatted.category_confidence
        if category == DEFAULT_CATEGORY:
            prediction = self.classifier.predict(formatted.description, formatted.amount)
            if prediction.confidence > CLASSIFIER_OVERRIDE_CONFIDENCE:
                category = prediction.category
                category_confidence = prediction.confidence

        return dataclasses.replace(
            formatted,
            category=category,
            category_confidence=category_confidence,
            raw_text=message.text[:RAW_TEXT_LIMIT],
        )

    def detect_batch(
        self,
        texts: Iterable[str],
        source: str = "sms",
        accounts: Optional[list[Account]] = None,
    ) -> list[FormattedTransaction]:
        """Detect candidates in many messages; non-transactions are dropped."""
        detected = []
        for text in texts:
            formatted = self.detect_from_text(text, source=source, accounts=accounts)
            if formatted is not None:
                detected.append(formatted)
        return detected

    def process_text(
        self,
        text: str,
        source: str = "manual",
        accounts: Optional[list[Account]] = None,
        sender: Optional[str] = None,
    ) -> Optional[PendingTransaction]:
        """Detect a candidate and queue it for confirmation.

        Returns:
            The queued entry, or None if nothing was detected or it was a duplicate
        """
        formatted = self.detect_from_text(text, source=source, accounts=accounts, sender=sender)
        if formatted is None:
            return None
        return self.pending.add(formatted, source=source)

    def enrich_transaction(self, transaction: FormattedTransaction) -> FormattedTransaction:
        """Re-apply the first matching custom rule to a formatted candidate.

        Rule fields win over the candidate's own; a match sets confidence to 100.
        """
        if transaction is None or not transaction.raw_text:
            return transaction

        for rule in self.rules.list_rules():
            if match_rule(rule, transaction.raw_text):
                logger.debug("Enriched transaction with rule %s", rule.id)
                txn_type = rule.type or transaction.type
                magnitude = abs(transaction.amount)
                return dataclasses.replace(
                    transaction,
                    amount=magnitude if txn_type == INCOME or not magnitude else -magnitude,
                    category=rule.category or transaction.category,
                    account_id=rule.account_id or transaction.account_id,
                    description=rule.description or transaction.description,
                    type=txn_type,
                    bank_name=rule.bank_name or transaction.bank_name,
                    confidence=100,
                    category_confidence=1.0,
                )
        return transaction
