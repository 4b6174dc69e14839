"""Custom rule domain service."""

import logging
import re
from typing import Optional

from smsledger.database.base import Database
from smsledger.domain.entities import (
    CustomRule,
    DEFAULT_CATEGORY,
    EXPENSE,
    TRANSACTION_TYPES,
)
from smsledger.domain.errors import (
    PersistenceError,
    ValidationError,
    invalid_rule_pattern,
    invalid_transaction_type,
)
from smsledger.domain.observable import Observable

logger = logging.getLogger(__name__)


def match_rule(rule: CustomRule, text: str) -> Optional[re.Match | bool]:
    """Test a custom rule against message text.

    Plain patterns are case-insensitive substring tests. Regex patterns are
    searched case-insensitively; a pattern that does not compile is logged
    and treated as non-matching.

    Args:
        rule: Rule to test
        text: Raw message text

    Returns:
        The re.Match for regex rules, True for substring hits, None otherwise
    """
    if not rule.pattern:
        return None

    if not rule.is_regex:
        return True if rule.pattern.lower() in text.lower() else None

    try:
        return re.search(rule.pattern, text, re.IGNORECASE)
    except re.error as e:
        logger.warning("Skipping custom rule %s with malformed pattern %r: %s", rule.id, rule.pattern, e)
        return None


class RuleService(Observable):
    """Service for managing user-authored override rules."""

    def __init__(self, db: Database):
        """Initialize rule service.

        Args:
            db: Database instance
        """
        super().__init__()
        self.db = db

    def list_rules(self) -> list[CustomRule]:
        """List rules in creation order (oldest first).

        Storage failures are logged and read as "no rules yet".

        Returns:
            List of rule entities
        """
        try:
            return self.db.list_rules()
        except PersistenceError as e:
            logger.warning("Custom rules unavailable, continuing without them: %s", e)
            return []

    def add_rule(
        self,
        pattern: str,
        is_regex: bool = False,
        type: Optional[str] = None,
        category: Optional[str] = None,
        account_id: Optional[str] = None,
        bank_name: Optional[str] = None,
        description: Optional[str] = None,
    ) -> CustomRule:
        """Append a new rule.

        Args:
            pattern: Substring or regular expression to look for
            is_regex: Treat pattern as a case-insensitive regular expression
            type: "expense" or "income" (default: expense)
            category: Category to assign (default: Other)
            account_id: Optional account to book matches against
            bank_name: Optional bank name overriding sender detection
            description: Optional description for matched transactions

        Returns:
            The stored rule with its assigned ID

        Raises:
            ValidationError: If the pattern is empty, the type unknown, or the regex invalid
            PersistenceError: If the rule could not be saved
        """
        if not pattern or not pattern.strip():
            raise ValidationError("Rule pattern cannot be empty")

        type = type or EXPENSE
        if type not in TRANSACTION_TYPES:
            raise ValidationError(invalid_transaction_type(type))

        if is_regex:
            try:
                re.compile(pattern)
            except re.error as e:
                raise ValidationError(invalid_rule_pattern(pattern, str(e)))

        rule = self.db.create_rule(
            pattern=pattern,
            is_regex=is_regex,
            type=type,
            category=category or DEFAULT_CATEGORY,
            account_id=account_id or None,
            bank_name=bank_name or None,
            description=description or None,
        )
        logger.info("Added custom rule %s for pattern %r", rule.id, pattern)
        self._notify(self.list_rules())
        return rule

    def delete_rule(self, rule_id: int) -> None:
        """Delete a rule. Unknown IDs are ignored.

        Args:
            rule_id: Rule ID to delete

        Raises:
            PersistenceError: If the deletion could not be saved
        """
        self.db.delete_rule(rule_id)
        self._notify(self.list_rules())

    def find_match(self, text: str) -> tuple[Optional[CustomRule], Optional[re.Match | bool]]:
        """Return the first rule matching the text, with its match.

        Args:
            text: Raw message text

        Returns:
            (rule, match) for the first match in creation order, or (None, None)
        """
        for rule in self.list_rules():
            match = match_rule(rule, text)
            if match:
                logger.debug("Custom rule %s matched pattern %r", rule.id, rule.pattern)
                return rule, match
        return None, None
