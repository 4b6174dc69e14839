"""Field extraction engine: raw notification text to ExtractionResult.

Each field is resolved by its own tier: an ordered tuple of patterns tried
first to last, where the first pattern that yields a usable value wins and
adds the tier's confidence. Tiers are independent, so a miss in one never
blocks the others. Only the amount tier is mandatory.
"""

import logging
import re
from datetime import date
from decimal import Decimal
from typing import Callable, Optional, TypeVar

from smsledger.domain.bank import BankIdentifier
from smsledger.domain.entities import (
    CustomRule,
    DEFAULT_CATEGORY,
    EXPENSE,
    INCOME,
    ExtractionResult,
)
from smsledger.domain.rules import RuleService
from smsledger.utils.amount_parser import parse_amount
from smsledger.utils.date_parser import parse_message_date

logger = logging.getLogger(__name__)

T = TypeVar("T")

MAX_AMOUNT = Decimal("10000000")
MERCHANT_MAX_LENGTH = 50
RULE_CONFIDENCE = 100

AMOUNT_CONFIDENCE = 40
MERCHANT_CONFIDENCE = 20
ACCOUNT_CONFIDENCE = 10
DATE_CONFIDENCE = 10
CATEGORY_CONFIDENCE = 20

_CURRENCY = r"(?:\brs\.?|\binr|₹)"
_AMOUNT = r"(\d[\d,]*(?:\.\d+)?)"

CURRENCY_AMOUNT = re.compile(_CURRENCY + r"\s*" + _AMOUNT, re.IGNORECASE)

# Expense cues are tried before income cues
AMOUNT_PATTERNS: tuple[tuple[str, re.Pattern], ...] = (
    (EXPENSE, re.compile(
        r"\b(?:debited|spent|paid|sent|withdrawn|purchase|txn|transaction|transferred)"
        r".{0,30}?" + _CURRENCY + r"\s*" + _AMOUNT, re.IGNORECASE)),
    (EXPENSE, re.compile(
        _CURRENCY + r"\s*" + _AMOUNT
        + r".{0,30}?\b(?:debited|spent|paid|withdrawn|deducted|transferred to|sent)", re.IGNORECASE)),
    (EXPENSE, re.compile(
        r"\b(?:debit|dr)\b\.?\s*(?:" + _CURRENCY + r")?\s*" + _AMOUNT, re.IGNORECASE)),
    (INCOME, re.compile(
        r"\b(?:credited|received|deposited|refund|reversed)"
        r".{0,30}?" + _CURRENCY + r"\s*" + _AMOUNT, re.IGNORECASE)),
    (INCOME, re.compile(
        _CURRENCY + r"\s*" + _AMOUNT
        + r".{0,30}?\b(?:credited|received|deposited|refunded)", re.IGNORECASE)),
    (INCOME, re.compile(
        r"\b(?:credit|cr)\b\.?\s*(?:" + _CURRENCY + r")?\s*" + _AMOUNT, re.IGNORECASE)),
)

MERCHANT_PATTERNS: tuple[re.Pattern, ...] = (
    re.compile(r"(?:\b(?:at|to|from)|@)\s+([A-Za-z0-9\s&\-.]+?)(?:\s+on\b|\s+ref|\s+upi|\s+thru|\.|$)", re.IGNORECASE),
    re.compile(r"\b(?:paid to|sent to|received from)\s+([A-Za-z0-9\s&\-.]+?)(?:\s+ref|\s+upi|\.|$)", re.IGNORECASE),
    re.compile(r"\bupi[:\s]+([A-Za-z0-9\s@\-.]+?)(?:\s+ref|\.|$)", re.IGNORECASE),
    re.compile(r"\b(?:info|txn|transaction)[:\s]+([A-Za-z0-9\s&\-.]+?)(?:\s+ref|\.|$)", re.IGNORECASE),
    re.compile(r"\bvpa[:\s]+([A-Za-z0-9\s@\-.]+?)(?:\s+ref|\.|$)", re.IGNORECASE),
)

ACCOUNT_PATTERNS: tuple[re.Pattern, ...] = (
    re.compile(r"\b(?:a/c|acct|account|ac)[:\s]*(?:no\.?|number)?[:\s]*[x*]*(\d{4,})", re.IGNORECASE),
    re.compile(r"\bcard[:\s]*(?:ending(?:\s+(?:in|with))?)?[:\s]*[x*]*(\d{4})", re.IGNORECASE),
)

DATE_PATTERNS: tuple[re.Pattern, ...] = (
    re.compile(r"\b(\d{1,2}[-/]\d{1,2}[-/]\d{2,4})\b"),
    re.compile(
        r"\b(\d{1,2}[\s-]*(?:jan|feb|mar|apr|may|jun|jul|aug|sep|oct|nov|dec)[a-z]*[\s-]*\d{2,4})\b",
        re.IGNORECASE,
    ),
)

# Checked in order; the first category with a substring hit wins
CATEGORY_KEYWORDS: dict[str, list[str]] = {
    "Food & Dining": ["swiggy", "zomato", "restaurant", "cafe", "food", "dominos", "pizza",
                      "burger", "mcd", "kfc", "starbucks", "dunkin"],
    "Transport/Petrol": ["uber", "ola", "rapido", "petrol", "fuel", "hp", "iocl", "bpcl",
                         "shell", "metro", "irctc", "railway"],
    "Shopping": ["amazon", "flipkart", "myntra", "ajio", "meesho", "mall", "store", "mart",
                 "retail", "uniqlo", "zara"],
    "Groceries": ["bigbasket", "grofers", "blinkit", "zepto", "dmart", "more",
                  "reliance fresh", "grocery", "instamart"],
    "Utilities/Bills": ["electricity", "water", "gas", "broadband", "wifi", "airtel", "jio",
                        "vi", "bsnl", "bill", "bescom"],
    "Entertainment": ["netflix", "prime", "hotstar", "spotify", "youtube", "movie", "pvr",
                      "inox", "bookmyshow"],
    "Health": ["pharmacy", "medical", "hospital", "clinic", "apollo", "medplus", "1mg",
               "pharmeasy", "doctor"],
    "Transfer": ["upi", "neft", "imps", "transfer", "sent to", "received from"],
    "ATM Withdrawal": ["atm", "withdrawal", "cash"],
}


def _first(patterns, text: str, extract: Callable[[re.Match], Optional[T]]) -> Optional[T]:
    """Run patterns in order; return the first non-None extracted value."""
    for pattern in patterns:
        match = pattern.search(text)
        if match is None:
            continue
        value = extract(match)
        if value is not None:
            return value
    return None


def _clean_merchant(match: re.Match) -> Optional[str]:
    merchant = re.sub(r"\s+", " ", match.group(1)).strip()
    return merchant[:MERCHANT_MAX_LENGTH].strip() or None


def _account_suffix(match: re.Match) -> Optional[str]:
    return match.group(1)[-4:]


def _calendar_date(match: re.Match) -> Optional[date]:
    try:
        return parse_message_date(match.group(1))
    except ValueError as e:
        logger.debug("Ignoring unparseable date %r: %s", match.group(1), e)
        return None


class ExtractionEngine:
    """Turns one notification into an ExtractionResult, or None.

    Custom rules are consulted live on every call and short-circuit the
    generic pattern cascade with confidence 100.
    """

    def __init__(
        self,
        rule_service: Optional[RuleService] = None,
        bank_identifier: Optional[BankIdentifier] = None,
        today: Callable[[], date] = date.today,
        max_amount: Decimal = MAX_AMOUNT,
    ):
        """Initialize the extraction engine.

        Args:
            rule_service: Source of custom rules (None disables rules)
            bank_identifier: Used to fill bank_name on generic results
            today: Clock supplying the default transaction date
            max_amount: Exclusive upper bound for a plausible amount
        """
        self.rule_service = rule_service
        self.bank_identifier = bank_identifier
        self.today = today
        self.max_amount = max_amount

    def _plausible_amount(self, raw: Optional[str]) -> Optional[Decimal]:
        """Parse an amount capture, or None if unparseable or out of bounds."""
        if not raw:
            return None
        try:
            amount = parse_amount(raw)
        except ValueError:
            return None
        if 0 < amount < self.max_amount:
            return amount
        return None

    def parse_message(self, text: str, sender: Optional[str] = None) -> Optional[ExtractionResult]:
        """Extract a transaction from notification text.

        Args:
            text: Raw message text
            sender: Optional SMS sender ID, used for bank identification

        Returns:
            ExtractionResult, or None if the text is not a transaction
        """
        if not isinstance(text, str) or not text.strip():
            return None

        if self.rule_service is not None:
            rule, match = self.rule_service.find_match(text)
            if rule is not None:
                return self._from_rule(rule, match, text)

        confidence = 0

        amount_and_type = None
        for txn_type, pattern in AMOUNT_PATTERNS:
            for match in pattern.finditer(text):
                amount = self._plausible_amount(match.group(1))
                if amount is not None:
                    amount_and_type = (amount, txn_type)
                    break
            if amount_and_type is not None:
                break

        if amount_and_type is None:
            logger.debug("No transaction amount found in message")
            return None
        amount, txn_type = amount_and_type
        confidence += AMOUNT_CONFIDENCE

        merchant = _first(MERCHANT_PATTERNS, text, _clean_merchant)
        if merchant is not None:
            confidence += MERCHANT_CONFIDENCE

        account_last4 = _first(ACCOUNT_PATTERNS, text, _account_suffix)
        if account_last4 is not None:
            confidence += ACCOUNT_CONFIDENCE

        txn_date = _first(DATE_PATTERNS, text, _calendar_date)
        if txn_date is not None:
            confidence += DATE_CONFIDENCE
        else:
            txn_date = self.today()

        category = self._keyword_category(text)
        if category is not None:
            confidence += CATEGORY_CONFIDENCE
        else:
            category = DEFAULT_CATEGORY

        if merchant:
            description = merchant
        elif txn_type == EXPENSE:
            description = "Payment"
        else:
            description = "Credit received"

        bank_name = None
        if self.bank_identifier is not None:
            bank_name = self.bank_identifier.identify(text, sender=sender)

        return ExtractionResult(
            amount=amount,
            type=txn_type,
            merchant=merchant,
            description=description,
            category=category,
            date=txn_date,
            account_last4=account_last4,
            account_id=None,
            bank_name=bank_name,
            raw_text=text,
            confidence=confidence,
        )

    def _keyword_category(self, text: str) -> Optional[str]:
        lowered = text.lower()
        for category, keywords in CATEGORY_KEYWORDS.items():
            if any(keyword in lowered for keyword in keywords):
                return category
        return None

    def _from_rule(self, rule: CustomRule, match, text: str) -> ExtractionResult:
        """Build the fixed-confidence result for a custom rule match."""
        amount = None
        if isinstance(match, re.Match) and match.re.groups:
            amount = self._plausible_amount(match.group(1))
        if amount is None:
            for candidate in CURRENCY_AMOUNT.finditer(text):
                amount = self._plausible_amount(candidate.group(1))
                if amount is not None:
                    break

        return ExtractionResult(
            amount=amount,
            type=rule.type or EXPENSE,
            merchant=rule.description or "Custom Rule",
            description=rule.description or "Custom Transaction",
            category=rule.category or DEFAULT_CATEGORY,
            date=self.today(),
            account_last4=None,
            account_id=rule.account_id,
            bank_name=rule.bank_name,
            raw_text=text,
            confidence=RULE_CONFIDENCE,
        )
