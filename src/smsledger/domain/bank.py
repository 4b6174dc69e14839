"""Bank and payment app identification."""

import re
from typing import Optional

from smsledger.domain.rules import RuleService, match_rule

# Institution -> keywords, checked in order; the first hit wins
BANK_KEYWORDS: dict[str, list[str]] = {
    "HDFC": ["hdfc", "hdfcbank", "hdfc bank"],
    "ICICI": ["icici", "icicib", "icici bank"],
    "SBI": ["sbi", "state bank", "sbiin", "sbin"],
    "Axis": ["axis", "axisbk", "axis bank"],
    "Kotak": ["kotak", "kotak mahindra", "kotak bank"],
    "IndusInd": ["indusind", "indus ind"],
    "IDBI": ["idbi", "idbi bank"],
    "PNB": ["pnb", "punjab national"],
    "BOB": ["bob", "bank of baroda"],
    "Canara": ["canara", "cnrb"],
    "Union": ["union bank", "uboi"],
    "Federal": ["federal", "fedbank"],
    "IDFC": ["idfc", "idfc first", "idfc bank"],
    "Yes Bank": ["yes bank", "yesbank"],
    "Standard Chartered": ["scb", "standard chartered"],
    "Citi": ["citi", "citibank"],
    "HSBC": ["hsbc"],
    "DBS": ["dbs", "dbs bank"],
    "Paytm": ["paytm", "pp_bank", "paytm bank"],
    "PhonePe": ["phonepe"],
    "GPay": ["gpay", "google pay"],
    "Amazon": ["amazon", "amazonpay"],
    "Amex": ["amex", "american express"],
}

# Institution -> SMS sender ID prefix. Operator prefixes such as "VM-" or
# "AD-" are stripped before matching.
SENDER_PATTERNS: dict[str, re.Pattern] = {
    "HDFC": re.compile(r"^(?:HDFCBK|HDFC|HD)", re.IGNORECASE),
    "ICICI": re.compile(r"^(?:ICICI|ICI|IC)", re.IGNORECASE),
    "SBI": re.compile(r"^(?:SBIIN|SBI|SB)", re.IGNORECASE),
    "Axis": re.compile(r"^(?:AXIS|AX)", re.IGNORECASE),
    "Kotak": re.compile(r"^(?:KOTAK|KT)", re.IGNORECASE),
    "IDFC": re.compile(r"^(?:IDFC|ID)", re.IGNORECASE),
}

_OPERATOR_PREFIX = re.compile(r"^[A-Z]{2}-", re.IGNORECASE)


class BankIdentifier:
    """Names the institution behind a message.

    Read-only: never touches rules or persisted state beyond reading rules.
    """

    def __init__(self, rule_service: Optional[RuleService] = None):
        self.rule_service = rule_service

    def identify(self, text: str, sender: Optional[str] = None) -> Optional[str]:
        """Identify the bank or payment app for a message.

        Args:
            text: Raw message text
            sender: Optional SMS sender ID (e.g. "VM-HDFCBK")

        Returns:
            Canonical institution name, or None if nothing matched
        """
        if not text or not isinstance(text, str):
            return None

        # Rules may pin a bank name explicitly
        if self.rule_service is not None:
            for rule in self.rule_service.list_rules():
                if rule.bank_name and match_rule(rule, text):
                    return rule.bank_name

        lowered = text.lower()
        for bank_name, keywords in BANK_KEYWORDS.items():
            if any(keyword in lowered for keyword in keywords):
                return bank_name

        candidate = sender.strip() if sender else text.strip()
        candidate = _OPERATOR_PREFIX.sub("", candidate) if sender else candidate
        for bank_name, pattern in SENDER_PATTERNS.items():
            if pattern.match(candidate):
                return bank_name

        return None
