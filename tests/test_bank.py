"""Tests for bank and sender identification."""

import pytest

from smsledger.domain.bank import BankIdentifier


@pytest.mark.parametrize(
    "text,expected",
    [
        ("Your HDFC Bank a/c XX1234 is debited", "HDFC"),
        ("ICICI Bank: Rs 500 spent on card", "ICICI"),
        ("Dear customer, State Bank account credited", "SBI"),
        ("Money sent via PhonePe", "PhonePe"),
        ("Paid using Google Pay", "GPay"),
        ("AMERICAN EXPRESS card alert", "Amex"),
    ],
)
def test_keyword_identification(bank_identifier, text, expected):
    """Test keyword table lookups (case-insensitive)."""
    assert bank_identifier.identify(text) == expected


def test_table_order_breaks_ties(bank_identifier):
    """Test that the earlier institution wins when several match."""
    assert bank_identifier.identify("SBI card bill paid via Paytm") == "SBI"


def test_sender_id_with_operator_prefix(bank_identifier):
    """Test sender ID prefixes such as AD-HDFCBK."""
    assert bank_identifier.identify("Rs 500 debited", sender="AD-HDFCBK") == "HDFC"


def test_sender_prefix_on_text(bank_identifier):
    """Test that the prefix table falls back to the start of the text."""
    assert bank_identifier.identify("KT-alert: Rs 100 debited") == "Kotak"


def test_unknown_text_returns_none(bank_identifier):
    """Test that unmatched text identifies no bank."""
    assert bank_identifier.identify("hello there") is None


@pytest.mark.parametrize("value", [None, "", 42])
def test_invalid_input_returns_none(bank_identifier, value):
    """Test that empty or non-string text identifies no bank."""
    assert bank_identifier.identify(value) is None


def test_rule_bank_name_overrides_tables(bank_identifier, rule_service):
    """Test that a matching rule with a bank name wins."""
    rule_service.add_rule(pattern="hdfc", bank_name="HDFC Credit Card")

    assert bank_identifier.identify("HDFC: Rs 500 spent") == "HDFC Credit Card"


def test_rule_without_bank_name_falls_through(bank_identifier, rule_service):
    """Test that rules without a bank name do not stop the table lookup."""
    rule_service.add_rule(pattern="swiggy", category="Food")

    assert bank_identifier.identify("Axis Bank: paid to swiggy") == "Axis"


def test_identify_does_not_mutate_rules(bank_identifier, rule_service):
    """Test that identification is read-only."""
    rule_service.add_rule(pattern="myfin", bank_name="MyFin")
    before = rule_service.list_rules()

    bank_identifier.identify("myfin wallet debit")

    assert rule_service.list_rules() == before


def test_identifier_without_rules():
    """Test an identifier built without a rule store."""
    assert BankIdentifier().identify("kotak mahindra alert") == "Kotak"
