"""Utility functions for smsledger."""

from smsledger.utils.amount_parser import parse_amount
from smsledger.utils.date_parser import parse_message_date

__all__ = ["parse_amount", "parse_message_date"]
