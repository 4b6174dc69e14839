"""Tests for notification date parsing."""

import pytest
from datetime import date

from smsledger.utils.date_parser import parse_message_date


class TestParseMessageDate:
    """Tests for parse_message_date."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("26-01-2026", date(2026, 1, 26)),
            ("26/01/26", date(2026, 1, 26)),
            ("5-1-26", date(2026, 1, 5)),
            ("01-02-2026", date(2026, 2, 1)),
            ("26 Jan 2026", date(2026, 1, 26)),
            ("26 January 26", date(2026, 1, 26)),
            ("5 Feb2026", date(2026, 2, 5)),
        ],
    )
    def test_day_first_dates(self, text, expected):
        assert parse_message_date(text) == expected

    def test_month_name_without_year_uses_current_year(self):
        assert parse_message_date("12 Mar") == date(date.today().year, 3, 12)

    @pytest.mark.parametrize("text", ["31-02-2026", "13-13-2026", "01-01-202", "not a date"])
    def test_invalid_dates(self, text):
        with pytest.raises(ValueError):
            parse_message_date(text)
