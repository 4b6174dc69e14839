"""Tests for domain entities."""

import pytest
from dataclasses import FrozenInstanceError

from smsledger.domain.entities import CustomRule, RawMessage
from smsledger.domain.errors import DomainError, ValidationError
from smsledger.domain.observable import Observable


class TestRawMessage:
    """Tests for RawMessage."""

    @pytest.mark.parametrize("source", ["sms", "clipboard", "manual", "notification"])
    def test_known_sources(self, source):
        assert RawMessage("Rs 500 debited", source).source == source

    def test_default_source(self):
        assert RawMessage("Rs 500 debited").source == "manual"

    def test_unknown_source(self):
        with pytest.raises(ValidationError):
            RawMessage("Rs 500 debited", "email")


def test_entities_are_frozen():
    """Test that domain entities are immutable."""
    rule = CustomRule(id=1, pattern="netflix")

    with pytest.raises(FrozenInstanceError):
        rule.pattern = "spotify"


def test_domain_errors_are_value_errors():
    """Test the error hierarchy."""
    assert issubclass(ValidationError, DomainError)
    assert issubclass(DomainError, ValueError)


class TestObservable:
    """Tests for the listener base class."""

    def test_notify_and_unsubscribe(self):
        observable = Observable()
        seen = []
        unsubscribe = observable.subscribe(seen.append)

        observable._notify("first")
        unsubscribe()
        unsubscribe()
        observable._notify("second")

        assert seen == ["first"]
