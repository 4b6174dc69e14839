"""Shared pytest fixtures for smsledger tests."""

import tempfile
import os
from datetime import date, datetime, UTC
import pytest

from smsledger.database.factories import create_sqlite_database
from smsledger.domain.account_resolution import AccountResolver
from smsledger.domain.bank import BankIdentifier
from smsledger.domain.classifier import CategoryClassifier
from smsledger.domain.detector import TransactionDetector
from smsledger.domain.entities import Account
from smsledger.domain.extraction import ExtractionEngine
from smsledger.domain.pending import PendingQueue
from smsledger.domain.rules import RuleService

TODAY = date(2026, 3, 15)
NOW = datetime(2026, 3, 15, 10, 30, tzinfo=UTC)


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def rule_service(temp_db):
    """Create a RuleService with a temporary database."""
    return RuleService(temp_db)


@pytest.fixture
def bank_identifier(rule_service):
    """Create a BankIdentifier that consults the temporary rule store."""
    return BankIdentifier(rule_service)


@pytest.fixture
def classifier(temp_db):
    """Create a CategoryClassifier with a temporary database."""
    return CategoryClassifier(temp_db)


@pytest.fixture
def engine(rule_service, bank_identifier):
    """Create an ExtractionEngine whose default date is TODAY."""
    return ExtractionEngine(rule_service, bank_identifier, today=lambda: TODAY)


@pytest.fixture
def account_resolver(temp_db):
    """Create an AccountResolver with a temporary database."""
    return AccountResolver(temp_db)


@pytest.fixture
def pending_queue(temp_db):
    """Create a PendingQueue whose clock is frozen at NOW."""
    return PendingQueue(temp_db, now=lambda: NOW)


@pytest.fixture
def detector(temp_db, pending_queue):
    """Create a TransactionDetector wired to the temporary database."""
    return TransactionDetector(temp_db, today=lambda: TODAY, pending=pending_queue)


@pytest.fixture
def sample_accounts():
    """Candidate accounts as the application would supply them."""
    return [
        Account(id="acc-cash", name="Cash Wallet", type="cash"),
        Account(id="acc-hdfc", name="HDFC Savings", account_number="50100001234", type="bank"),
        Account(id="acc-icici", name="ICICI Card 9876", type="credit_card"),
    ]


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def today():
    """The frozen default transaction date used by engine and detector."""
    return TODAY


@pytest.fixture
def now():
    """The frozen clock used by the pending queue."""
    return NOW
