"""SQLAlchemy models for smsledger database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    DateTime,
    Date,
    Numeric,
    Boolean,
    Float,
    create_engine,
)
from sqlalchemy.orm import declarative_base, sessionmaker, Session

Base = declarative_base()


class CustomRule(Base):
    """User-authored override rule model."""

    __tablename__ = "custom_rules"

    id = Column(Integer, primary_key=True, autoincrement=True)
    pattern = Column(String, nullable=False)
    is_regex = Column(Boolean, default=False, nullable=False)
    type = Column(String, default="expense", nullable=False)
    category = Column(String, default="Other", nullable=False)
    account_id = Column(String, nullable=True)
    bank_name = Column(String, nullable=True)
    description = Column(String, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class BankAccountMapping(Base):
    """Account remembered for a bank, keyed by lowercased bank name."""

    __tablename__ = "bank_account_mappings"

    bank_key = Column(String, primary_key=True)
    account_id = Column(String, nullable=False)


class CategoryMapping(Base):
    """Learned description to category mapping."""

    __tablename__ = "category_mappings"

    description = Column(String, primary_key=True)
    category = Column(String, nullable=False)


class CategoryFrequency(Base):
    """Number of times a category was taught to the classifier."""

    __tablename__ = "category_frequencies"

    category = Column(String, primary_key=True)
    count = Column(Integer, default=0, nullable=False)


class PendingTransaction(Base):
    """Detected transaction waiting for confirmation."""

    __tablename__ = "pending_transactions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    date = Column(Date, nullable=False)
    description = Column(String, nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    category = Column(String, nullable=False)
    account_id = Column(String, nullable=True)
    type = Column(String, nullable=False)
    confidence = Column(Integer, nullable=False)
    category_confidence = Column(Float, nullable=False)
    bank_name = Column(String, nullable=True)
    raw_text = Column(String, nullable=False)
    source = Column(String, nullable=False)
    status = Column(String, default="pending", nullable=False)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(UTC), nullable=False)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
