"""Construction of the ledger database used by the CLI and the tests."""

import os
from pathlib import Path
from typing import Optional

from smsledger.database.sqlalchemy_db import SQLAlchemyDatabase

DB_PATH_ENVVAR = "SMSLEDGER_DB_PATH"


def default_database_path() -> Path:
    """Location of the ledger when neither --db-path nor SMSLEDGER_DB_PATH is set."""
    return Path.home() / ".smsledger" / "smsledger.db"


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Open the SQLite file holding rules, bank mappings, the classifier model and the pending queue.

    Args:
        database_path: Explicit file path. Falls back to SMSLEDGER_DB_PATH, then
            to ~/.smsledger/smsledger.db (whose directory is created on demand)

    Returns:
        SQLAlchemyDatabase bound to the file
    """
    path = database_path or os.environ.get(DB_PATH_ENVVAR)
    if path is None:
        default = default_database_path()
        default.parent.mkdir(parents=True, exist_ok=True)
        path = str(default)

    return SQLAlchemyDatabase(f"sqlite:///{path}")
