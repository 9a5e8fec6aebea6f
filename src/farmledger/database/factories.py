"""Factories for opening the record store."""

import logging
import os
from pathlib import Path
from typing import Optional

from farmledger.database.sqlalchemy_db import SQLAlchemyDatabase

logger = logging.getLogger(__name__)

DB_PATH_ENV = "FARMLEDGER_DB_PATH"


def default_database_path() -> Path:
    return Path.home() / ".farmledger" / "farmledger.db"


def resolve_database_path(database_path: Optional[str] = None) -> Path:
    """Pick the SQLite file to use.

    An explicit path wins, then the FARMLEDGER_DB_PATH environment variable,
    then ~/.farmledger/farmledger.db. The parent directory is created if
    it is missing.
    """
    if not database_path:
        database_path = os.environ.get(DB_PATH_ENV) or None

    path = Path(database_path).expanduser() if database_path else default_database_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a SQLite-backed store.

    Args:
        database_path: Path to the SQLite file (see resolve_database_path)

    Returns:
        SQLAlchemyDatabase instance, not yet connected
    """
    path = resolve_database_path(database_path)
    logger.debug("Using database at %s", path)
    return SQLAlchemyDatabase(f"sqlite:///{path}")
