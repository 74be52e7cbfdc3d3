"""
Read-only database connections for AddressBook sources

Usage:
    db = ContactsDatabase(path)
    rows = db.execute("SELECT ZFIRSTNAME FROM ZABCDRECORD WHERE ZLASTNAME LIKE ?", ("%doe%",))
    db.close()
"""

import logging
import sqlite3
from pathlib import Path
from typing import List, Dict, Any, Optional, Sequence, Union

logger = logging.getLogger(__name__)


class DatabaseAccessError(Exception):
    """Error opening a contacts database."""
    pass


class ContactsDatabase:
    """
    A read-only SQLite connection to one AddressBook database.

    The connection stays open until close() is called so it can be reused
    across many searches. It is opened with check_same_thread disabled so the
    concurrent aggregator may query it from a worker thread; the connection is
    never written to.
    """

    def __init__(self, db_path: Union[str, Path]):
        self.db_path = Path(db_path)
        self._conn: Optional[sqlite3.Connection] = None

        try:
            conn = sqlite3.connect(
                f"file:{self.db_path}?mode=ro",
                uri=True,
                check_same_thread=False,
            )
        except sqlite3.Error as e:
            raise DatabaseAccessError(
                f"Cannot open contacts database {self.db_path}: {e}"
            ) from e

        conn.row_factory = sqlite3.Row
        self._conn = conn

    def __repr__(self):
        return f"ContactsDatabase(path='{self.db_path}')"

    def __enter__(self) -> 'ContactsDatabase':
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def closed(self) -> bool:
        return self._conn is None

    def _connection(self) -> sqlite3.Connection:
        if self._conn is None:
            raise sqlite3.ProgrammingError(f"Database {self.db_path} is closed")
        return self._conn

    def execute(self, query: str, params: Sequence[Any] = ()) -> List[Dict[str, Any]]:
        """Execute a SELECT query and return results as list of dicts"""
        cursor = self._connection().execute(query, tuple(params))
        try:
            return [dict(row) for row in cursor.fetchall()]
        finally:
            cursor.close()

    def execute_one(self, query: str, params: Sequence[Any] = ()) -> Optional[Dict[str, Any]]:
        """Execute a SELECT query and return single result"""
        cursor = self._connection().execute(query, tuple(params))
        try:
            row = cursor.fetchone()
            return dict(row) if row else None
        finally:
            cursor.close()

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None
            logger.debug("Closed contacts database %s", self.db_path)
