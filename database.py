"""
SQLite storage for documentation pages.

Statements commit immediately unless they run inside Database.transaction(),
which groups multi-statement page writes into one commit.
"""

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Optional


SCHEMA_PATH = Path(__file__).parent / "schema.sql"


class Database:
    """Connection wrapper for the page store."""

    def __init__(self, db_path: str = "fielddocs.db"):
        self.db_path = Path(db_path)
        self.connection: Optional[sqlite3.Connection] = None
        self._transaction_depth = 0

    def connect(self) -> sqlite3.Connection:
        """Open the connection on first use, with foreign keys enforced."""
        if self.connection is None:
            self.connection = sqlite3.connect(self.db_path)
            self.connection.row_factory = sqlite3.Row
            self.connection.execute("PRAGMA foreign_keys = ON")
        return self.connection

    def close(self):
        if self.connection:
            self.connection.close()
            self.connection = None

    def initialize_schema(self):
        """
        Apply schema.sql. Every statement is CREATE ... IF NOT EXISTS, so
        running it against an existing database is a no-op.

        Raises:
            FileNotFoundError: If schema.sql is missing
        """
        if not SCHEMA_PATH.exists():
            raise FileNotFoundError(f"Schema file not found: {SCHEMA_PATH}")

        conn = self.connect()
        conn.executescript(SCHEMA_PATH.read_text())
        conn.commit()

    @contextmanager
    def transaction(self):
        """
        Group writes into a single commit; roll everything back on error.

        Example:
            with db.transaction():
                db.execute("INSERT INTO doc_pages ...")
                db.execute("INSERT INTO page_blocks ...")
        """
        conn = self.connect()
        self._transaction_depth += 1
        try:
            yield self
        except BaseException:
            self._transaction_depth -= 1
            if self._transaction_depth == 0:
                conn.rollback()
            raise
        else:
            self._transaction_depth -= 1
            if self._transaction_depth == 0:
                conn.commit()

    def execute(self, query: str, params: tuple = ()):
        """
        Execute a single query.

        Returns:
            Cursor object with results
        """
        conn = self.connect()
        cursor = conn.cursor()
        cursor.execute(query, params)
        if self._transaction_depth == 0:
            conn.commit()
        return cursor

    def fetch_all(self, query: str, params: tuple = ()) -> list:
        return self.execute(query, params).fetchall()

    def fetch_one(self, query: str, params: tuple = ()) -> Optional[sqlite3.Row]:
        return self.execute(query, params).fetchone()

    def __enter__(self):
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


def open_database(db_path: str = "fielddocs.db") -> Database:
    """
    Open a page store, creating its tables if needed.

    Args:
        db_path: Path for the database file

    Returns:
        Connected Database instance
    """
    db = Database(db_path)
    db.initialize_schema()
    return db
