"""
DuckDB access for the local settings file

One DatabaseManager owns at most one connection. Writes go through
``transaction`` so a failed batch leaves the table as it was.
"""

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

import duckdb


SETTINGS_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS settings (
    key VARCHAR PRIMARY KEY,
    value VARCHAR NOT NULL,
    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
)
"""

logger = logging.getLogger(__name__)


class DatabaseConnectionError(Exception):
    """Raised when the settings database cannot be opened or used"""
    pass


class DatabaseManager:
    """Holds the DuckDB connection used by the settings store"""

    def __init__(self):
        self._connection: Optional[duckdb.DuckDBPyConnection] = None
        self.db_path: Optional[Path] = None

    @property
    def is_connected(self) -> bool:
        return self._connection is not None

    def connect(self, db_path: Path) -> duckdb.DuckDBPyConnection:
        """
        Open the database file, creating its directory on first use

        Args:
            db_path: Location of the DuckDB file

        Returns:
            The open connection

        Raises:
            DatabaseConnectionError: If already connected or DuckDB refuses the file
        """
        if self._connection is not None:
            raise DatabaseConnectionError(f"Already connected to {self.db_path}. Close it first.")

        db_path = Path(db_path)
        try:
            db_path.parent.mkdir(parents=True, exist_ok=True)
            self._connection = duckdb.connect(str(db_path))
        except (OSError, duckdb.Error) as e:
            raise DatabaseConnectionError(f"Failed to open settings database {db_path}: {e}")

        self.db_path = db_path
        logger.debug(f"Opened settings database {db_path}")
        return self._connection

    def close(self) -> None:
        if self._connection is None:
            return
        try:
            self._connection.close()
        except duckdb.Error as e:
            logger.warning(f"Error closing settings database {self.db_path}: {e}")
        finally:
            self._connection = None

    def ensure_schema(self) -> None:
        """Create the settings table if this is a new file"""
        connection = self._require_connection()
        try:
            connection.execute(SETTINGS_TABLE_SQL)
        except duckdb.Error as e:
            raise DatabaseConnectionError(f"Failed to create settings table: {e}")

    @contextmanager
    def transaction(self) -> Iterator[duckdb.DuckDBPyConnection]:
        """
        Run the enclosed statements as one unit

        Commits when the block exits normally, rolls back and re-raises otherwise.
        """
        connection = self._require_connection()
        connection.begin()
        try:
            yield connection
        except Exception:
            connection.rollback()
            raise
        else:
            connection.commit()

    def execute_batch(self, query: str, rows: Iterable[Sequence]) -> int:
        """
        Execute one statement per parameter row inside a single transaction

        Returns:
            Number of rows executed
        """
        count = 0
        with self.transaction() as connection:
            for params in rows:
                connection.execute(query, params)
                count += 1
        return count

    def query(self, sql: str, params: Sequence = ()) -> List[Tuple]:
        return self._require_connection().execute(sql, params).fetchall()

    def _require_connection(self) -> duckdb.DuckDBPyConnection:
        if self._connection is None:
            raise DatabaseConnectionError("No active database connection")
        return self._connection
