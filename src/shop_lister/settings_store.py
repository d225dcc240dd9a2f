"""
SettingsStore module for persisting the API endpoint and credentials
"""

import logging
from datetime import datetime
from typing import Dict, Optional

from shop_lister.database_manager import DatabaseManager, DatabaseConnectionError


ENDPOINT_URL_KEY = "endpoint_url"
API_KEY_KEY = "api_key"
API_SECRET_KEY = "api_secret"

SETTINGS_KEYS = (ENDPOINT_URL_KEY, API_KEY_KEY, API_SECRET_KEY)

logger = logging.getLogger(__name__)


class SettingsStore:
    """Key/value settings persisted in a DuckDB table"""

    def __init__(self, database_manager: DatabaseManager):
        self.db_manager = database_manager

    def get(self, key: str) -> Optional[str]:
        """
        Read one stored setting

        Args:
            key: Setting name

        Returns:
            Stored value, or None when the key was never saved
        """
        rows = self.db_manager.query("SELECT value FROM settings WHERE key = ?", (key,))
        if not rows:
            return None
        return rows[0][0]

    def get_all(self) -> Dict[str, str]:
        """
        Read every known setting in a single query

        Returns:
            Dictionary of setting name to value, absent keys omitted
        """
        rows = self.db_manager.query("SELECT key, value FROM settings")
        return {key: value for key, value in rows if key in SETTINGS_KEYS}

    def save(self, values: Dict[str, Optional[str]]) -> None:
        """
        Insert or update settings in one transaction

        Args:
            values: Setting name to value; None values are skipped

        Raises:
            ValueError: If a key is not a known setting
        """
        unknown = [key for key in values if key not in SETTINGS_KEYS]
        if unknown:
            raise ValueError(f"Unknown settings: {', '.join(unknown)}")

        upsert_sql = """
        INSERT INTO settings (key, value, updated_at) VALUES (?, ?, ?)
        ON CONFLICT (key) DO UPDATE SET
            value = EXCLUDED.value,
            updated_at = EXCLUDED.updated_at
        """

        now = datetime.now()
        rows = [(key, value, now) for key, value in values.items() if value is not None]
        saved = self.db_manager.execute_batch(upsert_sql, rows)
        logger.info(f"Saved {saved} setting(s): {', '.join(row[0] for row in rows)}")

    def clear(self) -> None:
        """Remove every stored setting"""
        self.db_manager.execute_batch("DELETE FROM settings", [()])
        logger.info("Cleared stored settings")


def open_settings_store(database_manager: DatabaseManager, db_path) -> SettingsStore:
    """
    Connect to the settings database and make sure the schema exists

    Args:
        database_manager: Manager that will own the connection
        db_path: Path to the DuckDB file

    Returns:
        SettingsStore bound to the open connection

    Raises:
        DatabaseConnectionError: If the database cannot be opened
    """
    database_manager.connect(db_path)
    try:
        database_manager.ensure_schema()
    except DatabaseConnectionError:
        database_manager.close()
        raise
    return SettingsStore(database_manager)
