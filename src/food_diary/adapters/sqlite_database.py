"""SQLite connection handling and schema."""

import logging
import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path

from food_diary.domain.errors import StoreError

_logger = logging.getLogger(__name__)

SCHEMA = """
CREATE TABLE IF NOT EXISTS meal_entries (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    user_id TEXT NOT NULL,
    date TEXT NOT NULL,
    meal TEXT NOT NULL,
    name TEXT NOT NULL DEFAULT '',
    amount REAL NOT NULL DEFAULT 0 CHECK (amount >= 0),
    unit TEXT NOT NULL DEFAULT 'g',
    calories REAL NOT NULL DEFAULT 0 CHECK (calories >= 0),
    protein REAL NOT NULL DEFAULT 0 CHECK (protein >= 0),
    carbohydrate REAL NOT NULL DEFAULT 0 CHECK (carbohydrate >= 0),
    fat REAL NOT NULL DEFAULT 0 CHECK (fat >= 0),
    water REAL NOT NULL DEFAULT 0 CHECK (water >= 0),
    source TEXT NOT NULL DEFAULT 'manual',
    created_at TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_meal_entries_user_date
    ON meal_entries(user_id, date);

CREATE TABLE IF NOT EXISTS favorites (
    user_id TEXT NOT NULL,
    recipe_id TEXT NOT NULL,
    created_at TEXT NOT NULL,
    PRIMARY KEY (user_id, recipe_id)
);

CREATE INDEX IF NOT EXISTS idx_favorites_user_created
    ON favorites(user_id, created_at DESC);
"""

NOW_SQL = "strftime('%Y-%m-%d %H:%M:%f', 'now')"


@dataclass
class SqliteDatabase:
    """Opens short-lived connections to the diary database file."""

    path: Path

    def connect(self) -> sqlite3.Connection:
        """Open a connection with row access by column name."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(str(self.path))
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON;")
        return conn

    @contextmanager
    def connection(self) -> Iterator[sqlite3.Connection]:
        """Yield a connection; commit on success, roll back on error.

        Every statement issued inside the block belongs to one transaction.
        """
        try:
            conn = self.connect()
        except sqlite3.Error as exc:
            raise StoreError(f"Cannot open database: {exc}") from exc
        try:
            with conn:
                yield conn
        except sqlite3.Error as exc:
            _logger.exception("Database operation failed")
            raise StoreError(str(exc)) from exc
        finally:
            conn.close()

    def init_schema(self) -> None:
        """Apply the schema; safe to run on every startup."""
        with self.connection() as conn:
            conn.executescript(SCHEMA)

    def reset(self) -> None:
        """Delete the database file and recreate an empty schema."""
        if self.path.exists():
            self.path.unlink()
        self.init_schema()
        _logger.info("Database reset: %s", self.path.resolve())
