"""SQLite repository for recipe favorites."""

from dataclasses import dataclass

from food_diary.adapters.sqlite_database import NOW_SQL, SqliteDatabase
from food_diary.domain.favorites import Favorite
from food_diary.services.favorites import FavoritesRepository


@dataclass
class SqliteFavoritesRepository(FavoritesRepository):
    """SQLite implementation for favorites."""

    database: SqliteDatabase

    def add(self, user_id: str, recipe_id: str) -> bool:
        """Insert a favorite unless it already exists."""
        with self.database.connection() as conn:
            cursor = conn.execute(
                "INSERT OR IGNORE INTO favorites (user_id, recipe_id, created_at) "
                f"VALUES (?, ?, {NOW_SQL})",  # noqa: S608
                (user_id, recipe_id),
            )
        return cursor.rowcount > 0

    def remove(self, user_id: str, recipe_id: str) -> bool:
        """Delete a favorite; report whether a row was removed."""
        with self.database.connection() as conn:
            cursor = conn.execute(
                "DELETE FROM favorites WHERE user_id = ? AND recipe_id = ?",
                (user_id, recipe_id),
            )
        return cursor.rowcount > 0

    def exists(self, user_id: str, recipe_id: str) -> bool:
        """Return whether the favorite exists."""
        with self.database.connection() as conn:
            row = conn.execute(
                "SELECT 1 FROM favorites WHERE user_id = ? AND recipe_id = ? LIMIT 1",
                (user_id, recipe_id),
            ).fetchone()
        return row is not None

    def list_for_user(self, user_id: str) -> list[Favorite]:
        """Return the user's favorites, newest first."""
        with self.database.connection() as conn:
            rows = conn.execute(
                "SELECT recipe_id, created_at FROM favorites WHERE user_id = ? "
                "ORDER BY created_at DESC, rowid DESC",
                (user_id,),
            ).fetchall()
        return [
            Favorite(recipe_id=row["recipe_id"], created_at=row["created_at"])
            for row in rows
        ]
