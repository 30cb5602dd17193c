"""SQLite repository for meal diary entries."""

import sqlite3
from dataclasses import dataclass

from food_diary.adapters.sqlite_database import NOW_SQL, SqliteDatabase
from food_diary.domain.diary import DaySummaryRow, DayTotals, MealEntry, NewEntry
from food_diary.services.diary import DiaryRepository

_INSERT_ENTRY = f"""
INSERT INTO meal_entries
    (user_id, date, meal, name, amount, unit, calories, protein, carbohydrate,
     fat, water, source, created_at)
VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, {NOW_SQL})
"""  # noqa: S608

_LIST_DAY_ENTRIES = """
SELECT id, user_id, date, meal, name, amount, unit, calories, protein,
       carbohydrate, fat, water, source, created_at
FROM meal_entries
WHERE user_id = ? AND date = ?
ORDER BY created_at ASC, id ASC
"""

_SUM_DAY_TOTALS = """
SELECT COALESCE(SUM(calories), 0) AS calories,
       COALESCE(SUM(protein), 0) AS protein,
       COALESCE(SUM(carbohydrate), 0) AS carbohydrate,
       COALESCE(SUM(fat), 0) AS fat,
       COALESCE(SUM(water), 0) AS water
FROM meal_entries
WHERE user_id = ? AND date = ?
"""

_LIST_SUMMARY = """
SELECT date,
       COALESCE(SUM(calories), 0) AS calories,
       COALESCE(SUM(protein), 0) AS protein,
       COALESCE(SUM(carbohydrate), 0) AS carbohydrate,
       COALESCE(SUM(fat), 0) AS fat,
       COALESCE(SUM(water), 0) AS water
FROM meal_entries
WHERE user_id = ? AND date BETWEEN ? AND ?
GROUP BY date
ORDER BY date ASC
"""

_DELETE_ENTRY = "DELETE FROM meal_entries WHERE id = ? AND user_id = ?"


@dataclass
class SqliteDiaryRepository(DiaryRepository):
    """SQLite implementation for diary entries."""

    database: SqliteDatabase

    def insert_entries(
        self, user_id: str, date: str, meal: str, items: list[NewEntry]
    ) -> None:
        """Insert all items in input order within one transaction."""
        rows = [
            (
                user_id,
                date,
                meal,
                item.name,
                item.amount,
                item.unit,
                item.calories,
                item.protein,
                item.carbohydrate,
                item.fat,
                item.water,
                item.source,
            )
            for item in items
        ]
        with self.database.connection() as conn:
            for row in rows:
                conn.execute(_INSERT_ENTRY, row)

    def list_day_entries(self, user_id: str, date: str) -> list[MealEntry]:
        """Return a day's entries, oldest first."""
        with self.database.connection() as conn:
            rows = conn.execute(_LIST_DAY_ENTRIES, (user_id, date)).fetchall()
        return [_parse_entry(row) for row in rows]

    def sum_day_totals(self, user_id: str, date: str) -> DayTotals:
        """Return summed nutrition columns for a day."""
        with self.database.connection() as conn:
            row = conn.execute(_SUM_DAY_TOTALS, (user_id, date)).fetchone()
        return DayTotals(
            calories=float(row["calories"]),
            protein=float(row["protein"]),
            carbohydrate=float(row["carbohydrate"]),
            fat=float(row["fat"]),
            water=float(row["water"]),
        )

    def delete_entry(self, entry_id: int, user_id: str) -> bool:
        """Delete an entry owned by the user; report whether it existed."""
        with self.database.connection() as conn:
            cursor = conn.execute(_DELETE_ENTRY, (entry_id, user_id))
        return cursor.rowcount > 0

    def list_summary(self, user_id: str, start: str, end: str) -> list[DaySummaryRow]:
        """Return one totals row per date with entries in the range."""
        with self.database.connection() as conn:
            rows = conn.execute(_LIST_SUMMARY, (user_id, start, end)).fetchall()
        return [
            DaySummaryRow(
                date=row["date"],
                calories=float(row["calories"]),
                protein=float(row["protein"]),
                carbohydrate=float(row["carbohydrate"]),
                fat=float(row["fat"]),
                water=float(row["water"]),
            )
            for row in rows
        ]


def _parse_entry(row: sqlite3.Row) -> MealEntry:
    return MealEntry(
        id=int(row["id"]),
        user_id=row["user_id"],
        date=row["date"],
        meal=row["meal"],
        name=row["name"],
        amount=float(row["amount"]),
        unit=row["unit"],
        calories=float(row["calories"]),
        protein=float(row["protein"]),
        carbohydrate=float(row["carbohydrate"]),
        fat=float(row["fat"]),
        water=float(row["water"]),
        source=row["source"],
        created_at=row["created_at"],
    )
