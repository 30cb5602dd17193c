"""Meal diary service: validation, day views and summaries."""

import math
from dataclasses import dataclass
from datetime import date, datetime
from typing import Protocol

from food_diary.domain.diary import (
    DaySummaryRow,
    DayTotals,
    DayView,
    MealEntry,
    NewEntry,
    SummaryView,
)
from food_diary.domain.errors import InvalidPayloadError

WATER_MEAL = "water"
WATER_NAME = "Water"
_NUMERIC_FIELDS = ("amount", "calories", "protein", "carbohydrate", "fat", "water")
# Largest rowid SQLite can store.
MAX_ENTRY_ID = 2**63 - 1


class DiaryRepository(Protocol):
    """Persistence interface for diary entries."""

    def insert_entries(
        self, user_id: str, date: str, meal: str, items: list[NewEntry]
    ) -> None:
        """Insert a batch of entries atomically."""

    def list_day_entries(self, user_id: str, date: str) -> list[MealEntry]:
        """Return a day's entries in insertion order."""

    def sum_day_totals(self, user_id: str, date: str) -> DayTotals:
        """Return summed nutrition columns for a day."""

    def delete_entry(self, entry_id: int, user_id: str) -> bool:
        """Delete an entry owned by the user."""

    def list_summary(self, user_id: str, start: str, end: str) -> list[DaySummaryRow]:
        """Return per-date totals for dates that have entries."""


def to_date_only(value: object) -> str:
    """Normalize a date input to a local ``YYYY-MM-DD`` day.

    Missing or unparseable input means today. Timezone-aware datetimes are
    converted to local time before the day is taken.
    """
    raw = str(value).strip() if value is not None else ""
    if not raw:
        return date.today().isoformat()  # noqa: DTZ011
    try:
        parsed = datetime.fromisoformat(raw)
    except ValueError:
        return date.today().isoformat()  # noqa: DTZ011
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone()
    return parsed.date().isoformat()


def _required_text(value: object, field: str) -> str:
    text = str(value).strip() if value is not None else ""
    if not text:
        raise InvalidPayloadError(field, f"{field} is required")
    return text


def _non_negative(value: object, field: str) -> float:
    if value is None or value == "":
        return 0.0
    if isinstance(value, bool):
        raise InvalidPayloadError(field, f"{field} must be a number")
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise InvalidPayloadError(field, f"{field} must be a number") from exc
    if math.isnan(number) or math.isinf(number):
        raise InvalidPayloadError(field, f"{field} must be a number")
    if number < 0:
        raise InvalidPayloadError(field, f"{field} must not be negative")
    return number


def parse_item(index: int, raw: object) -> NewEntry:
    """Validate one incoming diary item."""
    if not isinstance(raw, dict):
        raise InvalidPayloadError(f"items[{index}]", "item must be an object")
    values = {
        name: _non_negative(raw.get(name), f"items[{index}].{name}")
        for name in _NUMERIC_FIELDS
    }
    unit = str(raw.get("unit") or "g").strip() or "g"
    return NewEntry(
        name=str(raw.get("name") or "").strip(),
        unit=unit,
        **values,
    )


@dataclass
class DiaryService:
    """Application service for the append-only meal diary."""

    repository: DiaryRepository

    def add_entries(
        self,
        user_id: object,
        entry_date: object,
        meal: object,
        items: object,
    ) -> DayView:
        """Insert a batch of items for one meal and return the day."""
        user = _required_text(user_id, "user_id")
        meal_name = _required_text(meal, "meal")
        if not isinstance(items, list) or not items:
            raise InvalidPayloadError("items", "items must be a non-empty list")
        entries = [parse_item(index, raw) for index, raw in enumerate(items)]
        day = to_date_only(entry_date)
        self.repository.insert_entries(user, day, meal_name, entries)
        view = self.get_day(user, day)
        return DayView(
            date=view.date, entries=view.entries, totals=view.totals, meal=meal_name
        )

    def add_water(self, user_id: object, entry_date: object, amount: object) -> DayView:
        """Log a water intake in millilitres."""
        user = _required_text(user_id, "user_id")
        millilitres = _non_negative(amount, "amount")
        if millilitres <= 0:
            raise InvalidPayloadError("amount", "amount must be positive")
        day = to_date_only(entry_date)
        water = NewEntry(
            name=WATER_NAME, amount=millilitres, unit="ml", water=millilitres
        )
        self.repository.insert_entries(user, day, WATER_MEAL, [water])
        return self.get_day(user, day)

    def get_day(self, user_id: object, entry_date: object) -> DayView:
        """Return a day's entries in insertion order with totals."""
        user = _required_text(user_id, "user_id")
        day = to_date_only(entry_date)
        return DayView(
            date=day,
            entries=self.repository.list_day_entries(user, day),
            totals=self.repository.sum_day_totals(user, day),
        )

    def delete_entry(self, entry_id: object, user_id: object) -> bool:
        """Delete one of the user's entries; missing ids are not an error."""
        user = _required_text(user_id, "user_id")
        try:
            parsed_id = int(str(entry_id).strip())
        except (TypeError, ValueError) as exc:
            raise InvalidPayloadError("id", "id must be an integer") from exc
        if parsed_id <= 0:
            raise InvalidPayloadError("id", "id must be positive")
        if parsed_id > MAX_ENTRY_ID:
            return False
        return self.repository.delete_entry(parsed_id, user)

    def get_summary(
        self, user_id: object, start: object, end: object
    ) -> SummaryView:
        """Return totals per date; days without entries are omitted."""
        user = _required_text(user_id, "user_id")
        start_day = to_date_only(start)
        end_day = to_date_only(end)
        return SummaryView(
            start=start_day,
            end=end_day,
            rows=self.repository.list_summary(user, start_day, end_day),
        )
