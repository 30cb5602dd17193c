"""Domain models for the meal diary."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class NewEntry:
    """A validated diary item ready to be inserted."""

    name: str
    amount: float
    unit: str
    calories: float = 0.0
    protein: float = 0.0
    carbohydrate: float = 0.0
    fat: float = 0.0
    water: float = 0.0
    source: str = "manual"


@dataclass(frozen=True)
class MealEntry:
    """A stored diary row. Entries are never updated in place."""

    id: int
    user_id: str
    date: str
    meal: str
    name: str
    amount: float
    unit: str
    calories: float
    protein: float
    carbohydrate: float
    fat: float
    water: float
    source: str
    created_at: str


@dataclass(frozen=True)
class DayTotals:
    """Summed nutrition columns for a set of entries."""

    calories: float = 0.0
    protein: float = 0.0
    carbohydrate: float = 0.0
    fat: float = 0.0
    water: float = 0.0


@dataclass(frozen=True)
class DaySummaryRow:
    """Totals for one date that has at least one entry."""

    date: str
    calories: float
    protein: float
    carbohydrate: float
    fat: float
    water: float


@dataclass(frozen=True)
class DayView:
    """Entries and totals for a single user day."""

    date: str
    entries: list[MealEntry] = field(default_factory=list)
    totals: DayTotals = field(default_factory=DayTotals)
    meal: str | None = None


@dataclass(frozen=True)
class SummaryView:
    """Per-date totals for a date range."""

    start: str
    end: str
    rows: list[DaySummaryRow] = field(default_factory=list)
