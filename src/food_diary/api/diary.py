"""Meal diary endpoints."""

from __future__ import annotations

from dataclasses import asdict
from typing import TYPE_CHECKING

from fastapi import APIRouter, Query, Request

from food_diary.api.models import AddManyRequest, AddWaterRequest

if TYPE_CHECKING:
    from food_diary.containers import AppContainer
    from food_diary.domain.diary import DayView

router = APIRouter(prefix="/api/diary", tags=["diary"])


def _day_payload(view: DayView) -> dict[str, object]:
    return {
        "date": view.date,
        "entries": [asdict(entry) for entry in view.entries],
        "totals": asdict(view.totals),
    }


@router.post("/add-many")
async def add_many(body: AddManyRequest, request: Request) -> dict[str, object]:
    """Log several items for one meal in a single transaction."""
    container: AppContainer = request.app.state.container
    view = container.diary_service.add_entries(
        body.user_id, body.date, body.meal, body.items
    )
    return {"ok": True, "meal": view.meal, **_day_payload(view)}


@router.post("/add-water")
async def add_water(body: AddWaterRequest, request: Request) -> dict[str, object]:
    """Log a water intake."""
    container: AppContainer = request.app.state.container
    view = container.diary_service.add_water(body.user_id, body.date, body.amount)
    return {"ok": True, **_day_payload(view)}


@router.get("/day")
async def get_day(
    request: Request, user_id: str | None = None, date: str | None = None
) -> dict[str, object]:
    """Return a day's entries and totals."""
    container: AppContainer = request.app.state.container
    return _day_payload(container.diary_service.get_day(user_id, date))


@router.delete("/entry/{entry_id}")
async def delete_entry(
    entry_id: str, request: Request, user_id: str | None = None
) -> dict[str, bool]:
    """Delete one of the user's entries."""
    container: AppContainer = request.app.state.container
    deleted = container.diary_service.delete_entry(entry_id, user_id)
    return {"ok": True, "deleted": deleted}


@router.get("/summary")
async def get_summary(
    request: Request,
    user_id: str | None = None,
    start: str | None = Query(default=None, alias="from"),
    end: str | None = Query(default=None, alias="to"),
) -> dict[str, object]:
    """Return per-date totals for a date range."""
    container: AppContainer = request.app.state.container
    summary = container.diary_service.get_summary(user_id, start, end)
    return {
        "from": summary.start,
        "to": summary.end,
        "rows": [asdict(row) for row in summary.rows],
    }
