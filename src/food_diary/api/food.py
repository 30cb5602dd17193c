"""Food search and barcode endpoints."""

from __future__ import annotations

from dataclasses import asdict
from typing import TYPE_CHECKING

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from food_diary.domain.errors import NotFoundError
from food_diary.services.gateway import parse_flag
from food_diary.services.normalizer import normalize_food

if TYPE_CHECKING:
    from food_diary.containers import AppContainer

router = APIRouter(prefix="/api/food", tags=["food"])


@router.get("/search")
async def search_foods(  # noqa: PLR0913
    request: Request,
    query: str | None = None,
    page: str | None = None,
    max_results: str | None = None,
    flag_default_serving: str | None = None,
    region: str | None = None,
    language: str | None = None,
) -> JSONResponse:
    """Search packaged foods; the upstream payload is passed through."""
    container: AppContainer = request.app.state.container
    payload = await container.gateway.search_foods(
        query,
        page,
        max_results,
        flag_default_serving=flag_default_serving,
        region=region,
        language=language,
    )
    return JSONResponse(payload)


@router.get("/{barcode}")
async def food_by_barcode(
    barcode: str,
    request: Request,
    region: str | None = None,
    language: str | None = None,
    normalized: str | None = None,
) -> JSONResponse:
    """Resolve a scanned barcode and return the food record."""
    container: AppContainer = request.app.state.container
    food_id = await container.gateway.lookup_food_by_barcode(barcode, region)
    payload = await container.gateway.get_food(
        food_id, region=region, language=language
    )
    if not parse_flag(normalized):
        return JSONResponse(payload)
    food = normalize_food(payload)
    if food is None:
        raise NotFoundError("Food not found")
    return JSONResponse(asdict(food))
