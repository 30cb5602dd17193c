"""Recipe search, detail and favorites endpoints."""

from __future__ import annotations

from dataclasses import asdict
from typing import TYPE_CHECKING

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from food_diary.api.models import FavoriteRequest
from food_diary.domain.errors import NotFoundError
from food_diary.services.gateway import parse_flag
from food_diary.services.normalizer import normalize_recipe

if TYPE_CHECKING:
    from food_diary.containers import AppContainer

router = APIRouter(prefix="/api/recipes", tags=["recipes"])


@router.get("/search")
async def search_recipes(  # noqa: PLR0913
    request: Request,
    query: str | None = None,
    page: str | None = None,
    max_results: str | None = None,
    sort_by: str | None = None,
    must_have_images: str | None = None,
) -> JSONResponse:
    """Search recipes; the upstream payload is passed through."""
    container: AppContainer = request.app.state.container
    payload = await container.gateway.search_recipes(
        query,
        page,
        max_results,
        sort_by,
        must_have_images=must_have_images,
    )
    return JSONResponse(payload)


@router.get("/favorites")
async def list_favorites(
    request: Request, user_id: str | None = None, expand: str | None = None
) -> dict[str, object]:
    """List a user's favorites, optionally with recipe metadata."""
    container: AppContainer = request.app.state.container
    service = container.favorites_service
    if parse_flag(expand):
        favorites = await service.list_expanded(user_id)
    else:
        favorites = service.list_favorites(user_id)
    return {"favorites": [asdict(favorite) for favorite in favorites]}


@router.get("/favorite/check")
async def check_favorite(
    request: Request, user_id: str | None = None, recipe_id: str | None = None
) -> dict[str, bool]:
    """Return whether the recipe is in the user's favorites."""
    container: AppContainer = request.app.state.container
    return {
        "isFavorite": container.favorites_service.is_favorite(user_id, recipe_id)
    }


@router.post("/favorite")
async def add_favorite(body: FavoriteRequest, request: Request) -> dict[str, bool]:
    """Bookmark a recipe."""
    container: AppContainer = request.app.state.container
    inserted = container.favorites_service.add_favorite(body.user_id, body.recipe_id)
    return {"ok": True, "inserted": inserted}


@router.delete("/favorite")
async def remove_favorite(
    request: Request, user_id: str | None = None, recipe_id: str | None = None
) -> dict[str, bool]:
    """Remove a bookmark."""
    container: AppContainer = request.app.state.container
    deleted = container.favorites_service.remove_favorite(user_id, recipe_id)
    return {"ok": True, "deleted": deleted}


@router.get("/{recipe_id}")
async def get_recipe(
    recipe_id: str, request: Request, normalized: str | None = None
) -> JSONResponse:
    """Return a recipe record, raw or normalized."""
    container: AppContainer = request.app.state.container
    payload = await container.gateway.get_recipe_by_id(recipe_id)
    if not parse_flag(normalized):
        return JSONResponse(payload)
    recipe = normalize_recipe(payload)
    if recipe is None:
        raise NotFoundError("Recipe not found")
    return JSONResponse(asdict(recipe))
