"""Recipe favorites service."""

import asyncio
import logging
from dataclasses import dataclass
from typing import Protocol

from food_diary.domain.errors import (
    InvalidPayloadError,
    NotFoundError,
    UpstreamAuthError,
    UpstreamError,
    UpstreamUnavailableError,
)
from food_diary.domain.favorites import Favorite, FavoriteRecipe
from food_diary.services.gateway import FoodRecipeGateway
from food_diary.services.normalizer import normalize_recipe

_logger = logging.getLogger(__name__)

_FETCH_ERRORS = (
    NotFoundError,
    UpstreamAuthError,
    UpstreamError,
    UpstreamUnavailableError,
)


class FavoritesRepository(Protocol):
    """Persistence interface for favorites."""

    def add(self, user_id: str, recipe_id: str) -> bool:
        """Insert a favorite; return whether a row was created."""

    def remove(self, user_id: str, recipe_id: str) -> bool:
        """Delete a favorite; return whether a row was removed."""

    def exists(self, user_id: str, recipe_id: str) -> bool:
        """Return whether the favorite exists."""

    def list_for_user(self, user_id: str) -> list[Favorite]:
        """Return favorites newest first."""


def _required(value: object, field: str) -> str:
    text = str(value).strip() if value is not None else ""
    if not text:
        raise InvalidPayloadError(field, f"{field} is required")
    return text


@dataclass
class FavoritesService:
    """Application service for recipe bookmarks."""

    repository: FavoritesRepository
    gateway: FoodRecipeGateway

    def add_favorite(self, user_id: object, recipe_id: object) -> bool:
        """Bookmark a recipe; adding twice is a no-op."""
        return self.repository.add(
            _required(user_id, "user_id"), _required(recipe_id, "recipe_id")
        )

    def remove_favorite(self, user_id: object, recipe_id: object) -> bool:
        """Remove a bookmark; removing twice is a no-op."""
        return self.repository.remove(
            _required(user_id, "user_id"), _required(recipe_id, "recipe_id")
        )

    def is_favorite(self, user_id: object, recipe_id: object) -> bool:
        """Check whether a recipe is bookmarked."""
        return self.repository.exists(
            _required(user_id, "user_id"), _required(recipe_id, "recipe_id")
        )

    def list_favorites(self, user_id: object) -> list[Favorite]:
        """Return raw favorites newest first."""
        return self.repository.list_for_user(_required(user_id, "user_id"))

    async def list_expanded(self, user_id: object) -> list[FavoriteRecipe]:
        """Return favorites with recipe metadata, skipping failed fetches."""
        favorites = self.list_favorites(user_id)
        results = await asyncio.gather(
            *(self._expand(favorite) for favorite in favorites)
        )
        return [recipe for recipe in results if recipe is not None]

    async def _expand(self, favorite: Favorite) -> FavoriteRecipe | None:
        try:
            payload = await self.gateway.get_recipe_by_id(favorite.recipe_id)
        except _FETCH_ERRORS as exc:
            _logger.warning(
                "Dropping favorite %s from listing: %s", favorite.recipe_id, exc
            )
            return None
        recipe = normalize_recipe(payload)
        if recipe is None:
            _logger.warning("Dropping favorite %s: empty record", favorite.recipe_id)
            return None
        return FavoriteRecipe(
            id=recipe.id or favorite.recipe_id,
            name=recipe.name,
            description=recipe.description,
            image=recipe.image,
            created_at=favorite.created_at,
        )
