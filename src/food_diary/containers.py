"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from food_diary.adapters.fatsecret_auth import HttpxOAuthClient
from food_diary.adapters.fatsecret_client import HttpxFatSecretClient
from food_diary.adapters.sqlite_database import SqliteDatabase
from food_diary.adapters.sqlite_diary_repository import SqliteDiaryRepository
from food_diary.adapters.sqlite_favorites_repository import (
    SqliteFavoritesRepository,
)
from food_diary.config import Settings, parse_scopes
from food_diary.services.diary import DiaryService
from food_diary.services.favorites import FavoritesService
from food_diary.services.gateway import FoodRecipeGateway
from food_diary.services.tokens import TokenCache


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    database: SqliteDatabase
    token_cache: TokenCache
    gateway: FoodRecipeGateway
    diary_service: DiaryService
    favorites_service: FavoritesService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    database = SqliteDatabase(resolved_settings.db_path)
    oauth_client = HttpxOAuthClient.create(
        client_id=resolved_settings.fatsecret_client_id,
        client_secret=resolved_settings.fatsecret_client_secret,
        token_url=resolved_settings.fatsecret_oauth_url,
        timeout=resolved_settings.upstream_timeout_seconds,
    )
    fatsecret_client = HttpxFatSecretClient.create(
        base_url=resolved_settings.fatsecret_api_url,
        timeout=resolved_settings.upstream_timeout_seconds,
    )
    token_cache = TokenCache(exchanger=oauth_client)
    gateway = FoodRecipeGateway(
        client=fatsecret_client,
        token_cache=token_cache,
        default_region=resolved_settings.fatsecret_region or None,
        food_scopes=parse_scopes(resolved_settings.fatsecret_food_scopes),
        recipe_scopes=parse_scopes(resolved_settings.fatsecret_recipe_scopes),
    )
    diary_service = DiaryService(SqliteDiaryRepository(database))
    favorites_service = FavoritesService(
        repository=SqliteFavoritesRepository(database),
        gateway=gateway,
    )

    async def close_resources() -> None:
        await oauth_client.close()
        await fatsecret_client.close()

    return AppContainer(
        settings=resolved_settings,
        database=database,
        token_cache=token_cache,
        gateway=gateway,
        diary_service=diary_service,
        favorites_service=favorites_service,
        close_resources=close_resources,
    )
