"""Shared test fixtures."""

from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

import pytest

from food_diary.adapters.fatsecret_client import FatSecretClient, UpstreamResponse
from food_diary.adapters.sqlite_database import SqliteDatabase
from food_diary.adapters.sqlite_diary_repository import SqliteDiaryRepository
from food_diary.adapters.sqlite_favorites_repository import (
    SqliteFavoritesRepository,
)
from food_diary.config import Settings
from food_diary.containers import AppContainer
from food_diary.services.diary import DiaryService
from food_diary.services.favorites import FavoritesService
from food_diary.services.gateway import FoodRecipeGateway
from food_diary.services.tokens import TokenCache, TokenExchanger, TokenGrant

FIXED_NOW = 1_700_000_000.0


@dataclass
class FakeClock:
    """Manually advanced clock returning epoch seconds."""

    now: float = FIXED_NOW

    def __call__(self) -> float:
        return self.now


@dataclass
class FakeTokenExchanger(TokenExchanger):
    """Token exchanger that counts exchanges per scope key."""

    expires_in: int | None = 3600
    error: Exception | None = None
    calls: list[str] = field(default_factory=list)

    async def exchange(self, scope: str) -> TokenGrant:
        self.calls.append(scope)
        if self.error is not None:
            raise self.error
        return TokenGrant(
            access_token=f"token-{len(self.calls)}", expires_in=self.expires_in
        )


@dataclass
class FakeFatSecretClient(FatSecretClient):
    """FatSecret client returning queued or routed responses."""

    queued: dict[str, list[UpstreamResponse]] = field(default_factory=dict)
    handler: Callable[[str, dict[str, str]], UpstreamResponse] | None = None
    calls: list[tuple[str, dict[str, str], str]] = field(default_factory=list)

    def queue(self, path: str, payload: object, status_code: int = 200) -> None:
        text = "" if payload is None else "{}"
        self.queued.setdefault(path, []).append(
            UpstreamResponse(status_code=status_code, payload=payload, text=text)
        )

    async def get(
        self, path: str, params: dict[str, str], token: str
    ) -> UpstreamResponse:
        self.calls.append((path, params, token))
        queue = self.queued.get(path)
        if queue:
            return queue.pop(0)
        if self.handler is not None:
            return self.handler(path, params)
        return UpstreamResponse(status_code=200, payload={})


def recipe_payload(recipe_id: str, name: str, **extra: object) -> dict[str, object]:
    """Build a recipe/v2 style response."""
    return {"recipe": {"recipe_id": recipe_id, "recipe_name": name, **extra}}


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        fatsecret_client_id="client-id",
        fatsecret_client_secret="client-secret",
        fatsecret_region="FI",
        db_path=tmp_path / "meals.db",
    )


@pytest.fixture
def database(tmp_path: Path) -> SqliteDatabase:
    db = SqliteDatabase(tmp_path / "meals.db")
    db.init_schema()
    return db


@pytest.fixture
def exchanger() -> FakeTokenExchanger:
    return FakeTokenExchanger()


@pytest.fixture
def fatsecret_client() -> FakeFatSecretClient:
    return FakeFatSecretClient()


@pytest.fixture
def token_cache(exchanger: FakeTokenExchanger) -> TokenCache:
    return TokenCache(exchanger=exchanger, clock=FakeClock())


@pytest.fixture
def gateway(
    fatsecret_client: FakeFatSecretClient, token_cache: TokenCache
) -> FoodRecipeGateway:
    return FoodRecipeGateway(
        client=fatsecret_client,
        token_cache=token_cache,
        default_region="FI",
        food_scopes=frozenset({"basic", "barcode"}),
        recipe_scopes=frozenset(),
        clock=FakeClock(),
    )


@pytest.fixture
def diary_service(database: SqliteDatabase) -> DiaryService:
    return DiaryService(SqliteDiaryRepository(database))


@pytest.fixture
def favorites_service(
    database: SqliteDatabase, gateway: FoodRecipeGateway
) -> FavoritesService:
    return FavoritesService(
        repository=SqliteFavoritesRepository(database), gateway=gateway
    )


@pytest.fixture
def container(
    settings: Settings,
    database: SqliteDatabase,
    token_cache: TokenCache,
    gateway: FoodRecipeGateway,
    diary_service: DiaryService,
    favorites_service: FavoritesService,
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        database=database,
        token_cache=token_cache,
        gateway=gateway,
        diary_service=diary_service,
        favorites_service=favorites_service,
        close_resources=close_resources,
    )
