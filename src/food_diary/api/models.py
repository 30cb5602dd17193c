"""Pydantic models for JSON request bodies."""

from typing import Any

from pydantic import BaseModel


class AddManyRequest(BaseModel):
    """Batch of diary items for one meal."""

    user_id: str | int | None = None
    date: str | None = None
    meal: str | None = None
    items: list[Any] | None = None


class AddWaterRequest(BaseModel):
    """Water intake in millilitres."""

    user_id: str | int | None = None
    date: str | None = None
    amount: Any = None


class FavoriteRequest(BaseModel):
    """User -> recipe bookmark."""

    user_id: str | int | None = None
    recipe_id: str | int | None = None
