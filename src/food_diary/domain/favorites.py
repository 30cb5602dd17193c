"""Domain models for recipe favorites."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Favorite:
    """A stored user -> recipe bookmark."""

    recipe_id: str
    created_at: str


@dataclass(frozen=True)
class FavoriteRecipe:
    """A favorite expanded with recipe display metadata."""

    id: str
    name: str
    description: str | None
    image: str | None
    created_at: str
