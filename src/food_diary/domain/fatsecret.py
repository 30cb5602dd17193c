"""Normalized shapes for FatSecret recipe and food payloads."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class NutritionSummary:
    """Macro summary as provided upstream (strings or numbers)."""

    calories: object = None
    carbohydrate: object = None
    fat: object = None
    protein: object = None


@dataclass(frozen=True)
class Direction:
    """A numbered preparation step."""

    step_number: str
    text: str


@dataclass(frozen=True)
class RecipeListItem:
    """Compact recipe shape for lists."""

    id: str
    name: str
    description: str | None = None
    image: str | None = None


@dataclass(frozen=True)
class NormalizedRecipe:
    """Recipe record with every list-like field flattened."""

    id: str
    name: str
    description: str | None = None
    image: str | None = None
    ingredients: list[str] = field(default_factory=list)
    types: list[str] = field(default_factory=list)
    categories: list[str] = field(default_factory=list)
    nutrition: NutritionSummary | None = None
    directions: list[Direction] = field(default_factory=list)


@dataclass(frozen=True)
class FoodServing:
    """One serving option of a packaged food."""

    id: str
    description: str
    calories: object = None
    protein: object = None
    carbohydrate: object = None
    fat: object = None
    is_default: bool = False


@dataclass(frozen=True)
class NormalizedFood:
    """Food record with servings flattened to a list."""

    id: str
    name: str
    brand: str | None = None
    food_type: str | None = None
    url: str | None = None
    image: str | None = None
    servings: list[FoodServing] = field(default_factory=list)
    nutrition: NutritionSummary | None = None
