"""Normalization of FatSecret payloads into stable internal records.

FatSecret serializes one-element collections as a bare object and larger
ones as an array, so every list-like field goes through ``to_array`` before
it is read. All functions here are pure and never raise on sparse input.
"""

from food_diary.domain.fatsecret import (
    Direction,
    FoodServing,
    NormalizedFood,
    NormalizedRecipe,
    NutritionSummary,
    RecipeListItem,
)

_NUTRITION_FIELDS = ("calories", "carbohydrate", "fat", "protein")


def to_array(value: object) -> list[object]:
    """Coerce a maybe-single, maybe-list value into a list."""
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


def _field(obj: object, key: str) -> object:
    if isinstance(obj, dict):
        return obj.get(key)
    return None


def _nested(obj: object, *keys: str) -> object:
    for key in keys:
        obj = _field(obj, key)
    return obj


def _text(value: object) -> str:
    if value is None or isinstance(value, (dict, list)):
        return ""
    return str(value).strip()


def _optional_text(value: object) -> str | None:
    return _text(value) or None


def pick_primary_record(
    payload: object, singular: str = "recipe", plural: str = "recipes"
) -> dict[str, object] | None:
    """Return the single record of a get/search response, if any."""
    direct = _field(payload, singular)
    candidate = direct if direct is not None else _nested(payload, plural, singular)
    for record in to_array(candidate):
        if isinstance(record, dict):
            return record
        return None
    return None


def pick_image(
    record: object,
    field: str = "recipe_image",
    collection: str = "recipe_images",
) -> str | None:
    """Return the direct image or the first entry of the image collection."""
    direct = _optional_text(_field(record, field))
    if direct:
        return direct
    images = to_array(_nested(record, collection, field))
    if not images:
        return None
    first = images[0]
    if isinstance(first, dict):
        return _optional_text(first.get("image_url"))
    return _optional_text(first)


def _ingredient_text(item: object) -> str:
    if isinstance(item, str):
        return item.strip()
    description = _text(_field(item, "ingredient_description"))
    if description:
        return description
    units = _text(_field(item, "number_of_units"))
    measurement = _text(_field(item, "measurement_description"))
    food_name = _text(_field(item, "food_name"))
    if units and measurement and food_name:
        return f"{units} {measurement} {food_name}"
    return _text(_field(item, "name")) or _text(_field(item, "text"))


def normalize_ingredients(items: object) -> list[str]:
    """Flatten ingredient entries to display strings."""
    texts = (_ingredient_text(item) for item in to_array(items))
    return [text for text in texts if text]


def _category_text(item: object) -> str:
    if isinstance(item, str):
        return item.strip()
    return (
        _text(_field(item, "recipe_category_name"))
        or _text(_field(item, "recipe_type"))
        or _text(_field(item, "name"))
    )


def normalize_categories(items: object) -> list[str]:
    """Flatten category or type entries to strings."""
    texts = (_category_text(item) for item in to_array(items))
    return [text for text in texts if text]


def _nutrition_from(source: object) -> NutritionSummary | None:
    if not isinstance(source, dict):
        return None
    return NutritionSummary(**{name: source.get(name) for name in _NUTRITION_FIELDS})


def normalize_nutrition(record: object) -> NutritionSummary | None:
    """Prefer the explicit nutrition object, else the first serving."""
    explicit = _nutrition_from(_field(record, "recipe_nutrition"))
    if explicit is not None:
        return explicit
    servings = to_array(_nested(record, "serving_sizes", "serving"))
    return _nutrition_from(servings[0]) if servings else None


def normalize_directions(record: object) -> list[Direction]:
    """Return numbered steps in upstream order, skipping empty ones."""
    steps = []
    for item in to_array(_nested(record, "directions", "direction")):
        text = _text(_field(item, "direction_description"))
        if not text:
            continue
        steps.append(
            Direction(
                step_number=_text(_field(item, "direction_number")),
                text=text,
            )
        )
    return steps


def normalize_recipe_list_item(record: object) -> RecipeListItem:
    """Map a recipe record to the compact list shape."""
    return RecipeListItem(
        id=_text(_field(record, "recipe_id")),
        name=_text(_field(record, "recipe_name")),
        description=_optional_text(_field(record, "recipe_description")),
        image=pick_image(record),
    )


def normalize_recipe(payload: object) -> NormalizedRecipe | None:
    """Normalize a recipe get response (or a bare recipe record)."""
    record = pick_primary_record(payload)
    if record is None and isinstance(payload, dict) and "recipe_id" in payload:
        record = payload
    if record is None:
        return None
    ingredients = _nested(record, "ingredients", "ingredient")
    if ingredients is None:
        ingredients = _nested(record, "recipe_ingredients", "ingredient")
    return NormalizedRecipe(
        id=_text(record.get("recipe_id")),
        name=_text(record.get("recipe_name")),
        description=_optional_text(record.get("recipe_description")),
        image=pick_image(record),
        ingredients=normalize_ingredients(ingredients),
        types=normalize_categories(_nested(record, "recipe_types", "recipe_type")),
        categories=normalize_categories(
            _nested(record, "recipe_categories", "recipe_category")
        ),
        nutrition=normalize_nutrition(record),
        directions=normalize_directions(record),
    )


def _serving(item: object) -> FoodServing:
    return FoodServing(
        id=_text(_field(item, "serving_id")),
        description=_text(_field(item, "serving_description")),
        calories=_field(item, "calories"),
        protein=_field(item, "protein"),
        carbohydrate=_field(item, "carbohydrate"),
        fat=_field(item, "fat"),
        is_default=_text(_field(item, "is_default")) == "1",
    )


def pick_default_serving(servings: list[FoodServing]) -> FoodServing | None:
    """Return the serving flagged as default, else the first one."""
    for serving in servings:
        if serving.is_default:
            return serving
    return servings[0] if servings else None


def normalize_food(payload: object) -> NormalizedFood | None:
    """Normalize a food get or barcode response."""
    record = pick_primary_record(payload, singular="food", plural="foods")
    if record is None:
        return None
    servings = [
        _serving(item)
        for item in to_array(_nested(record, "servings", "serving"))
        if isinstance(item, dict)
    ]
    default = pick_default_serving(servings)
    nutrition = None
    if default is not None:
        nutrition = NutritionSummary(
            calories=default.calories,
            carbohydrate=default.carbohydrate,
            fat=default.fat,
            protein=default.protein,
        )
    return NormalizedFood(
        id=_text(record.get("food_id")),
        name=_text(record.get("food_name")),
        brand=_optional_text(record.get("brand_name")),
        food_type=_optional_text(record.get("food_type")),
        url=_optional_text(record.get("food_url")),
        image=pick_image(record, field="food_image", collection="food_images"),
        servings=servings,
        nutrition=nutrition,
    )
