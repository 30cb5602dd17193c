"""Gateway to the FatSecret food and recipe API."""

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field

from food_diary.adapters.fatsecret_client import FatSecretClient, UpstreamResponse
from food_diary.domain.errors import (
    InvalidPayloadError,
    NotFoundError,
    UpstreamError,
)
from food_diary.services.barcodes import is_valid_gtin13, to_gtin13
from food_diary.services.tokens import TokenCache

MAX_PAGE = 9999
MIN_RESULTS = 1
MAX_RESULTS = 50
DEFAULT_RESULTS = 20
DEFAULT_SORT = "newest"

# FatSecret error codes: 106 invalid id, 211 no food item detected.
NOT_FOUND_CODES = frozenset({106, 211})

RECIPE_SORT_VALUES = {
    "newest": "newest",
    "oldest": "oldest",
    "caloriesAsc": "caloriesPerServingAscending",
    "caloriesDesc": "caloriesPerServingDescending",
    "caloriesPerServingAscending": "caloriesPerServingAscending",
    "caloriesPerServingDescending": "caloriesPerServingDescending",
}

_TRUTHY = {"1", "true", "yes", "on"}

_logger = logging.getLogger(__name__)


def clamp(value: int, lower: int, upper: int) -> int:
    """Clamp an integer into ``[lower, upper]``."""
    return max(lower, min(upper, value))


def parse_int(raw: object, default: int) -> int:
    """Parse an integer query value, falling back to ``default``."""
    if isinstance(raw, bool):
        return default
    if isinstance(raw, int):
        return raw
    try:
        return int(str(raw).strip())
    except (TypeError, ValueError):
        return default


def parse_flag(raw: object, *, default: bool = False) -> bool:
    """Parse a boolean-ish query value (1/true/yes/on)."""
    if raw is None:
        return default
    if isinstance(raw, str):
        return raw.strip().lower() in _TRUTHY
    return bool(raw)


def normalize_sort(raw: object) -> str:
    """Map a sort name to the upstream value, defaulting to newest."""
    return RECIPE_SORT_VALUES.get(str(raw or "").strip(), DEFAULT_SORT)


def _as_int(value: object) -> int | None:
    try:
        return int(str(value))
    except (TypeError, ValueError):
        return None


def _error_envelope(payload: object) -> dict[str, object]:
    if not isinstance(payload, dict):
        return {}
    nested = payload.get("error")
    if isinstance(nested, dict):
        return nested
    return payload


def raise_for_upstream_error(response: UpstreamResponse) -> None:
    """Translate an upstream error response into a local exception."""
    envelope = _error_envelope(response.payload)
    if response.ok:
        nested = (
            response.payload.get("error")
            if isinstance(response.payload, dict)
            else None
        )
        if isinstance(nested, dict) and _as_int(nested.get("code")) in NOT_FOUND_CODES:
            raise NotFoundError(
                str(nested.get("message") or "Not found"), code=nested.get("code")
            )
        return

    code = envelope.get("code") or response.status_code
    message = envelope.get("message")
    if not message:
        message = response.text[:300] if response.payload is None else ""
    message = str(message or "Unknown error")
    if _as_int(code) in NOT_FOUND_CODES:
        raise NotFoundError(message, code=code)
    raw = response.payload if response.payload is not None else response.text
    raise UpstreamError(response.status_code, code, message, raw)


@dataclass
class FoodRecipeGateway:
    """Builds FatSecret requests and maps their errors."""

    client: FatSecretClient
    token_cache: TokenCache
    default_region: str | None = None
    food_scopes: frozenset[str] = field(default_factory=frozenset)
    recipe_scopes: frozenset[str] = field(default_factory=frozenset)
    clock: Callable[[], float] = time.time

    async def _call(
        self, path: str, params: dict[str, str], scopes: frozenset[str]
    ) -> object:
        token = await self.token_cache.get_access_token(scopes)
        response = await self.client.get(path, params, token)
        if not response.ok:
            _logger.warning(
                "FatSecret %s failed: status=%s", path, response.status_code
            )
        raise_for_upstream_error(response)
        return response.payload

    async def search_recipes(  # noqa: PLR0913
        self,
        query: str | None = None,
        page: object = 0,
        max_results: object = DEFAULT_RESULTS,
        sort_by: object = DEFAULT_SORT,
        *,
        must_have_images: object = True,
    ) -> object:
        """Search recipes and return the upstream payload verbatim."""
        params = {
            "page_number": str(clamp(parse_int(page, 0), 0, MAX_PAGE)),
            "max_results": str(
                clamp(
                    parse_int(max_results, DEFAULT_RESULTS), MIN_RESULTS, MAX_RESULTS
                )
            ),
            "sort_by": normalize_sort(sort_by),
        }
        expression = (query or "").strip()
        if expression:
            params["search_expression"] = expression
        if parse_flag(must_have_images, default=True):
            params["must_have_images"] = "true"
        return await self._call("recipes/search/v3", params, self.recipe_scopes)

    async def get_recipe_by_id(self, recipe_id: str | None) -> object:
        """Fetch a raw recipe record by id."""
        cleaned = (recipe_id or "").strip()
        if not cleaned:
            raise InvalidPayloadError("id", "Missing recipe id")
        return await self._call(
            "recipe/v2", {"recipe_id": cleaned}, self.recipe_scopes
        )

    async def search_foods(  # noqa: PLR0913
        self,
        query: str | None = None,
        page: object = 0,
        max_results: object = DEFAULT_RESULTS,
        *,
        flag_default_serving: object = False,
        region: str | None = None,
        language: str | None = None,
    ) -> object:
        """Search foods and return the upstream payload verbatim."""
        params = {
            "page_number": str(clamp(parse_int(page, 0), 0, MAX_PAGE)),
            "max_results": str(
                clamp(
                    parse_int(max_results, DEFAULT_RESULTS), MIN_RESULTS, MAX_RESULTS
                )
            ),
            "cb": str(int(self.clock() * 1000)),
        }
        expression = (query or "").strip()
        if expression:
            params["search_expression"] = expression
        if parse_flag(flag_default_serving):
            params["flag_default_serving"] = "true"
        if region:
            params["region"] = region
        if language:
            params["language"] = language
        return await self._call("foods/search/v3", params, self.food_scopes)

    async def get_food(
        self,
        food_id: str,
        region: str | None = None,
        language: str | None = None,
    ) -> object:
        """Fetch a raw food record by id."""
        params = {"food_id": food_id}
        if region:
            params["region"] = region
        if language:
            params["language"] = language
        return await self._call("food/v4", params, self.food_scopes)

    async def find_food_id_by_barcode(
        self, gtin13: str, region: str | None = None
    ) -> str | None:
        """Run a single barcode lookup, returning None on a miss."""
        params = {"barcode": gtin13}
        if region:
            params["region"] = region
        try:
            payload = await self._call(
                "food/barcode/find-by-id/v1", params, self.food_scopes
            )
        except NotFoundError:
            # Only a not-found answer falls through to the next region;
            # other upstream errors propagate.
            return None
        food_id = payload.get("food_id") if isinstance(payload, dict) else None
        if isinstance(food_id, dict):
            food_id = food_id.get("value")
        if food_id in (None, "", 0, "0"):
            return None
        return str(food_id)

    async def lookup_food_by_barcode(
        self, raw_barcode: str, region: str | None = None
    ) -> str:
        """Resolve a scanned barcode to a food id, regional first."""
        if not any(char in "0123456789" for char in raw_barcode or ""):
            raise InvalidPayloadError("barcode", "Barcode must contain digits")
        gtin13 = to_gtin13(raw_barcode)
        if not is_valid_gtin13(gtin13):
            _logger.warning("Invalid GTIN-13 check digit: %s", gtin13)

        first_region = region or self.default_region
        attempts = [first_region, None] if first_region else [None]
        for attempt_region in attempts:
            food_id = await self.find_food_id_by_barcode(gtin13, attempt_region)
            if food_id:
                _logger.info(
                    "Barcode %s resolved (region=%s): food_id=%s",
                    gtin13,
                    attempt_region or "global",
                    food_id,
                )
                return food_id
            _logger.info(
                "Barcode %s not found (region=%s)", gtin13, attempt_region or "global"
            )
        raise NotFoundError("Food not found", code=404)
