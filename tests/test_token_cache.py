"""Tests for the OAuth token cache."""

import asyncio

import pytest

from food_diary.domain.errors import UpstreamAuthError
from food_diary.services.tokens import TokenCache, TokenGrant, scope_key
from tests.conftest import FIXED_NOW, FakeClock, FakeTokenExchanger


def test_scope_key_sorts_and_dedupes() -> None:
    assert scope_key(["basic", "barcode", "basic"]) == "barcode basic"
    assert scope_key(set()) == ""


def test_second_call_within_window_makes_no_exchange() -> None:
    exchanger = FakeTokenExchanger()
    cache = TokenCache(exchanger=exchanger, clock=FakeClock())

    first = asyncio.run(cache.get_access_token({"basic"}))
    second = asyncio.run(cache.get_access_token({"basic"}))

    assert first == second == "token-1"
    assert exchanger.calls == ["basic"]


def test_equivalent_scope_sets_share_a_slot() -> None:
    exchanger = FakeTokenExchanger()
    cache = TokenCache(exchanger=exchanger, clock=FakeClock())

    asyncio.run(cache.get_access_token({"basic", "barcode"}))
    asyncio.run(cache.get_access_token(["barcode", "basic"]))

    assert exchanger.calls == ["barcode basic"]


def test_distinct_scope_sets_do_not_share_tokens() -> None:
    exchanger = FakeTokenExchanger()
    cache = TokenCache(exchanger=exchanger, clock=FakeClock())

    empty = asyncio.run(cache.get_access_token(set()))
    basic = asyncio.run(cache.get_access_token({"basic"}))

    assert empty != basic
    assert exchanger.calls == ["", "basic"]


def test_token_refreshed_inside_safety_margin() -> None:
    exchanger = FakeTokenExchanger(expires_in=3600)
    clock = FakeClock()
    cache = TokenCache(exchanger=exchanger, clock=clock)

    asyncio.run(cache.get_access_token({"basic"}))
    clock.now = FIXED_NOW + 3539
    reused = asyncio.run(cache.get_access_token({"basic"}))
    clock.now = FIXED_NOW + 3541
    refreshed = asyncio.run(cache.get_access_token({"basic"}))

    assert reused == "token-1"
    assert refreshed == "token-2"
    assert len(exchanger.calls) == 2


def test_missing_expires_in_defaults_to_one_hour() -> None:
    exchanger = FakeTokenExchanger(expires_in=None)
    cache = TokenCache(exchanger=exchanger, clock=FakeClock())

    asyncio.run(cache.get_access_token({"basic"}))
    cached = cache.get_cached("basic")

    assert cached is not None
    assert cached.expires_at == FIXED_NOW + 3600


def test_concurrent_misses_share_one_exchange() -> None:
    class SlowExchanger(FakeTokenExchanger):
        async def exchange(self, scope: str) -> TokenGrant:
            await asyncio.sleep(0.01)
            return await super().exchange(scope)

    exchanger = SlowExchanger()
    cache = TokenCache(exchanger=exchanger, clock=FakeClock())

    async def run() -> list[str]:
        return await asyncio.gather(
            *(cache.get_access_token({"basic"}) for _ in range(3))
        )

    tokens = asyncio.run(run())

    assert tokens == ["token-1"] * 3
    assert exchanger.calls == ["basic"]


def test_exchange_failure_propagates_and_caches_nothing() -> None:
    exchanger = FakeTokenExchanger(error=UpstreamAuthError("rejected"))
    cache = TokenCache(exchanger=exchanger, clock=FakeClock())

    with pytest.raises(UpstreamAuthError):
        asyncio.run(cache.get_access_token({"basic"}))

    assert cache.get_cached("basic") is None
