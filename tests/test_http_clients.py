"""Tests for HTTP-based adapters."""

import asyncio
import base64
from urllib.parse import parse_qs

import httpx
import pytest

from food_diary.adapters.fatsecret_auth import HttpxOAuthClient
from food_diary.adapters.fatsecret_client import HttpxFatSecretClient
from food_diary.domain.errors import (
    ConfigurationError,
    UpstreamAuthError,
    UpstreamUnavailableError,
)


def _oauth_client(handler, client_id="client", client_secret="secret"):  # type: ignore[no-untyped-def]
    return HttpxOAuthClient(
        client_id=client_id,
        client_secret=client_secret,
        token_url="https://oauth.test/connect/token",
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )


def test_oauth_exchange_uses_basic_auth_and_scope() -> None:
    seen: dict[str, object] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["auth"] = request.headers["Authorization"]
        seen["form"] = parse_qs(request.content.decode())
        return httpx.Response(200, json={"access_token": "abc", "expires_in": 86400})

    grant = asyncio.run(_oauth_client(handler).exchange("barcode basic"))

    expected = base64.b64encode(b"client:secret").decode()
    assert seen["auth"] == f"Basic {expected}"
    assert seen["form"] == {
        "grant_type": ["client_credentials"],
        "scope": ["barcode basic"],
    }
    assert grant.access_token == "abc"
    assert grant.expires_in == 86400


def test_oauth_exchange_omits_empty_scope() -> None:
    forms: list[dict[str, list[str]]] = []

    def handler(request: httpx.Request) -> httpx.Response:
        forms.append(parse_qs(request.content.decode()))
        return httpx.Response(200, json={"access_token": "abc"})

    grant = asyncio.run(_oauth_client(handler).exchange(""))

    assert forms == [{"grant_type": ["client_credentials"]}]
    assert grant.expires_in is None


def test_oauth_missing_credentials_fail_before_network() -> None:
    calls: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, json={"access_token": "abc"})

    client = _oauth_client(handler, client_id="", client_secret=None)

    with pytest.raises(ConfigurationError):
        asyncio.run(client.exchange("basic"))
    assert calls == []


def test_oauth_rejected_credentials_raise_auth_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, json={"error": "invalid_client"})

    with pytest.raises(UpstreamAuthError):
        asyncio.run(_oauth_client(handler).exchange("basic"))


def test_fatsecret_client_sends_bearer_and_format() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.headers["Authorization"] == "Bearer tok"
        assert request.url.path == "/rest/recipe/v2"
        assert request.url.params["format"] == "json"
        assert request.url.params["recipe_id"] == "42"
        return httpx.Response(200, json={"recipe": {"recipe_id": "42"}})

    client = HttpxFatSecretClient(
        base_url="https://api.test/rest",
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )

    response = asyncio.run(client.get("recipe/v2", {"recipe_id": "42"}, "tok"))

    assert response.ok
    assert response.payload == {"recipe": {"recipe_id": "42"}}


def test_fatsecret_client_keeps_non_json_body_as_text() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(502, text="<html>Bad gateway</html>")

    client = HttpxFatSecretClient(
        base_url="https://api.test/rest",
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )

    response = asyncio.run(client.get("foods/search/v3", {}, "tok"))

    assert not response.ok
    assert response.payload is None
    assert "Bad gateway" in response.text


def test_fatsecret_client_timeout_raises_unavailable() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    client = HttpxFatSecretClient(
        base_url="https://api.test/rest",
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
        timeout=0.1,
    )

    with pytest.raises(UpstreamUnavailableError):
        asyncio.run(client.get("recipe/v2", {"recipe_id": "1"}, "tok"))
