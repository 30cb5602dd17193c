"""FatSecret Platform REST API client."""

from dataclasses import dataclass
from typing import Protocol

import httpx

from food_diary.domain.errors import UpstreamUnavailableError


@dataclass(frozen=True)
class UpstreamResponse:
    """Status and decoded body of an upstream call."""

    status_code: int
    payload: object
    text: str = ""

    @property
    def ok(self) -> bool:
        """Return true for 2xx responses."""
        return 200 <= self.status_code < 300  # noqa: PLR2004


class FatSecretClient(Protocol):
    """Interface for FatSecret REST interactions."""

    async def get(
        self, path: str, params: dict[str, str], token: str
    ) -> UpstreamResponse:
        """Perform an authorized GET against a REST method path."""


@dataclass
class HttpxFatSecretClient(FatSecretClient):
    """HTTPX-backed FatSecret client."""

    base_url: str
    http_client: httpx.AsyncClient
    timeout: float = 10.0

    @classmethod
    def create(cls, base_url: str, timeout: float = 10.0) -> "HttpxFatSecretClient":
        """Create a FatSecret client with a managed httpx session."""
        return cls(base_url=base_url, http_client=httpx.AsyncClient(), timeout=timeout)

    async def get(
        self, path: str, params: dict[str, str], token: str
    ) -> UpstreamResponse:
        """GET a REST method and decode the JSON body when possible."""
        url = f"{self.base_url.rstrip('/')}/{path.lstrip('/')}"
        try:
            response = await self.http_client.get(
                url,
                params={"format": "json", **params},
                headers={
                    "Authorization": f"Bearer {token}",
                    "Accept": "application/json",
                },
                timeout=self.timeout,
            )
        except httpx.TimeoutException as exc:
            raise UpstreamUnavailableError(f"FatSecret {path} timed out") from exc
        except httpx.TransportError as exc:
            raise UpstreamUnavailableError(f"FatSecret {path} unreachable") from exc

        text = response.text
        try:
            payload = response.json() if text else {}
        except ValueError:
            payload = None
        return UpstreamResponse(
            status_code=response.status_code, payload=payload, text=text
        )

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
