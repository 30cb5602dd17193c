"""FatSecret OAuth client-credentials adapter."""

import base64
from dataclasses import dataclass

import httpx

from food_diary.domain.errors import (
    ConfigurationError,
    UpstreamAuthError,
    UpstreamUnavailableError,
)
from food_diary.services.tokens import TokenExchanger, TokenGrant


def basic_auth_header(client_id: str, client_secret: str) -> str:
    """Return the HTTP Basic authorization value for the credentials."""
    raw = f"{client_id}:{client_secret}".encode()
    return "Basic " + base64.b64encode(raw).decode("ascii")


@dataclass
class HttpxOAuthClient(TokenExchanger):
    """HTTPX-backed client-credentials exchanger."""

    client_id: str | None
    client_secret: str | None
    token_url: str
    http_client: httpx.AsyncClient
    timeout: float = 10.0

    @classmethod
    def create(
        cls,
        client_id: str | None,
        client_secret: str | None,
        token_url: str,
        timeout: float = 10.0,
    ) -> "HttpxOAuthClient":
        """Create an OAuth client with a managed httpx session."""
        return cls(
            client_id=client_id,
            client_secret=client_secret,
            token_url=token_url,
            http_client=httpx.AsyncClient(),
            timeout=timeout,
        )

    async def exchange(self, scope: str) -> TokenGrant:
        """Request a token with the client-credentials grant."""
        if not self.client_id or not self.client_secret:
            raise ConfigurationError(
                "FATSECRET_CLIENT_ID / FATSECRET_CLIENT_SECRET missing"
            )
        form = {"grant_type": "client_credentials"}
        if scope:
            form["scope"] = scope
        try:
            response = await self.http_client.post(
                self.token_url,
                data=form,
                headers={
                    "Authorization": basic_auth_header(
                        self.client_id, self.client_secret
                    )
                },
                timeout=self.timeout,
            )
        except httpx.TimeoutException as exc:
            raise UpstreamUnavailableError("Token endpoint timed out") from exc
        except httpx.HTTPError as exc:
            raise UpstreamAuthError(f"Token request failed: {exc}") from exc

        if not response.is_success:
            raise UpstreamAuthError(
                f"Token error {response.status_code}: {response.text[:300]}"
            )
        try:
            payload = response.json()
        except ValueError as exc:
            raise UpstreamAuthError("Token endpoint returned invalid JSON") from exc
        token = payload.get("access_token") if isinstance(payload, dict) else None
        if not token:
            raise UpstreamAuthError("Token endpoint returned no access_token")
        expires_in = payload.get("expires_in")
        return TokenGrant(
            access_token=str(token),
            expires_in=int(expires_in) if isinstance(expires_in, (int, float)) else None,
        )

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
