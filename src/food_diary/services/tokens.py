"""OAuth access-token cache keyed by scope set."""

import asyncio
import logging
import time
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Protocol

SAFETY_MARGIN_SECONDS = 60
DEFAULT_EXPIRES_IN_SECONDS = 3600

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TokenGrant:
    """Result of a client-credentials exchange."""

    access_token: str
    expires_in: int | None = None


class TokenExchanger(Protocol):
    """Interface for the client-credentials token endpoint."""

    async def exchange(self, scope: str) -> TokenGrant:
        """Exchange client credentials for a token covering ``scope``."""


@dataclass(frozen=True)
class CachedToken:
    """A bearer token and its absolute expiry in epoch seconds."""

    scope_key: str
    access_token: str
    expires_at: float


def scope_key(scopes: Iterable[str]) -> str:
    """Return the canonical cache key for a scope set."""
    return " ".join(sorted({scope for scope in scopes if scope}))


@dataclass
class TokenCache:
    """Reuses tokens per scope key until shortly before they expire."""

    exchanger: TokenExchanger
    clock: Callable[[], float] = time.time
    safety_margin_seconds: int = SAFETY_MARGIN_SECONDS
    _entries: dict[str, CachedToken] = field(default_factory=dict, init=False)
    _locks: dict[str, asyncio.Lock] = field(default_factory=dict, init=False)

    def get_cached(self, key: str) -> CachedToken | None:
        """Return the cached token for a key if it is still usable."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        if entry.expires_at - self.safety_margin_seconds > self.clock():
            return entry
        return None

    async def get_access_token(self, scopes: Iterable[str] = ()) -> str:
        """Return a valid token for the scope set, refreshing on miss."""
        key = scope_key(scopes)
        cached = self.get_cached(key)
        if cached is not None:
            return cached.access_token

        lock = self._locks.setdefault(key, asyncio.Lock())
        async with lock:
            cached = self.get_cached(key)
            if cached is not None:
                return cached.access_token
            return (await self._refresh(key)).access_token

    async def _refresh(self, key: str) -> CachedToken:
        grant = await self.exchanger.exchange(key)
        expires_in = grant.expires_in or DEFAULT_EXPIRES_IN_SECONDS
        entry = CachedToken(
            scope_key=key,
            access_token=grant.access_token,
            expires_at=self.clock() + expires_in,
        )
        self._entries[key] = entry
        _logger.info(
            "Refreshed access token: scope=%r expires_in=%s", key, expires_in
        )
        return entry
