"""Access token providers consumed by the Douyin client."""

import inspect
from collections.abc import Awaitable, Callable
from typing import Protocol, runtime_checkable

from .exceptions import TokenError


@runtime_checkable
class TokenProvider(Protocol):
    """Returns a valid access token for an open id or raises."""

    async def get_access_token(self, open_id: str) -> str: ...


class StaticTokenProvider:
    """In-memory open id -> access token mapping."""

    def __init__(self, tokens: dict[str, str] | None = None):
        self.tokens = dict(tokens or {})

    def set_token(self, open_id: str, access_token: str) -> None:
        self.tokens[open_id] = access_token

    async def get_access_token(self, open_id: str) -> str:
        token = self.tokens.get(open_id)
        if not token:
            raise TokenError(open_id, "no access token registered")
        return token


class CallableTokenProvider:
    """Adapts a sync or async ``func(open_id) -> token`` to the provider protocol."""

    def __init__(self, func: Callable[[str], str | Awaitable[str]]):
        self.func = func

    async def get_access_token(self, open_id: str) -> str:
        token = self.func(open_id)
        if inspect.isawaitable(token):
            token = await token
        if not token:
            raise TokenError(open_id, "provider returned an empty token")
        return token
