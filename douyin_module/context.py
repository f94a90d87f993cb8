"""Shared execution context: token lookup, HTTP transport and settings."""

from config.settings import DouyinSettings, get_settings
from logger import get_logger, short_id

from .exceptions import TokenError
from .token_provider import TokenProvider
from .transport import HTTPTransport

logger = get_logger("douyin")


class DouyinContext:
    """Collaborators shared by all Douyin API clients of a process."""

    def __init__(
        self,
        token_provider: TokenProvider,
        transport: HTTPTransport | None = None,
        settings: DouyinSettings | None = None,
    ):
        self.settings = settings or get_settings().douyin
        self.token_provider = token_provider
        self.transport = transport or HTTPTransport.from_settings(self.settings)

    async def get_access_token(self, open_id: str) -> str:
        """Get access token for open id, normalizing any provider failure to TokenError."""
        try:
            token = await self.token_provider.get_access_token(open_id)
        except TokenError:
            raise
        except Exception as e:
            logger.warning(f"Token provider failed for {short_id(open_id)}: {e}")
            raise TokenError(open_id, str(e)) from e

        if not token:
            raise TokenError(open_id, "empty access token")
        return token

    def url(self, path: str) -> str:
        return f"{self.settings.base_url}{path}"

    async def aclose(self) -> None:
        await self.transport.aclose()

    async def __aenter__(self) -> "DouyinContext":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
