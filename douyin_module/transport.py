"""HTTP transport for the Douyin Open Platform built on httpx."""

from pathlib import Path
from typing import Any

import httpx

from config.settings import DouyinSettings
from logger import get_logger

from .exceptions import TransportError

logger = get_logger("douyin.http")


class HTTPTransport:
    """Thin async wrapper over httpx performing POST / JSON / multipart calls.

    When no shared ``httpx.AsyncClient`` is injected, a client is opened per request.
    Responses are returned as-is whatever their status; only failures of the HTTP
    exchange itself become ``TransportError``.
    """

    def __init__(
        self,
        timeout: float = 60.0,
        connect_timeout: float = 15.0,
        upload_timeout: float = 600.0,
        client: httpx.AsyncClient | None = None,
    ):
        self.timeout = httpx.Timeout(timeout, connect=connect_timeout)
        self.upload_timeout = httpx.Timeout(upload_timeout, connect=connect_timeout)
        self.client = client

    @classmethod
    def from_settings(cls, settings: DouyinSettings, client: httpx.AsyncClient | None = None) -> "HTTPTransport":
        return cls(
            timeout=settings.timeout,
            connect_timeout=settings.connect_timeout,
            upload_timeout=settings.upload_timeout,
            client=client,
        )

    def _build_client(self, timeout: httpx.Timeout) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=timeout, follow_redirects=True)

    async def _send(
        self,
        url: str,
        params: dict[str, Any],
        timeout: httpx.Timeout | None = None,
        **kwargs,
    ) -> httpx.Response:
        timeout = timeout or self.timeout
        try:
            if self.client is not None:
                return await self.client.post(url, params=params, timeout=timeout, **kwargs)
            async with self._build_client(timeout) as client:
                return await client.post(url, params=params, **kwargs)
        except httpx.TimeoutException as e:
            raise TransportError(f"Request to {httpx.URL(url).path} timed out: {e}") from e
        except httpx.HTTPError as e:
            raise TransportError(f"Request to {httpx.URL(url).path} failed: {type(e).__name__}: {e}") from e

    async def post(self, url: str, params: dict[str, Any]) -> httpx.Response:
        """POST with an empty body."""
        return await self._send(url, params, content=b"")

    async def post_json(self, url: str, params: dict[str, Any], payload: dict[str, Any]) -> httpx.Response:
        """POST a JSON body."""
        return await self._send(url, params, json=payload)

    async def post_multipart(
        self,
        url: str,
        params: dict[str, Any],
        field_name: str,
        file_path: str | Path | None = None,
        content: bytes | None = None,
        filename: str | None = None,
    ) -> httpx.Response:
        """POST a single file as multipart form data.

        Either ``file_path`` (streamed from disk) or raw ``content`` must be given.
        """
        if file_path is not None:
            path = Path(file_path)
            if not path.exists():
                raise FileNotFoundError(f"Local file not found: {path}")

            logger.debug(f"Streaming {path.name} ({path.stat().st_size / (1024**2):.1f} MB) to {httpx.URL(url).path}")
            with path.open("rb") as f:
                files = {field_name: (filename or path.name, f)}
                return await self._send(url, params, timeout=self.upload_timeout, files=files)

        if content is None:
            raise ValueError("Either file_path or content is required")

        files = {field_name: (filename or "video.mp4", content)}
        return await self._send(url, params, timeout=self.upload_timeout, files=files)

    async def aclose(self) -> None:
        """Close the shared client, if any."""
        if self.client is not None:
            await self.client.aclose()
