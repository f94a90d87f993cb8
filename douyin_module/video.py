"""Douyin Open Platform video API client: upload, chunked upload, create, delete."""

from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import Any, TypeVar

import httpx
from pydantic import ValidationError

from config.settings import MIN_PART_SIZE
from logger import format_details, get_logger, short_id

from .context import DouyinContext
from .exceptions import DecodeError, DouyinError, ProviderError, TransportError
from .models import (
    CommonError,
    CreatedVideoInfo,
    CreateVideoRequest,
    DeleteVideoRequest,
    PartUploadSession,
    ResponseEnvelope,
    UploadedVideoInfo,
)

logger = get_logger("douyin.video")

VIDEO_UPLOAD_PATH = "/video/upload"
VIDEO_PART_INIT_PATH = "/video/part/init"
VIDEO_PART_UPLOAD_PATH = "/video/part/upload"
VIDEO_PART_COMPLETE_PATH = "/video/part/complete"
VIDEO_CREATE_PATH = "/video/create"
VIDEO_DELETE_PATH = "/video/delete"

VIDEO_FIELD_NAME = "video"

ResultT = TypeVar("ResultT", bound=CommonError)
Sender = Callable[[str, dict[str, Any]], Awaitable[httpx.Response]]


class VideoClient:
    """Video management API of the Douyin Open Platform.

    Stateless: every call fetches a token through the context, performs one HTTP
    round trip and returns the decoded ``data`` part of the response envelope.
    Failures raise ``TokenError``, ``TransportError``, ``DecodeError`` or
    ``ProviderError``; nothing is retried.

    Docs: https://open.douyin.com/platform/doc/6848798087398295555
    """

    def __init__(self, context: DouyinContext):
        self.context = context

    @property
    def settings(self):
        return self.context.settings

    async def upload(self, open_id: str, file_path: str | Path) -> UploadedVideoInfo:
        """Upload a video file in a single multipart request."""
        path = _require_file(file_path)

        async def send(url: str, params: dict[str, Any]) -> httpx.Response:
            return await self.context.transport.post_multipart(url, params, VIDEO_FIELD_NAME, file_path=path)

        info = await self._execute("Upload", open_id, VIDEO_UPLOAD_PATH, UploadedVideoInfo, send)
        logger.info(f"Video uploaded | {format_details(video_id=info.video_id, size=f'{info.width}x{info.height}')}")
        return info

    async def part_init(self, open_id: str) -> PartUploadSession:
        """Open a chunked upload session."""
        session = await self._execute(
            "PartInit", open_id, VIDEO_PART_INIT_PATH, PartUploadSession, self.context.transport.post
        )
        logger.debug(f"Part upload session opened: {session.upload_id}")
        return session

    async def part_upload(self, open_id: str, upload_id: str, part_number: int, file_path: str | Path) -> None:
        """Upload one chunk file of a chunked upload session."""
        path = _require_file(file_path)
        await self._part_upload(open_id, upload_id, part_number, file_path=path)

    async def part_complete(self, open_id: str, upload_id: str) -> UploadedVideoInfo:
        """Finish a chunked upload session after all parts are uploaded."""
        info = await self._execute(
            "PartComplete",
            open_id,
            VIDEO_PART_COMPLETE_PATH,
            UploadedVideoInfo,
            self.context.transport.post,
            upload_id=upload_id,
        )
        logger.info(f"Chunked upload completed | {format_details(upload_id=upload_id, video_id=info.video_id)}")
        return info

    async def create(self, open_id: str, request: CreateVideoRequest) -> CreatedVideoInfo:
        """Publish an uploaded video."""
        payload = request.to_payload()

        async def send(url: str, params: dict[str, Any]) -> httpx.Response:
            return await self.context.transport.post_json(url, params, payload)

        info = await self._execute("Create", open_id, VIDEO_CREATE_PATH, CreatedVideoInfo, send)
        logger.info(f"Video created: item_id={info.item_id}")
        return info

    async def delete(self, open_id: str, item_id: str, raise_on_error: bool | None = None) -> bool:
        """Delete a published video.

        Failures raise unless ``raise_on_error`` (default: ``raise_on_delete_error``
        setting) is False, in which case they are logged and False is returned.
        """
        if raise_on_error is None:
            raise_on_error = self.settings.raise_on_delete_error

        payload = DeleteVideoRequest(item_id=item_id).model_dump()

        async def send(url: str, params: dict[str, Any]) -> httpx.Response:
            return await self.context.transport.post_json(url, params, payload)

        try:
            await self._execute("Delete", open_id, VIDEO_DELETE_PATH, CommonError, send)
        except DouyinError as e:
            if raise_on_error:
                raise
            logger.error(f"Video deletion failed: item_id={item_id}: {e}")
            return False

        logger.info(f"Video deleted: item_id={item_id}")
        return True

    async def upload_in_parts(
        self,
        open_id: str,
        file_path: str | Path,
        chunk_size: int | None = None,
    ) -> UploadedVideoInfo:
        """Upload a file through the init -> parts -> complete protocol.

        Part numbers start at 1. Every part except the last has ``chunk_size`` bytes.
        """
        if chunk_size is None:
            chunk_size = self.settings.part_size
        if chunk_size < MIN_PART_SIZE:
            raise ValueError(f"chunk_size must be at least {MIN_PART_SIZE} bytes, got {chunk_size}")

        path = _require_file(file_path)
        file_size = path.stat().st_size
        if file_size == 0:
            raise ValueError(f"Cannot upload empty file: {path}")

        total_parts = -(-file_size // chunk_size)
        logger.info(f"Chunked upload of {path.name} | {format_details(size=file_size, parts=total_parts)}")

        session = await self.part_init(open_id)
        with logger.contextualize(upload_id=short_id(session.upload_id)):
            with path.open("rb") as f:
                part_number = 1
                while chunk := f.read(chunk_size):
                    await self._part_upload(open_id, session.upload_id, part_number, content=chunk, filename=path.name)
                    details = format_details(part=part_number, total=total_parts, size=len(chunk))
                    logger.debug(f"Part uploaded | {details}")
                    part_number += 1

            return await self.part_complete(open_id, session.upload_id)

    async def upload_auto(self, open_id: str, file_path: str | Path) -> UploadedVideoInfo:
        """Direct upload for files up to ``direct_upload_limit``, chunked upload above."""
        path = _require_file(file_path)
        if path.stat().st_size <= self.settings.direct_upload_limit:
            return await self.upload(open_id, path)
        return await self.upload_in_parts(open_id, path)

    async def _part_upload(
        self,
        open_id: str,
        upload_id: str,
        part_number: int,
        file_path: Path | None = None,
        content: bytes | None = None,
        filename: str | None = None,
    ) -> None:
        async def send(url: str, params: dict[str, Any]) -> httpx.Response:
            return await self.context.transport.post_multipart(
                url, params, VIDEO_FIELD_NAME, file_path=file_path, content=content, filename=filename
            )

        await self._execute(
            "PartUpload",
            open_id,
            VIDEO_PART_UPLOAD_PATH,
            CommonError,
            send,
            upload_id=upload_id,
            part_number=part_number,
        )

    async def _execute(
        self,
        operation: str,
        open_id: str,
        path: str,
        result_model: type[ResultT],
        send: Sender,
        **query: Any,
    ) -> ResultT:
        """Token -> URL -> transport -> envelope decode -> errcode check."""
        with logger.contextualize(open_id=short_id(open_id), operation=operation):
            access_token = await self.context.get_access_token(open_id)
            params = {"access_token": access_token, "open_id": open_id, **query}

            logger.debug(f"POST {path}")
            response = await send(self.context.url(path), params)
            return _parse_response(operation, response, result_model)


def _require_file(file_path: str | Path) -> Path:
    path = Path(file_path)
    if not path.is_file():
        raise FileNotFoundError(f"Video file not found: {path}")
    return path


def _parse_response(operation: str, response: httpx.Response, result_model: type[ResultT]) -> ResultT:
    """Decode the ``{message, data}`` envelope and raise on non-zero errcode."""
    try:
        envelope = ResponseEnvelope[result_model].model_validate_json(response.content)
    except ValidationError as e:
        if response.is_error:
            raise TransportError(
                f"{operation} failed: HTTP {response.status_code}, {response.text[:200]}",
                response.status_code,
            ) from e
        raise DecodeError(f"{operation} returned an invalid response: {response.text[:200]}") from e

    data = envelope.data
    if data.error_code != 0:
        logger.warning(f"{operation} rejected | {format_details(errcode=data.error_code, errmsg=data.error_message)}")
        raise ProviderError(operation, data.error_code, data.error_message)
    return data
