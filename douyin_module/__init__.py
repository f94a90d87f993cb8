"""Async client for the Douyin Open Platform video API"""

from .context import DouyinContext
from .exceptions import DecodeError, DouyinError, ProviderError, TokenError, TransportError
from .models import (
    CommonError,
    CreatedVideoInfo,
    CreateVideoRequest,
    PartUploadSession,
    UploadedVideoInfo,
    VideoMeta,
)
from .token_provider import CallableTokenProvider, StaticTokenProvider, TokenProvider
from .transport import HTTPTransport
from .video import VideoClient

__all__ = [
    # Client
    "DouyinContext",
    "HTTPTransport",
    "VideoClient",
    # Token providers
    "CallableTokenProvider",
    "StaticTokenProvider",
    "TokenProvider",
    # Models
    "CommonError",
    "CreateVideoRequest",
    "CreatedVideoInfo",
    "PartUploadSession",
    "UploadedVideoInfo",
    "VideoMeta",
    # Errors
    "DecodeError",
    "DouyinError",
    "ProviderError",
    "TokenError",
    "TransportError",
]
