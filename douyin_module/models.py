"""Request and response models for the Douyin video API."""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field


class CommonError(BaseModel):
    """Error envelope embedded in every response's ``data`` field.

    ``error_code == 0`` means success. Result models inherit from it.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    error_code: int = Field(0, alias="errcode", description="Provider error code (0 = success)")
    error_message: str = Field("", alias="errmsg", description="Provider error message")

    @property
    def ok(self) -> bool:
        """Provider reported success."""
        return self.error_code == 0


class VideoMeta(BaseModel):
    """Uploaded video file metadata."""

    video_id: str = ""
    height: int = 0
    width: int = 0


class UploadedVideoInfo(CommonError):
    """Result of a direct upload or a completed chunked upload."""

    video: VideoMeta = Field(default_factory=VideoMeta)

    @property
    def video_id(self) -> str:
        return self.video.video_id

    @property
    def height(self) -> int:
        return self.video.height

    @property
    def width(self) -> int:
        return self.video.width


class PartUploadSession(CommonError):
    """Handle of an in-progress chunked upload (opaque to the client)."""

    upload_id: str = ""


class CreatedVideoInfo(CommonError):
    """Published content identifier."""

    item_id: str = ""


class CreateVideoRequest(BaseModel):
    """Publishing metadata for ``/video/create``.

    All fields are optional and sent under the provider's names; unset fields are
    omitted from the request body. Unknown provider fields are passed through.
    """

    model_config = ConfigDict(extra="allow")

    video_id: str | None = None
    cover_tsp: float | None = Field(None, description="Cover frame timestamp (seconds)")
    game_id: str | None = None
    poi_id: str | None = None
    text: str | None = None
    micro_app_url: str | None = None
    micro_app_id: str | None = None
    micro_app_title: str | None = None
    at_users: list[str] | None = None
    game_content: str | None = None
    timeliness_keyword: str | None = None
    timeliness_label: str | None = None
    article_id: str | None = None
    article_title: str | None = None

    def to_payload(self) -> dict:
        """JSON body with unset fields dropped."""
        return self.model_dump(exclude_none=True)


class DeleteVideoRequest(BaseModel):
    """Body of ``/video/delete``."""

    item_id: str


DataT = TypeVar("DataT", bound=CommonError)


class ResponseEnvelope(BaseModel, Generic[DataT]):
    """``{"message": ..., "data": {...}}`` wrapper of every response."""

    message: str = ""
    data: DataT
