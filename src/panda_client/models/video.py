"""Video data models."""

from typing import Optional

from pydantic import BaseModel, Field

from panda_client.models.base import ApiDatetime, Entity


class Video(Entity):
    """A source video uploaded to a cloud."""

    id: str = Field(..., description="Unique video identifier")
    status: str = Field(..., description="Processing status of the source video")
    created_at: Optional[ApiDatetime] = None
    updated_at: Optional[ApiDatetime] = None
    original_filename: Optional[str] = None
    extname: Optional[str] = Field(None, description="File extension, e.g. '.mp4'")
    source_url: Optional[str] = None
    path: Optional[str] = None
    mime_type: Optional[str] = None
    duration: Optional[int] = Field(None, description="Duration in milliseconds")
    width: Optional[int] = None
    height: Optional[int] = None
    file_size: Optional[int] = Field(None, description="Size in bytes")
    video_bitrate: Optional[int] = None
    audio_bitrate: Optional[int] = None
    video_codec: Optional[str] = None
    audio_codec: Optional[str] = None
    fps: Optional[float] = None
    audio_channels: Optional[int] = None
    audio_sample_rate: Optional[int] = None
    error_message: Optional[str] = None
    error_class: Optional[str] = None
    payload: Optional[str] = Field(None, description="Opaque caller data echoed back by the service")


class VideoPage(BaseModel):
    """One page of a paginated video listing."""

    items: list[Video] = Field(default_factory=list)
    page: int = 1
    per_page: int = 100
    total: int = 0
