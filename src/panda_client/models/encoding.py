"""Encoding data models."""

from enum import Enum
from typing import Optional

from pydantic import Field

from panda_client.models.base import ApiDatetime, Entity


class EncodingStatus(str, Enum):
    """Status values reported for videos and encodings."""

    QUEUED = "queued"
    PROCESSING = "processing"
    SUCCESS = "success"
    FAIL = "fail"
    CANCELLED = "cancelled"


class Encoding(Entity):
    """One rendition of a video produced with a given profile."""

    id: str = Field(..., description="Unique encoding identifier")
    video_id: str = Field(..., description="ID of the source video")
    status: str = Field(..., description="Encoding status (see EncodingStatus)")
    profile_id: Optional[str] = None
    profile_name: Optional[str] = None
    created_at: Optional[ApiDatetime] = None
    updated_at: Optional[ApiDatetime] = None
    started_encoding_at: Optional[ApiDatetime] = None
    encoding_progress: Optional[int] = Field(None, ge=0, le=100)
    encoding_time: Optional[int] = Field(None, description="Encoding time in seconds")
    extname: Optional[str] = None
    path: Optional[str] = None
    files: Optional[list[str]] = Field(None, description="Output file names")
    mime_type: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None
    duration: Optional[int] = None
    file_size: Optional[int] = None
    video_bitrate: Optional[int] = None
    audio_bitrate: Optional[int] = None
    video_codec: Optional[str] = None
    audio_codec: Optional[str] = None
    fps: Optional[float] = None
    audio_channels: Optional[int] = None
    audio_sample_rate: Optional[int] = None
    error_message: Optional[str] = None
    error_class: Optional[str] = None
    logfile_url: Optional[str] = None
