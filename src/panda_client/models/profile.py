"""Encoding profile data models."""

from typing import Optional

from pydantic import Field

from panda_client.models.base import ApiDatetime, Entity


class Profile(Entity):
    """Named set of output settings applied when encoding a video.

    ``id`` is assigned by the service, so a profile that has not been created
    yet has none. ``preset_name`` selects one of the service presets instead
    of spelling out the settings.
    """

    name: str = Field(..., description="Profile name used when encoding")
    id: Optional[str] = None
    title: Optional[str] = None
    preset_name: Optional[str] = None
    extname: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None
    upscale: Optional[bool] = None
    aspect_mode: Optional[str] = None
    two_pass: Optional[bool] = None
    video_bitrate: Optional[int] = None
    fps: Optional[float] = None
    keyframe_interval: Optional[int] = None
    keyframe_rate: Optional[float] = None
    audio_bitrate: Optional[int] = None
    audio_sample_rate: Optional[int] = None
    audio_channels: Optional[int] = None
    clip_length: Optional[str] = None
    clip_offset: Optional[str] = None
    watermark_url: Optional[str] = None
    watermark_top: Optional[str] = None
    watermark_bottom: Optional[str] = None
    watermark_left: Optional[str] = None
    watermark_right: Optional[str] = None
    frame_count: Optional[int] = None
    command: Optional[str] = None
    created_at: Optional[ApiDatetime] = None
    updated_at: Optional[ApiDatetime] = None
