"""Cloud data models."""

from typing import Optional

from pydantic import Field

from panda_client.models.base import ApiDatetime, Entity


class CloudInfo(Entity):
    """Settings of an encoding cloud as reported by the service."""

    id: str = Field(..., description="Cloud identifier")
    name: Optional[str] = None
    s3_videos_bucket: Optional[str] = None
    s3_private_access: Optional[bool] = None
    url: Optional[str] = None
    created_at: Optional[ApiDatetime] = None
    updated_at: Optional[ApiDatetime] = None
