"""Notification settings data models."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from panda_client.models.base import Entity


class NotificationEvents(BaseModel):
    """Which events trigger a notification request."""

    model_config = ConfigDict(extra="allow", frozen=True)

    video_created: bool = False
    video_encoded: bool = False
    encoding_progress: bool = False
    encoding_completed: bool = False


class Notifications(Entity):
    """Notification settings of a cloud.

    ``url`` and every event flag are always sent, since the service only
    disables a setting when it gets an explicit empty url or ``false``.
    """

    url: str = Field("", description="Callback URL; empty disables notifications")
    delay: Optional[int] = Field(None, ge=0, description="Delay in seconds")
    events: NotificationEvents = Field(default_factory=NotificationEvents)

    @field_validator("url", mode="before")
    @classmethod
    def _null_url_is_disabled(cls, value: Any) -> Any:
        return "" if value is None else value
