"""Domain entities of the encoding service."""

from panda_client.models.base import ApiDatetime, Entity
from panda_client.models.cloud import CloudInfo
from panda_client.models.encoding import Encoding, EncodingStatus
from panda_client.models.notifications import NotificationEvents, Notifications
from panda_client.models.profile import Profile
from panda_client.models.video import Video, VideoPage
from panda_client.models.wire import WireRecord, WireValue, as_record, as_record_list

__all__ = [
    "ApiDatetime",
    "Entity",
    "CloudInfo",
    "Encoding",
    "EncodingStatus",
    "NotificationEvents",
    "Notifications",
    "Profile",
    "Video",
    "VideoPage",
    "WireRecord",
    "WireValue",
    "as_record",
    "as_record_list",
]
