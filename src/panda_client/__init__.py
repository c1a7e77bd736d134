"""Client library for the Panda video encoding service."""

from panda_client.api import (
    Account,
    AccountManager,
    Cloud,
    CloudManager,
    DispatcherConfig,
    RawResponse,
    RequestDispatcher,
    SignedRequest,
    Signer,
    UploadFile,
)
from panda_client.bootstrap import Api, ApiBuilder, get_cloud_instance
from panda_client.config import AccountConfig, ApiConfig, CloudConfig
from panda_client.core import (
    ApiError,
    InvalidConfiguration,
    MalformedResponse,
    PandaClientError,
    SigningError,
    TransportError,
    InvalidEntity,
    configure_logging,
    get_logger,
)
from panda_client.models import (
    CloudInfo,
    Encoding,
    EncodingStatus,
    NotificationEvents,
    Notifications,
    Profile,
    Video,
    VideoPage,
)
from panda_client.transformer import EntityKind, Transformer, TransformerRegistry

__version__ = "1.0.0"

__all__ = [
    "Account",
    "AccountManager",
    "Cloud",
    "CloudManager",
    "DispatcherConfig",
    "RawResponse",
    "RequestDispatcher",
    "SignedRequest",
    "Signer",
    "UploadFile",
    "Api",
    "ApiBuilder",
    "get_cloud_instance",
    "AccountConfig",
    "ApiConfig",
    "CloudConfig",
    "ApiError",
    "InvalidConfiguration",
    "MalformedResponse",
    "PandaClientError",
    "SigningError",
    "TransportError",
    "InvalidEntity",
    "configure_logging",
    "get_logger",
    "CloudInfo",
    "Encoding",
    "EncodingStatus",
    "NotificationEvents",
    "Notifications",
    "Profile",
    "Video",
    "VideoPage",
    "EntityKind",
    "Transformer",
    "TransformerRegistry",
]
