"""Signing, transport and per-cloud operations."""

from panda_client.api.account import Account, AccountManager
from panda_client.api.cloud import Cloud
from panda_client.api.cloud_manager import CloudManager
from panda_client.api.http_client import (
    DispatcherConfig,
    RawResponse,
    RequestDispatcher,
    UploadFile,
)
from panda_client.api.signer import SignedRequest, Signer, format_timestamp

__all__ = [
    "Account",
    "AccountManager",
    "Cloud",
    "CloudManager",
    "DispatcherConfig",
    "RawResponse",
    "RequestDispatcher",
    "UploadFile",
    "SignedRequest",
    "Signer",
    "format_timestamp",
]
