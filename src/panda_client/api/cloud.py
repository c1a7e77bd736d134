"""Per-cloud entry point mapping the service REST resources to methods.

Each operation builds flat parameters, signs them with the cloud account,
dispatches the request and turns the JSON answer into entities through the
transformer registry. Error statuses become ``ApiError``.
"""

from collections.abc import Mapping, Sequence
from datetime import datetime
from pathlib import Path
from typing import Any, Optional, Union

from panda_client.api.account import Account
from panda_client.api.http_client import RawResponse, RequestDispatcher, UploadFile
from panda_client.api.signer import FILE_PARAM, Signer
from panda_client.core import get_logger
from panda_client.core.errors import ApiError, InvalidEntity, MalformedResponse
from panda_client.core.params import flatten_params
from panda_client.models import (
    CloudInfo,
    Encoding,
    EncodingStatus,
    Notifications,
    Profile,
    Video,
    VideoPage,
)
from panda_client.models.wire import as_record
from panda_client.transformer.registry import TransformerRegistry

logger = get_logger(__name__)

API_VERSION = "v2"
RESPONSE_FORMAT = "json"

ProfileNames = Union[str, Sequence[str]]


def _join_profiles(profiles: ProfileNames) -> str:
    if isinstance(profiles, str):
        return profiles
    return ",".join(profiles)


class Cloud:
    """Operations on one encoding cloud.

    A cloud is bound to an account and owns its dispatcher. Signer and
    transformers are shared and hold no per-request state, so concurrent
    calls on the same instance are safe.
    """

    def __init__(
        self,
        cloud_id: str,
        account: Account,
        signer: Signer,
        dispatcher: RequestDispatcher,
        transformers: TransformerRegistry,
    ):
        self.cloud_id = cloud_id
        self.account = account
        self.signer = signer
        self.dispatcher = dispatcher
        self.transformers = transformers

    def __repr__(self) -> str:
        return f"Cloud(cloud_id={self.cloud_id!r}, api_host={self.account.api_host!r})"

    def resource_path(self, resource: str) -> str:
        """Request path of a resource, e.g. ``/v2/<cloud_id>/videos.json``."""
        return f"/{API_VERSION}/{self.cloud_id}/{resource}.{RESPONSE_FORMAT}"

    async def request(
        self,
        method: str,
        resource: str,
        params: Optional[Mapping[str, Any]] = None,
        files: Optional[Mapping[str, UploadFile]] = None,
        timestamp: Optional[datetime] = None,
    ) -> RawResponse:
        """Sign and send a request, returning the successful raw response.

        Raises:
            ApiError: If the service answers with a non-2xx status
        """
        path = self.resource_path(resource)
        signed = self.signer.sign(
            self.account,
            method,
            path,
            params or {},
            cloud_id=self.cloud_id,
            timestamp=timestamp,
        )
        response = await self.dispatcher.execute(
            self.account.api_host, method, path, signed.params, files=files
        )
        if not response.ok:
            error = ApiError.from_response(response.status_code, response.body)
            logger.warning(
                "api_error",
                cloud_id=self.cloud_id,
                method=method,
                path=path,
                status=response.status_code,
                error_class=error.error_class,
            )
            raise error
        return response

    # Videos

    async def get_videos(self) -> list[Video]:
        response = await self.request("GET", "videos")
        return self.transformers.video.from_json_list(response.body)

    async def get_videos_for_pagination(self, page: int = 1, per_page: int = 100) -> VideoPage:
        response = await self.request("GET", "videos", {"page": page, "per_page": per_page})
        return self.transformers.video.from_json_page(response.body)

    async def get_video(self, video_id: str) -> Video:
        response = await self.request("GET", f"videos/{video_id}")
        return self.transformers.video.from_json(response.body)

    async def get_video_metadata(self, video_id: str) -> dict[str, Any]:
        """Metadata extracted by the service from the source file."""
        response = await self.request("GET", f"videos/{video_id}/metadata")
        return as_record(self.transformers.video.decode(response.body), "metadata")

    async def get_status(self, video_id: str) -> EncodingStatus:
        """Current processing status of a video."""
        video = await self.get_video(video_id)
        try:
            return EncodingStatus(video.status)
        except ValueError:
            raise MalformedResponse(
                f"Unknown status {video.status!r} for video {video_id}",
                kind="video",
                field="status",
            ) from None

    async def encode_video_by_url(
        self,
        source_url: str,
        profiles: ProfileNames = (),
        path_format: Optional[str] = None,
        payload: Optional[str] = None,
    ) -> Video:
        """Create a video from a remote source and encode it with ``profiles``."""
        params = {
            "source_url": source_url,
            "profiles": _join_profiles(profiles) or None,
            "path_format": path_format,
            "payload": payload,
        }
        logger.info("video_encode_requested", cloud_id=self.cloud_id, source_url=source_url)
        response = await self.request("POST", "videos", params)
        return self.transformers.video.from_json(response.body)

    async def encode(
        self,
        video_source: str,
        profile_names: ProfileNames = (),
        path_format: Optional[str] = None,
        payload: Optional[str] = None,
    ) -> Video:
        return await self.encode_video_by_url(video_source, profile_names, path_format, payload)

    async def encode_video_file(
        self,
        local_path: Union[str, Path],
        profiles: ProfileNames = (),
        path_format: Optional[str] = None,
        payload: Optional[str] = None,
    ) -> Video:
        """Upload a local file and encode it with ``profiles``.

        The file is streamed as a multipart part while the request is sent
        and is not covered by the signature.
        """
        upload = UploadFile.from_path(local_path)
        params = {
            "profiles": _join_profiles(profiles) or None,
            "path_format": path_format,
            "payload": payload,
        }
        logger.info(
            "video_upload_requested",
            cloud_id=self.cloud_id,
            filename=upload.filename,
            size_bytes=upload.path.stat().st_size,
        )
        response = await self.request("POST", "videos", params, files={FILE_PARAM: upload})
        return self.transformers.video.from_json(response.body)

    async def delete_video(self, video_id: str) -> None:
        await self.request("DELETE", f"videos/{video_id}")

    async def delete_encodings(self, video_id: str) -> None:
        """Delete every encoding of a video, keeping the video itself."""
        await self.request("DELETE", f"videos/{video_id}/encodings")

    async def delete_source(self, video_id: str) -> None:
        """Delete the source file of a video, keeping its encodings."""
        await self.request("DELETE", f"videos/{video_id}/source")

    # Encodings

    async def get_encodings(self, filter: Optional[Mapping[str, Any]] = None) -> list[Encoding]:
        """List encodings, optionally filtered (status, profile_id, profile_name, video_id, page, per_page)."""
        response = await self.request("GET", "encodings", flatten_params(filter or {}))
        return self.transformers.encoding.from_json_list(response.body)

    async def list_encodings(self, filter: Optional[Mapping[str, Any]] = None) -> list[Encoding]:
        return await self.get_encodings(filter)

    async def get_encodings_with_status(
        self,
        status: Union[EncodingStatus, str],
        filter: Optional[Mapping[str, Any]] = None,
    ) -> list[Encoding]:
        return await self.get_encodings({**(filter or {}), "status": status})

    async def get_encodings_for_profile(
        self,
        profile_id: str,
        filter: Optional[Mapping[str, Any]] = None,
    ) -> list[Encoding]:
        return await self.get_encodings({**(filter or {}), "profile_id": profile_id})

    async def get_encodings_for_profile_by_name(
        self,
        profile_name: str,
        filter: Optional[Mapping[str, Any]] = None,
    ) -> list[Encoding]:
        return await self.get_encodings({**(filter or {}), "profile_name": profile_name})

    async def get_encodings_for_video(
        self,
        video_id: str,
        filter: Optional[Mapping[str, Any]] = None,
    ) -> list[Encoding]:
        response = await self.request(
            "GET", f"videos/{video_id}/encodings", flatten_params(filter or {})
        )
        return self.transformers.encoding.from_json_list(response.body)

    async def get_encoding(self, encoding_id: str) -> Encoding:
        response = await self.request("GET", f"encodings/{encoding_id}")
        return self.transformers.encoding.from_json(response.body)

    async def create_encoding(self, video_id: str, profile_id: str) -> Encoding:
        response = await self.request(
            "POST", "encodings", {"video_id": video_id, "profile_id": profile_id}
        )
        return self.transformers.encoding.from_json(response.body)

    async def create_encoding_with_profile_name(self, video_id: str, profile_name: str) -> Encoding:
        response = await self.request(
            "POST", "encodings", {"video_id": video_id, "profile_name": profile_name}
        )
        return self.transformers.encoding.from_json(response.body)

    async def cancel_encoding(self, encoding_id: str) -> None:
        await self.request("POST", f"encodings/{encoding_id}/cancel")

    async def retry_encoding(self, encoding_id: str) -> None:
        await self.request("POST", f"encodings/{encoding_id}/retry")

    async def delete_encoding(self, encoding_id: str) -> None:
        await self.request("DELETE", f"encodings/{encoding_id}")

    # Profiles

    async def get_profiles(self) -> list[Profile]:
        response = await self.request("GET", "profiles")
        return self.transformers.profile.from_json_list(response.body)

    async def get_profile(self, profile_id: str) -> Profile:
        response = await self.request("GET", f"profiles/{profile_id}")
        return self.transformers.profile.from_json(response.body)

    async def add_profile(self, profile: Profile) -> Profile:
        response = await self.request("POST", "profiles", self.transformers.profile.to_params(profile))
        return self.transformers.profile.from_json(response.body)

    async def add_profile_from_preset(self, preset_name: str, name: Optional[str] = None) -> Profile:
        params = {"preset_name": preset_name, "name": name}
        response = await self.request("POST", "profiles", params)
        return self.transformers.profile.from_json(response.body)

    async def set_profile(self, profile: Profile) -> Profile:
        """Update an existing profile with the settings of ``profile``."""
        if not profile.id:
            raise InvalidEntity("Cannot update a profile without an id", kind="profile", field="id")
        response = await self.request(
            "PUT", f"profiles/{profile.id}", self.transformers.profile.to_params(profile)
        )
        return self.transformers.profile.from_json(response.body)

    async def delete_profile(self, profile_id: str) -> None:
        await self.request("DELETE", f"profiles/{profile_id}")

    # Cloud

    async def get_cloud(self) -> CloudInfo:
        response = await self.request("GET", "cloud")
        return self.transformers.cloud.from_json(response.body)

    async def set_cloud(self, settings: Mapping[str, Any]) -> CloudInfo:
        """Change cloud settings such as name, s3_videos_bucket or AWS credentials."""
        response = await self.request("PUT", "cloud", flatten_params(settings))
        return self.transformers.cloud.from_json(response.body)

    # Notifications

    async def get_notifications(self) -> Notifications:
        response = await self.request("GET", "notifications")
        return self.transformers.notifications.from_json(response.body)

    async def set_notifications(self, notifications: Notifications) -> Notifications:
        response = await self.request(
            "PUT", "notifications", self.transformers.notifications.to_params(notifications)
        )
        return self.transformers.notifications.from_json(response.body)
