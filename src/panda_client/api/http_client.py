"""HTTP transport for signed requests.

GET and DELETE parameters travel in the query string, POST and PUT
parameters in a form encoded body. Both are encoded with the same table the
signer uses. Uploads are sent as multipart forms, where file parts are never
part of the signature.
"""

import asyncio
import json
from collections.abc import Mapping
from contextlib import ExitStack
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, BinaryIO, Optional, Union

import aiohttp
from pydantic import BaseModel, Field
from yarl import URL

from panda_client.core import get_logger
from panda_client.core.errors import TransportError
from panda_client.core.params import canonical_querystring

logger = get_logger(__name__)

QUERY_METHODS = frozenset({"GET", "DELETE"})


class DispatcherConfig(BaseModel):
    """Configuration for the request dispatcher."""

    scheme: str = Field(default="https", pattern="^https?$", description="URL scheme")
    timeout_seconds: Optional[float] = Field(
        default=None,
        gt=0,
        description="Total request timeout; None keeps aiohttp's default",
    )
    user_agent: str = Field(
        default="panda-client-python/1.0",
        description="User agent string for requests",
    )
    verify_ssl: bool = Field(default=True, description="Verify SSL certificates")
    reuse_session: bool = Field(
        default=False,
        description="Keep one aiohttp session open until close() instead of one per request",
    )


@dataclass
class RawResponse:
    """Status, body and headers of an HTTP response, uninterpreted."""

    status_code: int
    body: str
    headers: dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    def json(self) -> Any:
        return json.loads(self.body)


@dataclass(frozen=True)
class UploadFile:
    """A multipart file part, given either as in-memory content or as a path.

    A path is opened only while the request is sent, and aiohttp streams the
    open file in chunks, so large sources are never loaded into memory.
    """

    filename: str
    content: Optional[bytes] = field(default=None, repr=False)
    path: Optional[Path] = None
    content_type: str = "application/octet-stream"

    def __post_init__(self):
        if (self.content is None) == (self.path is None):
            raise ValueError("UploadFile needs exactly one of content or path")

    @classmethod
    def from_path(cls, path: Union[str, Path], content_type: str = "application/octet-stream") -> "UploadFile":
        path = Path(path)
        if not path.is_file():
            raise FileNotFoundError(f"No such file: {path}")
        return cls(filename=path.name, path=path, content_type=content_type)

    def open(self, stack: ExitStack) -> Union[bytes, BinaryIO]:
        """Payload for ``FormData.add_field``; opened files are closed by ``stack``."""
        if self.path is not None:
            return stack.enter_context(self.path.open("rb"))
        return self.content  # type: ignore[return-value]


class RequestDispatcher:
    """Sends signed requests and returns the raw responses.

    HTTP error statuses are returned like any other response. Only failures
    that prevent getting a status (connection, TLS, timeout) raise, as
    ``TransportError``. Nothing is retried.
    """

    def __init__(
        self,
        config: Optional[DispatcherConfig] = None,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        self.config = config or DispatcherConfig()
        self._session = session
        self._owns_session = False

    def build_url(self, api_host: str, path: str) -> str:
        return f"{self.config.scheme}://{api_host}{path}"

    async def execute(
        self,
        api_host: str,
        method: str,
        path: str,
        signed_params: Mapping[str, str],
        files: Optional[Mapping[str, UploadFile]] = None,
    ) -> RawResponse:
        """Execute a signed request.

        Args:
            api_host: Host to send the request to
            method: HTTP method
            path: Request path
            signed_params: Parameters returned by the signer
            files: Optional multipart file parts, keyed by field name

        Returns:
            RawResponse with the status code intact

        Raises:
            TransportError: If no HTTP response could be obtained
        """
        method = method.upper()
        url = self.build_url(api_host, path)
        headers = {"User-Agent": self.config.user_agent}
        query = canonical_querystring(signed_params)

        request_kwargs: dict[str, Any] = {"headers": headers, "ssl": self.config.verify_ssl}
        if self.config.timeout_seconds is not None:
            request_kwargs["timeout"] = aiohttp.ClientTimeout(total=self.config.timeout_seconds)

        # Files opened for upload stay open until the response has been read.
        with ExitStack() as uploads:
            if method in QUERY_METHODS:
                # encoded=True keeps yarl from re-quoting the signed query.
                request_url = URL(f"{url}?{query}" if query else url, encoded=True)
            elif files:
                request_url = URL(url, encoded=True)
                form = aiohttp.FormData()
                for key, value in signed_params.items():
                    form.add_field(key, value)
                for field_name, upload in files.items():
                    form.add_field(
                        field_name,
                        upload.open(uploads),
                        filename=upload.filename,
                        content_type=upload.content_type,
                    )
                request_kwargs["data"] = form
            else:
                request_url = URL(url, encoded=True)
                headers["Content-Type"] = "application/x-www-form-urlencoded"
                request_kwargs["data"] = query.encode("utf-8")

            logger.debug("request_dispatching", method=method, url=url)
            try:
                if self._session is not None or self.config.reuse_session:
                    session = await self._shared_session()
                    response = await self._send(session, method, request_url, request_kwargs)
                else:
                    async with aiohttp.ClientSession() as session:
                        response = await self._send(session, method, request_url, request_kwargs)
            except asyncio.TimeoutError as e:
                logger.error("request_timeout", method=method, url=url, timeout=self.config.timeout_seconds)
                raise TransportError(
                    f"Request timed out: {method} {url}", method=method, url=url
                ) from e
            except aiohttp.ClientError as e:
                logger.error("request_transport_error", method=method, url=url, error=str(e))
                raise TransportError(
                    f"Transport error for {method} {url}: {e}", method=method, url=url
                ) from e

        logger.info(
            "request_dispatched",
            method=method,
            url=url,
            status=response.status_code,
            size_bytes=len(response.body),
        )
        return response

    async def _send(
        self,
        session: aiohttp.ClientSession,
        method: str,
        url: URL,
        request_kwargs: dict[str, Any],
    ) -> RawResponse:
        async with session.request(method, url, **request_kwargs) as response:
            body = await response.text()
            return RawResponse(
                status_code=response.status,
                body=body,
                headers=dict(response.headers),
            )

    async def _shared_session(self) -> aiohttp.ClientSession:
        if self._session is None:
            self._session = aiohttp.ClientSession()
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        """Close the session this dispatcher opened, if any."""
        if self._session is not None and self._owns_session:
            await self._session.close()
            self._session = None
            self._owns_session = False
