"""Tests for the request dispatcher."""

import asyncio
from contextlib import ExitStack
from unittest.mock import DEFAULT, AsyncMock, MagicMock

import aiohttp
import pytest

from panda_client.api.http_client import (
    DispatcherConfig,
    RawResponse,
    RequestDispatcher,
    UploadFile,
)
from panda_client.core.errors import TransportError


def make_session(status=200, body="{}", headers=None):
    """Create a mocked aiohttp session answering every request the same way."""
    response = MagicMock()
    response.status = status
    response.text = AsyncMock(return_value=body)
    response.headers = headers or {"Content-Type": "application/json"}

    session = MagicMock()
    session.request.return_value.__aenter__.return_value = response
    session.close = AsyncMock()
    return session


class TestRawResponse:
    """Tests for RawResponse helpers."""

    def test_ok_range(self):
        assert RawResponse(200, "").ok
        assert RawResponse(204, "").ok
        assert not RawResponse(302, "").ok
        assert not RawResponse(404, "").ok

    def test_json(self):
        assert RawResponse(200, '{"id": "v1"}').json() == {"id": "v1"}


class TestRequestDispatcher:
    """Tests for RequestDispatcher.execute."""

    def test_build_url(self):
        dispatcher = RequestDispatcher()
        assert dispatcher.build_url("api.example.com", "/v2/c1/videos.json") == (
            "https://api.example.com/v2/c1/videos.json"
        )

    def test_build_url_plain_http(self):
        dispatcher = RequestDispatcher(DispatcherConfig(scheme="http"))
        assert dispatcher.build_url("localhost:8080", "/v2/c1/videos.json") == (
            "http://localhost:8080/v2/c1/videos.json"
        )

    @pytest.mark.asyncio
    async def test_get_parameters_in_query(self):
        """Test GET parameters are sent in the query with the signing encoding."""
        session = make_session(body='[{"id": "v1"}]')
        dispatcher = RequestDispatcher(session=session)

        response = await dispatcher.execute(
            "api.example.com", "GET", "/v2/c1/videos.json", {"q": "a b&c", "a": "1"}
        )

        assert response.status_code == 200
        assert response.body == '[{"id": "v1"}]'
        method, url = session.request.call_args.args
        assert method == "GET"
        assert str(url) == "https://api.example.com/v2/c1/videos.json?a=1&q=a%20b%26c"
        assert "data" not in session.request.call_args.kwargs

    @pytest.mark.asyncio
    async def test_delete_parameters_in_query(self):
        session = make_session(status=200, body="")
        dispatcher = RequestDispatcher(session=session)

        await dispatcher.execute("api.example.com", "delete", "/v2/c1/videos/v1.json", {"a": "1"})

        method, url = session.request.call_args.args
        assert method == "DELETE"
        assert str(url).endswith("/v2/c1/videos/v1.json?a=1")

    @pytest.mark.asyncio
    async def test_post_form_body(self):
        """Test POST parameters are sent as a form encoded body."""
        session = make_session(status=201)
        dispatcher = RequestDispatcher(session=session)

        await dispatcher.execute(
            "api.example.com", "POST", "/v2/c1/videos.json", {"source_url": "http://x/a b.mp4"}
        )

        method, url = session.request.call_args.args
        kwargs = session.request.call_args.kwargs
        assert method == "POST"
        assert str(url) == "https://api.example.com/v2/c1/videos.json"
        assert kwargs["data"] == b"source_url=http%3A%2F%2Fx%2Fa%20b.mp4"
        assert kwargs["headers"]["Content-Type"] == "application/x-www-form-urlencoded"

    @pytest.mark.asyncio
    async def test_post_with_file_is_multipart(self):
        session = make_session(status=201)
        dispatcher = RequestDispatcher(session=session)

        await dispatcher.execute(
            "api.example.com",
            "POST",
            "/v2/c1/videos.json",
            {"profiles": "h264"},
            files={"file": UploadFile(filename="clip.mp4", content=b"\x00\x01")},
        )

        kwargs = session.request.call_args.kwargs
        assert isinstance(kwargs["data"], aiohttp.FormData)
        assert "Content-Type" not in kwargs["headers"]

    @pytest.mark.asyncio
    async def test_file_upload_is_streamed_from_open_file(self, tmp_path, monkeypatch):
        """Test a path upload is opened for the request, unread, and closed afterwards."""
        source = tmp_path / "clip.mp4"
        source.write_bytes(b"\x00" * 4096)
        opened = []
        original_open = UploadFile.open

        def tracking_open(upload, stack):
            handle = original_open(upload, stack)
            opened.append(handle)
            return handle

        monkeypatch.setattr(UploadFile, "open", tracking_open)
        states = []

        def request(*args, **kwargs):
            states.append((opened[0].closed, opened[0].tell()))
            return DEFAULT

        session = make_session(status=201)
        session.request.side_effect = request
        dispatcher = RequestDispatcher(session=session)

        await dispatcher.execute(
            "api.example.com",
            "POST",
            "/v2/c1/videos.json",
            {"profiles": "h264"},
            files={"file": UploadFile.from_path(source)},
        )

        assert states == [(False, 0)]
        assert opened[0].closed

    @pytest.mark.asyncio
    async def test_file_closed_after_transport_error(self, tmp_path, monkeypatch):
        source = tmp_path / "clip.mp4"
        source.write_bytes(b"\x00\x01")
        opened = []
        original_open = UploadFile.open

        def tracking_open(upload, stack):
            handle = original_open(upload, stack)
            opened.append(handle)
            return handle

        monkeypatch.setattr(UploadFile, "open", tracking_open)
        session = make_session()
        session.request.side_effect = aiohttp.ClientConnectionError("reset")
        dispatcher = RequestDispatcher(session=session)

        with pytest.raises(TransportError):
            await dispatcher.execute(
                "api.example.com",
                "POST",
                "/v2/c1/videos.json",
                {},
                files={"file": UploadFile.from_path(source)},
            )

        assert opened[0].closed

    @pytest.mark.asyncio
    async def test_error_status_returned_not_raised(self):
        """Test HTTP error statuses come back as ordinary responses."""
        session = make_session(status=404, body='{"error": "RecordNotFound"}')
        dispatcher = RequestDispatcher(session=session)

        response = await dispatcher.execute("api.example.com", "GET", "/v2/c1/videos/x.json", {})

        assert response.status_code == 404
        assert not response.ok

    @pytest.mark.asyncio
    async def test_timeout_configured(self):
        session = make_session()
        dispatcher = RequestDispatcher(DispatcherConfig(timeout_seconds=5), session=session)

        await dispatcher.execute("api.example.com", "GET", "/v2/c1/videos.json", {})

        timeout = session.request.call_args.kwargs["timeout"]
        assert timeout.total == 5

    @pytest.mark.asyncio
    async def test_no_timeout_by_default(self):
        session = make_session()
        dispatcher = RequestDispatcher(session=session)

        await dispatcher.execute("api.example.com", "GET", "/v2/c1/videos.json", {})

        assert "timeout" not in session.request.call_args.kwargs

    @pytest.mark.asyncio
    async def test_connection_error_is_transport_error(self):
        session = make_session()
        session.request.side_effect = aiohttp.ClientConnectionError("Connection refused")
        dispatcher = RequestDispatcher(session=session)

        with pytest.raises(TransportError) as exc_info:
            await dispatcher.execute("api.example.com", "GET", "/v2/c1/videos.json", {})

        assert exc_info.value.method == "GET"
        assert exc_info.value.url == "https://api.example.com/v2/c1/videos.json"
        assert isinstance(exc_info.value.__cause__, aiohttp.ClientConnectionError)

    @pytest.mark.asyncio
    async def test_timeout_is_transport_error(self):
        session = make_session()
        session.request.side_effect = asyncio.TimeoutError()
        dispatcher = RequestDispatcher(session=session)

        with pytest.raises(TransportError):
            await dispatcher.execute("api.example.com", "GET", "/v2/c1/videos.json", {})

    @pytest.mark.asyncio
    async def test_injected_session_not_closed(self):
        session = make_session()
        dispatcher = RequestDispatcher(session=session)

        await dispatcher.close()

        session.close.assert_not_awaited()


class TestUploadFile:
    """Tests for UploadFile sources."""

    def test_from_path(self, tmp_path):
        source = tmp_path / "clip.mp4"
        source.write_bytes(b"\x00\x01")

        upload = UploadFile.from_path(str(source), content_type="video/mp4")

        assert upload.filename == "clip.mp4"
        assert upload.path == source
        assert upload.content is None
        assert upload.content_type == "video/mp4"

    def test_from_missing_path(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            UploadFile.from_path(tmp_path / "missing.mp4")

    def test_needs_exactly_one_source(self, tmp_path):
        with pytest.raises(ValueError):
            UploadFile(filename="clip.mp4")
        with pytest.raises(ValueError):
            UploadFile(filename="clip.mp4", content=b"x", path=tmp_path / "clip.mp4")

    def test_open_closes_with_stack(self, tmp_path):
        source = tmp_path / "clip.mp4"
        source.write_bytes(b"\x00\x01")
        upload = UploadFile.from_path(source)

        with ExitStack() as stack:
            handle = upload.open(stack)
            assert handle.read() == b"\x00\x01"
        assert handle.closed

    def test_open_in_memory_content(self):
        with ExitStack() as stack:
            assert UploadFile(filename="a.bin", content=b"abc").open(stack) == b"abc"
