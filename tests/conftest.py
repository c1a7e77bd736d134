"""
Pytest configuration and shared fixtures for the Panda client tests.
"""
from datetime import datetime, timezone

import pytest
from hypothesis import settings, Verbosity

from panda_client.api.account import Account
from panda_client.api.http_client import RawResponse
from panda_client.api.signer import Signer

# Configure Hypothesis settings for all property-based tests
settings.register_profile(
    "default",
    max_examples=100,
    deadline=5000,
    verbosity=Verbosity.normal,
)

settings.register_profile(
    "ci",
    max_examples=200,
    deadline=10000,
    verbosity=Verbosity.quiet,
)

settings.load_profile("default")


FIXED_TIMESTAMP = datetime(2024, 5, 17, 12, 30, 45, tzinfo=timezone.utc)


class RecordingDispatcher:
    """Stands in for RequestDispatcher and answers with canned responses."""

    def __init__(self, *responses: RawResponse):
        self.responses = list(responses)
        self.calls: list[dict] = []
        self.closed = False

    async def execute(self, api_host, method, path, signed_params, files=None):
        self.calls.append({
            "api_host": api_host,
            "method": method,
            "path": path,
            "params": dict(signed_params),
            "files": files,
        })
        return self.responses.pop(0)

    async def close(self):
        self.closed = True


class RecordingSigner(Signer):
    """Signer that remembers what it signed."""

    def __init__(self):
        self.signed = []

    def sign(self, *args, **kwargs):
        signed = super().sign(*args, **kwargs)
        self.signed.append(signed)
        return signed


def json_response(body: str, status_code: int = 200) -> RawResponse:
    return RawResponse(status_code=status_code, body=body, headers={"Content-Type": "application/json"})


@pytest.fixture
def account():
    """Account used across signing and cloud tests."""
    return Account(access_key="AK", secret_key="SK", api_host="api.example.com")


@pytest.fixture
def api_config():
    """Minimal valid configuration mapping."""
    return {
        "accounts": {
            "default": {
                "access_key": "AK",
                "secret_key": "SK",
                "api_host": "api.example.com",
            },
        },
        "clouds": {
            "default": {"id": "c1", "account": "default"},
        },
    }
