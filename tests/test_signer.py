"""Tests for request signing."""

import base64
import hashlib
import hmac
from datetime import datetime, timedelta, timezone

import pytest
from hypothesis import given, strategies as st

from panda_client.api.account import Account
from panda_client.api.signer import (
    RESERVED_PARAMS,
    SIGNATURE_VERSION,
    Signer,
    format_timestamp,
)
from panda_client.core.errors import SigningError

from conftest import FIXED_TIMESTAMP

PATH = "/v2/c1/videos.json"


@pytest.fixture
def signer():
    return Signer()


class TestFormatTimestamp:
    """Tests for timestamp rendering."""

    def test_utc_datetime(self):
        assert format_timestamp(FIXED_TIMESTAMP) == "2024-05-17T12:30:45.000000+00:00"

    def test_other_timezone_converted_to_utc(self):
        local = FIXED_TIMESTAMP.astimezone(timezone(timedelta(hours=2)))
        assert format_timestamp(local) == "2024-05-17T12:30:45.000000+00:00"

    def test_naive_datetime_treated_as_utc(self):
        assert format_timestamp(datetime(2024, 5, 17, 12, 30, 45)) == "2024-05-17T12:30:45.000000+00:00"

    def test_string_passed_through(self):
        assert format_timestamp("2024-01-01T00:00:00.000000+00:00") == "2024-01-01T00:00:00.000000+00:00"

    def test_defaults_to_now(self):
        assert format_timestamp().endswith("+00:00")


class TestSigner:
    """Tests for Signer.sign."""

    def test_metadata_added(self, signer, account):
        """Test that the required metadata is merged into the parameters."""
        signed = signer.sign(account, "get", PATH, {"page": 1}, cloud_id="c1", timestamp=FIXED_TIMESTAMP)

        assert signed.params["page"] == "1"
        assert signed.params["cloud_id"] == "c1"
        assert signed.params["access_key"] == "AK"
        assert signed.params["timestamp"] == "2024-05-17T12:30:45.000000+00:00"
        assert signed.params["signature_version"] == SIGNATURE_VERSION
        assert signed.params["signature"] == signed.signature

    def test_string_to_sign_layout(self, signer):
        """Test method, host, path and canonical query joined by newlines."""
        account = Account(access_key="AK", secret_key="SK", api_host="API.Example.com")
        signed = signer.sign(account, "post", PATH, {"source_url": "a b&c"}, cloud_id="c1", timestamp=FIXED_TIMESTAMP)

        method, host, path, query = signed.string_to_sign.split("\n")
        assert method == "POST"
        assert host == "api.example.com"
        assert path == PATH
        assert query == (
            "access_key=AK&cloud_id=c1&signature_version=2"
            "&source_url=a%20b%26c"
            "&timestamp=2024-05-17T12%3A30%3A45.000000%2B00%3A00"
        )

    def test_signature_is_base64_hmac_sha256(self, signer, account):
        """Test the signature against an independently computed HMAC."""
        signed = signer.sign(account, "GET", PATH, {}, cloud_id="c1", timestamp=FIXED_TIMESTAMP)

        expected = base64.b64encode(
            hmac.new(b"SK", signed.string_to_sign.encode("utf-8"), hashlib.sha256).digest()
        ).decode("ascii")
        assert signed.signature == expected

    def test_deterministic(self, signer, account):
        first = signer.sign(account, "GET", PATH, {"a": "1"}, cloud_id="c1", timestamp=FIXED_TIMESTAMP)
        second = signer.sign(account, "GET", PATH, {"a": "1"}, cloud_id="c1", timestamp=FIXED_TIMESTAMP)
        assert first.signature == second.signature

    def test_parameter_order_does_not_matter(self, signer, account):
        first = signer.sign(account, "GET", PATH, {"b": "2", "a": "1"}, cloud_id="c1", timestamp=FIXED_TIMESTAMP)
        second = signer.sign(account, "GET", PATH, {"a": "1", "b": "2"}, cloud_id="c1", timestamp=FIXED_TIMESTAMP)
        assert first.signature == second.signature
        assert first.string_to_sign == second.string_to_sign

    def test_different_secret_changes_signature(self, signer, account):
        other = Account(access_key="AK", secret_key="other", api_host="api.example.com")
        first = signer.sign(account, "GET", PATH, {}, cloud_id="c1", timestamp=FIXED_TIMESTAMP)
        second = signer.sign(other, "GET", PATH, {}, cloud_id="c1", timestamp=FIXED_TIMESTAMP)
        assert first.signature != second.signature

    def test_none_values_skipped(self, signer, account):
        signed = signer.sign(account, "GET", PATH, {"payload": None}, cloud_id="c1", timestamp=FIXED_TIMESTAMP)
        assert "payload" not in signed.params

    @pytest.mark.parametrize("key", sorted(RESERVED_PARAMS))
    def test_reserved_key_rejected(self, signer, account, key):
        with pytest.raises(SigningError) as exc_info:
            signer.sign(account, "GET", PATH, {key: "x"}, cloud_id="c1")
        assert exc_info.value.key == key

    def test_nested_value_rejected(self, signer, account):
        with pytest.raises(SigningError):
            signer.sign(account, "PUT", PATH, {"events": {"video_created": True}}, cloud_id="c1")

    def test_empty_secret_rejected(self, signer):
        account = Account(access_key="AK", secret_key="", api_host="api.example.com")
        with pytest.raises(SigningError):
            signer.sign(account, "GET", PATH, {}, cloud_id="c1")

    def test_unsupported_method_rejected(self, signer, account):
        with pytest.raises(SigningError):
            signer.sign(account, "PATCH", PATH, {}, cloud_id="c1")

    @given(st.dictionaries(
        keys=st.text(alphabet="abcdefghijklmnopqrstuvwxyz_[]", min_size=1, max_size=12).filter(
            lambda key: key not in RESERVED_PARAMS
        ),
        values=st.text(max_size=20),
        max_size=8,
    ))
    def test_order_independence_property(self, params):
        """Any insertion order of the same parameters signs identically."""
        account = Account(access_key="AK", secret_key="SK", api_host="api.example.com")
        signer = Signer()
        reordered = dict(reversed(list(params.items())))

        first = signer.sign(account, "GET", PATH, params, cloud_id="c1", timestamp=FIXED_TIMESTAMP)
        second = signer.sign(account, "GET", PATH, reordered, cloud_id="c1", timestamp=FIXED_TIMESTAMP)
        assert first.signature == second.signature
