"""Request signing.

Every request carries the cloud id, the access key, a timestamp and the
signature version. The signature is an HMAC-SHA256, keyed with the account
secret, over::

    METHOD\\nhost\\npath\\ncanonical_query

encoded in standard base64 and sent as the ``signature`` parameter.
"""

import base64
import hashlib
import hmac
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Union

from panda_client.api.account import Account
from panda_client.core import get_logger
from panda_client.core.errors import SigningError
from panda_client.core.params import Params, canonical_querystring, format_scalar

logger = get_logger(__name__)

SIGNATURE_VERSION = "2"
SIGNATURE_PARAM = "signature"
FILE_PARAM = "file"
TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S.%f+00:00"

METADATA_PARAMS = ("cloud_id", "access_key", "timestamp", "signature_version")
RESERVED_PARAMS = frozenset(METADATA_PARAMS) | {SIGNATURE_PARAM, FILE_PARAM}
ALLOWED_METHODS = frozenset({"GET", "POST", "PUT", "DELETE"})


@dataclass(frozen=True)
class SignedRequest:
    """Outcome of signing a request.

    ``params`` holds the caller parameters, the metadata and the signature,
    ready to be transmitted. ``string_to_sign`` is kept for debugging.
    """

    params: Params
    signature: str
    string_to_sign: str


def format_timestamp(timestamp: Union[datetime, str, None] = None) -> str:
    """Render a timestamp in the signing format, defaulting to now (UTC)."""
    if isinstance(timestamp, str):
        return timestamp
    if timestamp is None:
        timestamp = datetime.now(timezone.utc)
    elif timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=timezone.utc)
    return timestamp.astimezone(timezone.utc).strftime(TIMESTAMP_FORMAT)


class Signer:
    """Computes request signatures.

    Signing depends only on its arguments, so a single instance can be
    shared between clouds and concurrent calls. Pass ``timestamp`` for a
    reproducible signature.
    """

    def sign(
        self,
        account: Account,
        method: str,
        path: str,
        params: Mapping[str, Any],
        *,
        cloud_id: str,
        timestamp: Union[datetime, str, None] = None,
    ) -> SignedRequest:
        """Sign a request.

        Args:
            account: Account whose secret key signs the request
            method: HTTP method (GET, POST, PUT or DELETE)
            path: Request path, e.g. ``/v2/<cloud_id>/videos.json``
            params: Flat caller parameters, without file content
            cloud_id: Cloud the request is addressed to
            timestamp: Request time; defaults to the current time

        Returns:
            SignedRequest with the parameters to transmit

        Raises:
            SigningError: For an unsupported method, an empty secret key,
                a reserved or nested parameter.
        """
        method = method.upper()
        if method not in ALLOWED_METHODS:
            raise SigningError(f"Unsupported HTTP method {method}")
        if not account.secret_key:
            raise SigningError("Cannot sign a request without a secret key")

        signed: Params = {}
        for key, value in params.items():
            if key in RESERVED_PARAMS:
                raise SigningError(f"Parameter {key} is reserved", key=key)
            if isinstance(value, (Mapping, list, tuple, set)):
                raise SigningError(
                    f"Parameter {key} is nested; flatten it before signing",
                    key=key,
                )
            if value is not None:
                signed[key] = format_scalar(value)

        signed.update({
            "cloud_id": cloud_id,
            "access_key": account.access_key,
            "timestamp": format_timestamp(timestamp),
            "signature_version": SIGNATURE_VERSION,
        })

        string_to_sign = "\n".join([
            method,
            account.api_host.lower(),
            path,
            canonical_querystring(signed),
        ])
        digest = hmac.new(
            account.secret_key.encode("utf-8"),
            string_to_sign.encode("utf-8"),
            hashlib.sha256,
        ).digest()
        signature = base64.b64encode(digest).decode("ascii")

        signed[SIGNATURE_PARAM] = signature
        logger.debug("request_signed", method=method, path=path, cloud_id=cloud_id)
        return SignedRequest(params=signed, signature=signature, string_to_sign=string_to_sign)
