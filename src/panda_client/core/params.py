"""Request parameter encoding shared by the signer and the dispatcher.

The service recomputes the signature over the parameters it receives, so the
query string that is signed and the one that is transmitted must be encoded
byte for byte identically. Both go through ``canonical_querystring``.

Encoding table: UTF-8 bytes, RFC 3986 unreserved characters
(``A-Z a-z 0-9 - _ . ~``) are kept, everything else becomes ``%XX`` with
uppercase hex digits. A space is ``%20``, never ``+``.
"""

from collections.abc import Mapping
from enum import Enum
from typing import Any, Optional
from urllib.parse import quote

Params = dict[str, str]


def urlescape(value: Any) -> str:
    """Percent-encode a key or value with the service encoding table."""
    return quote(str(value), safe="~")


def format_scalar(value: Any) -> str:
    """Render a scalar parameter value as the service expects it."""
    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def flatten_params(params: Mapping[str, Any], prefix: Optional[str] = None) -> Params:
    """Flatten nested request parameters into a flat string mapping.

    Nested mappings use bracket keys (``events[video_created]``), lists are
    sent as a single comma-joined value under ``key[]`` when nested and under
    ``key`` at the top level. ``None`` values are dropped.

    Args:
        params: Possibly nested parameters
        prefix: Key of the enclosing mapping, used for recursion

    Returns:
        Flat mapping of parameter names to string values
    """
    flat: Params = {}
    for key, value in params.items():
        name = f"{prefix}[{key}]" if prefix else str(key)
        if value is None:
            continue
        if isinstance(value, Mapping):
            flat.update(flatten_params(value, name))
        elif isinstance(value, (list, tuple)):
            list_name = f"{name}[]" if prefix else name
            flat[list_name] = ",".join(format_scalar(item) for item in value)
        else:
            flat[name] = format_scalar(value)
    return flat


def canonical_querystring(params: Mapping[str, str]) -> str:
    """Join parameters as ``key=value`` pairs sorted by key bytes."""
    ordered = sorted(params.items(), key=lambda item: item[0].encode("utf-8"))
    return "&".join(f"{urlescape(key)}={urlescape(value)}" for key, value in ordered)
