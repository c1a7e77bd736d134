"""Wire record types exchanged with the encoding service.

A wire record is the decoded JSON object the service sends or expects: a
mapping of field names to scalars, nested records, or lists. Only the
transformers look inside wire records; callers always get entities.
"""

from collections.abc import Mapping
from typing import Any, Optional, Union

from panda_client.core.errors import MalformedResponse

WireScalar = Union[str, int, float, bool, None]
WireValue = Union[WireScalar, "WireRecord", list[Any]]
WireRecord = dict[str, WireValue]


def as_record(value: Any, kind: str) -> WireRecord:
    """Return ``value`` as a wire record or raise ``MalformedResponse``."""
    if not isinstance(value, Mapping):
        raise MalformedResponse(
            f"Expected a {kind} record, got {type(value).__name__}",
            kind=kind,
        )
    return dict(value)


def as_record_list(value: Any, kind: str, list_key: Optional[str] = None) -> list[WireRecord]:
    """Normalize a list response to an ordered list of wire records.

    The service answers list requests either with a bare JSON array or with an
    envelope such as ``{"total": 2, "encodings": [...]}``. The envelope list
    is taken from ``list_key`` when present, otherwise from the only
    list-valued field of the envelope.
    """
    if isinstance(value, Mapping):
        if list_key is not None and isinstance(value.get(list_key), list):
            items = value[list_key]
        else:
            candidates = [v for v in value.values() if isinstance(v, list)]
            if len(candidates) != 1:
                raise MalformedResponse(
                    f"Cannot find the {kind} list in the response envelope",
                    kind=kind,
                    field=list_key,
                )
            items = candidates[0]
    elif isinstance(value, list):
        items = value
    else:
        raise MalformedResponse(
            f"Expected a list of {kind} records, got {type(value).__name__}",
            kind=kind,
        )

    return [as_record(item, kind) for item in items]
