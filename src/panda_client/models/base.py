"""Shared building blocks for domain entities."""

from datetime import datetime, timezone
from typing import Annotated, Any, ClassVar

from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict, PlainSerializer

# Format used by the service for created_at/updated_at style fields,
# e.g. "2009/10/13 19:11:29 +0000".
API_DATETIME_FORMAT = "%Y/%m/%d %H:%M:%S %z"


def parse_api_datetime(value: Any) -> Any:
    """Parse the service timestamp format; other values go on to pydantic (ISO 8601)."""
    if isinstance(value, str):
        try:
            return datetime.strptime(value, API_DATETIME_FORMAT)
        except ValueError:
            return value
    return value


def assume_utc(value: datetime) -> datetime:
    """Naive timestamps are UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def format_api_datetime(value: datetime) -> str:
    """Format a datetime the way the service does.

    The service format has whole-second precision, so values carrying
    microseconds are written as ISO 8601 instead. Both forms parse back to
    the same instant.
    """
    value = assume_utc(value)
    if value.microsecond:
        return value.isoformat()
    return value.strftime(API_DATETIME_FORMAT)


ApiDatetime = Annotated[
    datetime,
    BeforeValidator(parse_api_datetime),
    AfterValidator(assume_utc),
    PlainSerializer(format_api_datetime, return_type=str),
]


class Entity(BaseModel):
    """Base class for entities parsed from wire records.

    Fields the service sends that are not declared on the entity are kept in
    ``model_extra`` and written back out unchanged.
    """

    model_config = ConfigDict(
        extra="allow",
        frozen=True,
        coerce_numbers_to_str=True,
    )

    # Fields the service sets itself; never sent back in create/update requests.
    read_only_fields: ClassVar[frozenset[str]] = frozenset({"id", "created_at", "updated_at"})
