"""Bidirectional conversion between wire records and entities."""

import json
from enum import Enum
from typing import Any, ClassVar, Generic, Optional, TypeVar

from pydantic import TypeAdapter, ValidationError

from panda_client.core import get_logger
from panda_client.core.errors import MalformedResponse
from panda_client.core.params import Params, flatten_params
from panda_client.models.base import Entity
from panda_client.models.wire import WireRecord, as_record, as_record_list

logger = get_logger(__name__)

EntityT = TypeVar("EntityT", bound=Entity)

_extras_adapter = TypeAdapter(dict[str, Any])


class EntityKind(str, Enum):
    """Kinds of entities exchanged with the service."""

    CLOUD = "cloud"
    ENCODING = "encoding"
    NOTIFICATIONS = "notifications"
    PROFILE = "profile"
    VIDEO = "video"


class Transformer(Generic[EntityT]):
    """Converts wire records of one entity kind to entities and back.

    Subclasses set ``kind``, ``entity_class`` and, for kinds the service
    lists, the ``list_key`` used in list response envelopes.
    """

    kind: ClassVar[EntityKind]
    entity_class: ClassVar[type[Entity]]
    list_key: ClassVar[Optional[str]] = None

    def from_wire(self, record: Any) -> EntityT:
        """Validate a wire record and build the entity.

        Raises:
            MalformedResponse: If the record is not a mapping or a field is
                missing or has the wrong type. ``field`` names the first
                offending field.
        """
        record = as_record(record, self.kind.value)
        try:
            return self.entity_class.model_validate(record)  # type: ignore[return-value]
        except ValidationError as e:
            error = e.errors()[0]
            field = ".".join(str(part) for part in error["loc"])
            logger.warning(
                "wire_record_rejected",
                kind=self.kind.value,
                field=field,
                error=error["msg"],
            )
            raise MalformedResponse(
                f"Invalid {self.kind.value} record: field '{field}': {error['msg']}",
                kind=self.kind.value,
                field=field,
            ) from e

    def to_wire(self, entity: EntityT) -> WireRecord:
        """Project an entity back to its wire record.

        Unset declared fields are left out. Undeclared fields are written
        back as received, including those the service sent as null.
        """
        extras = entity.model_extra or {}
        record = entity.model_dump(mode="json", exclude_none=True, exclude=set(extras))
        record.update(_extras_adapter.dump_python(extras, mode="json"))
        return record

    def from_wire_list(self, data: Any) -> list[EntityT]:
        """Build entities from a bare list or a list envelope."""
        records = as_record_list(data, self.kind.value, self.list_key)
        return [self.from_wire(record) for record in records]

    def from_json(self, body: str) -> EntityT:
        return self.from_wire(self.decode(body))

    def from_json_list(self, body: str) -> list[EntityT]:
        return self.from_wire_list(self.decode(body))

    def to_params(self, entity: EntityT) -> Params:
        """Flat request parameters for creating or updating ``entity``."""
        record = self.to_wire(entity)
        for name in entity.read_only_fields:
            record.pop(name, None)
        return flatten_params(record)

    def decode(self, body: str) -> Any:
        """Decode a JSON response body."""
        try:
            return json.loads(body)
        except ValueError as e:
            raise MalformedResponse(
                f"Response for {self.kind.value} is not valid JSON: {e}",
                kind=self.kind.value,
            ) from e
