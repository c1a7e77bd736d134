"""Transformer for cloud notification settings."""

from panda_client.models.notifications import Notifications
from panda_client.models.wire import WireRecord
from panda_client.transformer.base import EntityKind, Transformer


class NotificationsTransformer(Transformer[Notifications]):
    """Notification settings always carry ``url`` and every event flag.

    An empty ``url`` and ``false`` flags are meaningful to the service, so
    they are written out instead of being left out like other unset fields.
    """

    kind = EntityKind.NOTIFICATIONS
    entity_class = Notifications

    def to_wire(self, entity: Notifications) -> WireRecord:
        record = super().to_wire(entity)
        record["url"] = entity.url
        record["events"] = entity.events.model_dump(mode="json")
        return record
