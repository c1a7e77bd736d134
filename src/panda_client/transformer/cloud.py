"""Transformer for cloud settings."""

from panda_client.models.cloud import CloudInfo
from panda_client.transformer.base import EntityKind, Transformer


class CloudTransformer(Transformer[CloudInfo]):
    kind = EntityKind.CLOUD
    entity_class = CloudInfo
    list_key = "clouds"
