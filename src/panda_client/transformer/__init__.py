"""Transformers between wire records and domain entities."""

from panda_client.transformer.base import EntityKind, Transformer
from panda_client.transformer.cloud import CloudTransformer
from panda_client.transformer.encoding import EncodingTransformer
from panda_client.transformer.notifications import NotificationsTransformer
from panda_client.transformer.profile import ProfileTransformer
from panda_client.transformer.registry import TransformerRegistry
from panda_client.transformer.video import VideoTransformer

__all__ = [
    "EntityKind",
    "Transformer",
    "CloudTransformer",
    "EncodingTransformer",
    "NotificationsTransformer",
    "ProfileTransformer",
    "TransformerRegistry",
    "VideoTransformer",
]
