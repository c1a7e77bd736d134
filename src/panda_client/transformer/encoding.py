"""Transformer for encodings."""

from panda_client.models.encoding import Encoding
from panda_client.transformer.base import EntityKind, Transformer


class EncodingTransformer(Transformer[Encoding]):
    kind = EntityKind.ENCODING
    entity_class = Encoding
    list_key = "encodings"
