"""Registry routing conversions to the transformer of each entity kind."""

from collections.abc import Mapping
from typing import Optional, Union

from panda_client.core import get_logger
from panda_client.transformer.base import EntityKind, Transformer
from panda_client.transformer.cloud import CloudTransformer
from panda_client.transformer.encoding import EncodingTransformer
from panda_client.transformer.notifications import NotificationsTransformer
from panda_client.transformer.profile import ProfileTransformer
from panda_client.transformer.video import VideoTransformer

logger = get_logger(__name__)


class TransformerRegistry:
    """Holds exactly one transformer per entity kind.

    The registry is filled when the API is built and only read afterwards.
    Asking for a kind nobody registered is a programming error and raises
    ``LookupError``.
    """

    def __init__(self, transformers: Optional[Mapping[EntityKind, Transformer]] = None):
        self._transformers: dict[EntityKind, Transformer] = {}
        for kind, transformer in (transformers or {}).items():
            self.register(kind, transformer)

    @classmethod
    def default(cls) -> "TransformerRegistry":
        """Registry with the built-in transformer for every kind."""
        return cls({
            EntityKind.CLOUD: CloudTransformer(),
            EntityKind.ENCODING: EncodingTransformer(),
            EntityKind.NOTIFICATIONS: NotificationsTransformer(),
            EntityKind.PROFILE: ProfileTransformer(),
            EntityKind.VIDEO: VideoTransformer(),
        })

    def register(self, kind: Union[EntityKind, str], transformer: Transformer) -> None:
        """Register ``transformer`` for ``kind``, replacing any previous one."""
        kind = EntityKind(kind)
        if transformer.kind is not kind:
            raise ValueError(
                f"{type(transformer).__name__} handles {transformer.kind.value}, not {kind.value}"
            )
        self._transformers[kind] = transformer
        logger.debug("transformer_registered", kind=kind.value, transformer=type(transformer).__name__)

    def get(self, kind: Union[EntityKind, str]) -> Transformer:
        try:
            return self._transformers[EntityKind(kind)]
        except (KeyError, ValueError):
            raise LookupError(f"No transformer registered for {kind!r}") from None

    def is_complete(self) -> bool:
        """Whether every entity kind has a transformer."""
        return all(kind in self._transformers for kind in EntityKind)

    @property
    def cloud(self) -> CloudTransformer:
        return self.get(EntityKind.CLOUD)  # type: ignore[return-value]

    @property
    def encoding(self) -> EncodingTransformer:
        return self.get(EntityKind.ENCODING)  # type: ignore[return-value]

    @property
    def notifications(self) -> NotificationsTransformer:
        return self.get(EntityKind.NOTIFICATIONS)  # type: ignore[return-value]

    @property
    def profile(self) -> ProfileTransformer:
        return self.get(EntityKind.PROFILE)  # type: ignore[return-value]

    @property
    def video(self) -> VideoTransformer:
        return self.get(EntityKind.VIDEO)  # type: ignore[return-value]
