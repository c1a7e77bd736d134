"""Transformer for videos."""

from typing import Any

from panda_client.core.errors import MalformedResponse
from panda_client.models.video import Video, VideoPage
from panda_client.transformer.base import EntityKind, Transformer


class VideoTransformer(Transformer[Video]):
    kind = EntityKind.VIDEO
    entity_class = Video
    list_key = "videos"

    def from_wire_page(self, data: Any) -> VideoPage:
        """Build a page of videos from a paginated listing.

        A bare list is accepted too and treated as a single page holding
        everything.
        """
        items = self.from_wire_list(data)
        if not isinstance(data, dict):
            return VideoPage(items=items, page=1, per_page=len(items), total=len(items))
        try:
            return VideoPage(
                items=items,
                page=int(data.get("page", 1)),
                per_page=int(data.get("per_page", len(items))),
                total=int(data.get("total", len(items))),
            )
        except (TypeError, ValueError) as e:
            raise MalformedResponse(
                f"Invalid pagination data in video listing: {e}",
                kind=self.kind.value,
            ) from e

    def from_json_page(self, body: str) -> VideoPage:
        return self.from_wire_page(self.decode(body))
