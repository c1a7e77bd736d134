"""Transformer for encoding profiles."""

from panda_client.core.params import Params
from panda_client.models.profile import Profile
from panda_client.transformer.base import EntityKind, Transformer


class ProfileTransformer(Transformer[Profile]):
    kind = EntityKind.PROFILE
    entity_class = Profile
    list_key = "profiles"

    def to_params(self, entity: Profile) -> Params:
        # Preset based profiles only accept the preset and its name.
        if entity.preset_name:
            params = {"preset_name": entity.preset_name, "name": entity.name}
            if entity.title:
                params["title"] = entity.title
            return params
        return super().to_params(entity)
