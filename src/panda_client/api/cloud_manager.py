"""Registry of named clouds."""

from panda_client.api.cloud import Cloud
from panda_client.core import get_logger
from panda_client.core.errors import InvalidConfiguration

logger = get_logger(__name__)


class CloudManager:
    """Keeps track of clouds by their configured name."""

    def __init__(self, default_cloud: str = "default"):
        self._clouds: dict[str, Cloud] = {}
        self._default_cloud = default_cloud

    def register_cloud(self, name: str, cloud: Cloud) -> None:
        """Register ``cloud`` under ``name``, replacing a previous registration."""
        if name in self._clouds:
            logger.info("cloud_replaced", name=name)
        self._clouds[name] = cloud
        logger.debug("cloud_registered", name=name, cloud_id=cloud.cloud_id)

    def has_cloud(self, name: str) -> bool:
        return name in self._clouds

    def get_cloud(self, name: str) -> Cloud:
        try:
            return self._clouds[name]
        except KeyError:
            raise InvalidConfiguration(
                f"No cloud registered with name {name}",
                section="cloud",
                name=name,
            ) from None

    def set_default_cloud(self, name: str) -> None:
        self._default_cloud = name

    def get_default_cloud(self) -> Cloud:
        return self.get_cloud(self._default_cloud)

    @property
    def default_cloud_name(self) -> str:
        return self._default_cloud

    def names(self) -> list[str]:
        return list(self._clouds)

    def clouds(self) -> list[Cloud]:
        return list(self._clouds.values())
