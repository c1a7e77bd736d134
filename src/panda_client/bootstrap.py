"""Composition root assembling accounts, clouds and their collaborators.

``ApiBuilder`` holds one factory per component. Replacing a factory, or a
single transformer through ``with_transformer``, swaps that component
without touching how the rest is wired.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Union

from panda_client.api.account import Account, AccountManager
from panda_client.api.cloud import Cloud
from panda_client.api.cloud_manager import CloudManager
from panda_client.api.http_client import DispatcherConfig, RequestDispatcher
from panda_client.api.signer import Signer
from panda_client.config import ApiConfig
from panda_client.core import get_logger
from panda_client.core.errors import InvalidConfiguration
from panda_client.transformer.base import EntityKind, Transformer
from panda_client.transformer.registry import TransformerRegistry

logger = get_logger(__name__)


class Api:
    """A fully built client: named accounts, named clouds and transformers."""

    def __init__(
        self,
        account_manager: AccountManager,
        cloud_manager: CloudManager,
        transformers: TransformerRegistry,
    ):
        self.account_manager = account_manager
        self.cloud_manager = cloud_manager
        self.transformers = transformers

    @classmethod
    def from_config(cls, config: Union[ApiConfig, Mapping[str, Any]]) -> "Api":
        return ApiBuilder().build(config)

    def get_cloud(self, name: Optional[str] = None) -> Cloud:
        """Return a cloud by its configured name, or the default cloud."""
        if name is None:
            return self.cloud_manager.get_default_cloud()
        return self.cloud_manager.get_cloud(name)

    async def close(self) -> None:
        """Close HTTP sessions kept open by the clouds' dispatchers."""
        for cloud in self.cloud_manager.clouds():
            await cloud.dispatcher.close()

    async def __aenter__(self) -> "Api":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()


@dataclass
class ApiBuilder:
    """Builds an ``Api`` from a configuration."""

    account_manager_factory: Callable[[str], AccountManager] = AccountManager
    cloud_manager_factory: Callable[[str], CloudManager] = CloudManager
    account_factory: Callable[[str, str, str], Account] = Account
    signer_factory: Callable[[], Signer] = Signer
    dispatcher_factory: Callable[[DispatcherConfig], RequestDispatcher] = RequestDispatcher
    registry_factory: Callable[[], TransformerRegistry] = TransformerRegistry.default
    cloud_factory: Callable[..., Cloud] = Cloud
    transformer_overrides: dict[EntityKind, Transformer] = field(default_factory=dict)

    def with_transformer(self, kind: Union[EntityKind, str], transformer: Transformer) -> "ApiBuilder":
        self.transformer_overrides[EntityKind(kind)] = transformer
        return self

    def build(self, config: Union[ApiConfig, Mapping[str, Any]]) -> Api:
        """Validate ``config`` and assemble the client.

        Raises:
            InvalidConfiguration: If the configuration is incomplete, a cloud
                names an unknown account, or a transformer is missing.
        """
        if not isinstance(config, ApiConfig):
            config = ApiConfig.from_mapping(config)

        transformers = self.registry_factory()
        for kind, transformer in self.transformer_overrides.items():
            transformers.register(kind, transformer)
        if not transformers.is_complete():
            missing = [kind.value for kind in EntityKind if not _has_transformer(transformers, kind)]
            raise InvalidConfiguration(
                f"No transformer configured for {', '.join(missing)}",
                section="transformers",
            )

        account_manager = self.account_manager_factory(config.default_account)
        for name, account_config in config.accounts.items():
            account_manager.register_account(
                name,
                self.account_factory(
                    account_config.access_key,
                    account_config.secret_key,
                    account_config.api_host,
                ),
            )

        # Resolve every account reference before any cloud is created.
        resolved: list[tuple[str, str, Account]] = []
        for name, cloud_config in config.clouds.items():
            if not account_manager.has_account(cloud_config.account):
                raise InvalidConfiguration(
                    f"Invalid account {cloud_config.account} for cloud {name}",
                    section="cloud",
                    name=name,
                    option="account",
                )
            resolved.append((name, cloud_config.id, account_manager.get_account(cloud_config.account)))

        signer = self.signer_factory()
        cloud_manager = self.cloud_manager_factory(config.default_cloud)
        for name, cloud_id, account in resolved:
            cloud = self.cloud_factory(
                cloud_id,
                account,
                signer,
                self.dispatcher_factory(config.http),
                transformers,
            )
            cloud_manager.register_cloud(name, cloud)

        logger.info(
            "api_built",
            accounts=account_manager.names(),
            clouds=cloud_manager.names(),
        )
        return Api(account_manager, cloud_manager, transformers)


def _has_transformer(transformers: TransformerRegistry, kind: EntityKind) -> bool:
    try:
        transformers.get(kind)
    except LookupError:
        return False
    return True


def get_cloud_instance(
    access_key: str,
    secret_key: str,
    api_host: str,
    cloud_id: str,
    http: Optional[Union[DispatcherConfig, Mapping[str, Any]]] = None,
) -> Cloud:
    """Build a client for a single account and cloud and return the cloud."""
    config: dict[str, Any] = {
        "accounts": {
            "default": {
                "access_key": access_key,
                "secret_key": secret_key,
                "api_host": api_host,
            },
        },
        "clouds": {
            "default": {"id": cloud_id, "account": "default"},
        },
    }
    if http is not None:
        config["http"] = http.model_dump() if isinstance(http, DispatcherConfig) else dict(http)
    return ApiBuilder().build(config).get_cloud("default")
