"""Configuration records for accounts and clouds.

A configuration names accounts and clouds::

    {
        "accounts": {
            "default": {
                "access_key": "...",
                "secret_key": "...",
                "api_host": "api.pandastream.com",
            },
        },
        "clouds": {
            "default": {"id": "...", "account": "default"},
        },
    }

Validation happens before anything is built, so a bad configuration never
yields a partially usable client.
"""

import os
from collections.abc import Mapping
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from panda_client.api.http_client import DispatcherConfig
from panda_client.core.errors import InvalidConfiguration

DEFAULT_API_HOST = "api.pandastream.com"

ACCOUNT_OPTIONS = ("access_key", "secret_key", "api_host")
CLOUD_OPTIONS = ("id", "account")


class AccountConfig(BaseModel):
    """Credentials of one named account."""

    access_key: str = Field(..., min_length=1)
    secret_key: str = Field(..., min_length=1, repr=False)
    api_host: str = Field(..., min_length=1)


class CloudConfig(BaseModel):
    """A cloud id and the name of the account used to access it."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    id: str = Field(..., min_length=1)
    account: str = Field(..., min_length=1)


class ApiConfig(BaseModel):
    """Complete client configuration."""

    accounts: dict[str, AccountConfig]
    clouds: dict[str, CloudConfig]
    default_account: str = "default"
    default_cloud: str = "default"
    http: DispatcherConfig = Field(default_factory=DispatcherConfig)

    @classmethod
    def from_mapping(cls, config: Mapping[str, Any]) -> "ApiConfig":
        """Validate a raw configuration mapping.

        Raises:
            InvalidConfiguration: If a section is missing, or an entry lacks a
                mandatory option or has an invalid one.
        """
        accounts = {
            name: _validate_entry(AccountConfig, "account", name, entry, ACCOUNT_OPTIONS)
            for name, entry in _section(config, "accounts", "account").items()
        }
        clouds = {
            name: _validate_entry(CloudConfig, "cloud", name, entry, CLOUD_OPTIONS)
            for name, entry in _section(config, "clouds", "cloud").items()
        }

        try:
            http = DispatcherConfig.model_validate(config.get("http") or {})
        except ValidationError as e:
            error = e.errors()[0]
            option = ".".join(str(part) for part in error["loc"])
            raise InvalidConfiguration(
                f"Invalid option {option} for http: {error['msg']}",
                section="http",
                option=option,
            ) from e

        return cls(
            accounts=accounts,
            clouds=clouds,
            default_account=config.get("default_account") or "default",
            default_cloud=config.get("default_cloud") or "default",
            http=http,
        )

    @classmethod
    def from_env(
        cls,
        prefix: str = "PANDA_",
        environ: Optional[Mapping[str, str]] = None,
    ) -> "ApiConfig":
        """Single default account and cloud from environment variables.

        Reads ``<prefix>ACCESS_KEY``, ``<prefix>SECRET_KEY``,
        ``<prefix>API_HOST`` and ``<prefix>CLOUD_ID``.
        """
        environ = os.environ if environ is None else environ
        account: dict[str, Any] = {
            "access_key": environ.get(f"{prefix}ACCESS_KEY"),
            "secret_key": environ.get(f"{prefix}SECRET_KEY"),
            "api_host": environ.get(f"{prefix}API_HOST", DEFAULT_API_HOST),
        }
        cloud: dict[str, Any] = {"id": environ.get(f"{prefix}CLOUD_ID"), "account": "default"}
        return cls.from_mapping({
            "accounts": {"default": account},
            "clouds": {"default": cloud},
        })


def _section(config: Mapping[str, Any], key: str, section: str) -> Mapping[str, Any]:
    value = config.get(key)
    if not isinstance(value, Mapping):
        raise InvalidConfiguration(f"No {section} configuration given.", section=section)
    return value


def _validate_entry(
    model: type[BaseModel],
    section: str,
    name: str,
    entry: Any,
    options: tuple[str, ...],
) -> Any:
    if not isinstance(entry, Mapping):
        raise InvalidConfiguration(
            f"Invalid configuration for {section} {name}",
            section=section,
            name=name,
        )
    for option in options:
        if entry.get(option) is None:
            raise InvalidConfiguration(
                f"Missing option {option} for {section} {name}",
                section=section,
                name=name,
                option=option,
            )
    try:
        return model.model_validate(entry)
    except ValidationError as e:
        error = e.errors()[0]
        option = ".".join(str(part) for part in error["loc"])
        raise InvalidConfiguration(
            f"Invalid option {option} for {section} {name}: {error['msg']}",
            section=section,
            name=name,
            option=option,
        ) from e
