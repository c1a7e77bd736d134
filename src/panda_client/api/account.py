"""Account credentials and the registry of named accounts."""

from dataclasses import dataclass, field
from typing import Optional

from panda_client.core import get_logger
from panda_client.core.errors import InvalidConfiguration

logger = get_logger(__name__)


@dataclass(frozen=True)
class Account:
    """Credentials used to sign requests for one API host."""

    access_key: str
    secret_key: str = field(repr=False)
    api_host: str

    def __post_init__(self) -> None:
        for option in ("access_key", "api_host"):
            if not getattr(self, option):
                raise InvalidConfiguration(
                    f"Empty option {option} for account",
                    section="account",
                    option=option,
                )


class AccountManager:
    """Keeps track of accounts by their configured name."""

    def __init__(self, default_account: str = "default"):
        self._accounts: dict[str, Account] = {}
        self._default_account = default_account

    def register_account(self, name: str, account: Account) -> None:
        """Register ``account`` under ``name``, replacing a previous registration."""
        if name in self._accounts:
            logger.info("account_replaced", name=name)
        self._accounts[name] = account
        logger.debug("account_registered", name=name, access_key=account.access_key)

    def has_account(self, name: str) -> bool:
        return name in self._accounts

    def get_account(self, name: str) -> Account:
        try:
            return self._accounts[name]
        except KeyError:
            raise InvalidConfiguration(
                f"No account registered with name {name}",
                section="account",
                name=name,
            ) from None

    def set_default_account(self, name: str) -> None:
        self._default_account = name

    def get_default_account(self) -> Account:
        return self.get_account(self._default_account)

    @property
    def default_account_name(self) -> str:
        return self._default_account

    def names(self) -> list[str]:
        return list(self._accounts)
