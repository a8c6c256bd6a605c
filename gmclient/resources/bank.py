"""Bank account resource."""

import logging
from dataclasses import dataclass, field
from typing import Literal, Optional, Union

from gmclient.context import ApiContext
from gmclient.core.logging import get_log_context
from gmclient.resources.player import Player
from gmclient.schemas.bank import AccountType, BankAccountData, BankInfoResponse

logger = logging.getLogger(__name__)

BANK_INFO_ENDPOINT = "bank/info"


@dataclass(frozen=True)
class PrivateBearer:
    """Bearer of a private account: a player."""

    player: Player
    kind: Literal["private"] = field(default="private", init=False)


@dataclass(frozen=True)
class CompanyBearer:
    """Bearer of a company account: the company name."""

    name: str
    kind: Literal["company"] = field(default="company", init=False)


Bearer = Union[PrivateBearer, CompanyBearer]


async def resolve_bearer(data: BankAccountData, ctx: ApiContext) -> Bearer:
    """Turn the raw bearer string into the variant matching the account type.

    Players of private accounts are created with the same context and are
    therefore loaded or left unloaded according to its lazy flag.
    """
    if data.account_type is AccountType.PRIVATE:
        player = await Player.create(ctx, player_name=data.bearer)
        return PrivateBearer(player)
    return CompanyBearer(data.bearer)


class BankAccount:
    """A bank account identified by its account number.

    Unloaded accounts only know their number; ``load()`` fetches bank/info
    and fills in balance, account type and bearer.
    """

    def __init__(self, account_number: str, ctx: ApiContext):
        self._account_number = account_number
        self._ctx = ctx
        self.balance: Optional[float] = None
        self.account_type: Optional[AccountType] = None
        self.bearer: Optional[Bearer] = None

    @property
    def account_number(self) -> str:
        return self._account_number

    @property
    def is_loaded(self) -> bool:
        return self.account_type is not None

    @classmethod
    async def create(cls, account_number: str, ctx: ApiContext) -> "BankAccount":
        """Create an account, loading it right away unless the context is lazy."""
        account = cls(account_number, ctx)
        if not ctx.lazy:
            await account.load()
        return account

    @classmethod
    async def from_data(cls, data: BankAccountData, ctx: ApiContext) -> "BankAccount":
        """Create a loaded account from an already validated record."""
        account = cls(data.account_number, ctx)
        await account._apply(data)
        return account

    async def load(self) -> "BankAccount":
        """Fetch the account details.

        Fields are only assigned once the payload validated and the bearer
        was resolved; on failure the account keeps its previous state.

        Returns:
            The account itself

        Raises:
            LimitReachedError: If the cached quota is exhausted
            ApiError: If the request fails
            pydantic.ValidationError: If the payload is malformed
        """
        await self._ctx.handle_operation()

        data = await self._ctx.fetch(
            BANK_INFO_ENDPOINT, {"accountNumber": self._account_number}
        )
        result = BankInfoResponse.model_validate(data).account

        if self._ctx.debug:
            logger.debug(
                f"BankAccountData successfully validated: {result.model_dump_json(by_alias=True)}",
                extra=get_log_context(
                    endpoint=BANK_INFO_ENDPOINT, account_number=self._account_number
                ),
            )

        await self._apply(result)
        return self

    async def _apply(self, data: BankAccountData) -> None:
        bearer = await resolve_bearer(data, self._ctx)
        self.balance = data.balance
        self.account_type = data.account_type
        self.bearer = bearer

    def __repr__(self) -> str:
        return (
            f"BankAccount(account_number={self._account_number!r}, "
            f"balance={self.balance!r}, account_type={self.account_type!r}, "
            f"bearer={self.bearer!r})"
        )
