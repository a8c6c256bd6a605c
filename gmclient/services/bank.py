"""Bank service: finders for bank accounts."""

import logging
from typing import Any, List

from gmclient.context import ApiContext
from gmclient.core.logging import get_log_context
from gmclient.exceptions import UnexpectedResponseError
from gmclient.resources.bank import BankAccount
from gmclient.schemas.bank import BankAccountData

logger = logging.getLogger(__name__)

BANK_LIST_ENDPOINT = "bank/list"

# Keys checked, in order, for an embedded list of accounts
COLLECTION_KEYS = ("accounts", "list", "results", "data")


def extract_items(data: Any) -> List[Any]:
    """Normalize the bank/list payload into a flat list of records.

    Accepts:
    - a list directly
    - a dict containing a list under one of COLLECTION_KEYS
    - a dict with any other list-valued field (the first one wins)
    - a dict mapping ids to records (its values are used)
    - an empty dict (no accounts)

    Raises:
        UnexpectedResponseError: If none of the shapes match
    """
    if isinstance(data, list):
        return data

    if isinstance(data, dict):
        if not data:
            return []

        for key in COLLECTION_KEYS:
            if isinstance(data.get(key), list):
                return data[key]

        for value in data.values():
            if isinstance(value, list):
                return value

        values = list(data.values())
        if all(isinstance(v, dict) for v in values):
            return values

    raise UnexpectedResponseError(
        BANK_LIST_ENDPOINT,
        "expected a list or an object containing a list",
    )


class BankService:
    """Finder for bank accounts."""

    def __init__(self, ctx: ApiContext):
        self._ctx = ctx

    async def get(self, account_number: str) -> BankAccount:
        """Get a bank account.

        A new instance is returned on every call. With lazy mode enabled the
        account is returned unloaded.
        """
        return await BankAccount.create(account_number, self._ctx)

    async def list_all(self) -> List[BankAccount]:
        """List all bank accounts of the API key.

        Every record is validated; a single malformed record fails the
        whole call.

        Raises:
            LimitReachedError: If the cached quota is exhausted
            ApiError: If the request fails
            UnexpectedResponseError: If the payload holds no collection
            pydantic.ValidationError: If a record is malformed
        """
        await self._ctx.handle_operation()

        data = await self._ctx.fetch(BANK_LIST_ENDPOINT)
        records = [BankAccountData.model_validate(item) for item in extract_items(data)]

        if self._ctx.debug:
            logger.debug(
                f"{len(records)} bank accounts successfully validated",
                extra=get_log_context(endpoint=BANK_LIST_ENDPOINT),
            )

        return [await BankAccount.from_data(record, self._ctx) for record in records]
