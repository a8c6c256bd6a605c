"""Schemas for the bank endpoints."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class AccountType(str, Enum):
    """Bank account types as reported by the API."""

    PRIVATE = "Privatkonto"
    COMPANY = "Firma"


class BankAccountData(BaseModel):
    """A single bank account record."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    account_number: str = Field(alias="accountNumber")
    balance: float
    account_type: AccountType = Field(alias="accountType")
    bearer: str = Field(min_length=1)


class BankInfoResponse(BaseModel):
    """Payload of bank/info."""

    account: BankAccountData
