"""Pydantic models for API payloads."""

from gmclient.schemas.api_info import ApiInfo
from gmclient.schemas.bank import AccountType, BankAccountData, BankInfoResponse
from gmclient.schemas.player import PlayernameLookup, UuidLookup

__all__ = [
    "AccountType",
    "ApiInfo",
    "BankAccountData",
    "BankInfoResponse",
    "PlayernameLookup",
    "UuidLookup",
]
