"""Async client for the GermanMiner API."""

from gmclient.client import GMClient
from gmclient.context import ApiContext
from gmclient.exceptions import (
    ApiError,
    ClientConfigError,
    GMClientException,
    LimitReachedError,
    UnexpectedResponseError,
    UsageError,
)
from gmclient.resources import BankAccount, CompanyBearer, Player, PrivateBearer
from gmclient.schemas import AccountType, ApiInfo
from gmclient.services import BankService, PlayerService

__version__ = "0.1.0"

__all__ = [
    "AccountType",
    "ApiContext",
    "ApiError",
    "ApiInfo",
    "BankAccount",
    "BankService",
    "ClientConfigError",
    "CompanyBearer",
    "GMClient",
    "GMClientException",
    "LimitReachedError",
    "Player",
    "PlayerService",
    "PrivateBearer",
    "UnexpectedResponseError",
    "UsageError",
]
