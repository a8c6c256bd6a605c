"""Resource objects loaded from the API."""

from gmclient.resources.bank import (
    BankAccount,
    Bearer,
    CompanyBearer,
    PrivateBearer,
    resolve_bearer,
)
from gmclient.resources.base import Loadable
from gmclient.resources.player import Player

__all__ = [
    "BankAccount",
    "Bearer",
    "CompanyBearer",
    "Loadable",
    "Player",
    "PrivateBearer",
    "resolve_bearer",
]
