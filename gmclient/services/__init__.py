"""Services package.

This package provides finders that construct resource objects:
- Bank accounts (single lookup and listing)
- Players (by name or UUID)
"""

from gmclient.services.bank import BankService, extract_items
from gmclient.services.player import PlayerService

__all__ = [
    "BankService",
    "PlayerService",
    "extract_items",
]
