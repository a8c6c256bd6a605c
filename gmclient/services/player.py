"""Player service: lookups by name or UUID."""

from gmclient.context import ApiContext
from gmclient.resources.player import Player


class PlayerService:
    """Finder for players.

    Both lookups always return loaded players, regardless of lazy mode.
    """

    def __init__(self, ctx: ApiContext):
        self._ctx = ctx.eager()

    async def from_playername(self, player_name: str) -> Player:
        """Get a player by name, with the UUID resolved."""
        return await Player.create(self._ctx, player_name=player_name)

    async def from_uuid(self, uuid: str) -> Player:
        """Get a player by UUID, with the name resolved."""
        return await Player.create(self._ctx, uuid=uuid)
