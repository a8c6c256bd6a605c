"""Player resource identified by name and/or UUID."""

import logging
from typing import Optional

from gmclient.context import ApiContext
from gmclient.core.logging import get_log_context
from gmclient.exceptions import UsageError
from gmclient.schemas.player import PlayernameLookup, UuidLookup

logger = logging.getLogger(__name__)

UUID_ENDPOINT = "util/uuid"
PLAYERNAME_ENDPOINT = "util/playername"


class Player:
    """A player known by at least one of name and UUID.

    ``load()`` resolves whichever key is missing through the lookup
    endpoints. A player is loaded once both keys are known.
    """

    def __init__(
        self,
        ctx: ApiContext,
        player_name: Optional[str] = None,
        uuid: Optional[str] = None,
    ):
        if not player_name and not uuid:
            raise UsageError("A player needs a player name or a UUID.")
        self.player_name: Optional[str] = player_name or None
        self.uuid: Optional[str] = uuid or None
        self._ctx = ctx

    @classmethod
    async def create(
        cls,
        ctx: ApiContext,
        player_name: Optional[str] = None,
        uuid: Optional[str] = None,
    ) -> "Player":
        """Create a player, loading it right away unless the context is lazy."""
        player = cls(ctx, player_name=player_name, uuid=uuid)
        if not ctx.lazy:
            await player.load()
        return player

    @property
    def is_loaded(self) -> bool:
        return self.player_name is not None and self.uuid is not None

    async def load(self) -> "Player":
        """Resolve the missing key.

        Returns:
            The player itself

        Raises:
            UsageError: If neither key is set
            LimitReachedError: If the cached quota is exhausted
            ApiError: If the lookup fails
            pydantic.ValidationError: If the lookup payload is malformed
        """
        if not self.player_name and not self.uuid:
            raise UsageError("A player needs a player name or a UUID.")
        if self.is_loaded:
            return self

        await self._ctx.handle_operation()

        if self.uuid is None:
            data = await self._ctx.fetch(UUID_ENDPOINT, {"playername": self.player_name})
            self.uuid = UuidLookup.model_validate(data).uuid
        else:
            data = await self._ctx.fetch(PLAYERNAME_ENDPOINT, {"uuid": self.uuid})
            self.player_name = PlayernameLookup.model_validate(data).playername

        if self._ctx.debug:
            logger.debug(
                "Player resolved",
                extra=get_log_context(player_name=self.player_name, uuid=self.uuid),
            )
        return self

    def __repr__(self) -> str:
        return f"Player(player_name={self.player_name!r}, uuid={self.uuid!r})"
