"""Schemas for the player lookup endpoints."""

from pydantic import BaseModel, Field


class UuidLookup(BaseModel):
    """Payload of util/uuid."""

    uuid: str = Field(min_length=1)


class PlayernameLookup(BaseModel):
    """Payload of util/playername."""

    playername: str = Field(min_length=1)
