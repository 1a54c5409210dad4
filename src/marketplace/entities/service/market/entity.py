"""Entity: Market."""

from pydantic import Field

from src.marketplace.entities.core._base import Entity


class Market(Entity):
    """A physical or virtual marketplace grouping vendors."""

    name: str = Field(description="Market name")
    location: str | None = Field(default=None, description="Where the market is held")
