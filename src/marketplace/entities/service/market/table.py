"""Market database table model."""

from src.marketplace.entities.core._base import EntityTable


class MarketTable(EntityTable, table=True):
    """Database persistence model for markets."""

    __tablename__ = "market"

    name: str
    location: str | None = None
