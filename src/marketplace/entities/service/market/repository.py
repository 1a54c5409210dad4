"""Market repository."""

from sqlmodel import Session, select

from .entity import Market
from .table import MarketTable


class MarketRepository:
    """Data-access layer for markets."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def get(self, market_id: str) -> Market | None:
        row = self._session.get(MarketTable, market_id)
        if row is None:
            return None
        return Market.model_validate(row, from_attributes=True)

    def list_all(self) -> list[Market]:
        rows = self._session.exec(select(MarketTable).order_by(MarketTable.name)).all()
        return [Market.model_validate(row, from_attributes=True) for row in rows]

    def create(self, market: Market) -> Market:
        row = MarketTable(**market.model_dump())
        self._session.add(row)
        self._session.flush()
        self._session.refresh(row)
        return Market.model_validate(row, from_attributes=True)
