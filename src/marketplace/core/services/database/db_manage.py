"""Schema management."""

from loguru import logger
from sqlalchemy.engine import Engine
from sqlmodel import SQLModel


def register_tables() -> None:
    """Import every table model so it is present in ``SQLModel.metadata``."""
    from src.marketplace.entities.core.user import UserTable  # noqa: F401
    from src.marketplace.entities.service.market import MarketTable  # noqa: F401
    from src.marketplace.entities.service.product import ProductTable  # noqa: F401
    from src.marketplace.entities.service.vendor import VendorTable  # noqa: F401


class DbManageService:
    def __init__(self, engine: Engine):
        self._engine = engine

    def create_all(self) -> None:
        """Create all database tables."""
        register_tables()
        SQLModel.metadata.create_all(self._engine)
        logger.info("Database initialized with tables.")
