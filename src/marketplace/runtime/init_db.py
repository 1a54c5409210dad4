"""Database initialization script."""

from src.marketplace.core.services import DbManageService, DbSessionService
from src.marketplace.runtime.context import get_config


def init_db() -> None:
    """Create all database tables for the configured database."""
    config = get_config()
    database_service = DbSessionService(config.database, config.app.environment)
    DbManageService(database_service.engine).create_all()


if __name__ == "__main__":
    init_db()
