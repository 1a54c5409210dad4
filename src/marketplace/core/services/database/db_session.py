"""Database engine and session factory used across the application."""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from loguru import logger
from sqlalchemy import text
from sqlmodel import Session, create_engine

from src.marketplace.runtime.config.config_data import DatabaseConfig


class DbSessionService:
    def __init__(self, db_config: DatabaseConfig, environment: str = "development"):
        """Initialize the shared database engine and session factory."""
        self._config = db_config
        logger.info("Configuring database engine for environment: {}", environment)

        engine_kwargs: dict[str, Any] = {
            "echo": db_config.echo,
            "pool_pre_ping": True,
            "connect_args": self._get_connect_args(db_config, environment),
        }
        if not db_config.is_sqlite:
            engine_kwargs.update(
                {
                    "pool_size": db_config.pool_size,
                    "max_overflow": db_config.max_overflow,
                    "pool_timeout": db_config.pool_timeout,
                    "pool_recycle": db_config.pool_recycle,
                }
            )

        self._engine = create_engine(db_config.url, **engine_kwargs)

    @property
    def engine(self):
        return self._engine

    def _get_connect_args(self, db_config: DatabaseConfig, environment: str) -> dict:
        """Get database-specific connection arguments."""
        if "postgresql" in db_config.url:
            return {
                "application_name": f"{environment}_marketplace_api",
                "connect_timeout": 30,
            }

        if db_config.is_sqlite:
            if environment == "production":
                logger.warning(
                    "SQLite is not recommended for production use. "
                    "Consider PostgreSQL for better performance and reliability."
                )
            return {"check_same_thread": False, "timeout": 20}

        return {}

    def get_session(self) -> Session:
        """Return a new SQLModel session bound to the shared engine."""
        return Session(self._engine, expire_on_commit=False, autoflush=True)

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """Transactional scope: commit on success, roll back on error."""
        db = self.get_session()
        try:
            yield db
            db.commit()
        except Exception as e:
            db.rollback()
            logger.bind(error_type=type(e).__name__).error(
                "Database transaction failed: {}", e
            )
            raise
        finally:
            db.close()

    def health_check(self) -> bool:
        """Perform a health check on the database connection."""
        try:
            with self._engine.connect() as connection:
                connection.execute(text("SELECT 1"))
                return True
        except Exception as e:
            logger.bind(error_type=type(e).__name__).error(
                "Database health check failed: {}", e
            )
            return False

    def get_pool_status(self) -> dict:
        """Get current connection pool status for monitoring."""
        pool = self._engine.pool

        # SQLite pools lack some counters, and SingletonThreadPool.size is an int
        def metric(name: str) -> int:
            value = getattr(pool, name, 0)
            return value() if callable(value) else value

        return {
            "pool": type(pool).__name__,
            "size": metric("size"),
            "checked_in": metric("checkedin"),
            "checked_out": metric("checkedout"),
            "overflow": metric("overflow"),
        }
