"""Shared utilities for CLI commands."""

from collections.abc import Iterator
from contextlib import contextmanager

import typer
from rich.console import Console
from sqlmodel import Session

from src.marketplace.core.services import DbSessionService
from src.marketplace.runtime.context import get_config

# Initialize Rich console for colored output
console = Console()


def get_database_service() -> DbSessionService:
    config = get_config()
    return DbSessionService(config.database, config.app.environment)


@contextmanager
def database_session() -> Iterator[Session]:
    """Open a committed session, exiting the command on failure."""
    try:
        with get_database_service().session_scope() as db:
            yield db
    except typer.Exit:
        raise
    except Exception as e:
        console.print(f"[red]❌ Database operation failed: {e}[/red]")
        raise typer.Exit(code=1) from e
