#!/usr/bin/env python3
"""Marketplace command-line interface.

Manages the catalog database and runs the API server.
"""

import typer
import uvicorn
from rich.panel import Panel

from src.marketplace.runtime.init_db import init_db as create_tables

from .catalog_commands import market_app, product_app, vendor_app
from .utils import console

app = typer.Typer(
    name="marketplace",
    help="Marketplace CLI - Manage markets, vendors and products",
    rich_markup_mode="rich",
)

app.add_typer(market_app, name="market")
app.add_typer(vendor_app, name="vendor")
app.add_typer(product_app, name="product")


@app.command(name="init-db")
def init_db() -> None:
    """🗄️ Create all database tables."""
    try:
        create_tables()
    except Exception as e:
        console.print(f"[red]❌ Failed to initialize database: {e}[/red]")
        raise typer.Exit(code=1) from e
    console.print("[green]✅ Database initialized[/green]")


@app.command()
def serve(
    host: str = typer.Option("0.0.0.0", help="Host to bind the server to"),
    port: int = typer.Option(8000, help="Port to bind the server to"),
    reload: bool = typer.Option(False, help="Enable auto-reload on code changes"),
    log_level: str = typer.Option(
        "info", help="Log level (debug, info, warning, error, critical)"
    ),
) -> None:
    """🚀 Start the catalog API server."""
    console.print(
        Panel.fit(
            "[bold green]Starting Marketplace API Server[/bold green]",
            border_style="green",
        )
    )
    console.print(f"[blue]Server will be available at:[/blue] http://{host}:{port}")
    uvicorn.run(
        "src.marketplace.api.http.app:app",
        host=host,
        port=port,
        reload=reload,
        log_level=log_level,
    )


if __name__ == "__main__":
    app()
