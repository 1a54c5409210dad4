"""Catalog data commands: markets, vendors and products."""

import typer
from rich.table import Table

from src.marketplace.entities import (
    Market,
    MarketRepository,
    ProductRepository,
    User,
    UserRepository,
    Vendor,
    VendorRepository,
)

from .utils import console, database_session

market_app = typer.Typer(help="🏪 Market management commands")
vendor_app = typer.Typer(help="🧑‍🌾 Vendor management commands")
product_app = typer.Typer(help="📦 Product catalog commands")


@market_app.command("add")
def add_market(
    name: str = typer.Argument(..., help="Market name"),
    location: str = typer.Option(..., "--location", "-l", help="Market location"),
) -> None:
    """Add a market."""
    with database_session() as db:
        market = MarketRepository(db).create(Market(name=name, location=location))
    console.print(f"[green]✅ Market '{market.name}' created: {market.id}[/green]")


@market_app.command("ls")
def list_markets() -> None:
    """List markets."""
    with database_session() as db:
        markets = MarketRepository(db).list_all()

    if not markets:
        console.print("[yellow]No markets found[/yellow]")
        return

    table = Table(title="Markets")
    table.add_column("ID", style="cyan")
    table.add_column("Name", style="green")
    table.add_column("Location", style="blue")
    for market in markets:
        table.add_row(market.id, market.name, market.location)
    console.print(table)


@vendor_app.command("add")
def add_vendor(
    name: str = typer.Argument(..., help="Vendor (stall) name"),
    market_id: str = typer.Option(..., "--market-id", "-m", help="Market the vendor trades at"),
    phone: str = typer.Option(..., "--phone", "-p", help="Phone of the operating user"),
    first_name: str = typer.Option("", "--first-name", "-f", help="User first name"),
    last_name: str = typer.Option("", "--last-name", "-l", help="User last name"),
    email: str | None = typer.Option(None, "--email", "-e", help="User email"),
) -> None:
    """Add a vendor, creating its operating user when the phone is new."""
    with database_session() as db:
        if MarketRepository(db).get(market_id) is None:
            console.print(f"[red]❌ Market '{market_id}' not found[/red]")
            raise typer.Exit(code=1)

        users = UserRepository(db)
        user = users.get_by_phone(phone)
        if user is None:
            user = users.create(
                User(first_name=first_name, last_name=last_name, email=email, phone=phone)
            )
            console.print(f"[blue]👤 Created user {user.id} for {phone}[/blue]")

        vendor = VendorRepository(db).create(
            Vendor(name=name, user_id=user.id, market_id=market_id)
        )
    console.print(f"[green]✅ Vendor '{vendor.name}' created: {vendor.id}[/green]")


@product_app.command("ls")
def list_products(
    market_id: str | None = typer.Option(None, "--market-id", "-m", help="Only this market"),
) -> None:
    """List products with their vendor and market."""
    with database_session() as db:
        products = ProductRepository(db).list_all(market_id)

    if not products:
        console.print("[yellow]No products found[/yellow]")
        return

    table = Table(title="Products")
    table.add_column("ID", style="cyan")
    table.add_column("Name", style="green")
    table.add_column("Tags", style="magenta")
    table.add_column("Vendor", style="blue")
    table.add_column("Market", style="blue")
    for product in products:
        table.add_row(
            product.id,
            product.name,
            ", ".join(tag.value for tag in product.tags),
            product.vendor.name,
            product.vendor.market.name,
        )
    console.print(table)
    console.print(f"\n[green]Found {len(products)} products[/green]")
