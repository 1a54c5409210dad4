"""Product repository."""

from datetime import UTC, datetime

from sqlmodel import Session, select

from src.marketplace.entities.service.market.entity import Market
from src.marketplace.entities.service.market.table import MarketTable
from src.marketplace.entities.service.vendor.entity import VendorWithMarket
from src.marketplace.entities.service.vendor.table import VendorTable

from .entity import Product, ProductWithVendor
from .table import ProductTable


def _with_vendor(
    product: ProductTable, vendor: VendorTable, market: MarketTable
) -> ProductWithVendor:
    vendor_data = VendorWithMarket(
        **vendor.model_dump(),
        market=Market.model_validate(market, from_attributes=True),
    )
    return ProductWithVendor(**product.model_dump(), vendor=vendor_data)


class ProductRepository:
    """Data-access layer for products.

    Reads always load the owning vendor and that vendor's market.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def _joined(self):
        return (
            select(ProductTable, VendorTable, MarketTable)
            .join(VendorTable, ProductTable.vendor_id == VendorTable.id)
            .join(MarketTable, VendorTable.market_id == MarketTable.id)
        )

    def list_all(self, market_id: str | None = None) -> list[ProductWithVendor]:
        """List products, restricted to one market's vendors when ``market_id`` is given."""
        statement = self._joined()
        if market_id:
            statement = statement.where(MarketTable.id == market_id)
        statement = statement.order_by(ProductTable.created_at)
        rows = self._session.exec(statement).all()
        return [_with_vendor(product, vendor, market) for product, vendor, market in rows]

    def get(self, product_id: str) -> ProductWithVendor | None:
        statement = self._joined().where(ProductTable.id == product_id)
        row = self._session.exec(statement).first()
        if row is None:
            return None
        product, vendor, market = row
        return _with_vendor(product, vendor, market)

    def create(self, product: Product) -> Product:
        row = ProductTable(
            id=product.id,
            name=product.name,
            description=product.description,
            tags=[tag.value for tag in product.tags],
            image=product.image,
            vendor_id=product.vendor_id,
            created_at=product.created_at,
            updated_at=product.updated_at,
        )
        self._session.add(row)
        self._session.flush()
        self._session.refresh(row)
        return Product.model_validate(row, from_attributes=True)

    def update(self, product: Product) -> Product:
        """Persist edited fields. The owning vendor is never reassigned."""
        row = self._session.get(ProductTable, product.id)
        if row is None:
            raise ValueError(f"Product {product.id} not found")

        row.name = product.name
        row.description = product.description
        row.tags = [tag.value for tag in product.tags]
        row.image = product.image
        row.updated_at = datetime.now(UTC)

        self._session.add(row)
        self._session.flush()
        self._session.refresh(row)
        return Product.model_validate(row, from_attributes=True)
