"""Product database table model."""

from sqlalchemy import JSON, Column
from sqlmodel import Field

from src.marketplace.entities.core._base import EntityTable


class ProductTable(EntityTable, table=True):
    """Database persistence model for products."""

    __tablename__ = "product"

    name: str
    description: str
    tags: list[str] = Field(
        default_factory=lambda: ["OTHER"], sa_column=Column(JSON, nullable=False)
    )
    image: str
    vendor_id: str = Field(foreign_key="vendor.id", index=True)
