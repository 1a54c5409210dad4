"""Entity: Product."""

from enum import Enum
from typing import Any

from pydantic import Field, field_validator

from src.marketplace.entities.core._base import Entity
from src.marketplace.entities.service.vendor.entity import VendorWithMarket


class Tag(str, Enum):
    """Product category."""

    PRODUCE = "PRODUCE"
    MEAT = "MEAT"
    DAIRY = "DAIRY"
    BAKERY = "BAKERY"
    SEAFOOD = "SEAFOOD"
    BEVERAGES = "BEVERAGES"
    CRAFTS = "CRAFTS"
    CLOTHING = "CLOTHING"
    OTHER = "OTHER"

    @property
    def label(self) -> str:
        return self.value.capitalize()


class Product(Entity):
    """Product listed by a vendor.

    ``image`` always holds the secure URL handed back by the media host,
    never the uploaded payload itself.
    """

    name: str = Field(min_length=1, description="Product name")
    description: str = Field(min_length=1, description="Product description")
    tags: list[Tag] = Field(
        default_factory=lambda: [Tag.OTHER], description="Category tags"
    )
    image: str = Field(description="Secure URL of the product image")
    vendor_id: str = Field(description="Owning vendor, fixed at creation")

    @field_validator("image")
    @classmethod
    def _image_is_remote_url(cls, value: str) -> str:
        if not value.startswith(("https://", "http://")):
            raise ValueError("image must be a resolved http(s) URL")
        return value

    def __eq__(self, other: Any) -> bool:
        """Compare products by business attributes, ignoring timestamps."""
        if not isinstance(other, Product):
            return False

        return (
            self.id == other.id
            and self.name == other.name
            and self.description == other.description
            and self.tags == other.tags
            and self.image == other.image
            and self.vendor_id == other.vendor_id
        )

    def __hash__(self) -> int:
        return hash((self.id, self.name, self.image, self.vendor_id))


class ProductWithVendor(Product):
    """Product with its vendor and the vendor's market loaded."""

    vendor: VendorWithMarket
