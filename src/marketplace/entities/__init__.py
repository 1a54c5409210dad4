"""Entities organised by business concept.

Each entity package holds:
- entity.py: Domain model
- table.py: Database persistence model
- repository.py: Data access layer
"""

from .core.user import User, UserRepository, UserTable
from .service.market import Market, MarketRepository, MarketTable
from .service.product import (
    Product,
    ProductRepository,
    ProductTable,
    ProductWithVendor,
    Tag,
)
from .service.vendor import Vendor, VendorRepository, VendorTable, VendorWithMarket

__all__ = [
    "User",
    "UserTable",
    "UserRepository",
    "Market",
    "MarketTable",
    "MarketRepository",
    "Vendor",
    "VendorWithMarket",
    "VendorTable",
    "VendorRepository",
    "Product",
    "ProductWithVendor",
    "ProductTable",
    "ProductRepository",
    "Tag",
]
