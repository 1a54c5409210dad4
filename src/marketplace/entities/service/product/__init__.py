"""Entity package: Product."""

from .entity import Product, ProductWithVendor, Tag
from .repository import ProductRepository
from .table import ProductTable

__all__ = ["Product", "ProductWithVendor", "Tag", "ProductRepository", "ProductTable"]
