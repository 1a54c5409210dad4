"""HTTP client helpers for catalog front ends."""

from .edit_product import (
    EditProductController,
    ProductLoadError,
    ProductUpdateError,
)

__all__ = ["EditProductController", "ProductLoadError", "ProductUpdateError"]
