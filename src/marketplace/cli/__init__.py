"""Command-line interface for the marketplace catalog."""

from .main import app

__all__ = ["app"]
