"""Entity package: Market."""

from .entity import Market
from .repository import MarketRepository
from .table import MarketTable

__all__ = ["Market", "MarketRepository", "MarketTable"]
