# agents/market/__init__.py
"""
Market agent package
"""

from .agent import MarketAgent
from .models import MarketPrice, MarketPricesResponse

__all__ = ["MarketAgent", "MarketPrice", "MarketPricesResponse"]
