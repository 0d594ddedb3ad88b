# agents/market/models.py
"""
Pydantic models for market agent
"""
from pydantic import BaseModel, Field
from typing import List, Optional

class MarketPrice(BaseModel):
    commodity: str = Field(..., min_length=1, description="Commodity name")
    variety: str = Field(..., min_length=1, description="Variety of the commodity")
    maxPrice: float = Field(..., gt=0, description="Maximum price (Rs/quintal)")
    minPrice: float = Field(..., gt=0, description="Minimum price (Rs/quintal)")
    date: str = Field(..., description="Arrival date (YYYY-MM-DD)")

class MarketPricesResponse(BaseModel):
    success: bool
    data: Optional[List[MarketPrice]] = None
    error: Optional[str] = None
    lastUpdated: str
    totalItems: int = 0

class MarketUpdateResult(BaseModel):
    success: bool
    message: str
    totalItems: int = 0
    lastUpdated: str
    error: Optional[str] = None
