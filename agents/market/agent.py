# agents/market/agent.py
"""
Market price agent - latest AGMARKNET commodity prices
"""

from typing import List, Optional

from agents.base import AgentResponse, BaseAgent
from agents.market.models import MarketPrice, MarketPricesResponse, MarketUpdateResult
from agents.market.service import MarketPriceService
from core.cache import CacheManager
from core.config import Settings

LATEST_PRICES_KEY = "market:latest"

class MarketAgent(BaseAgent):
    """
    Market price agent

    Features:
    - Scrapes the AGMARKNET price ticker
    - Sorts prices by commodity name
    - Keeps the latest successful snapshot for quick reads
    - Manual and scheduled refresh
    """

    def __init__(self, settings: Optional[Settings] = None, service: Optional[MarketPriceService] = None,
                 cache: Optional[CacheManager] = None):
        super().__init__("market", settings)
        self.service = service or MarketPriceService(config=self.config)
        self.cache = cache or CacheManager(ttl=int(self.config.get("snapshot_ttl", 86400)))
        self.logger.info("Market agent initialized")

    def _validate_config(self) -> None:
        """Validate market agent configuration"""
        required_config = ["ticker_url", "request_timeout", "refresh_interval_minutes"]

        missing = [key for key in required_config if key not in self.config]
        if missing:
            self.logger.warning(f"Missing market config (using defaults): {missing}")

    async def _fetch_sorted_prices(self) -> List[MarketPrice]:
        prices = await self.service.get_market_prices()
        return sorted(prices, key=lambda price: price.commodity.casefold())

    def _to_prices_response(self, envelope: AgentResponse) -> MarketPricesResponse:
        if not envelope.success:
            return MarketPricesResponse(
                success=False,
                error=envelope.error,
                lastUpdated=envelope.timestamp,
                totalItems=0
            )
        return MarketPricesResponse(
            success=True,
            data=envelope.data,
            lastUpdated=envelope.timestamp,
            totalItems=len(envelope.data)
        )

    async def get_market_prices(self) -> MarketPricesResponse:
        """Fresh scrape, sorted by commodity; successful results become the latest snapshot"""
        envelope = await self.execute(self._fetch_sorted_prices, "market prices")
        response = self._to_prices_response(envelope)

        if response.success:
            await self.cache.set(LATEST_PRICES_KEY, response)
            self.logger.info(f"Market prices retrieved successfully: {response.totalItems} items")

        return response

    async def get_latest_market_prices(self) -> MarketPricesResponse:
        """Latest snapshot, or a fresh scrape when there is none"""
        snapshot = await self.cache.get(LATEST_PRICES_KEY)
        if snapshot is not None:
            self.logger.info("Serving market prices from latest snapshot")
            return snapshot
        return await self.get_market_prices()

    async def trigger_update(self) -> MarketUpdateResult:
        """Refresh the snapshot now"""
        response = await self.get_market_prices()

        if response.success:
            message = f"Market prices updated: {response.totalItems} items"
        else:
            message = "Failed to update market prices"

        return MarketUpdateResult(
            success=response.success,
            message=message,
            totalItems=response.totalItems,
            lastUpdated=response.lastUpdated,
            error=response.error
        )
