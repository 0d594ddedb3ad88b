# agents/market/scheduler.py
"""
Periodic market price refresh
"""
import asyncio
import logging
from typing import Optional

from agents.market.agent import MarketAgent

logger = logging.getLogger(__name__)

class MarketPriceScheduler:
    """Background task that refreshes the market snapshot on a fixed interval"""

    def __init__(self, agent: MarketAgent, interval_minutes: float = 60):
        if interval_minutes <= 0:
            raise ValueError("interval_minutes must be positive")
        self.agent = agent
        self.interval_seconds = interval_minutes * 60
        self._task: Optional[asyncio.Task] = None

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.is_running:
            return
        self._task = asyncio.create_task(self._run(), name="market-price-scheduler")
        logger.info(f"Market price scheduler started (every {self.interval_seconds / 60:g} minutes)")

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("Market price scheduler stopped")

    async def _run(self) -> None:
        while True:
            result = await self.agent.trigger_update()
            if result.success:
                logger.info(f"Scheduled market update: {result.totalItems} items")
            else:
                logger.warning(f"Scheduled market update failed: {result.error}")
            await asyncio.sleep(self.interval_seconds)
