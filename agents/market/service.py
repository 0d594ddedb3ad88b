# agents/market/service.py
"""
Market price service - AGMARKNET price ticker scraping
"""
import asyncio
import re
import ssl
import logging
from datetime import date as dt_date, datetime, timezone
from typing import Any, Dict, List, Optional

import aiohttp
import certifi
from bs4 import BeautifulSoup
from dateutil import parser as date_parser

from agents.market.models import MarketPrice
from core.exceptions import ProviderUnavailableError

logger = logging.getLogger(__name__)

DEFAULT_TICKER_URL = "https://agmarknet.gov.in/agnew/namticker.aspx"
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)

_PRICE_PATTERN = re.compile(r"\d+(?:\.\d+)?")

def parse_price(price_text: str) -> float:
    """'Rs. 2,450.00' -> 2450.0; anything unparsable -> 0"""
    match = _PRICE_PATTERN.search((price_text or "").replace(",", ""))
    return float(match.group()) if match else 0.0

def parse_date(date_text: str, today: Optional[dt_date] = None) -> str:
    """Ticker date text -> YYYY-MM-DD, falling back to today"""
    cleaned = re.sub(r"\s+", " ", date_text or "").strip()
    try:
        return date_parser.parse(cleaned).date().isoformat()
    except (ValueError, OverflowError) as e:
        logger.warning(f"Error parsing date {date_text!r}: {e}")
        return (today or datetime.now(timezone.utc).date()).isoformat()

def _span_text(cell, id_fragment: str) -> str:
    span = cell.select_one(f'span[id*="{id_fragment}"]')
    return span.get_text(strip=True) if span else ""

def parse_market_prices_html(html: str, today: Optional[dt_date] = None) -> List[MarketPrice]:
    """
    Extract ticker rows from the AGMARKNET page.

    Only rows with a commodity, a variety and both prices above zero are kept.
    """
    soup = BeautifulSoup(html, "html.parser")

    date_element = soup.select_one("#rptrArrdate_lblDate_0")
    arrival_date = parse_date(date_element.get_text() if date_element else "", today)

    market_prices = []
    for index, cell in enumerate(soup.select("#DataListTicker td")):
        commodity = _span_text(cell, "lblTicker_")
        variety = _span_text(cell, "lblTitle_")
        max_price = parse_price(_span_text(cell, "lblMaxprice_"))
        min_price = parse_price(_span_text(cell, "lblminprice_"))

        if not (commodity and variety and max_price > 0 and min_price > 0):
            logger.debug(f"Skipping incomplete ticker item at index {index}")
            continue

        market_prices.append(MarketPrice(
            commodity=commodity,
            variety=variety,
            maxPrice=max_price,
            minPrice=min_price,
            date=arrival_date
        ))

    logger.info(f"Successfully parsed {len(market_prices)} market prices")
    return market_prices

class MarketPriceService:
    """Fetches and parses the AGMARKNET price ticker"""

    def __init__(self, config: Dict[str, Any]):
        self.config = config
        self.ticker_url = config.get("ticker_url", DEFAULT_TICKER_URL)
        self.user_agent = config.get("user_agent", DEFAULT_USER_AGENT)
        self.timeout = config.get("request_timeout", 10)

    async def fetch_ticker_html(self) -> str:
        """Single attempt; any transport failure or non-200 status is ProviderUnavailableError"""
        connector = aiohttp.TCPConnector(ssl=ssl.create_default_context(cafile=certifi.where()))
        timeout = aiohttp.ClientTimeout(total=self.timeout)
        headers = {"User-Agent": self.user_agent}

        try:
            async with aiohttp.ClientSession(connector=connector, timeout=timeout, headers=headers) as session:
                async with session.get(self.ticker_url) as response:
                    if response.status != 200:
                        raise ProviderUnavailableError(
                            f"Market ticker returned status {response.status}"
                        )
                    return await response.text()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"Failed to fetch market ticker: {e!r}")
            raise ProviderUnavailableError(f"Market provider unavailable: {e!r}") from e

    async def get_market_prices(self) -> List[MarketPrice]:
        logger.info("Fetching market prices from AGMARKNET...")
        html = await self.fetch_ticker_html()
        return parse_market_prices_html(html)
