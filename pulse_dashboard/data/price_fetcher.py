"""CoinGecko spot price fetcher."""

import logging
from typing import Any

from pulse_dashboard.data.base import JsonFetcher, require_mapping, require_number
from pulse_dashboard.models import PriceQuote


logger = logging.getLogger(__name__)


def parse_quote(payload: Any, asset_id: str, currency: str) -> PriceQuote:
    """
    Map a ``simple/price`` response to a PriceQuote.

    The body looks like ``{"bitcoin": {"usd": 64000.0, "usd_24h_change": -1.2}}``.
    A missing or null change is reported as unknown (None), not zero.
    """
    body = require_mapping(payload, "price")
    entry = require_mapping(body.get(asset_id), f"price.{asset_id}")
    price = require_number(entry, currency, f"price.{asset_id}")

    change_key = f"{currency}_24h_change"
    change = None
    if entry.get(change_key) is not None:
        change = require_number(entry, change_key, f"price.{asset_id}")

    return PriceQuote(asset_id=asset_id, price=price, currency=currency, change_24h=change)


class PriceFetcher(JsonFetcher):
    """Fetches spot prices from CoinGecko."""

    name = "price"

    async def fetch(self, asset_id: str) -> PriceQuote:
        """Fetch the current price and 24h change for one coin."""
        currency = self.settings.display_currency
        payload = await self._get_json(
            f"{self.settings.price_base_url}/simple/price",
            params={
                "ids": asset_id,
                "vs_currencies": currency,
                "include_24hr_change": "true",
            },
        )
        quote = parse_quote(payload, asset_id, currency)
        logger.info(f"  {asset_id}: {quote.price} {currency}")
        return quote
