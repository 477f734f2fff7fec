from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import httpx

from betledger.config import settings

logger = logging.getLogger(__name__)

SPORT_KEYS = {
    "NFL": "americanfootball_nfl",
    "NBA": "basketball_nba",
    "MLB": "baseball_mlb",
    "NHL": "icehockey_nhl",
    "NCAAF": "americanfootball_ncaaf",
    "NCAAB": "basketball_ncaab",
}
MARKET_KEYS = {
    "MONEYLINE": "h2h",
    "SPREAD": "spreads",
    "TOTAL_OVER": "totals",
    "TOTAL_UNDER": "totals",
}


def sport_key(sport: str) -> str:
    return SPORT_KEYS.get(sport.strip().upper(), SPORT_KEYS["NFL"])


def market_key(bet_type: str) -> str:
    return MARKET_KEYS.get(bet_type.strip().upper(), "h2h")


@dataclass
class OddsAPIResult:
    data: list[dict[str, Any]]
    requests_remaining: int | None


class OddsAPIClient:
    def __init__(self, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self.base_url = settings.odds_api_base_url.rstrip("/")
        self.api_key = settings.odds_api_key
        self.requests_remaining: int | None = None
        self._transport = transport

    def _remember_quota(self, response: httpx.Response) -> None:
        remaining = response.headers.get("x-requests-remaining", "")
        if remaining.isdigit():
            self.requests_remaining = int(remaining)
            logger.debug("odds api quota: requests_remaining=%s", self.requests_remaining)

    async def _get(self, path: str, params: dict[str, Any]) -> OddsAPIResult:
        if not self.api_key:
            logger.warning("ODDS_API_KEY is not configured; skipping request to %s", path)
            return OddsAPIResult(data=[], requests_remaining=self.requests_remaining)
        query = {**params, "apiKey": self.api_key}
        url = f"{self.base_url}/{path.lstrip('/')}"
        async with httpx.AsyncClient(timeout=settings.http_timeout_seconds, transport=self._transport) as client:
            response = await client.get(url, params=query)
        response.raise_for_status()
        self._remember_quota(response)
        payload = response.json()
        games = payload if isinstance(payload, list) else [payload]
        return OddsAPIResult(data=games, requests_remaining=self.requests_remaining)

    async def get_odds(
        self,
        sport: str,
        regions: str | None = None,
        markets: str | None = None,
        bookmakers: str | None = None,
    ) -> OddsAPIResult:
        params: dict[str, Any] = {
            "regions": regions or settings.odds_api_regions,
            "markets": markets or settings.odds_api_markets,
            "oddsFormat": "american",
        }
        if bookmakers:
            params["bookmakers"] = bookmakers
        return await self._get(f"sports/{sport}/odds", params=params)

    async def get_live_odds(self, sport: str) -> list[dict[str, Any]]:
        """Odds for every upcoming game of a sport key; provider failures yield an empty list."""
        try:
            result = await self.get_odds(sport)
        except httpx.HTTPError:
            logger.exception("Failed to fetch odds for sport %s", sport)
            return []
        return result.data
