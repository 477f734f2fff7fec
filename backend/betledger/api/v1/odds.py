from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from betledger.analytics.best_bets import find_best_bets, find_best_odds
from betledger.api.v1.deps import get_odds_client
from betledger.data_providers.odds_api import OddsAPIClient, market_key, sport_key

router = APIRouter(prefix="/odds", tags=["odds"])


@router.get("/live")
async def live_odds(
    sport: str = Query(default="NFL"),
    client: OddsAPIClient = Depends(get_odds_client),
) -> list[dict]:
    return await client.get_live_odds(sport_key(sport))


@router.get("/best")
async def best_odds(
    team: str = Query(...),
    sport: str = Query(default="NFL"),
    bet_type: str = Query(default="MONEYLINE"),
    client: OddsAPIClient = Depends(get_odds_client),
) -> dict:
    games = await client.get_live_odds(sport_key(sport))
    return find_best_odds(games, team, market_key(bet_type))


@router.get("/best-bets-today")
async def best_bets_today(
    sport: str = Query(default="NFL"),
    limit: int = Query(default=10, ge=1, le=50),
    client: OddsAPIClient = Depends(get_odds_client),
) -> list[dict]:
    games = await client.get_live_odds(sport_key(sport))
    return find_best_bets(games, limit=limit)
