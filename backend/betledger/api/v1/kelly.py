from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from betledger.analytics.kelly import kelly_result_to_dict
from betledger.database import get_session
from betledger.services.bankroll_service import get_kelly_recommendation
from betledger.utils.odds_math import (
    american_to_decimal,
    american_to_implied_prob,
    format_american,
    implied_prob_to_american,
)

router = APIRouter(prefix="/kelly", tags=["kelly"])


@router.get("/calculate")
async def calculate(
    odds: int = Query(...),
    win_probability: float = Query(..., description="Win probability as a fraction in (0, 1]"),
    fractional: bool = Query(default=True),
    session: AsyncSession = Depends(get_session),
) -> dict:
    result = await get_kelly_recommendation(session, odds, win_probability, fractional)
    return kelly_result_to_dict(result)


@router.get("/implied-probability")
async def implied_probability(odds: int = Query(...)) -> dict:
    return {
        "odds": odds,
        "implied_probability": american_to_implied_prob(odds) * 100,
        "decimal_odds": american_to_decimal(odds),
    }


@router.get("/fair-odds")
async def fair_odds(win_probability: float = Query(..., description="Win probability as a fraction in (0, 1)")) -> dict:
    american = implied_prob_to_american(win_probability)
    return {
        "win_probability": win_probability * 100,
        "fair_american_odds": american,
        "fair_american_display": format_american(american),
        "fair_decimal_odds": 1 / win_probability,
    }
