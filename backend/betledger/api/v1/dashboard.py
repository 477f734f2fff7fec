from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from betledger.analytics.clv import clv_stats_to_dict
from betledger.database import get_session
from betledger.schemas.bets import BetResponse
from betledger.services import bankroll_service, bet_service
from betledger.services.clv_service import get_clv_stats

router = APIRouter(prefix="/dashboard", tags=["dashboard"])

RECENT_BETS = 10


@router.get("/summary")
async def summary(session: AsyncSession = Depends(get_session)) -> dict:
    pending = await bet_service.get_pending_bets(session)
    settled = await bet_service.get_settled_bets(session)
    return {
        "betting": (await bet_service.get_betting_stats(session)).model_dump(),
        "bankroll": (await bankroll_service.get_bankroll_stats(session)).model_dump(),
        "clv": clv_stats_to_dict(await get_clv_stats(session)),
        "pending_bets": [BetResponse.model_validate(b) for b in pending],
        "recent_settled_bets": [BetResponse.model_validate(b) for b in settled[:RECENT_BETS]],
    }
