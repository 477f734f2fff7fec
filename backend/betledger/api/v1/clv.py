from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from betledger.analytics.clv import clv_stats_to_dict
from betledger.api.v1.deps import service_errors
from betledger.database import get_session
from betledger.schemas.bets import BetResponse, ClosingOddsUpdate
from betledger.services import clv_service

router = APIRouter(prefix="/clv", tags=["clv"])


@router.get("/stats")
async def clv_stats(session: AsyncSession = Depends(get_session)) -> dict:
    return clv_stats_to_dict(await clv_service.get_clv_stats(session))


@router.put("/bets/{bet_id}/closing-odds", response_model=BetResponse)
async def update_closing_odds(
    bet_id: int, payload: ClosingOddsUpdate, session: AsyncSession = Depends(get_session)
) -> BetResponse:
    with service_errors():
        bet = await clv_service.update_closing_odds(session, bet_id, payload.closing_odds)
    return BetResponse.model_validate(bet)
