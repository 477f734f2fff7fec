from __future__ import annotations

from decimal import Decimal

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from betledger.api.v1.deps import get_llm_client, service_errors
from betledger.data_providers.llm import LLMClient
from betledger.database import get_session
from betledger.services import bet_service, ev_service

router = APIRouter(prefix="/ai", tags=["ai"])


class BetEVRequest(BaseModel):
    sport: str
    event_name: str
    bet_type: str
    selection: str
    odds: int
    stake: Decimal


class MatchupRequest(BaseModel):
    game: str
    bet_type: str
    selection: str
    best_odds: int
    worst_odds: int
    value_points: float


@router.get("/performance")
async def performance(
    session: AsyncSession = Depends(get_session),
    client: LLMClient = Depends(get_llm_client),
) -> dict:
    return await ev_service.performance_review(session, client)


@router.post("/bet-ev")
async def bet_ev(payload: BetEVRequest, client: LLMClient = Depends(get_llm_client)) -> dict:
    return await ev_service.bet_ev_narrative(
        client,
        sport=payload.sport,
        event=payload.event_name,
        bet_type=payload.bet_type,
        selection=payload.selection,
        odds=payload.odds,
        stake=payload.stake,
    )


@router.post("/matchup")
async def matchup(payload: MatchupRequest, client: LLMClient = Depends(get_llm_client)) -> dict:
    return await ev_service.matchup_analysis(
        client,
        game=payload.game,
        bet_type=payload.bet_type,
        selection=payload.selection,
        best_odds=payload.best_odds,
        worst_odds=payload.worst_odds,
        value_points=payload.value_points,
    )


@router.get("/bets/{bet_id}/clv")
async def bet_clv(
    bet_id: int,
    session: AsyncSession = Depends(get_session),
    client: LLMClient = Depends(get_llm_client),
) -> dict:
    with service_errors():
        bet = await bet_service.get_bet(session, bet_id)
    if bet.closing_odds is None:
        return {"success": False, "error": "Bet has no closing odds recorded"}
    response = await ev_service.clv_narrative(client, bet.odds, bet.closing_odds)
    response["clv"] = bet.clv
    return response
