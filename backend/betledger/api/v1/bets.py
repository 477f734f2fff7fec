from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from betledger.api.v1.deps import service_errors
from betledger.database import get_session
from betledger.schemas.bets import BetCreate, BetResponse, BettingStats, BetUpdate
from betledger.services import bet_service

router = APIRouter(prefix="/bets", tags=["bets"])


@router.post("", response_model=BetResponse, status_code=201)
async def create_bet(payload: BetCreate, session: AsyncSession = Depends(get_session)) -> BetResponse:
    with service_errors():
        bet = await bet_service.create_bet(session, payload)
    return BetResponse.model_validate(bet)


@router.get("", response_model=list[BetResponse])
async def list_bets(
    status: str | None = Query(default=None),
    sport: str | None = Query(default=None),
    sportsbook: str | None = Query(default=None),
    bet_type: str | None = Query(default=None),
    start_date: datetime | None = Query(default=None),
    end_date: datetime | None = Query(default=None),
    session: AsyncSession = Depends(get_session),
) -> list[BetResponse]:
    bets = await bet_service.list_bets(
        session, status=status, sport=sport, sportsbook=sportsbook, bet_type=bet_type, start=start_date, end=end_date
    )
    return [BetResponse.model_validate(b) for b in bets]


@router.delete("")
async def delete_all_bets(session: AsyncSession = Depends(get_session)) -> dict[str, int]:
    return {"deleted": await bet_service.delete_all_bets(session)}


@router.get("/pending", response_model=list[BetResponse])
async def pending_bets(session: AsyncSession = Depends(get_session)) -> list[BetResponse]:
    return [BetResponse.model_validate(b) for b in await bet_service.get_pending_bets(session)]


@router.get("/settled", response_model=list[BetResponse])
async def settled_bets(session: AsyncSession = Depends(get_session)) -> list[BetResponse]:
    return [BetResponse.model_validate(b) for b in await bet_service.get_settled_bets(session)]


@router.get("/stats", response_model=BettingStats)
async def betting_stats(session: AsyncSession = Depends(get_session)) -> BettingStats:
    return await bet_service.get_betting_stats(session)


@router.get("/analytics")
async def betting_analytics(session: AsyncSession = Depends(get_session)) -> dict:
    by_sport = await bet_service.profit_loss_by(session, "sport")
    by_book = await bet_service.profit_loss_by(session, "sportsbook_name")
    return {
        "profit_loss_by_sport": by_sport,
        "profit_loss_by_sportsbook": by_book,
        "most_profitable_sports": list(by_sport),
        "best_performing_sportsbooks": list(by_book),
    }


@router.get("/{bet_id}", response_model=BetResponse)
async def get_bet(bet_id: int, session: AsyncSession = Depends(get_session)) -> BetResponse:
    with service_errors():
        bet = await bet_service.get_bet(session, bet_id)
    return BetResponse.model_validate(bet)


@router.put("/{bet_id}", response_model=BetResponse)
async def update_bet(bet_id: int, payload: BetUpdate, session: AsyncSession = Depends(get_session)) -> BetResponse:
    with service_errors():
        bet = await bet_service.update_bet(session, bet_id, payload)
    return BetResponse.model_validate(bet)


@router.delete("/{bet_id}", status_code=204)
async def delete_bet(bet_id: int, session: AsyncSession = Depends(get_session)) -> None:
    with service_errors():
        await bet_service.delete_bet(session, bet_id)


SETTLERS = {
    "won": bet_service.mark_bet_won,
    "lost": bet_service.mark_bet_lost,
    "push": bet_service.mark_bet_push,
}


@router.post("/{bet_id}/settle/{outcome}", response_model=BetResponse)
async def settle_bet(bet_id: int, outcome: str, session: AsyncSession = Depends(get_session)) -> BetResponse:
    settle = SETTLERS.get(outcome.lower())
    if settle is None:
        raise HTTPException(status_code=400, detail=f"Unknown outcome: {outcome}")
    with service_errors():
        bet = await settle(session, bet_id)
    return BetResponse.model_validate(bet)
