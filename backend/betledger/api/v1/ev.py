from __future__ import annotations

from decimal import Decimal

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from betledger.api.v1.deps import get_llm_client
from betledger.data_providers.llm import LLMClient
from betledger.database import get_session
from betledger.services import ev_service
from betledger.services.bankroll_service import get_current_bankroll

router = APIRouter(prefix="/ev", tags=["ev"])


@router.get("/simple")
async def simple(
    odds: int = Query(...),
    win_probability: float = Query(...),
    session: AsyncSession = Depends(get_session),
) -> dict:
    bankroll = max(await get_current_bankroll(session), Decimal("0"))
    return ev_service.simple_ev(odds, win_probability, bankroll)


@router.get("/analyze")
async def analyze(
    sport: str = Query(...),
    event: str = Query(...),
    selection: str = Query(...),
    odds: int = Query(...),
    bet_type: str = Query(...),
    context: str | None = Query(default=None),
    session: AsyncSession = Depends(get_session),
    client: LLMClient = Depends(get_llm_client),
) -> dict:
    return await ev_service.analyze_ev_with_ai(
        session, client, sport=sport, event=event, selection=selection, odds=odds, bet_type=bet_type, context=context
    )
