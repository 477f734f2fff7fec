from fastapi import APIRouter, Depends
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from betledger.config import settings
from betledger.database import get_session
from betledger.models.bet import Bet

router = APIRouter(prefix="/system", tags=["system"])


@router.get("/health")
async def health(session: AsyncSession = Depends(get_session)) -> dict[str, str | int | bool | None]:
    bet_count = int((await session.scalar(select(func.count(Bet.id)))) or 0)
    last_bet_time = await session.scalar(select(func.max(Bet.placed_at)))

    return {
        "status": "ok",
        "bet_count": bet_count,
        "last_bet_time": last_bet_time.isoformat() if last_bet_time else None,
        "odds_api_key_set": bool(settings.odds_api_key),
        "llm_configured": bool(settings.llm_api_key),
    }
