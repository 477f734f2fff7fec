from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from betledger.analytics.clv import CLVRecord, CLVStats, summarize_clv
from betledger.models.bet import SETTLED_STATUSES, Bet
from betledger.services import bet_service


def bet_to_clv_record(bet: Bet) -> CLVRecord:
    return CLVRecord(placed_odds=bet.odds, closing_odds=bet.closing_odds, status=bet.status)


async def get_clv_stats(session: AsyncSession) -> CLVStats:
    bets = (
        await session.scalars(
            select(Bet).where(Bet.status.in_(SETTLED_STATUSES), Bet.closing_odds.is_not(None))
        )
    ).all()
    return summarize_clv(bet_to_clv_record(bet) for bet in bets)


async def update_closing_odds(session: AsyncSession, bet_id: int, closing_odds: int) -> Bet:
    return await bet_service.update_closing_odds(session, bet_id, closing_odds)
