from __future__ import annotations

import logging
from datetime import datetime
from decimal import Decimal

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from betledger.models.bet import SETTLED_STATUSES, Bet, BetStatus
from betledger.schemas.bets import BetCreate, BetUpdate, BettingStats
from betledger.utils.money import to_money
from betledger.utils.odds_math import InvalidOdds, validate_american_odds

logger = logging.getLogger(__name__)

REQUIRED_TEXT_FIELDS = ("sport", "event_name", "bet_type", "selection", "sportsbook_name")


class BetNotFoundError(LookupError):
    def __init__(self, bet_id: int) -> None:
        self.bet_id = bet_id
        super().__init__(f"Bet not found with id: {bet_id}")


def _require_text(values: dict) -> None:
    for field, value in values.items():
        if value is None or not value.strip():
            raise ValueError(f"{field} cannot be empty")


def validate_bet(data: BetCreate) -> None:
    if data.stake is None or data.stake <= 0:
        raise ValueError("Stake must be greater than zero")
    if data.odds is None:
        raise ValueError("Odds cannot be null")
    validate_american_odds(data.odds)
    _require_text({field: getattr(data, field) for field in REQUIRED_TEXT_FIELDS})


async def create_bet(session: AsyncSession, data: BetCreate) -> Bet:
    validate_bet(data)
    bet = Bet(
        sport=data.sport.strip(),
        event_name=data.event_name.strip(),
        bet_type=data.bet_type.strip(),
        selection=data.selection.strip(),
        stake=data.stake,
        odds=data.odds,
        sportsbook_name=data.sportsbook_name.strip(),
        event_start_time=data.event_start_time,
        notes=data.notes,
        status=BetStatus.PENDING.value,
    )
    bet.refresh_potential_payout()
    session.add(bet)
    await session.commit()
    await session.refresh(bet)
    logger.info("bet created: id=%s sport=%s odds=%s stake=%s", bet.id, bet.sport, bet.odds, bet.stake)
    return bet


async def get_bet(session: AsyncSession, bet_id: int) -> Bet:
    bet = await session.get(Bet, bet_id)
    if bet is None:
        raise BetNotFoundError(bet_id)
    return bet


async def list_bets(
    session: AsyncSession,
    *,
    status: str | None = None,
    sport: str | None = None,
    sportsbook: str | None = None,
    bet_type: str | None = None,
    start: datetime | None = None,
    end: datetime | None = None,
) -> list[Bet]:
    stmt = select(Bet)
    if status:
        stmt = stmt.where(Bet.status == status.upper())
    if sport:
        stmt = stmt.where(Bet.sport == sport)
    if sportsbook:
        stmt = stmt.where(Bet.sportsbook_name == sportsbook)
    if bet_type:
        stmt = stmt.where(Bet.bet_type == bet_type)
    if start:
        stmt = stmt.where(Bet.placed_at >= start)
    if end:
        stmt = stmt.where(Bet.placed_at <= end)
    stmt = stmt.order_by(Bet.placed_at.desc(), Bet.id.desc())
    return list((await session.scalars(stmt)).all())


async def get_pending_bets(session: AsyncSession) -> list[Bet]:
    return await list_bets(session, status=BetStatus.PENDING.value)


async def get_settled_bets(session: AsyncSession) -> list[Bet]:
    stmt = select(Bet).where(Bet.status.in_(SETTLED_STATUSES)).order_by(Bet.placed_at.desc(), Bet.id.desc())
    return list((await session.scalars(stmt)).all())


async def update_bet(session: AsyncSession, bet_id: int, data: BetUpdate) -> Bet:
    bet = await get_bet(session, bet_id)
    changes = data.model_dump(exclude_none=True)
    if "stake" in changes and changes["stake"] <= 0:
        raise ValueError("Stake must be greater than zero")
    if "odds" in changes:
        validate_american_odds(changes["odds"])
    text_changes = {field: changes[field] for field in REQUIRED_TEXT_FIELDS if field in changes}
    _require_text(text_changes)
    changes.update({field: value.strip() for field, value in text_changes.items()})

    for field, value in changes.items():
        setattr(bet, field, value)
    if {"stake", "odds"} & changes.keys():
        bet.refresh_potential_payout()
        if bet.closing_odds is not None:
            bet.set_closing_odds(bet.closing_odds)

    await session.commit()
    await session.refresh(bet)
    return bet


async def _settle(session: AsyncSession, bet_id: int, status: BetStatus) -> Bet:
    bet = await get_bet(session, bet_id)
    apply_settlement(bet, status)
    await session.commit()
    await session.refresh(bet)
    logger.info("bet settled: id=%s status=%s profit_loss=%s", bet.id, bet.status, bet.profit_loss)
    return bet


def apply_settlement(bet: Bet, status: BetStatus) -> None:
    if status == BetStatus.WON:
        bet.mark_as_won()
    elif status == BetStatus.LOST:
        bet.mark_as_lost()
    elif status == BetStatus.PUSH:
        bet.mark_as_push()
    else:
        raise ValueError(f"Cannot settle bet as {status.value}")


async def mark_bet_won(session: AsyncSession, bet_id: int) -> Bet:
    return await _settle(session, bet_id, BetStatus.WON)


async def mark_bet_lost(session: AsyncSession, bet_id: int) -> Bet:
    return await _settle(session, bet_id, BetStatus.LOST)


async def mark_bet_push(session: AsyncSession, bet_id: int) -> Bet:
    return await _settle(session, bet_id, BetStatus.PUSH)


async def update_closing_odds(session: AsyncSession, bet_id: int, closing_odds: int) -> Bet:
    try:
        validate_american_odds(closing_odds)
    except InvalidOdds:
        logger.warning("rejected closing odds for bet_id=%s: %r", bet_id, closing_odds)
        raise
    bet = await get_bet(session, bet_id)
    bet.set_closing_odds(closing_odds)
    await session.commit()
    await session.refresh(bet)
    return bet


async def delete_bet(session: AsyncSession, bet_id: int) -> None:
    bet = await get_bet(session, bet_id)
    await session.delete(bet)
    await session.commit()


async def delete_all_bets(session: AsyncSession) -> int:
    count = int(await session.scalar(select(func.count(Bet.id))) or 0)
    await session.execute(delete(Bet))
    await session.commit()
    logger.warning("all bets deleted: count=%s", count)
    return count


async def count_by_status(session: AsyncSession, status: str) -> int:
    return int(await session.scalar(select(func.count(Bet.id)).where(Bet.status == status)) or 0)


async def total_profit_loss(session: AsyncSession) -> Decimal:
    return to_money(await session.scalar(select(func.sum(Bet.profit_loss)).where(Bet.profit_loss.is_not(None))))


async def total_staked(session: AsyncSession) -> Decimal:
    return to_money(await session.scalar(select(func.sum(Bet.stake))))


async def win_rate(session: AsyncSession) -> float:
    """Percentage of decided bets (won or lost) that won."""
    won = await count_by_status(session, BetStatus.WON.value)
    lost = await count_by_status(session, BetStatus.LOST.value)
    return (won / (won + lost) * 100.0) if (won + lost) else 0.0


async def roi(session: AsyncSession) -> float:
    row = (
        await session.execute(
            select(func.sum(Bet.profit_loss), func.sum(Bet.stake)).where(Bet.profit_loss.is_not(None))
        )
    ).one()
    profit, staked = to_money(row[0]), to_money(row[1])
    return float(profit / staked * 100) if staked > 0 else 0.0


async def profit_loss_by(session: AsyncSession, attr: str) -> dict[str, Decimal]:
    column = getattr(Bet, attr)
    rows = (
        await session.execute(
            select(column, func.sum(Bet.profit_loss))
            .where(Bet.profit_loss.is_not(None))
            .group_by(column)
            .order_by(func.sum(Bet.profit_loss).desc())
        )
    ).all()
    return {key: to_money(total) for key, total in rows}


async def best_performing_sportsbooks(session: AsyncSession) -> list[str]:
    return list((await profit_loss_by(session, "sportsbook_name")).keys())


async def most_profitable_sports(session: AsyncSession) -> list[str]:
    return list((await profit_loss_by(session, "sport")).keys())


async def get_betting_stats(session: AsyncSession) -> BettingStats:
    return BettingStats(
        total_bets=int(await session.scalar(select(func.count(Bet.id))) or 0),
        pending_bets=await count_by_status(session, BetStatus.PENDING.value),
        won_bets=await count_by_status(session, BetStatus.WON.value),
        lost_bets=await count_by_status(session, BetStatus.LOST.value),
        pushed_bets=await count_by_status(session, BetStatus.PUSH.value),
        total_staked=await total_staked(session),
        total_profit_loss=await total_profit_loss(session),
        win_rate=await win_rate(session),
        roi=await roi(session),
    )
