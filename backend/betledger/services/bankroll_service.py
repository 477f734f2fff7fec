from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from betledger.analytics.kelly import KellyResult, kelly
from betledger.models.bankroll_transaction import BankrollTransaction, TransactionType
from betledger.schemas.bankroll import BankrollStats
from betledger.services.bet_service import total_profit_loss
from betledger.utils.money import ZERO, to_money

logger = logging.getLogger(__name__)

HUNDRED = Decimal("100")
BASIS = Decimal("0.0001")


async def _record(session: AsyncSession, amount: Decimal, kind: TransactionType, notes: str | None) -> BankrollTransaction:
    entry = BankrollTransaction(amount=amount, transaction_type=kind.value, notes=notes)
    session.add(entry)
    await session.commit()
    await session.refresh(entry)
    logger.info("bankroll %s recorded: id=%s amount=%s", kind.value.lower(), entry.id, entry.amount)
    return entry


async def record_deposit(session: AsyncSession, amount: Decimal, notes: str | None = None) -> BankrollTransaction:
    if amount <= 0:
        raise ValueError("Deposit amount must be greater than zero")
    return await _record(session, amount, TransactionType.DEPOSIT, notes)


async def record_withdrawal(session: AsyncSession, amount: Decimal, notes: str | None = None) -> BankrollTransaction:
    if amount <= 0:
        raise ValueError("Withdrawal amount must be greater than zero")
    return await _record(session, -amount, TransactionType.WITHDRAWAL, notes)


async def list_transactions(session: AsyncSession) -> list[BankrollTransaction]:
    stmt = select(BankrollTransaction).order_by(BankrollTransaction.recorded_at.desc(), BankrollTransaction.id.desc())
    return list((await session.scalars(stmt)).all())


async def total_deposits(session: AsyncSession) -> Decimal:
    stmt = select(func.sum(BankrollTransaction.amount)).where(
        BankrollTransaction.transaction_type == TransactionType.DEPOSIT.value
    )
    return to_money(await session.scalar(stmt))


async def total_withdrawals(session: AsyncSession) -> Decimal:
    """Sum of withdrawals as a positive amount."""
    stmt = select(func.sum(BankrollTransaction.amount)).where(
        BankrollTransaction.transaction_type == TransactionType.WITHDRAWAL.value
    )
    return abs(to_money(await session.scalar(stmt)))


async def get_starting_bankroll(session: AsyncSession) -> Decimal:
    return await total_deposits(session) - await total_withdrawals(session)


async def get_current_bankroll(session: AsyncSession) -> Decimal:
    return await get_starting_bankroll(session) + await total_profit_loss(session)


async def get_bankroll_stats(session: AsyncSession) -> BankrollStats:
    deposits = await total_deposits(session)
    withdrawals = await total_withdrawals(session)
    profit_loss = await total_profit_loss(session)
    starting = deposits - withdrawals
    current = starting + profit_loss

    true_roi = (profit_loss / deposits).quantize(BASIS, rounding=ROUND_HALF_UP) * HUNDRED if deposits > 0 else ZERO
    growth = ((current - starting) / starting).quantize(BASIS, rounding=ROUND_HALF_UP) * HUNDRED if starting > 0 else ZERO

    return BankrollStats(
        current_bankroll=current,
        starting_bankroll=starting,
        total_deposits=deposits,
        total_withdrawals=withdrawals,
        profit_loss=profit_loss,
        true_roi=true_roi,
        growth=growth,
    )


async def get_kelly_recommendation(
    session: AsyncSession, odds: int, win_probability: float, fractional: bool = True
) -> KellyResult:
    bankroll = await get_current_bankroll(session)
    # a bankroll drawn below zero sizes every stake at zero
    return kelly(odds, win_probability, fractional, max(bankroll, ZERO))
