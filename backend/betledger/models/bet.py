from __future__ import annotations

from datetime import UTC, datetime
from decimal import Decimal
from enum import Enum

from sqlalchemy import Boolean, DateTime, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from betledger.analytics.clv import beat_closing_line, calculate_clv
from betledger.database import Base
from betledger.utils.money import to_cents

HUNDRED = Decimal("100")


class BetStatus(str, Enum):
    PENDING = "PENDING"
    WON = "WON"
    LOST = "LOST"
    PUSH = "PUSH"
    VOID = "VOID"


SETTLED_STATUSES = (BetStatus.WON.value, BetStatus.LOST.value, BetStatus.PUSH.value)


def calculate_potential_payout(stake: Decimal, american_odds: int) -> Decimal:
    """Stake plus profit, with the odds multiplier rounded to cents first."""
    odds = Decimal(american_odds)
    if odds > 0:
        multiplier = to_cents(odds / HUNDRED)
    else:
        multiplier = to_cents(HUNDRED / abs(odds))
    return to_cents(stake * multiplier + stake)


class Bet(Base):
    __tablename__ = "bets"

    id: Mapped[int] = mapped_column(primary_key=True)
    sport: Mapped[str] = mapped_column(String(50), index=True)
    event_name: Mapped[str] = mapped_column(String(200))
    bet_type: Mapped[str] = mapped_column(String(50), index=True)
    selection: Mapped[str] = mapped_column(String(100))
    stake: Mapped[Decimal] = mapped_column(Numeric(10, 2))
    odds: Mapped[int] = mapped_column(Integer)
    potential_payout: Mapped[Decimal | None] = mapped_column(Numeric(10, 2), nullable=True)
    actual_payout: Mapped[Decimal | None] = mapped_column(Numeric(10, 2), nullable=True)
    sportsbook_name: Mapped[str] = mapped_column(String(50), index=True)
    status: Mapped[str] = mapped_column(String(20), default=BetStatus.PENDING.value, index=True)
    profit_loss: Mapped[Decimal | None] = mapped_column(Numeric(10, 2), nullable=True)
    placed_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(UTC), index=True)
    settled_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    event_start_time: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    closing_odds: Mapped[int | None] = mapped_column(Integer, nullable=True)
    beat_closing_line: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    notes: Mapped[str | None] = mapped_column(String(500), nullable=True)

    def refresh_potential_payout(self) -> None:
        self.potential_payout = calculate_potential_payout(self.stake, self.odds)

    def mark_as_won(self) -> None:
        if self.potential_payout is None:
            self.refresh_potential_payout()
        self.status = BetStatus.WON.value
        self.actual_payout = self.potential_payout
        self.profit_loss = self.actual_payout - self.stake
        self.settled_at = datetime.now(UTC)

    def mark_as_lost(self) -> None:
        self.status = BetStatus.LOST.value
        self.actual_payout = Decimal("0")
        self.profit_loss = -self.stake
        self.settled_at = datetime.now(UTC)

    def mark_as_push(self) -> None:
        self.status = BetStatus.PUSH.value
        self.actual_payout = self.stake
        self.profit_loss = Decimal("0")
        self.settled_at = datetime.now(UTC)

    def set_closing_odds(self, closing_odds: int | None) -> None:
        self.closing_odds = closing_odds
        self.beat_closing_line = beat_closing_line(self.odds, closing_odds)

    def calculate_clv(self) -> float | None:
        return calculate_clv(self.odds, self.closing_odds)

    @property
    def clv(self) -> float | None:
        return self.calculate_clv()
