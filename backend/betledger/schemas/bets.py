from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict


class BetCreate(BaseModel):
    sport: str
    event_name: str
    bet_type: str
    selection: str
    stake: Decimal
    odds: int
    sportsbook_name: str
    event_start_time: datetime | None = None
    notes: str | None = None


class BetUpdate(BaseModel):
    sport: str | None = None
    event_name: str | None = None
    bet_type: str | None = None
    selection: str | None = None
    stake: Decimal | None = None
    odds: int | None = None
    sportsbook_name: str | None = None
    event_start_time: datetime | None = None
    notes: str | None = None


class ClosingOddsUpdate(BaseModel):
    closing_odds: int


class BetResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    sport: str
    event_name: str
    bet_type: str
    selection: str
    stake: Decimal
    odds: int
    potential_payout: Decimal | None = None
    actual_payout: Decimal | None = None
    sportsbook_name: str
    status: str
    profit_loss: Decimal | None = None
    placed_at: datetime
    settled_at: datetime | None = None
    event_start_time: datetime | None = None
    closing_odds: int | None = None
    beat_closing_line: bool | None = None
    clv: float | None = None
    notes: str | None = None


class BettingStats(BaseModel):
    total_bets: int
    pending_bets: int
    won_bets: int
    lost_bets: int
    pushed_bets: int
    total_staked: Decimal
    total_profit_loss: Decimal
    win_rate: float
    roi: float
