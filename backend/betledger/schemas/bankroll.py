from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class TransactionRequest(BaseModel):
    amount: Decimal = Field(gt=0)
    notes: str | None = None


class TransactionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    amount: Decimal
    transaction_type: str
    notes: str | None = None
    related_bet_id: int | None = None
    recorded_at: datetime


class BankrollStats(BaseModel):
    current_bankroll: Decimal
    starting_bankroll: Decimal
    total_deposits: Decimal
    total_withdrawals: Decimal
    profit_loss: Decimal
    true_roi: Decimal
    growth: Decimal
