from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from betledger.utils.odds_math import format_american

logger = logging.getLogger(__name__)

BEST_BET = "best-bet"
HIGH_VALUE = "high-value"
BANKROLL = "bankroll"
CLV = "clv"

DEFAULT_MIN_VALUE = 100.0


@dataclass
class Subscriber:
    session_id: str
    enable_best_bets: bool = True
    enable_high_value: bool = True
    min_value: float = DEFAULT_MIN_VALUE


@dataclass
class Notification:
    title: str
    message: str
    type: str
    data: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))


class NotificationRegistry:
    """In-memory subscriber table, owned by the application instance."""

    def __init__(self) -> None:
        self.subscribers: dict[str, Subscriber] = {}

    def subscribe(self, session_id: str | None = None) -> Subscriber:
        session_id = session_id or str(uuid.uuid4())
        subscriber = self.subscribers.setdefault(session_id, Subscriber(session_id=session_id))
        logger.info("notification subscriber added: session_id=%s total=%s", session_id, len(self.subscribers))
        return subscriber

    def unsubscribe(self, session_id: str) -> bool:
        return self.subscribers.pop(session_id, None) is not None

    def update_preferences(
        self, session_id: str, enable_best_bets: bool, enable_high_value: bool, min_value: float
    ) -> Subscriber | None:
        subscriber = self.subscribers.get(session_id)
        if subscriber is None:
            return None
        subscriber.enable_best_bets = enable_best_bets
        subscriber.enable_high_value = enable_high_value
        subscriber.min_value = min_value
        return subscriber

    @property
    def subscriber_count(self) -> int:
        return len(self.subscribers)

    def should_notify(self, session_id: str, notification_type: str, value: float) -> bool:
        subscriber = self.subscribers.get(session_id)
        if subscriber is None:
            return False
        if notification_type == BEST_BET and not subscriber.enable_best_bets:
            return False
        if notification_type == HIGH_VALUE and not subscriber.enable_high_value:
            return False
        return value >= subscriber.min_value


def best_bet_notification(game: str, selection: str, odds: int, value: float, book: str) -> Notification:
    return Notification(
        title="Best Bet Alert!",
        message=f"{game} - {selection} @ {format_american(odds)}",
        type=BEST_BET,
        data={"game": game, "selection": selection, "odds": odds, "value": value, "book": book},
    )


def high_value_notification(value: float, game: str) -> Notification:
    return Notification(
        title="High Value Alert!",
        message=f"{round(value)} pts value on {game}",
        type=HIGH_VALUE,
        data={"value": value, "game": game},
    )


def bankroll_notification(milestone: str, amount: float) -> Notification:
    return Notification(
        title="Bankroll Milestone!",
        message=f"{milestone}: ${amount:.2f}",
        type=BANKROLL,
        data={"milestone": milestone, "amount": amount},
    )


def clv_notification(bet_description: str, clv: float) -> Notification:
    return Notification(
        title="Great Line!",
        message=f"You beat closing line by {clv:.2f}% on {bet_description}",
        type=CLV,
        data={"clv": clv, "bet": bet_description},
    )
