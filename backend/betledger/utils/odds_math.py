from __future__ import annotations

import math
from numbers import Real

EV_PLACES = 12


class InvalidOdds(ValueError):
    """American odds that cannot be converted (zero, non-finite or non-numeric)."""

    def __init__(self, value: object, message: str | None = None) -> None:
        self.value = value
        super().__init__(message or f"Invalid American odds: {value!r}")


class InvalidProbability(ValueError):
    """Win probability outside (0, 1]."""

    def __init__(self, value: object, message: str | None = None) -> None:
        self.value = value
        super().__init__(message or f"Probability must be in (0, 1], got {value!r}")


def validate_american_odds(american_odds: int | float) -> int | float:
    if isinstance(american_odds, bool) or not isinstance(american_odds, Real):
        raise InvalidOdds(american_odds)
    if not math.isfinite(american_odds):
        raise InvalidOdds(american_odds)
    if american_odds == 0:
        raise InvalidOdds(american_odds, "American odds cannot be 0")
    return american_odds


def validate_probability(prob: float) -> float:
    if isinstance(prob, bool) or not isinstance(prob, Real):
        raise InvalidProbability(prob)
    if not math.isfinite(prob) or not 0 < prob <= 1:
        raise InvalidProbability(prob)
    return float(prob)


def american_to_decimal(american_odds: int) -> float:
    """Convert American odds to decimal. -110 -> 1.909..., +150 -> 2.5"""
    validate_american_odds(american_odds)
    if american_odds > 0:
        return (american_odds / 100) + 1
    return (100 / abs(american_odds)) + 1


def decimal_to_american(decimal_odds: float) -> int:
    """2.5 -> +150, 1.909 -> -110. Even money maps to +100."""
    profit = decimal_odds - 1
    if not profit > 0:
        raise ValueError(f"Decimal odds must exceed 1, got {decimal_odds!r}")
    american = profit * 100 if profit >= 1 else -100 / profit
    return int(round(american))


def american_to_implied_prob(american_odds: int) -> float:
    """Convert American odds to implied probability. -110 -> 0.5238"""
    validate_american_odds(american_odds)
    if american_odds > 0:
        return 100 / (american_odds + 100)
    return abs(american_odds) / (abs(american_odds) + 100)


def implied_prob_to_american(prob: float) -> int:
    """0.6 -> -150. A certainty has no American price."""
    validate_probability(prob)
    if prob == 1:
        raise InvalidProbability(prob, "A probability of 1 has no American odds")
    return decimal_to_american(1 / prob)


def calculate_ev(win_prob: float, decimal_odds: float) -> float:
    """EV = (win_prob * decimal_odds) - 1. Returns as decimal (0.05 = 5%).

    Rounded to EV_PLACES so a break-even price evaluates to exactly 0.
    """
    return round((win_prob * decimal_odds) - 1, EV_PLACES)


def format_american(american_odds: int) -> str:
    return f"+{american_odds}" if american_odds > 0 else str(american_odds)
