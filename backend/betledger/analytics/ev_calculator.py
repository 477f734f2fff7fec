from __future__ import annotations

from collections.abc import Callable
from dataclasses import asdict, dataclass
from enum import Enum

from betledger.utils.odds_math import (
    american_to_decimal,
    american_to_implied_prob,
    calculate_ev,
    validate_probability,
)


class EVRecommendation(str, Enum):
    SKIP = "skip"
    STRONG_BET = "strong_bet"
    GOOD_BET = "good_bet"
    MARGINAL = "marginal"

    @property
    def message(self) -> str:
        return _MESSAGES[self]


_MESSAGES = {
    EVRecommendation.SKIP: "SKIP - Negative EV bet. No edge detected.",
    EVRecommendation.STRONG_BET: "STRONG BET - Significant +EV with clear edge!",
    EVRecommendation.GOOD_BET: "GOOD BET - Positive EV detected. Consider betting.",
    EVRecommendation.MARGINAL: "MARGINAL - Slight +EV but small edge. Proceed with caution.",
}

# (ev, ev_pct, edge) -> matches; evaluated top to bottom, first match wins.
RECOMMENDATION_LADDER: tuple[tuple[Callable[[float, float, float], bool], EVRecommendation], ...] = (
    (lambda ev, ev_pct, edge: ev <= 0, EVRecommendation.SKIP),
    (lambda ev, ev_pct, edge: ev_pct > 10 and edge > 5, EVRecommendation.STRONG_BET),
    (lambda ev, ev_pct, edge: ev_pct > 5, EVRecommendation.GOOD_BET),
    (lambda ev, ev_pct, edge: 0 < ev_pct <= 5, EVRecommendation.MARGINAL),
)


@dataclass(frozen=True)
class EVResult:
    odds: int
    win_probability: float
    decimal_odds: float
    ev: float
    ev_pct: float
    implied_probability: float
    edge: float
    is_positive_ev: bool
    recommendation: EVRecommendation


def recommend(ev: float, ev_pct: float, edge: float) -> EVRecommendation:
    for predicate, label in RECOMMENDATION_LADDER:
        if predicate(ev, ev_pct, edge):
            return label
    return EVRecommendation.SKIP


def expected_value(odds: int, win_probability: float) -> EVResult:
    p = validate_probability(win_probability)
    decimal_odds = american_to_decimal(odds)
    implied = american_to_implied_prob(odds)
    ev = calculate_ev(p, decimal_odds)
    ev_pct = ev * 100
    edge = (p - implied) * 100
    return EVResult(
        odds=odds,
        win_probability=p,
        decimal_odds=decimal_odds,
        ev=ev,
        ev_pct=ev_pct,
        implied_probability=implied,
        edge=edge,
        is_positive_ev=ev > 0,
        recommendation=recommend(ev, ev_pct, edge),
    )


def ev_result_to_dict(result: EVResult) -> dict:
    out = asdict(result)
    out["recommendation"] = result.recommendation.value
    out["recommendation_message"] = result.recommendation.message
    return out
