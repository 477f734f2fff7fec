from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import asdict, dataclass
from enum import Enum

from betledger.utils.odds_math import american_to_decimal


class CLVInterpretation(str, Enum):
    ELITE = "elite"
    SOLID = "solid"
    DEVELOPING = "developing"
    CONCERNING = "concerning"
    NEUTRAL = "neutral"

    @property
    def message(self) -> str:
        return _MESSAGES[self]


_MESSAGES = {
    CLVInterpretation.ELITE: "ELITE - You consistently beat the closing line with strong CLV!",
    CLVInterpretation.SOLID: "SOLID - Positive CLV indicates real skill and edge.",
    CLVInterpretation.DEVELOPING: "DEVELOPING - Slight positive CLV. Keep refining your process.",
    CLVInterpretation.CONCERNING: "CONCERNING - Negative CLV suggests betting into bad numbers.",
    CLVInterpretation.NEUTRAL: "NEUTRAL - Break even CLV. Look for better entry points.",
}

INTERPRETATION_LADDER: tuple[tuple[Callable[[float, float], bool], CLVInterpretation], ...] = (
    (lambda avg, rate: avg > 3 and rate > 60, CLVInterpretation.ELITE),
    (lambda avg, rate: avg > 1 and rate > 55, CLVInterpretation.SOLID),
    (lambda avg, rate: avg > 0 and rate > 50, CLVInterpretation.DEVELOPING),
    (lambda avg, rate: avg < 0, CLVInterpretation.CONCERNING),
)


@dataclass(frozen=True)
class CLVRecord:
    placed_odds: int | None
    closing_odds: int | None
    status: str


@dataclass
class CLVStats:
    has_clv_data: bool
    total_bets_with_clv: int
    beat_closing_line_count: int
    clv_win_rate: float
    avg_clv: float
    avg_clv_winners: float
    avg_clv_losers: float
    best_clv: float
    worst_clv: float
    interpretation: CLVInterpretation


def calculate_clv(placed_odds: int | None, closing_odds: int | None) -> float | None:
    """CLV% = (placed decimal / closing decimal - 1) * 100. None if either side is missing."""
    if placed_odds is None or closing_odds is None:
        return None
    return ((american_to_decimal(placed_odds) / american_to_decimal(closing_odds)) - 1) * 100


def beat_closing_line(placed_odds: int | None, closing_odds: int | None) -> bool | None:
    if placed_odds is None or closing_odds is None:
        return None
    if placed_odds < 0 and closing_odds < 0:
        # less negative is the better price: -105 beats -120
        return placed_odds > closing_odds
    if placed_odds > 0 and closing_odds > 0:
        return placed_odds > closing_odds
    # mixed signs fall back to a numeric comparison
    return placed_odds > closing_odds


def interpret_clv(avg_clv: float, clv_win_rate: float) -> CLVInterpretation:
    for predicate, label in INTERPRETATION_LADDER:
        if predicate(avg_clv, clv_win_rate):
            return label
    return CLVInterpretation.NEUTRAL


def _mean(values: list[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def summarize_clv(records: Iterable[CLVRecord]) -> CLVStats:
    with_closing = [r for r in records if r.closing_odds is not None and r.placed_odds is not None]

    all_clv: list[float] = []
    winners: list[float] = []
    losers: list[float] = []
    beat = 0
    for record in with_closing:
        if beat_closing_line(record.placed_odds, record.closing_odds):
            beat += 1
        clv = calculate_clv(record.placed_odds, record.closing_odds)
        if clv is None:
            continue
        all_clv.append(clv)
        if record.status == "WON":
            winners.append(clv)
        elif record.status == "LOST":
            losers.append(clv)

    total = len(with_closing)
    win_rate = (beat / total * 100) if total else 0.0
    avg_clv = _mean(all_clv)
    return CLVStats(
        has_clv_data=total > 0,
        total_bets_with_clv=total,
        beat_closing_line_count=beat,
        clv_win_rate=win_rate,
        avg_clv=avg_clv,
        avg_clv_winners=_mean(winners),
        avg_clv_losers=_mean(losers),
        best_clv=max(all_clv) if all_clv else 0.0,
        worst_clv=min(all_clv) if all_clv else 0.0,
        interpretation=interpret_clv(avg_clv, win_rate),
    )


def clv_stats_to_dict(stats: CLVStats) -> dict:
    out = asdict(stats)
    out["interpretation"] = stats.interpretation.value
    out["interpretation_message"] = stats.interpretation.message
    return out
