"""Kelly criterion stake sizing.

Kelly fraction = (b*p - q) / b with b the decimal odds, p the win probability
and q = 1 - p. The fractional mode is fixed at a quarter of full Kelly.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from decimal import Decimal

from betledger.utils.money import to_cents, to_money
from betledger.utils.odds_math import american_to_decimal, calculate_ev, validate_probability

QUARTER_KELLY = 0.25


@dataclass(frozen=True)
class KellyResult:
    kelly_percentage: float
    recommended_stake: Decimal
    current_bankroll: Decimal
    expected_value: float
    decimal_odds: float
    win_probability: float
    fractional: bool


def kelly_fraction(odds: int, win_probability: float, fractional: bool = False) -> float:
    p = validate_probability(win_probability)
    decimal_odds = american_to_decimal(odds)
    q = 1 - p
    fraction = ((decimal_odds * p) - q) / decimal_odds
    if fractional:
        fraction *= QUARTER_KELLY
    return max(0.0, fraction)


def kelly(odds: int, win_probability: float, fractional: bool, bankroll: Decimal | float | int) -> KellyResult:
    bankroll_amount = to_money(bankroll)
    if not bankroll_amount.is_finite():
        raise ValueError(f"Bankroll must be a finite amount, got {bankroll!r}")
    if bankroll_amount < 0:
        raise ValueError("Bankroll cannot be negative")

    fraction = kelly_fraction(odds, win_probability, fractional)
    decimal_odds = american_to_decimal(odds)
    recommended = to_cents(bankroll_amount * to_money(fraction))

    return KellyResult(
        kelly_percentage=fraction * 100,
        recommended_stake=recommended,
        current_bankroll=bankroll_amount,
        expected_value=calculate_ev(win_probability, decimal_odds) * 100,
        decimal_odds=decimal_odds,
        win_probability=win_probability * 100,
        fractional=fractional,
    )


def full_kelly(odds: int, win_probability: float, bankroll: Decimal | float | int) -> KellyResult:
    return kelly(odds, win_probability, False, bankroll)


def quarter_kelly(odds: int, win_probability: float, bankroll: Decimal | float | int) -> KellyResult:
    return kelly(odds, win_probability, True, bankroll)


def has_positive_ev(odds: int, win_probability: float) -> bool:
    p = validate_probability(win_probability)
    return calculate_ev(p, american_to_decimal(odds)) > 0


def kelly_result_to_dict(result: KellyResult) -> dict:
    return asdict(result)
