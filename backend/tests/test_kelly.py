from decimal import Decimal

import pytest

from betledger.analytics.kelly import (
    QUARTER_KELLY,
    full_kelly,
    has_positive_ev,
    kelly,
    kelly_fraction,
    kelly_result_to_dict,
    quarter_kelly,
)
from betledger.utils.money import to_cents, to_money
from betledger.utils.odds_math import InvalidOdds, InvalidProbability, american_to_implied_prob


def test_full_kelly_even_money():
    result = full_kelly(100, 0.6, Decimal("1000"))
    assert result.kelly_percentage == pytest.approx(40.0)
    assert result.recommended_stake == Decimal("400.00")
    assert result.expected_value == pytest.approx(20.0)
    assert result.win_probability == pytest.approx(60.0)
    assert result.fractional is False


def test_quarter_kelly_is_a_quarter_of_full():
    full = kelly_fraction(150, 0.5)
    quarter = kelly_fraction(150, 0.5, fractional=True)
    assert quarter == pytest.approx(full * QUARTER_KELLY)

    result = quarter_kelly(100, 0.6, 1000)
    assert result.kelly_percentage == pytest.approx(10.0)
    assert result.recommended_stake == Decimal("100.00")
    assert result.current_bankroll == Decimal("1000")


def test_negative_edge_clamps_to_zero_stake():
    result = kelly(-110, 0.3, False, Decimal("500"))
    assert result.kelly_percentage == 0.0
    assert result.recommended_stake == Decimal("0.00")
    assert result.expected_value < 0


def test_full_kelly_plus_money():
    result = full_kelly(150, 0.5, Decimal("1000"))
    assert result.decimal_odds == 2.5
    assert result.kelly_percentage == pytest.approx(30.0)
    assert result.recommended_stake == Decimal("300.00")


def test_stake_rounds_half_up_to_cents():
    # 1000 * 0.25 * ((2.5 * 0.5 - 0.5) / 2.5) = 75.0
    result = quarter_kelly(150, 0.5, Decimal("1000"))
    assert result.recommended_stake == Decimal("75.00")
    assert result.recommended_stake.as_tuple().exponent == -2


def test_stake_never_exceeds_bankroll():
    result = full_kelly(100, 1.0, Decimal("250"))
    assert result.kelly_percentage == pytest.approx(100.0)
    assert result.recommended_stake == Decimal("250.00")


def test_negative_bankroll_rejected():
    with pytest.raises(ValueError):
        kelly(-110, 0.55, True, Decimal("-1"))


def test_invalid_inputs():
    with pytest.raises(InvalidOdds):
        kelly(0, 0.5, True, 100)
    with pytest.raises(InvalidProbability):
        kelly(-110, 1.5, True, 100)


def test_has_positive_ev():
    assert has_positive_ev(150, 0.5) is True
    assert has_positive_ev(-110, 0.5) is False


def test_result_dict_is_flat():
    payload = kelly_result_to_dict(quarter_kelly(100, 0.6, 1000))
    assert payload["recommended_stake"] == Decimal("100.00")
    assert payload["fractional"] is True


@pytest.mark.parametrize("odds", [-200, -140, -110, 100, 150])
def test_break_even_price_has_no_positive_ev(odds):
    assert has_positive_ev(odds, american_to_implied_prob(odds)) is False


@pytest.mark.parametrize("bankroll", [float("nan"), float("inf"), Decimal("-Infinity")])
def test_non_finite_bankroll_rejected(bankroll):
    with pytest.raises(ValueError):
        kelly(150, 0.5, False, bankroll)


def test_money_coercion_is_shared_and_exact():
    assert to_money(None) == Decimal("0")
    assert to_money(0.075) == Decimal("0.075")
    assert to_money(Decimal("12.5")) == Decimal("12.5")
    assert to_cents(Decimal("0.075")) == Decimal("0.08")
