import math

import pytest

from betledger.utils.odds_math import (
    InvalidOdds,
    InvalidProbability,
    american_to_decimal,
    american_to_implied_prob,
    calculate_ev,
    decimal_to_american,
    format_american,
    implied_prob_to_american,
    validate_probability,
)


def test_american_decimal_roundtrip_even_money():
    assert american_to_decimal(100) == 2.0
    assert decimal_to_american(2.0) == 100


def test_decimal_odds_are_not_rounded():
    assert american_to_decimal(-110) == pytest.approx(1.9090909, abs=1e-7)
    assert american_to_decimal(150) == 2.5
    assert american_to_decimal(-500) == pytest.approx(1.2)
    assert american_to_decimal(1000) == 11.0


def test_implied_prob_conversions():
    assert round(american_to_implied_prob(-110), 4) == 0.5238
    assert american_to_implied_prob(150) == pytest.approx(0.4)
    assert implied_prob_to_american(0.6) == -150


def test_implied_prob_stays_inside_unit_interval():
    for odds in (-100000, -110, 100, 100000):
        assert 0 < american_to_implied_prob(odds) < 1


def test_calculate_ev():
    assert round(calculate_ev(0.45, 2.5), 4) == 0.125


def test_format_american():
    assert format_american(150) == "+150"
    assert format_american(-110) == "-110"


def test_zero_and_non_numeric_odds_rejected():
    for bad in (0, math.nan, math.inf, "150", None, True):
        with pytest.raises(InvalidOdds):
            american_to_decimal(bad)
    with pytest.raises(InvalidOdds):
        american_to_implied_prob(0)


def test_invalid_odds_is_a_value_error():
    with pytest.raises(ValueError):
        american_to_decimal(0)


def test_probability_bounds():
    assert validate_probability(1.0) == 1.0
    assert validate_probability(0.55) == 0.55
    for bad in (0, 0.0, -0.1, 1.01, math.nan, True):
        with pytest.raises(InvalidProbability):
            validate_probability(bad)


def test_decimal_to_american_rejects_non_positive_profit():
    with pytest.raises(ValueError):
        decimal_to_american(1.0)
    with pytest.raises(ValueError):
        implied_prob_to_american(1.0)
