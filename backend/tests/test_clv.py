import pytest

from betledger.analytics.clv import (
    CLVInterpretation,
    CLVRecord,
    beat_closing_line,
    calculate_clv,
    clv_stats_to_dict,
    interpret_clv,
    summarize_clv,
)


def test_clv_percentage_from_decimal_ratio():
    assert calculate_clv(-110, -120) == pytest.approx(4.1322, abs=1e-4)
    assert calculate_clv(150, 130) == pytest.approx((2.5 / 2.3 - 1) * 100)
    assert calculate_clv(-110, -110) == pytest.approx(0.0)


def test_missing_odds_yield_none():
    assert calculate_clv(None, -110) is None
    assert calculate_clv(-110, None) is None
    assert beat_closing_line(-110, None) is None


def test_beat_closing_line_same_sign():
    assert beat_closing_line(-110, -120) is True
    assert beat_closing_line(-120, -110) is False
    assert beat_closing_line(150, 130) is True
    assert beat_closing_line(130, 150) is False


def test_beat_closing_line_mixed_signs_uses_numeric_comparison():
    assert beat_closing_line(105, -105) is True
    assert beat_closing_line(-105, 105) is False


def test_interpretation_ladder():
    assert interpret_clv(4.0, 65.0) is CLVInterpretation.ELITE
    assert interpret_clv(2.0, 56.0) is CLVInterpretation.SOLID
    assert interpret_clv(0.5, 51.0) is CLVInterpretation.DEVELOPING
    assert interpret_clv(-1.0, 70.0) is CLVInterpretation.CONCERNING
    assert interpret_clv(0.0, 50.0) is CLVInterpretation.NEUTRAL
    assert interpret_clv(2.0, 50.0) is CLVInterpretation.NEUTRAL


def test_summary_counts_only_records_with_closing_odds():
    stats = summarize_clv(
        [
            CLVRecord(placed_odds=-110, closing_odds=-120, status="WON"),
            CLVRecord(placed_odds=-110, closing_odds=100, status="LOST"),
            CLVRecord(placed_odds=-110, closing_odds=None, status="WON"),
        ]
    )

    assert stats.has_clv_data is True
    assert stats.total_bets_with_clv == 2
    assert stats.beat_closing_line_count == 1
    assert stats.clv_win_rate == pytest.approx(50.0)
    assert stats.avg_clv_winners == pytest.approx(4.1322, abs=1e-4)
    assert stats.avg_clv_losers == pytest.approx(-4.5455, abs=1e-4)
    assert stats.avg_clv == pytest.approx(-0.2066, abs=1e-4)
    assert stats.best_clv == pytest.approx(4.1322, abs=1e-4)
    assert stats.worst_clv == pytest.approx(-4.5455, abs=1e-4)
    assert stats.interpretation is CLVInterpretation.CONCERNING


def test_empty_summary_is_neutral_zeros():
    stats = summarize_clv([])
    assert stats.has_clv_data is False
    assert stats.total_bets_with_clv == 0
    assert stats.clv_win_rate == 0.0
    assert stats.avg_clv == 0.0
    assert stats.best_clv == 0.0
    assert stats.worst_clv == 0.0
    assert stats.interpretation is CLVInterpretation.NEUTRAL


def test_stats_dict_exposes_interpretation_message():
    payload = clv_stats_to_dict(summarize_clv([CLVRecord(-110, -130, "WON")]))
    assert payload["interpretation"] == "elite"
    assert payload["interpretation_message"].startswith("ELITE")
