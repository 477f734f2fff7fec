from __future__ import annotations

import asyncio
from datetime import UTC, datetime, timedelta
from decimal import Decimal
from types import SimpleNamespace

from betledger.data_providers.espn import STATUS_FINAL, GameResult
from betledger.models.bet import BetStatus
from betledger.services import settlement_service
from betledger.services.settlement_service import (
    determine_bet_outcome,
    extract_line_from_selection,
    parse_teams_from_event,
)


def _final(home_score: int, away_score: int) -> GameResult:
    return GameResult("Chiefs", "Bills", home_score, away_score, STATUS_FINAL)


def test_parse_teams_from_event_formats():
    assert parse_teams_from_event("Chiefs vs Bills") == ["Chiefs", "Bills"]
    assert parse_teams_from_event("Bills @ Chiefs") == ["Bills", "Chiefs"]
    assert parse_teams_from_event("Lakers - Celtics") == ["Lakers", "Celtics"]
    assert parse_teams_from_event("Super Bowl") == ["Super Bowl"]


def test_extract_line_keeps_sign():
    assert extract_line_from_selection("Chiefs -3.5") == -3.5
    assert extract_line_from_selection("Bills +7") == 7.0
    assert extract_line_from_selection("Over 48.5") == 48.5
    assert extract_line_from_selection("Chiefs ML") is None


def test_pending_until_final():
    result = GameResult("Chiefs", "Bills", 21, 17)
    assert determine_bet_outcome(result, "Chiefs", "MONEYLINE", None) is BetStatus.PENDING


def test_moneyline_outcomes():
    assert determine_bet_outcome(_final(24, 20), "Chiefs ML", "MONEYLINE", None) is BetStatus.WON
    assert determine_bet_outcome(_final(24, 20), "Bills", "moneyline", None) is BetStatus.LOST
    assert determine_bet_outcome(_final(20, 20), "Bills", "MONEYLINE", None) is BetStatus.PUSH


def test_spread_outcomes():
    assert determine_bet_outcome(_final(24, 20), "Chiefs -3.5", "SPREAD", -3.5) is BetStatus.WON
    assert determine_bet_outcome(_final(24, 20), "Chiefs -4", "SPREAD", -4.0) is BetStatus.PUSH
    assert determine_bet_outcome(_final(24, 20), "Bills +3.5", "SPREAD", 3.5) is BetStatus.LOST
    assert determine_bet_outcome(_final(24, 20), "Chiefs", "SPREAD", None) is BetStatus.PENDING


def test_total_outcomes():
    assert determine_bet_outcome(_final(24, 20), "Over 43.5", "TOTAL_OVER", 43.5) is BetStatus.WON
    assert determine_bet_outcome(_final(24, 20), "Under 43.5", "TOTAL_UNDER", 43.5) is BetStatus.LOST
    assert determine_bet_outcome(_final(24, 20), "Over 44", "TOTAL_OVER", 44.0) is BetStatus.PUSH
    assert determine_bet_outcome(_final(24, 20), "Over", "TOTAL_OVER", None) is BetStatus.PENDING


def test_unknown_selection_stays_pending():
    assert determine_bet_outcome(_final(24, 20), "Broncos", "MONEYLINE", None) is BetStatus.PENDING


class _FakeESPN:
    def __init__(self, result: GameResult | Exception) -> None:
        self.result = result
        self.calls: list[tuple[str, str, str]] = []

    async def get_game_result(self, sport: str, home: str, away: str) -> GameResult:
        self.calls.append((sport, home, away))
        if isinstance(self.result, Exception):
            raise self.result
        return self.result


class _FakeSession:
    def __init__(self) -> None:
        self.commits = 0

    async def commit(self) -> None:
        self.commits += 1


def _pending_bet(**overrides):
    bet = SimpleNamespace(
        id=1,
        sport="NFL",
        event_name="Chiefs vs Bills",
        bet_type="MONEYLINE",
        selection="Chiefs",
        stake=Decimal("100.00"),
        odds=-150,
        potential_payout=Decimal("167.00"),
        event_start_time=datetime.now(UTC) - timedelta(hours=5),
        status=BetStatus.PENDING.value,
    )
    for key, value in overrides.items():
        setattr(bet, key, value)
    bet.mark_as_won = lambda: setattr(bet, "status", BetStatus.WON.value)
    bet.mark_as_lost = lambda: setattr(bet, "status", BetStatus.LOST.value)
    bet.mark_as_push = lambda: setattr(bet, "status", BetStatus.PUSH.value)
    return bet


def test_auto_settle_summary(monkeypatch):
    due = _pending_bet()
    recent = _pending_bet(id=2, event_start_time=datetime.now(UTC) - timedelta(hours=1))
    no_start = _pending_bet(id=3, event_start_time=None)

    async def fake_pending(session):
        return [due, recent, no_start]

    monkeypatch.setattr(settlement_service, "get_pending_bets", fake_pending)
    client = _FakeESPN(_final(27, 10))
    session = _FakeSession()

    summary = asyncio.run(settlement_service.auto_settle_all_bets(session, client))

    assert summary["total_pending"] == 3
    assert summary["settled"] == 1
    assert summary["failed"] == 0
    assert summary["still_pending"] == 2
    assert summary["results"] == ["Chiefs vs Bills: WON"]
    assert due.status == BetStatus.WON.value
    assert recent.status == BetStatus.PENDING.value
    assert client.calls == [("NFL", "Chiefs", "Bills")]
    assert session.commits == 1


def test_auto_settle_counts_provider_failures(monkeypatch):
    bet = _pending_bet()

    async def fake_pending(session):
        return [bet]

    monkeypatch.setattr(settlement_service, "get_pending_bets", fake_pending)
    summary = asyncio.run(
        settlement_service.auto_settle_all_bets(_FakeSession(), _FakeESPN(RuntimeError("scoreboard down")))
    )

    assert summary["failed"] == 1
    assert summary["settled"] == 0
    assert summary["still_pending"] == 0
    assert summary["results"] == ["Chiefs vs Bills: FAILED - scoreboard down"]
    assert bet.status == BetStatus.PENDING.value


def test_auto_settle_treats_naive_start_time_as_utc(monkeypatch):
    bet = _pending_bet(event_start_time=datetime(2026, 10, 18, 12, 0))

    async def fake_pending(session):
        return [bet]

    monkeypatch.setattr(settlement_service, "get_pending_bets", fake_pending)
    now = datetime(2026, 10, 18, 16, 0, tzinfo=UTC)
    summary = asyncio.run(
        settlement_service.auto_settle_all_bets(_FakeSession(), _FakeESPN(_final(10, 27)), now=now)
    )

    assert summary["settled"] == 1
    assert bet.status == BetStatus.LOST.value
