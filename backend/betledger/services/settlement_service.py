from __future__ import annotations

import logging
import re
from datetime import UTC, datetime, timedelta
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from betledger.config import settings
from betledger.data_providers.espn import ESPNClient, GameResult
from betledger.models.bet import Bet, BetStatus
from betledger.services.bet_service import apply_settlement, get_pending_bets

logger = logging.getLogger(__name__)

EVENT_SEPARATORS = (" vs ", " @ ", " - ")
_SIGNED_NUMBER = re.compile(r"^[+-]?\d+(?:\.\d+)?$")


def parse_teams_from_event(event_name: str) -> list[str]:
    for separator in EVENT_SEPARATORS:
        if separator in event_name:
            return [part.strip() for part in event_name.split(separator) if part.strip()]
    return [event_name.strip()]


def extract_line_from_selection(selection: str) -> float | None:
    """First signed number in a selection such as ``Chiefs -3.5`` or ``Over 48.5``."""
    for part in selection.split():
        if _SIGNED_NUMBER.match(part):
            return float(part)
    return None


def _compare(lhs: float, rhs: float) -> BetStatus:
    if lhs > rhs:
        return BetStatus.WON
    if lhs < rhs:
        return BetStatus.LOST
    return BetStatus.PUSH


def _settle_total(result: GameResult, bet_type: str, line: float | None) -> BetStatus:
    if line is None:
        return BetStatus.PENDING
    total = result.home_score + result.away_score
    if "OVER" in bet_type:
        return _compare(total, line)
    return _compare(line, total)


def _settle_moneyline(result: GameResult, selected_home: bool) -> BetStatus:
    if selected_home:
        return _compare(result.home_score, result.away_score)
    return _compare(result.away_score, result.home_score)


def _settle_spread(result: GameResult, selected_home: bool, line: float | None) -> BetStatus:
    if line is None:
        return BetStatus.PENDING
    if selected_home:
        return _compare(result.home_score + line, result.away_score)
    return _compare(result.away_score + line, result.home_score)


def determine_bet_outcome(result: GameResult, selection: str, bet_type: str, line: float | None) -> BetStatus:
    if not result.is_final:
        return BetStatus.PENDING

    kind = bet_type.strip().upper()
    if "OVER" in kind or "UNDER" in kind:
        return _settle_total(result, kind, line)

    chosen = selection.upper()
    selected_home = result.home_team.upper() in chosen
    selected_away = result.away_team.upper() in chosen
    if not selected_home and not selected_away:
        return BetStatus.PENDING

    if kind == "MONEYLINE":
        return _settle_moneyline(result, selected_home)
    if kind == "SPREAD":
        return _settle_spread(result, selected_home, line)
    return BetStatus.PENDING


async def attempt_auto_settle(bet: Bet, client: ESPNClient) -> BetStatus:
    teams = parse_teams_from_event(bet.event_name)
    if len(teams) < 2:
        return BetStatus.PENDING
    result = await client.get_game_result(bet.sport, teams[0], teams[1])
    return determine_bet_outcome(result, bet.selection, bet.bet_type, extract_line_from_selection(bet.selection))


def _is_due(bet: Bet, cutoff: datetime) -> bool:
    start = bet.event_start_time
    if start is None:
        return False
    if start.tzinfo is None:
        start = start.replace(tzinfo=UTC)
    return start < cutoff


async def auto_settle_all_bets(
    session: AsyncSession, client: ESPNClient, now: datetime | None = None
) -> dict[str, Any]:
    pending = await get_pending_bets(session)
    cutoff = (now or datetime.now(UTC)) - timedelta(hours=settings.auto_settle_grace_hours)

    settled = failed = 0
    results: list[str] = []
    for bet in pending:
        if not _is_due(bet, cutoff):
            continue
        try:
            outcome = await attempt_auto_settle(bet, client)
        except Exception as exc:
            logger.exception("auto-settle lookup failed: bet_id=%s event=%s", bet.id, bet.event_name)
            failed += 1
            results.append(f"{bet.event_name}: FAILED - {exc}")
            continue

        if outcome == BetStatus.PENDING:
            continue
        apply_settlement(bet, outcome)
        settled += 1
        results.append(f"{bet.event_name}: {outcome.value}")

    await session.commit()
    summary = {
        "total_pending": len(pending),
        "settled": settled,
        "failed": failed,
        "still_pending": len(pending) - settled - failed,
        "results": results,
    }
    logger.info(
        "auto-settle complete: total_pending=%s settled=%s failed=%s",
        summary["total_pending"],
        settled,
        failed,
    )
    return summary
