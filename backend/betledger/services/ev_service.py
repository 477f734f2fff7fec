from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any

import httpx
from sqlalchemy.ext.asyncio import AsyncSession

from betledger.analytics.ev_calculator import expected_value
from betledger.analytics.kelly import quarter_kelly
from betledger.analytics.probability_parser import extract_probability
from betledger.data_providers.llm import LLMClient, LLMUnavailableError
from betledger.services import bankroll_service, bet_service
from betledger.utils.odds_math import format_american

logger = logging.getLogger(__name__)

MATCHUP_MAX_TOKENS = 1500


def build_ev_prompt(
    sport: str, event: str, selection: str, odds: int, bet_type: str, context: str | None = None
) -> str:
    lines = [
        "You are a professional sports betting analyst. Analyze this bet and estimate the TRUE win probability.",
        "",
        f"Sport: {sport}",
        f"Event: {event}",
        f"Bet Type: {bet_type}",
        f"Selection: {selection}",
        f"Odds: {format_american(odds)}",
    ]
    if context:
        lines.append(f"Additional Context: {context}")
    lines += [
        "",
        "Provide:",
        "1. Your estimated win probability (as a percentage)",
        "2. Key factors influencing this probability",
        "3. Confidence level in this estimate",
        "",
        "Format your response starting with: 'ESTIMATED PROBABILITY: XX%'",
    ]
    return "\n".join(lines)


def build_bet_ev_prompt(
    sport: str, event: str, bet_type: str, selection: str, odds: int, stake: Decimal
) -> str:
    return (
        "You are a professional sports betting analyst. Calculate the Expected Value (EV) for this bet.\n\n"
        "BET DETAILS:\n"
        f"- Sport: {sport}\n"
        f"- Event: {event}\n"
        f"- Bet Type: {bet_type}\n"
        f"- Selection: {selection}\n"
        f"- Your Odds: {format_american(odds)} (American format)\n"
        f"- Stake: ${stake}\n\n"
        "ANALYSIS REQUIRED:\n"
        "1. Convert American odds to implied probability\n"
        "2. Estimate the TRUE probability of this outcome\n"
        "3. Calculate Expected Value\n"
        "4. Determine if this is +EV\n\n"
        "PROVIDE (keep it brief):\n"
        "- Implied Probability: X%\n"
        "- Estimated True Probability: X%\n"
        "- Expected Value: $X.XX\n"
        "- Recommendation: TAKE IT or SKIP IT\n"
        "- Reasoning: 2-3 sentences"
    )


def build_clv_prompt(placed_odds: int, closing_odds: int) -> str:
    return (
        "Analyze the closing line value (CLV) for this bet.\n\n"
        f"YOUR ODDS: {format_american(placed_odds)}\n"
        f"CLOSING ODDS: {format_american(closing_odds)}\n\n"
        "Briefly explain:\n"
        "1. Did this beat the closing line?\n"
        "2. What does this indicate?\n"
        "3. Is this a good sign?"
    )


def build_performance_prompt(
    total_bets: int, won: int, lost: int, profit_loss: Decimal, win_rate: float, roi: float
) -> str:
    return (
        "Analyze this sports bettor's performance.\n\n"
        "STATS:\n"
        f"- Total Bets: {total_bets}\n"
        f"- Won: {won}\n"
        f"- Lost: {lost}\n"
        f"- Total Profit/Loss: ${profit_loss}\n"
        f"- Win Rate: {win_rate:.1f}%\n"
        f"- ROI: {roi:.1f}%\n\n"
        "PROVIDE:\n"
        "1. Performance Assessment\n"
        "2. Key Strengths\n"
        "3. Areas for Improvement\n"
        "4. 2-3 Actionable Tips\n\n"
        "Keep it encouraging but honest."
    )


def build_matchup_prompt(
    game: str, bet_type: str, selection: str, best_odds: int, worst_odds: int, value_points: float
) -> str:
    best = format_american(best_odds)
    return (
        "You are a professional sports betting analyst. Analyze this betting opportunity:\n\n"
        f"GAME: {game}\n"
        f"BET TYPE: {bet_type}\n"
        f"SELECTION: {selection}\n"
        f"BEST ODDS: {best} (best available)\n"
        f"WORST ODDS: {format_american(worst_odds)} (worst available)\n"
        f"MARKET VALUE: {value_points:.0f} points (spread between books)\n\n"
        "Provide a detailed matchup analysis in this format:\n\n"
        "KEY FACTORS:\n"
        "- List 3-5 important factors (injuries, trends, matchups, weather if relevant)\n\n"
        "TRENDS:\n"
        "- Relevant historical trends\n"
        "- Recent performance patterns\n"
        "- Head-to-head history if applicable\n\n"
        "LINE VALUE ASSESSMENT:\n"
        "- Is this line value strong, fair, or weak?\n"
        f"- How does {best} odds compare to market?\n\n"
        "CONFIDENCE: [HIGH/MEDIUM-HIGH/MEDIUM/MEDIUM-LOW/LOW]\n\n"
        "RECOMMENDATION:\n"
        "- 2-3 sentences summarizing your analysis\n"
        "- Should this bet be placed based on the value and factors?\n"
        "- What's the main risk?\n\n"
        "Keep it concise, actionable, and data-focused."
    )


def _ev_payload(odds: int, win_probability: float, bankroll: Decimal) -> dict[str, Any]:
    ev = expected_value(odds, win_probability)
    stake = quarter_kelly(odds, win_probability, bankroll)
    return {
        "odds": odds,
        "win_probability": ev.win_probability * 100,
        "implied_probability": ev.implied_probability * 100,
        "edge": ev.edge,
        "expected_value": ev.ev_pct,
        "is_positive_ev": ev.is_positive_ev,
        "kelly_recommendation": stake.recommended_stake,
        "kelly_percentage": stake.kelly_percentage,
        "recommendation": ev.recommendation.value,
        "recommendation_message": ev.recommendation.message,
    }


def simple_ev(odds: int, win_probability: float, bankroll: Decimal) -> dict[str, Any]:
    return _ev_payload(odds, win_probability, bankroll)


async def _ask(client: LLMClient, prompt: str, max_tokens: int | None = None) -> str:
    try:
        return await client.complete(prompt, max_tokens=max_tokens)
    except LLMUnavailableError:
        logger.warning("LLM request skipped: no API key configured")
        raise
    except httpx.HTTPError:
        logger.exception("LLM request failed")
        raise


async def analyze_ev_with_ai(
    session: AsyncSession,
    client: LLMClient,
    *,
    sport: str,
    event: str,
    selection: str,
    odds: int,
    bet_type: str,
    context: str | None = None,
) -> dict[str, Any]:
    result: dict[str, Any] = {
        "sport": sport,
        "event": event,
        "selection": selection,
        "bet_type": bet_type,
        "odds": odds,
    }
    prompt = build_ev_prompt(sport, event, selection, odds, bet_type, context)
    try:
        analysis = await _ask(client, prompt)
    except (LLMUnavailableError, httpx.HTTPError) as exc:
        result["error"] = f"Failed to analyze EV: {exc}"
        return result

    probability = extract_probability(analysis)
    bankroll = max(await bankroll_service.get_current_bankroll(session), Decimal("0"))
    result.update(_ev_payload(odds, probability, bankroll))
    result["estimated_win_probability"] = result.pop("win_probability")
    result["ai_analysis"] = analysis
    return result


async def _narrative(client: LLMClient, prompt: str, max_tokens: int | None = None) -> dict[str, Any]:
    try:
        return {"success": True, "analysis": await _ask(client, prompt, max_tokens)}
    except (LLMUnavailableError, httpx.HTTPError) as exc:
        return {"success": False, "error": str(exc)}


async def bet_ev_narrative(
    client: LLMClient, *, sport: str, event: str, bet_type: str, selection: str, odds: int, stake: Decimal
) -> dict[str, Any]:
    return await _narrative(client, build_bet_ev_prompt(sport, event, bet_type, selection, odds, stake))


async def clv_narrative(client: LLMClient, placed_odds: int, closing_odds: int) -> dict[str, Any]:
    return await _narrative(client, build_clv_prompt(placed_odds, closing_odds))


async def performance_review(session: AsyncSession, client: LLMClient) -> dict[str, Any]:
    stats = await bet_service.get_betting_stats(session)
    prompt = build_performance_prompt(
        stats.total_bets, stats.won_bets, stats.lost_bets, stats.total_profit_loss, stats.win_rate, stats.roi
    )
    response = await _narrative(client, prompt)
    response["stats"] = stats.model_dump()
    return response


async def matchup_analysis(
    client: LLMClient,
    *,
    game: str,
    bet_type: str,
    selection: str,
    best_odds: int,
    worst_odds: int,
    value_points: float,
) -> dict[str, Any]:
    prompt = build_matchup_prompt(game, bet_type, selection, best_odds, worst_odds, value_points)
    response = await _narrative(client, prompt, MATCHUP_MAX_TOKENS)
    response["game"] = game
    return response
