"""Line shopping over odds-aggregator payloads.

Payloads follow The Odds API shape: each game carries ``bookmakers``, each
bookmaker a list of ``markets`` keyed ``h2h``/``spreads``/``totals``, each
market a list of ``outcomes`` with ``name``, ``price`` and optional ``point``.
"""

from __future__ import annotations

from typing import Any

MIN_VALUE_POINTS = 10.0
MARKET_BET_TYPES = {"h2h": "MONEYLINE", "spreads": "SPREAD", "totals": "TOTALS"}


def _book_name(bookmaker: dict[str, Any]) -> str:
    return bookmaker.get("title") or bookmaker.get("key") or "unknown"


def _iter_outcomes(game: dict[str, Any], market_key: str):
    for bookmaker in game.get("bookmakers") or []:
        for market in bookmaker.get("markets") or []:
            if market.get("key") != market_key:
                continue
            for outcome in market.get("outcomes") or []:
                if outcome.get("price") is None:
                    continue
                yield bookmaker, outcome


def find_odds_range(game: dict[str, Any], market_key: str, outcome_name: str) -> dict[str, Any]:
    best_odds = float("-inf")
    worst_odds = float("inf")
    best_book = worst_book = None
    all_books: dict[str, float] = {}

    for bookmaker, outcome in _iter_outcomes(game, market_key):
        if outcome.get("name") != outcome_name:
            continue
        price = float(outcome["price"])
        book = _book_name(bookmaker)
        all_books[book] = price
        if price > best_odds:
            best_odds, best_book = price, book
        if price < worst_odds:
            worst_odds, worst_book = price, book

    if best_book is None or worst_book is None:
        return {}
    return {
        "best_odds": best_odds,
        "worst_odds": worst_odds,
        "best_book": best_book,
        "worst_book": worst_book,
        "value": abs(best_odds - worst_odds),
        "all_books": all_books,
    }


def find_best_odds(games: list[dict[str, Any]], team: str, market_key: str) -> dict[str, Any]:
    wanted = team.strip().lower()
    for game in games:
        home = (game.get("home_team") or "").lower()
        away = (game.get("away_team") or "").lower()
        if wanted not in {home, away}:
            continue

        bookmakers: dict[str, dict[str, Any]] = {}
        for bookmaker, outcome in _iter_outcomes(game, market_key):
            if (outcome.get("name") or "").lower() != wanted:
                continue
            entry: dict[str, Any] = {"price": float(outcome["price"])}
            if outcome.get("point") is not None:
                entry["point"] = outcome["point"]
            bookmakers[_book_name(bookmaker)] = entry

        result: dict[str, Any] = {
            "found": True,
            "game": f"{game.get('away_team')} vs {game.get('home_team')}",
            "commence_time": game.get("commence_time"),
            "bookmakers": bookmakers,
        }
        if bookmakers:
            best_book = max(bookmakers, key=lambda name: bookmakers[name]["price"])
            result["best_book"] = best_book
            result["best_odds"] = bookmakers[best_book]["price"]
        return result

    return {"found": False}


def find_best_bets(games: list[dict[str, Any]], limit: int = 10, min_value: float = MIN_VALUE_POINTS) -> list[dict[str, Any]]:
    """Outcomes whose best and worst prices across books differ by at least ``min_value`` points."""
    best_bets: list[dict[str, Any]] = []
    for game in games:
        for market_key, bet_type in MARKET_BET_TYPES.items():
            seen: set[str] = set()
            for _, outcome in _iter_outcomes(game, market_key):
                key = outcome.get("name")
                if key in seen:
                    continue
                seen.add(key)

                comparison = find_odds_range(game, market_key, outcome.get("name"))
                if not comparison or comparison["value"] < min_value:
                    continue
                best_bets.append(
                    {
                        "game": f"{game.get('away_team')} @ {game.get('home_team')}",
                        "sport": game.get("sport_title"),
                        "commence_time": game.get("commence_time"),
                        "bet_type": bet_type,
                        "selection": outcome.get("name"),
                        "point": outcome.get("point"),
                        **comparison,
                    }
                )

    best_bets.sort(key=lambda bet: bet["value"], reverse=True)
    return best_bets[:limit]
