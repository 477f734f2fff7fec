from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import httpx

from betledger.config import settings

logger = logging.getLogger(__name__)

ESPN_SPORT_PATHS = {
    "NFL": "football/nfl",
    "NBA": "basketball/nba",
    "MLB": "baseball/mlb",
    "NHL": "hockey/nhl",
    "NCAAF": "football/college-football",
    "NCAAB": "basketball/mens-college-basketball",
}

STATUS_FINAL = "FINAL"
STATUS_PENDING = "PENDING"


@dataclass
class GameResult:
    home_team: str
    away_team: str
    home_score: int = 0
    away_score: int = 0
    status: str = STATUS_PENDING

    @property
    def is_final(self) -> bool:
        return self.status == STATUS_FINAL


def espn_sport_path(sport: str) -> str:
    return ESPN_SPORT_PATHS.get(sport.strip().upper(), ESPN_SPORT_PATHS["NFL"])


def _team_matches(query: str, team: dict[str, Any]) -> bool:
    wanted = query.strip().lower()
    if not wanted:
        return False
    names = [team.get(k) for k in ("displayName", "shortDisplayName", "name", "location")]
    if any(n and wanted in n.lower() for n in names):
        return True
    return (team.get("abbreviation") or "").lower() == wanted


def _score(raw: Any) -> int:
    try:
        return int(float(raw))
    except (TypeError, ValueError):
        return 0


def parse_scoreboard(payload: dict[str, Any], team_a: str, team_b: str) -> GameResult:
    """Locate the event featuring both teams and read its score line.

    ``team_a``/``team_b`` may be given in either order; the result reports
    them as home/away according to the scoreboard.
    """
    for event in payload.get("events") or []:
        for competition in event.get("competitions") or []:
            competitors = competition.get("competitors") or []
            home = next((c for c in competitors if c.get("homeAway") == "home"), None)
            away = next((c for c in competitors if c.get("homeAway") == "away"), None)
            if home is None or away is None:
                continue

            home_team, away_team = home.get("team") or {}, away.get("team") or {}
            if _team_matches(team_a, home_team) and _team_matches(team_b, away_team):
                home_name, away_name = team_a, team_b
            elif _team_matches(team_b, home_team) and _team_matches(team_a, away_team):
                home_name, away_name = team_b, team_a
            else:
                continue

            status_type = ((competition.get("status") or event.get("status") or {}).get("type")) or {}
            return GameResult(
                home_team=home_name,
                away_team=away_name,
                home_score=_score(home.get("score")),
                away_score=_score(away.get("score")),
                status=STATUS_FINAL if status_type.get("completed") else STATUS_PENDING,
            )

    return GameResult(home_team=team_a, away_team=team_b)


class ESPNClient:
    def __init__(self, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self.base_url = settings.espn_base_url.rstrip("/")
        self._transport = transport

    async def get_scoreboard(self, sport: str) -> dict[str, Any]:
        async with httpx.AsyncClient(timeout=settings.http_timeout_seconds, transport=self._transport) as client:
            response = await client.get(f"{self.base_url}/{espn_sport_path(sport)}/scoreboard")
            response.raise_for_status()
            return response.json()

    async def get_game_result(self, sport: str, home_team: str, away_team: str) -> GameResult:
        payload = await self.get_scoreboard(sport)
        return parse_scoreboard(payload, home_team, away_team)
