from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from betledger.data_providers.espn import STATUS_FINAL, STATUS_PENDING, ESPNClient, espn_sport_path, parse_scoreboard
from betledger.data_providers.llm import LLMClient, LLMUnavailableError
from betledger.data_providers.odds_api import OddsAPIClient, market_key, sport_key


def _competitor(home_away: str, name: str, abbreviation: str, score: str) -> dict:
    return {
        "homeAway": home_away,
        "score": score,
        "team": {"displayName": name, "shortDisplayName": name.split()[-1], "abbreviation": abbreviation},
    }


SCOREBOARD = {
    "events": [
        {
            "name": "Denver Broncos at Las Vegas Raiders",
            "competitions": [
                {
                    "status": {"type": {"completed": False}},
                    "competitors": [
                        _competitor("home", "Las Vegas Raiders", "LV", "3"),
                        _competitor("away", "Denver Broncos", "DEN", "7"),
                    ],
                }
            ],
        },
        {
            "name": "Buffalo Bills at Kansas City Chiefs",
            "competitions": [
                {
                    "status": {"type": {"completed": True}},
                    "competitors": [
                        _competitor("home", "Kansas City Chiefs", "KC", "27"),
                        _competitor("away", "Buffalo Bills", "BUF", "24"),
                    ],
                }
            ],
        },
    ]
}


def test_sport_key_mappings_default_to_nfl():
    assert sport_key("nba") == "basketball_nba"
    assert sport_key("CRICKET") == "americanfootball_nfl"
    assert market_key("SPREAD") == "spreads"
    assert market_key("TOTAL_UNDER") == "totals"
    assert market_key("parlay") == "h2h"
    assert espn_sport_path("NCAAB") == "basketball/mens-college-basketball"
    assert espn_sport_path("cricket") == "football/nfl"


def test_parse_scoreboard_matches_either_order():
    result = parse_scoreboard(SCOREBOARD, "Bills", "Chiefs")
    assert result.home_team == "Chiefs"
    assert result.away_team == "Bills"
    assert (result.home_score, result.away_score) == (27, 24)
    assert result.status == STATUS_FINAL
    assert result.is_final


def test_parse_scoreboard_in_progress_and_missing():
    assert parse_scoreboard(SCOREBOARD, "Raiders", "Broncos").status == STATUS_PENDING
    missing = parse_scoreboard(SCOREBOARD, "Jets", "Dolphins")
    assert missing.status == STATUS_PENDING
    assert (missing.home_team, missing.away_team) == ("Jets", "Dolphins")


def test_espn_client_fetches_sport_scoreboard():
    seen: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request.url.path)
        return httpx.Response(200, json=SCOREBOARD)

    client = ESPNClient(transport=httpx.MockTransport(handler))
    result = asyncio.run(client.get_game_result("NFL", "Chiefs", "Bills"))

    assert seen == ["/apis/site/v2/sports/football/nfl/scoreboard"]
    assert result.is_final
    assert result.home_score == 27


def test_odds_client_without_key_returns_empty():
    calls: list[httpx.Request] = []
    client = OddsAPIClient(transport=httpx.MockTransport(lambda r: calls.append(r) or httpx.Response(200, json=[])))
    client.api_key = ""
    assert asyncio.run(client.get_live_odds("americanfootball_nfl")) == []
    assert calls == []


def test_odds_client_sends_american_format_and_tracks_quota():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path.endswith("/sports/basketball_nba/odds")
        assert request.url.params["oddsFormat"] == "american"
        assert request.url.params["apiKey"] == "test-key"
        return httpx.Response(200, json=[{"id": "g1"}], headers={"x-requests-remaining": "42"})

    client = OddsAPIClient(transport=httpx.MockTransport(handler))
    client.api_key = "test-key"
    games = asyncio.run(client.get_live_odds("basketball_nba"))

    assert games == [{"id": "g1"}]
    assert client.requests_remaining == 42


def test_odds_client_swallows_provider_errors():
    client = OddsAPIClient(transport=httpx.MockTransport(lambda r: httpx.Response(503)))
    client.api_key = "test-key"
    assert asyncio.run(client.get_live_odds("basketball_nba")) == []


def test_llm_client_requires_key():
    client = LLMClient(transport=httpx.MockTransport(lambda r: httpx.Response(200, json={})))
    client.api_key = ""
    with pytest.raises(LLMUnavailableError):
        asyncio.run(client.complete("hello"))


def test_llm_client_posts_messages_and_returns_first_text():
    def handler(request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        assert request.headers["x-api-key"] == "secret"
        assert "anthropic-version" in request.headers
        assert body["messages"] == [{"role": "user", "content": "hello"}]
        assert body["max_tokens"] == 64
        return httpx.Response(200, json={"content": [{"type": "text", "text": "ESTIMATED PROBABILITY: 55%"}]})

    client = LLMClient(transport=httpx.MockTransport(handler))
    client.api_key = "secret"
    assert asyncio.run(client.complete("hello", max_tokens=64)) == "ESTIMATED PROBABILITY: 55%"


def test_llm_client_propagates_http_errors():
    client = LLMClient(transport=httpx.MockTransport(lambda r: httpx.Response(500)))
    client.api_key = "secret"
    with pytest.raises(httpx.HTTPStatusError):
        asyncio.run(client.complete("hello"))
