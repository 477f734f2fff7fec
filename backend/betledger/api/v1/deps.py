from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from fastapi import HTTPException, Request

from betledger.data_providers.espn import ESPNClient
from betledger.data_providers.llm import LLMClient
from betledger.data_providers.odds_api import OddsAPIClient
from betledger.services.bet_service import BetNotFoundError
from betledger.services.notification_service import NotificationRegistry
from betledger.utils.odds_math import InvalidOdds, InvalidProbability


def get_odds_client() -> OddsAPIClient:
    return OddsAPIClient()


def get_espn_client() -> ESPNClient:
    return ESPNClient()


def get_llm_client() -> LLMClient:
    return LLMClient()


def get_notification_registry(request: Request) -> NotificationRegistry:
    return request.app.state.notifications


@contextmanager
def service_errors() -> Iterator[None]:
    """Translate service exceptions into HTTP responses.

    Odds and probability errors pass through to the application handlers.
    """
    try:
        yield
    except BetNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except (InvalidOdds, InvalidProbability):
        raise
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
