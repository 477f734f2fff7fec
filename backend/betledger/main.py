from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from betledger.api.v1.router import api_router
from betledger.config import settings
from betledger.services.notification_service import NotificationRegistry
from betledger.utils.odds_math import InvalidOdds, InvalidProbability


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.notifications = NotificationRegistry()
    yield


app = FastAPI(title=settings.app_name, lifespan=lifespan)
app.include_router(api_router, prefix="/api/v1")


@app.exception_handler(InvalidOdds)
async def invalid_odds_handler(request: Request, exc: InvalidOdds) -> JSONResponse:
    return JSONResponse(status_code=422, content={"error": "invalid_odds", "detail": str(exc), "value": repr(exc.value)})


@app.exception_handler(InvalidProbability)
async def invalid_probability_handler(request: Request, exc: InvalidProbability) -> JSONResponse:
    return JSONResponse(
        status_code=422, content={"error": "invalid_probability", "detail": str(exc), "value": repr(exc.value)}
    )
