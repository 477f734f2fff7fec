from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from betledger.api.v1.deps import service_errors
from betledger.database import get_session
from betledger.schemas.bankroll import BankrollStats, TransactionRequest, TransactionResponse
from betledger.services import bankroll_service

router = APIRouter(prefix="/bankroll", tags=["bankroll"])


@router.post("/deposit", response_model=TransactionResponse, status_code=201)
async def deposit(payload: TransactionRequest, session: AsyncSession = Depends(get_session)) -> TransactionResponse:
    with service_errors():
        entry = await bankroll_service.record_deposit(session, payload.amount, payload.notes)
    return TransactionResponse.model_validate(entry)


@router.post("/withdraw", response_model=TransactionResponse, status_code=201)
async def withdraw(payload: TransactionRequest, session: AsyncSession = Depends(get_session)) -> TransactionResponse:
    with service_errors():
        entry = await bankroll_service.record_withdrawal(session, payload.amount, payload.notes)
    return TransactionResponse.model_validate(entry)


@router.get("/current")
async def current_bankroll(session: AsyncSession = Depends(get_session)) -> dict:
    return {"current_bankroll": await bankroll_service.get_current_bankroll(session)}


@router.get("/stats", response_model=BankrollStats)
async def bankroll_stats(session: AsyncSession = Depends(get_session)) -> BankrollStats:
    return await bankroll_service.get_bankroll_stats(session)


@router.get("/transactions", response_model=list[TransactionResponse])
async def transactions(session: AsyncSession = Depends(get_session)) -> list[TransactionResponse]:
    return [TransactionResponse.model_validate(t) for t in await bankroll_service.list_transactions(session)]
