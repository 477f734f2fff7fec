from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from betledger.api.v1.deps import get_espn_client
from betledger.data_providers.espn import ESPNClient
from betledger.database import get_session
from betledger.services.settlement_service import auto_settle_all_bets

router = APIRouter(prefix="/settlement", tags=["settlement"])


@router.post("/run")
async def run_settlement(
    session: AsyncSession = Depends(get_session),
    client: ESPNClient = Depends(get_espn_client),
) -> dict:
    return await auto_settle_all_bets(session, client)
