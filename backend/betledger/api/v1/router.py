from fastapi import APIRouter

from betledger.api.v1.ai import router as ai_router
from betledger.api.v1.bankroll import router as bankroll_router
from betledger.api.v1.bets import router as bets_router
from betledger.api.v1.clv import router as clv_router
from betledger.api.v1.dashboard import router as dashboard_router
from betledger.api.v1.ev import router as ev_router
from betledger.api.v1.kelly import router as kelly_router
from betledger.api.v1.notifications import router as notifications_router
from betledger.api.v1.odds import router as odds_router
from betledger.api.v1.settlement import router as settlement_router
from betledger.api.v1.system import router as system_router

api_router = APIRouter()
api_router.include_router(bets_router)
api_router.include_router(bankroll_router)
api_router.include_router(kelly_router)
api_router.include_router(ev_router)
api_router.include_router(clv_router)
api_router.include_router(odds_router)
api_router.include_router(settlement_router)
api_router.include_router(dashboard_router)
api_router.include_router(system_router)

api_router.include_router(ai_router)
api_router.include_router(notifications_router)
