import asyncio
import logging

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from betledger.config import get_database_identity, settings
from betledger.data_providers.espn import ESPNClient
from betledger.database import AsyncSessionLocal
from betledger.services.settlement_service import auto_settle_all_bets

logger = logging.getLogger(__name__)

LEDGER_TABLES = ("bets", "bankroll_transactions")

espn_client = ESPNClient()


async def ledger_schema_ready() -> bool:
    try:
        async with AsyncSessionLocal() as session:
            for table in LEDGER_TABLES:
                await session.execute(text(f"SELECT 1 FROM {table} LIMIT 1"))
    except SQLAlchemyError:
        return False
    return True


async def wait_for_ledger_schema(max_attempts: int = 30, sleep_seconds: int = 2) -> None:
    for attempt in range(1, max_attempts + 1):
        if await ledger_schema_ready():
            logger.info("ledger schema ready: attempts=%s", attempt)
            return
        logger.warning("ledger schema missing; retrying: attempt=%s/%s", attempt, max_attempts)
        await asyncio.sleep(sleep_seconds)
    raise RuntimeError(f"ledger tables {', '.join(LEDGER_TABLES)} not found; run the alembic upgrade first")


async def run_auto_settle_task() -> None:
    try:
        async with AsyncSessionLocal() as session:
            summary = await auto_settle_all_bets(session, espn_client)
    except Exception:
        logger.exception("auto-settle cycle failed; next attempt in %s minutes", settings.auto_settle_interval_minutes)
        return
    if summary["settled"] or summary["failed"]:
        for line in summary["results"]:
            logger.info("auto-settle result: %s", line)


async def main() -> None:
    db_host, db_name = get_database_identity()
    logger.info(
        "settlement worker starting: database_host=%s database_name=%s every_minutes=%s grace_hours=%s",
        db_host,
        db_name,
        settings.auto_settle_interval_minutes,
        settings.auto_settle_grace_hours,
    )

    await wait_for_ledger_schema()
    await run_auto_settle_task()

    sched = AsyncIOScheduler(timezone="UTC")
    sched.add_job(run_auto_settle_task, "interval", minutes=settings.auto_settle_interval_minutes)
    sched.start()

    await asyncio.Event().wait()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s [%(name)s] %(message)s")
    asyncio.run(main())
