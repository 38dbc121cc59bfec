"""
Background scheduler.
Handles:
- Nightly ledger reconciliation audit (reports balance/ledger drift, never fixes it)
"""

import logging
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

from familyhub.core import config
from familyhub.core.database import SessionLocal
from familyhub.modules.points.service import PointsService
from familyhub.shared.date_utils import parse_hhmm

logger = logging.getLogger("familyhub.scheduler")

scheduler = AsyncIOScheduler()


def reconcile_ledgers(session_factory=SessionLocal) -> int:
    """
    Compare every user's balance with their settled ledger.

    Returns:
        Number of users with drift
    """
    db = session_factory()
    try:
        drifted = PointsService(db).reconcile_all()
        logger.info(f"Ledger reconciliation finished: {len(drifted)} user(s) with drift")
        return len(drifted)
    finally:
        db.close()


async def run_reconciliation():
    """Job: nightly ledger audit"""
    try:
        reconcile_ledgers()
    except Exception as e:
        logger.error(f"Scheduler Error (Reconciliation): {e}")


def build_trigger(time_str: str) -> CronTrigger:
    """'03:30' -> daily cron at 03:30 UTC"""
    hour, minute = parse_hhmm(time_str)
    return CronTrigger(hour=hour, minute=minute, timezone="UTC")


def start_scheduler():
    """Start the scheduler if reconciliation is enabled"""
    if not config.RECONCILE_ENABLED:
        logger.info("Ledger reconciliation disabled, scheduler not started")
        return
    if not scheduler.running:
        scheduler.add_job(
            run_reconciliation,
            build_trigger(config.RECONCILE_TIME),
            id='ledger_reconciliation',
            replace_existing=True
        )
        scheduler.start()
        logger.info(">>> APScheduler STARTED <<<")
        logger.info(f"Scheduled jobs: {[job.id for job in scheduler.get_jobs()]}")


def stop_scheduler():
    """Stop the scheduler"""
    if scheduler.running:
        scheduler.shutdown()
        logger.info("APScheduler stopped")
