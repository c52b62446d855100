# app/services/reminder_job.py
import logging

from sqlmodel import Session

from ..db.engine_sync import sync_engine
from .reminder_service import ReminderService

logger = logging.getLogger("ReminderJob")


def run_reminder_check():
    """
    Run ONE reminder cycle.
    Called by APScheduler at startup and on every interval tick.
    """
    logger.info("--- RUNNING SERVICE REMINDER CHECK ---")

    try:
        with Session(sync_engine) as session:
            stats = ReminderService(session).run_cycle()
            logger.info(f"--- END OF CHECK. Summary: {stats} ---")
    except Exception as e:
        # Abandoned cycle; the next tick evaluates everything again
        logger.critical(f"Critical error in reminder check: {e}", exc_info=True)
