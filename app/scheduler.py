# app/scheduler.py
import logging
import time
from datetime import datetime

from apscheduler.events import EVENT_JOB_ERROR, EVENT_JOB_EXECUTED
from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger

from .core.constants import DEFAULT_CHECK_INTERVAL_SECONDS, SettingKeys
from .utils.settings_utils import get_int_setting_sync

logger = logging.getLogger("Scheduler")

REMINDER_JOB_ID = "reminder_job"


def job_listener(event):
    """Log the outcome of every job execution."""
    if event.exception:
        logger.error(f"Job {event.job_id} failed: {event.exception}")
    else:
        logger.info(f"Job {event.job_id} executed successfully")


def create_scheduler(interval_seconds: int | None = None) -> BackgroundScheduler:
    """
    Build the scheduler with the reminder job registered.

    The job fires once immediately (next_run_time=now) and then every
    interval_seconds. max_instances=1 keeps two cycles from interleaving.
    """
    from .services.reminder_job import run_reminder_check

    if interval_seconds is None:
        interval_seconds = get_int_setting_sync(
            SettingKeys.CHECK_INTERVAL.value, DEFAULT_CHECK_INTERVAL_SECONDS
        )
    if interval_seconds < 1:
        interval_seconds = DEFAULT_CHECK_INTERVAL_SECONDS

    scheduler = BackgroundScheduler(
        job_defaults={
            "coalesce": True,  # Missed runs collapse into one
            "max_instances": 1,
            "misfire_grace_time": 300,
        }
    )
    scheduler.add_listener(job_listener, EVENT_JOB_EXECUTED | EVENT_JOB_ERROR)

    logger.info(f"Scheduling reminder check every {interval_seconds} seconds")
    scheduler.add_job(
        run_reminder_check,
        trigger=IntervalTrigger(seconds=interval_seconds),
        id=REMINDER_JOB_ID,
        name="Service Reminder Check",
        replace_existing=True,
        next_run_time=datetime.now(),
    )
    return scheduler


def run_scheduler():
    """
    Entry point for the scheduler process.
    Blocks until interrupted, then shuts the scheduler down.
    """
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(levelname)s - [Scheduler] - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    from .db.init_db import setup_databases

    setup_databases()

    logger.info("Initializing BackgroundScheduler...")
    scheduler = create_scheduler()
    scheduler.start()
    logger.info("✅ Scheduler started")

    try:
        while True:
            time.sleep(60)
    except (KeyboardInterrupt, SystemExit):
        logger.info("Stopping scheduler...")
        scheduler.shutdown()
        logger.info("Scheduler stopped")
