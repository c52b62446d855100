import logging
import threading
from datetime import datetime, timedelta
from types import SimpleNamespace

from app.scheduler import REMINDER_JOB_ID, create_scheduler, job_listener


def test_reminder_job_is_registered_with_interval() -> None:
    scheduler = create_scheduler(interval_seconds=60)

    job = scheduler.get_job(REMINDER_JOB_ID)
    assert job is not None
    assert job.name == "Service Reminder Check"
    assert job.trigger.interval == timedelta(seconds=60)


def test_first_run_is_scheduled_immediately() -> None:
    before = datetime.now().astimezone()
    scheduler = create_scheduler(interval_seconds=3600)

    job = scheduler.get_job(REMINDER_JOB_ID)
    assert abs(job.next_run_time - before) < timedelta(seconds=5)


def test_invalid_interval_falls_back_to_default() -> None:
    scheduler = create_scheduler(interval_seconds=0)
    assert scheduler.get_job(REMINDER_JOB_ID).trigger.interval == timedelta(seconds=3600)


def test_started_scheduler_runs_once_at_startup_and_stops(monkeypatch) -> None:
    calls = []
    ran = threading.Event()

    def fake_check():
        calls.append(datetime.now())
        ran.set()

    monkeypatch.setattr("app.services.reminder_job.run_reminder_check", fake_check)
    scheduler = create_scheduler(interval_seconds=3600)

    scheduler.start()
    try:
        assert ran.wait(timeout=5)
        job = scheduler.get_job(REMINDER_JOB_ID)
        assert job.max_instances == 1
        assert job.coalesce is True
    finally:
        scheduler.shutdown(wait=True)

    assert scheduler.running is False
    assert len(calls) == 1


def test_job_listener_logs_failures(caplog) -> None:
    with caplog.at_level(logging.ERROR, logger="Scheduler"):
        job_listener(SimpleNamespace(job_id=REMINDER_JOB_ID, exception=RuntimeError("boom")))
    assert "boom" in caplog.text
