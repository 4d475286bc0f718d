"""Background scheduler for the daily snapshot refresh."""

import os

from apscheduler.events import EVENT_JOB_ERROR, EVENT_JOB_EXECUTED
from apscheduler.executors.pool import ThreadPoolExecutor
from apscheduler.jobstores.base import JobLookupError
from apscheduler.jobstores.memory import MemoryJobStore
from apscheduler.schedulers.background import BackgroundScheduler

from .config.logging import get_logger

logger = get_logger(__name__)

SNAPSHOT_JOB_ID = "snapshot_refresh"


def create_scheduler() -> BackgroundScheduler:
    """
    Create and configure a BackgroundScheduler with an in-memory job store.

    Returns:
        Configured BackgroundScheduler instance
    """
    jobstores = {"default": MemoryJobStore()}

    executors = {
        "default": ThreadPoolExecutor(
            max_workers=int(os.getenv("SCHEDULER_MAX_WORKERS", "1"))
        )
    }

    job_defaults = {
        "coalesce": True,  # A missed daily run only needs to happen once
        "max_instances": 1,  # Only one snapshot run at a time
        "misfire_grace_time": 300,
    }

    scheduler = BackgroundScheduler(
        jobstores=jobstores,
        executors=executors,
        job_defaults=job_defaults,
        timezone="UTC",
    )

    scheduler.add_listener(job_executed_listener, EVENT_JOB_EXECUTED)
    scheduler.add_listener(job_error_listener, EVENT_JOB_ERROR)

    return scheduler


def job_executed_listener(event):
    """Log successful job executions."""
    logger.info(
        "Scheduled job executed",
        job_id=event.job_id,
        scheduled_run_time=str(event.scheduled_run_time),
    )


def job_error_listener(event):
    """Log job execution errors."""
    logger.error(
        "Scheduled job crashed",
        job_id=event.job_id,
        error=str(event.exception),
        traceback=event.traceback,
    )


def get_global_scheduler() -> BackgroundScheduler:
    """
    Get or create the global scheduler instance.

    Returns:
        Global BackgroundScheduler instance
    """
    if not hasattr(get_global_scheduler, "_scheduler"):
        get_global_scheduler._scheduler = create_scheduler()

    return get_global_scheduler._scheduler


def start_scheduler():
    """Start the global scheduler."""
    scheduler = get_global_scheduler()
    if not scheduler.running:
        scheduler.start()
        logger.info("Scheduler started")


def shutdown_scheduler():
    """Shutdown the global scheduler."""
    scheduler = get_global_scheduler()
    if scheduler.running:
        scheduler.shutdown(wait=True)
        logger.info("Scheduler shutdown complete")


def add_snapshot_job(hour: int = 6):
    """
    Add the daily snapshot refresh job to the scheduler.

    Args:
        hour: Hour of the day to run (UTC)
    """
    scheduler = get_global_scheduler()

    try:
        scheduler.remove_job(SNAPSHOT_JOB_ID)
    except JobLookupError:
        pass  # Job doesn't exist yet

    scheduler.add_job(
        func="piefolio.core.snapshot_job:run_snapshot_job",
        trigger="cron",
        hour=hour,
        id=SNAPSHOT_JOB_ID,
        name="Daily Snapshot Refresh",
        replace_existing=True,
    )

    logger.info("Added snapshot refresh job", hour=hour)


def list_scheduled_jobs():
    """Log all scheduled jobs and return them."""
    scheduler = get_global_scheduler()
    jobs = scheduler.get_jobs()

    for job in jobs:
        logger.info(
            "Scheduled job",
            job_id=job.id,
            name=job.name,
            next_run_time=str(getattr(job, "next_run_time", None)),
        )

    return jobs
