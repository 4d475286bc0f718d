"""
piefolio - web server entry point.

Serves the landing page data API and, when enabled, refreshes the snapshot
once a day in the background.
"""

import uvicorn
from dotenv import load_dotenv

# Load environment variables first
load_dotenv()

from piefolio.config.logging import get_logger
from piefolio.config.settings import get_settings
from piefolio.scheduler import (
    add_snapshot_job,
    list_scheduled_jobs,
    shutdown_scheduler,
    start_scheduler,
)
from piefolio.utils.config import initialize_application


def main() -> None:
    """Main application entry point."""
    initialize_application()

    logger = get_logger(__name__)
    settings = get_settings()

    logger.info(
        "Starting piefolio web server",
        host=settings.endpoint_host,
        port=settings.endpoint_port,
        snapshot_schedule_enabled=settings.snapshot_schedule_enabled,
    )

    if settings.snapshot_schedule_enabled:
        start_scheduler()
        add_snapshot_job(hour=settings.snapshot_schedule_hour)
        list_scheduled_jobs()

    try:
        uvicorn.run(
            "piefolio.webapi.app:create_app",
            factory=True,
            host=settings.endpoint_host,
            port=settings.endpoint_port,
            reload=settings.api_reload,
            log_level=settings.api_log_level.lower(),
        )
    except KeyboardInterrupt:
        logger.info("Received interrupt signal")
    finally:
        logger.info("Shutting down scheduler")
        shutdown_scheduler()


if __name__ == "__main__":
    main()
