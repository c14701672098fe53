"""
Scheduled Tasks for FarmHub

Uses APScheduler to rebuild the weather forecast snapshot once per day.
"""
import logging
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

from farmhub.services.weather_service import weather_service

logger = logging.getLogger(__name__)

# Create scheduler instance
scheduler = AsyncIOScheduler()


def refresh_weather_job():
    """Rebuild the cached weather forecast for the new day."""
    logger.info("Starting scheduled weather refresh...")
    try:
        forecast = weather_service.refresh()
        logger.info(f"Weather refresh complete. {len(forecast)} forecast days cached.")
    except Exception as e:
        logger.error(f"Weather refresh failed: {e}")


def start_scheduler():
    """Start the APScheduler with configured jobs."""
    if not scheduler.running:
        # Shortly after midnight, when "Today" moves on
        scheduler.add_job(
            refresh_weather_job,
            trigger=CronTrigger(hour=0, minute=5),
            id="weather_refresh",
            name="Daily weather forecast refresh",
            replace_existing=True
        )
        scheduler.start()
        logger.info("Scheduler started with weather refresh job (daily at 00:05)")


def stop_scheduler():
    """Stop the APScheduler gracefully."""
    if scheduler.running:
        scheduler.shutdown(wait=False)
        logger.info("Scheduler stopped")
