import logging
from datetime import timedelta

from apscheduler.schedulers.asyncio import AsyncIOScheduler

from . import crud
from .config import REMINDER_HOUR, REMINDER_MINUTE, RETENTION_DAYS
from .notifications import ConnectionManager, build_reminder
from .store import HabitStore

logger = logging.getLogger(__name__)

scheduler = AsyncIOScheduler()


def run_retention_purge(store: HabitStore):
    # Maintenance never surfaces errors to request handlers
    try:
        cutoff = store.clock.today() - timedelta(days=RETENTION_DAYS)
        return crud.purge_expired(store, cutoff)
    except Exception as e:
        logger.exception(f"Retention purge failed: {str(e)}")
        return None


async def send_daily_reminder(store: HabitStore, manager: ConnectionManager):
    try:
        if not crud.notify_all_habits_exist(store):
            logger.info("No habits registered, skipping daily reminder")
            return 0
        delivered = await manager.broadcast(build_reminder(store.clock))
        logger.info(f"Daily reminder sent successfully to {delivered} clients")
        return delivered
    except Exception as e:
        logger.exception(f"Failed to send daily reminder: {str(e)}")
        return 0


def start_scheduler(store: HabitStore, manager: ConnectionManager):
    scheduler.add_job(
        send_daily_reminder,
        'cron',
        hour=REMINDER_HOUR,
        minute=REMINDER_MINUTE,
        args=[store, manager],
        id="daily_reminder",
        replace_existing=True,
    )
    scheduler.start()
    logger.info(f"Daily reminder scheduled at {REMINDER_HOUR:02d}:{REMINDER_MINUTE:02d}")


def stop_scheduler():
    if scheduler.running:
        scheduler.shutdown(wait=False)
