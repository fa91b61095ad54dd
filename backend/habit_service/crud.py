import logging
from datetime import date
from typing import Any, Dict, Optional

from .models import Habit, Number
from .store import HabitStore

logger = logging.getLogger(__name__)


def create_habit(store: HabitStore, name, daily_goal: Number) -> Habit:
    return store.registry.create(name, daily_goal)


def get_habit(store: HabitStore, habit_id: int) -> Habit:
    return store.registry.get(habit_id)


def record_progress(store: HabitStore, habit_id: int, quantity: Optional[Number] = None, on: Optional[date] = None) -> Dict[str, Any]:
    progress, day = store.ledger.record_progress(habit_id, quantity, on)
    logger.info(f"Recorded progress for habit {habit_id} on {day.isoformat()}: {progress}")
    return {"habit_id": habit_id, "date": day, "progress": progress}


def get_progress(store: HabitStore, habit_id: int, on: Optional[date] = None) -> Dict[str, Any]:
    day = on or store.clock.today()
    progress = store.ledger.get_progress(habit_id, day)
    return {"habit_id": habit_id, "date": day, "progress": progress}


def list_habits(
    store: HabitStore,
    completed: Optional[bool] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
) -> Dict[str, Any]:
    """List habits, optionally filtered on whether a goal was ever met.

    ``completed`` looks at every retained day (or only those between
    start_date and end_date when given), not at the weekly report window.
    """
    habits = store.registry.list()
    if completed is not None:
        habits = [
            habit for habit in habits
            if store.ledger.has_completed_day(habit, start_date, end_date) == completed
        ]
    return {"habits": habits, "total": len(habits)}


def weekly_report(store: HabitStore, reference_date: Optional[date] = None) -> Dict[str, Any]:
    report, report_date = store.reports.generate_weekly_report(reference_date)
    return {"report": report, "report_date": report_date}


def get_archived_report(store: HabitStore, report_date: date) -> Dict[str, Any]:
    return {"report": store.archive.get(report_date), "report_date": report_date}


def purge_expired(store: HabitStore, cutoff: date) -> int:
    removed = store.ledger.purge_older_than(cutoff)
    archived = store.archive.purge_older_than(cutoff)
    logger.info(f"Purged {removed} progress entries and {archived} archived reports older than {cutoff.isoformat()}")
    return removed


def notify_all_habits_exist(store: HabitStore) -> bool:
    return store.registry.exists()
