import logging
import threading
from datetime import date
from typing import Dict, Optional, Tuple

from .exceptions import ValidationError
from .models import Habit, Number
from .registry import HabitRegistry
from .utils import is_positive_number

logger = logging.getLogger(__name__)


class ProgressLedger:
    """Per-habit, per-day progress counters.

    Every stored value stays within ``0 <= value <= habit.daily_goal``:
    increments that would overshoot the goal are clamped to it and the
    excess is dropped without raising.
    """

    def __init__(self, registry: HabitRegistry, clock):
        self.registry = registry
        self.clock = clock
        self._entries: Dict[int, Dict[date, Number]] = {}
        self._lock = threading.Lock()

    def record_progress(self, habit_id: int, increment: Optional[Number] = None, on: Optional[date] = None) -> Tuple[Number, date]:
        habit = self.registry.get(habit_id)
        if increment is None:
            increment = 1
        elif not is_positive_number(increment):
            raise ValidationError("Invalid progress quantity")
        day = on or self.clock.today()

        with self._lock:
            days = self._entries.setdefault(habit.id, {})
            current = days.get(day, 0)
            value = min(current + increment, habit.daily_goal)
            days[day] = value

        if current + increment > habit.daily_goal:
            logger.debug(f"Capped progress for habit {habit.id} on {day} at {habit.daily_goal}")
        return value, day

    def get_progress(self, habit_id: int, on: date) -> Number:
        habit = self.registry.get(habit_id)
        return self._entries.get(habit.id, {}).get(on, 0)

    def entries(self, habit_id: int, start: Optional[date] = None, end: Optional[date] = None) -> Dict[date, Number]:
        habit = self.registry.get(habit_id)
        days = self._entries.get(habit.id, {})
        return {
            day: value
            for day, value in sorted(days.items())
            if (start is None or day >= start) and (end is None or day <= end)
        }

    def has_completed_day(self, habit: Habit, start: Optional[date] = None, end: Optional[date] = None) -> bool:
        return any(value >= habit.daily_goal for value in self.entries(habit.id, start, end).values())

    def purge_older_than(self, cutoff: date) -> int:
        removed = 0
        with self._lock:
            for days in self._entries.values():
                expired = [day for day in days if day < cutoff]
                for day in expired:
                    del days[day]
                removed += len(expired)
        return removed
