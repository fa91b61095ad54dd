import logging
import threading
from typing import Dict, List

from .exceptions import NotFoundError, ValidationError
from .models import Habit, Number
from .utils import is_positive_number

logger = logging.getLogger(__name__)


class HabitRegistry:
    """Owns the registered habits and hands out their identifiers.

    Identifiers start at 1 and only ever grow; an id is never handed out
    twice within the lifetime of a registry.
    """

    def __init__(self, clock):
        self.clock = clock
        self._habits: Dict[int, Habit] = {}
        self._last_id = 0
        self._lock = threading.Lock()

    def create(self, name, daily_goal: Number) -> Habit:
        if not isinstance(name, str) or not name.strip():
            raise ValidationError("Invalid habit name")
        if not is_positive_number(daily_goal):
            raise ValidationError("Invalid daily goal")

        with self._lock:
            self._last_id += 1
            habit = Habit(
                id=self._last_id,
                name=name.strip(),
                daily_goal=daily_goal,
                created_at=self.clock.now(),
            )
            self._habits[habit.id] = habit

        logger.info(f"Registered habit {habit.id} ({habit.name!r}, daily goal {habit.daily_goal})")
        return habit

    def get(self, habit_id: int) -> Habit:
        habit = self._habits.get(habit_id)
        if habit is None:
            raise NotFoundError("Habit not found")
        return habit

    def list(self) -> List[Habit]:
        return [self._habits[habit_id] for habit_id in sorted(self._habits)]

    def exists(self) -> bool:
        return bool(self._habits)

    def __len__(self):
        return len(self._habits)
