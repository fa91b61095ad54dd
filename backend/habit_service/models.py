from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Dict, Union

Number = Union[int, float]


@dataclass(frozen=True)
class Habit:
    id: int
    name: str
    daily_goal: Number
    created_at: datetime


@dataclass(frozen=True)
class DayProgress:
    progress: Number
    completed: bool


@dataclass
class WeeklyReport:
    habit_id: int
    name: str
    daily_goal: Number
    weekly_data: Dict[date, DayProgress] = field(default_factory=dict)

    @property
    def weekly_completion(self) -> int:
        return sum(1 for day in self.weekly_data.values() if day.completed)
