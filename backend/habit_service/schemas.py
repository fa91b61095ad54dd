from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt
from typing import Dict, List, Optional, Union
import datetime

Quantity = Union[StrictInt, StrictFloat]


class HabitCreate(BaseModel):
    name: str
    daily_goal: Quantity


class Habit(BaseModel):
    id: int
    name: str
    daily_goal: Quantity
    created_at: datetime.datetime

    model_config = ConfigDict(from_attributes=True)


class ProgressUpdate(BaseModel):
    quantity: Optional[Quantity] = Field(default=None)
    date: Optional[datetime.date] = Field(default=None)


class Progress(BaseModel):
    habit_id: int
    date: datetime.date
    progress: Quantity


class DayProgress(BaseModel):
    progress: Quantity
    completed: bool

    model_config = ConfigDict(from_attributes=True)


class WeeklyReport(BaseModel):
    habit_id: int
    name: str
    daily_goal: Quantity
    weekly_data: Dict[datetime.date, DayProgress]
    weekly_completion: int

    model_config = ConfigDict(from_attributes=True)


class HabitResponse(BaseModel):
    status: str = "success"
    data: Habit


class HabitListResponse(BaseModel):
    status: str = "success"
    data: List[Habit]
    total: int


class ProgressResponse(BaseModel):
    status: str = "success"
    data: Progress


class WeeklyReportResponse(BaseModel):
    status: str = "success"
    data: List[WeeklyReport]
    report_date: datetime.date
