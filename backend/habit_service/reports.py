import copy
import logging
from datetime import date, timedelta
from typing import Dict, List, Optional, Tuple

from .config import REPORT_WINDOW_DAYS, RETENTION_DAYS
from .exceptions import NotFoundError, ValidationError
from .ledger import ProgressLedger
from .models import DayProgress, WeeklyReport
from .registry import HabitRegistry
from .utils import window_dates

logger = logging.getLogger(__name__)


class WeeklyLogArchive:
    """Generated weekly reports keyed by the date they were generated for.

    Reports are copied on the way in and out, so callers never share
    state with the archived copy.
    """

    def __init__(self):
        self._logs: Dict[date, List[WeeklyReport]] = {}

    def store(self, report_date: date, reports: List[WeeklyReport]):
        # Regenerating on the same date replaces the earlier copy
        self._logs[report_date] = copy.deepcopy(list(reports))

    def get(self, report_date: date) -> List[WeeklyReport]:
        if report_date not in self._logs:
            raise NotFoundError(f"No weekly report archived for {report_date.isoformat()}")
        return copy.deepcopy(self._logs[report_date])

    def dates(self) -> List[date]:
        return sorted(self._logs)

    def purge_older_than(self, cutoff: date) -> int:
        expired = [report_date for report_date in self._logs if report_date < cutoff]
        for report_date in expired:
            del self._logs[report_date]
        return len(expired)


class ReportEngine:
    def __init__(self, registry: HabitRegistry, ledger: ProgressLedger, archive: WeeklyLogArchive, clock, retention_days: int = RETENTION_DAYS):
        self.registry = registry
        self.ledger = ledger
        self.archive = archive
        self.clock = clock
        self.retention_days = retention_days

    def build_report(self, habit, reference_date: date) -> WeeklyReport:
        """Summarise one habit over the trailing window ending at reference_date.

        Only days with a recorded entry appear in weekly_data; a day with no
        entry is left out rather than reported as zero.
        """
        window = window_dates(reference_date, REPORT_WINDOW_DAYS)
        recorded = self.ledger.entries(habit.id, start=window[0], end=window[-1])
        report = WeeklyReport(habit_id=habit.id, name=habit.name, daily_goal=habit.daily_goal)
        for day in window:
            if day not in recorded:
                continue
            progress = recorded[day]
            report.weekly_data[day] = DayProgress(progress=progress, completed=progress >= habit.daily_goal)
        return report

    def generate_weekly_report(self, reference_date: Optional[date] = None) -> Tuple[List[WeeklyReport], date]:
        today = self.clock.today()
        reference_date = reference_date or today
        # Archive keys stay within the retention period and never run ahead of today
        if not today - timedelta(days=self.retention_days) <= reference_date <= today:
            raise ValidationError(
                f"Report date must be between {self.retention_days} days ago and today"
            )
        reports = [self.build_report(habit, reference_date) for habit in self.registry.list()]
        self.archive.store(reference_date, reports)
        logger.info(f"Generated weekly report for {reference_date.isoformat()} covering {len(reports)} habits")
        return reports, reference_date
