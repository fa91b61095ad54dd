from .clock import SystemClock
from .ledger import ProgressLedger
from .registry import HabitRegistry
from .reports import ReportEngine, WeeklyLogArchive


class HabitStore:
    """All mutable state of the service, wired together around one clock."""

    def __init__(self, clock=None):
        self.clock = clock or SystemClock()
        self.registry = HabitRegistry(self.clock)
        self.ledger = ProgressLedger(self.registry, self.clock)
        self.archive = WeeklyLogArchive()
        self.reports = ReportEngine(self.registry, self.ledger, self.archive, self.clock)


store = HabitStore()


def get_store():
    return store
