from datetime import date, datetime, timedelta, timezone


class SystemClock:
    def today(self) -> date:
        return self.now().date()

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock:
    """Clock pinned to a given day. Used by tests and local replays."""

    def __init__(self, day: date):
        self._day = day

    def today(self) -> date:
        return self._day

    def now(self) -> datetime:
        return datetime(self._day.year, self._day.month, self._day.day, tzinfo=timezone.utc)

    def advance(self, days: int = 1):
        self._day = self._day + timedelta(days=days)
