import math
from datetime import date, timedelta
from typing import List


def window_dates(end_date: date, days: int) -> List[date]:
    return [end_date - timedelta(days=offset) for offset in range(days - 1, -1, -1)]


def is_positive_number(value) -> bool:
    # bool is an int subclass but never a valid quantity
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value) and value > 0
