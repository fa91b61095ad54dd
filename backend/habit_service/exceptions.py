class HabitTrackerError(Exception):
    """Base class for errors raised by the habit tracking core."""


class ValidationError(HabitTrackerError):
    """Malformed input such as an empty name or a non-positive goal."""


class NotFoundError(HabitTrackerError):
    """Unknown habit identifier or missing archived report."""
