"""Sleep duration and score calculations.

A night is described by two clock times and a 1-5 quality rating. The wake
time always belongs to the same night: when it is earlier than the bedtime it
is taken to be on the following day, never further.
"""

import math
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta

# Duration that earns the full duration share of the score
REFERENCE_SLEEP_MINUTES = 8 * 60
DURATION_WEIGHT = 60
QUALITY_WEIGHT = 40
MIN_QUALITY = 1
MAX_QUALITY = 5

_ANCHOR_DAY = date(2000, 1, 1)


@dataclass
class SleepDuration:
    """Elapsed time between bedtime and wake time."""

    hours: int
    minutes: int
    total_minutes: int

    @property
    def total_hours(self) -> float:
        return self.total_minutes / 60

    def to_dict(self) -> dict:
        return {
            "hours": self.hours,
            "minutes": self.minutes,
            "total_minutes": self.total_minutes,
        }


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives."""
    return int(math.floor(value + 0.5))


def parse_clock_time(value: str) -> time:
    """Parse "HH:MM" (or "HH:MM:SS" as stored by some databases).

    Raises:
        ValueError: If the string is not a valid time of day.
    """
    for fmt in ("%H:%M", "%H:%M:%S"):
        try:
            return datetime.strptime(value, fmt).time()
        except ValueError:
            continue
    raise ValueError(f"Invalid time of day: {value!r}")


def minutes_since_midnight(value: str) -> int:
    parsed = parse_clock_time(value)
    return parsed.hour * 60 + parsed.minute


def calculate_duration(bedtime: str, wake_time: str) -> SleepDuration:
    """Calculate how long a night lasted.

    Equal bedtime and wake time give a zero-length night, not 24 hours.

    Args:
        bedtime: Time the user went to bed, "HH:MM".
        wake_time: Time the user woke up, "HH:MM".

    Returns:
        Whole hours, remaining minutes and total minutes. Seconds are dropped.
    """
    start = datetime.combine(_ANCHOR_DAY, parse_clock_time(bedtime))
    end = datetime.combine(_ANCHOR_DAY, parse_clock_time(wake_time))
    if end < start:
        end += timedelta(days=1)

    elapsed_minutes = int((end - start).total_seconds() // 60)
    hours, minutes = divmod(elapsed_minutes, 60)
    return SleepDuration(hours=hours, minutes=minutes, total_minutes=hours * 60 + minutes)


def calculate_sleep_score(duration_minutes: int, quality: int) -> int:
    """Composite 0-100 score.

    60 points for duration, capped at 8 hours, plus 40 points for quality.

    Raises:
        ValueError: If quality is outside 1-5 or the duration is negative.
    """
    if not MIN_QUALITY <= quality <= MAX_QUALITY:
        raise ValueError(f"Quality must be between {MIN_QUALITY} and {MAX_QUALITY}, got {quality}")
    if duration_minutes < 0:
        raise ValueError(f"Duration cannot be negative, got {duration_minutes}")

    duration_score = min(duration_minutes / REFERENCE_SLEEP_MINUTES, 1.0) * DURATION_WEIGHT
    quality_score = quality / MAX_QUALITY * QUALITY_WEIGHT
    return round_half_up(duration_score + quality_score)
