"""
Rolling averages over a user's daily weight samples.

Windows are positional (the n most recent samples, whatever their dates)
except for the previous-week window, which is bounded by calendar dates.
A window that lacks enough samples is reported as None, never as zero.
"""
from dataclasses import dataclass
from datetime import date, timedelta
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Iterable, List, Optional

# (response key, window size) for windows that need exactly n samples
FIXED_WINDOWS = (
    ('twoDayAvg', 2),
    ('threeDayAvg', 3),
    ('fourDayAvg', 4),
    ('fiveDayAvg', 5),
    ('sixDayAvg', 6),
    ('oneWeekAvg', 7),
    ('oneMonthAvg', 28),
)

# (response key, floor) for windows capped at the floor once it is met
FLOOR_WINDOWS = (
    ('threeMonthAvg', 90),
    ('oneYearAvg', 365),
)

BASE_FIELDS = (
    'oneDayAvg', 'twoDayAvg', 'threeDayAvg', 'fourDayAvg', 'fiveDayAvg',
    'sixDayAvg', 'oneWeekAvg', 'oneMonthAvg', 'threeMonthAvg', 'oneYearAvg',
)
EXTENDED_FIELDS = BASE_FIELDS + ('yesterdayAvg', 'previousWeekAvg')

PREVIOUS_WEEK_DAYS = 7

_CENTS = Decimal('0.01')


@dataclass(frozen=True)
class DailySample:
    date: date
    am_weight: Optional[float] = None
    pm_weight: Optional[float] = None

    @property
    def daily_average(self) -> Optional[float]:
        if self.am_weight is not None and self.pm_weight is not None:
            return (float(self.am_weight) + float(self.pm_weight)) / 2
        if self.am_weight is not None:
            return float(self.am_weight)
        if self.pm_weight is not None:
            return float(self.pm_weight)
        return None


def round2(value: float) -> float:
    """Round half-up to 2 decimals on the float's exact value"""
    return float(Decimal(value).quantize(_CENTS, rounding=ROUND_HALF_UP))


def _mean(values: List[float]) -> float:
    return round2(sum(values) / len(values))


def _value_on(samples: List[DailySample], day: date) -> Optional[float]:
    for sample in samples:
        if sample.date == day:
            return round2(sample.daily_average)
    return None


def usable_samples(samples: Iterable[DailySample], today: date) -> List[DailySample]:
    """Samples dated today or earlier that carry a weight, newest first"""
    kept = [s for s in samples if s.date <= today and s.daily_average is not None]
    return sorted(kept, key=lambda s: s.date, reverse=True)


def calculate_averages(samples: Iterable[DailySample], today: date,
                       extended: bool = False) -> Dict[str, Optional[float]]:
    """
    Compute the named averages for one user as of ``today``.

    ``samples`` is not modified. Every field is either a float rounded to
    2 decimals or None when its window has too few samples.
    """
    ranked = usable_samples(samples, today)
    values = [s.daily_average for s in ranked]

    result: Dict[str, Optional[float]] = {'oneDayAvg': _value_on(ranked, today)}

    for key, size in FIXED_WINDOWS:
        window = values[:size]
        result[key] = _mean(window) if len(window) == size else None

    for key, floor in FLOOR_WINDOWS:
        window = values[:floor]
        result[key] = _mean(window) if len(values) >= floor else None

    if extended:
        result['yesterdayAvg'] = _value_on(ranked, today - timedelta(days=1))

        start = today - timedelta(days=PREVIOUS_WEEK_DAYS + 1)
        previous_week = [s.daily_average for s in ranked if start < s.date < today]
        result['previousWeekAvg'] = (
            _mean(previous_week) if len(previous_week) == PREVIOUS_WEEK_DAYS else None
        )

    fields = EXTENDED_FIELDS if extended else BASE_FIELDS
    return {key: result[key] for key in fields}
