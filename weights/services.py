import logging
import math
from datetime import date, timedelta
from typing import Any, Dict, List, Optional

import numpy as np
from django.utils import timezone

from .averages import DailySample, calculate_averages, round2, usable_samples
from .models import WeightGoal, WeightLog

logger = logging.getLogger(__name__)

TREND_WINDOW = 28


def daily_samples(user, today: date) -> List[DailySample]:
    """The user's samples dated on or before ``today``, newest first"""
    rows = (
        WeightLog.objects
        .filter(user=user, date__lte=today)
        .order_by('-date')
        .values_list('date', 'am_weight', 'pm_weight')
    )
    return [DailySample(date=d, am_weight=am, pm_weight=pm) for d, am, pm in rows]


class AveragesService:
    """Loads a user's samples and runs the averages calculator over them"""

    def __init__(self, user):
        self.user = user

    def calculate(self, today: Optional[date] = None, extended: bool = False) -> Dict[str, Optional[float]]:
        today = today or timezone.localdate()
        samples = daily_samples(self.user, today)
        logger.debug(f"Loaded {len(samples)} daily samples for user {self.user.pk}")
        return calculate_averages(samples, today, extended=extended)


def latest_weight(user, today: Optional[date] = None) -> Optional[float]:
    today = today or timezone.localdate()
    ranked = usable_samples(daily_samples(user, today), today)
    return ranked[0].daily_average if ranked else None


def weight_trend(samples: List[DailySample]) -> Optional[float]:
    """Least-squares slope in weight units per day, or None with under 2 points"""
    if len(samples) < 2:
        return None

    oldest = samples[-1].date
    x = np.array([(s.date - oldest).days for s in samples], dtype=float)
    y = np.array([s.daily_average for s in samples], dtype=float)

    slope, _intercept = np.polyfit(x, y, 1)
    return float(slope)


class GoalProgressService:
    """Progress of a weight goal against the user's logged weights"""

    def __init__(self, goal: WeightGoal):
        self.goal = goal

    def progress(self, today: Optional[date] = None) -> Dict[str, Any]:
        goal = self.goal
        today = today or timezone.localdate()
        ranked = usable_samples(daily_samples(goal.user, today), today)

        if not ranked:
            return {
                'goal_id': goal.pk,
                'target_weight': goal.target_weight,
                'current_weight': None,
                'status': 'insufficient_data',
            }

        current = ranked[0].daily_average
        start = goal.start_weight if goal.start_weight is not None else current
        percentage = self._percentage(start, current, goal.target_weight)

        slope = weight_trend(ranked[:TREND_WINDOW])
        weekly_rate = round2(slope * 7) if slope is not None else None

        if percentage >= 100 and not goal.is_achieved:
            goal.mark_achieved()
            logger.info(f"Weight goal {goal.pk} achieved by user {goal.user_id}")

        return {
            'goal_id': goal.pk,
            'target_weight': goal.target_weight,
            'start_weight': round2(start),
            'current_weight': round2(current),
            'remaining': round2(goal.target_weight - current),
            'progress_percentage': round2(percentage),
            'weekly_rate': weekly_rate,
            'projected_date': self._projected_date(current, slope, today, percentage),
            'days_remaining': goal.days_remaining_on(today),
            'is_on_track': self._is_on_track(percentage, today),
            'is_achieved': goal.is_achieved,
            'status': 'achieved' if goal.is_achieved else 'in_progress',
        }

    @staticmethod
    def _percentage(start: float, current: float, target: float) -> float:
        total_change = target - start
        if total_change == 0:
            return 100.0 if current == target else 0.0
        done = (current - start) / total_change * 100
        return min(100.0, max(0.0, done))

    def _projected_date(self, current: float, slope: Optional[float],
                        today: date, percentage: float) -> Optional[date]:
        # a slope that rounds to no weekly change is a flat trend
        if slope is None or round2(slope * 7) == 0 or percentage >= 100:
            return None
        days = (self.goal.target_weight - current) / slope
        if days <= 0:
            # trend moves away from the target
            return None
        days = math.ceil(days)
        if days > (date.max - today).days:
            return None
        return today + timedelta(days=days)

    def _is_on_track(self, percentage: float, today: date) -> Optional[bool]:
        goal = self.goal
        if not goal.target_date:
            return None

        total_days = (goal.target_date - goal.start_date).days
        days_passed = (today - goal.start_date).days
        if days_passed <= 0 or total_days <= 0:
            return None

        expected_progress = min(100.0, days_passed / total_days * 100)
        return percentage >= expected_progress
