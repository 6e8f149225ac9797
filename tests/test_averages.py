"""Tests for the rolling average calculator."""

from __future__ import annotations

import math
from datetime import date, timedelta

import pytest

from weights.averages import (
    BASE_FIELDS,
    EXTENDED_FIELDS,
    DailySample,
    calculate_averages,
    round2,
)

TODAY = date(2024, 3, 10)


def history(values, start: date = TODAY) -> list[DailySample]:
    """Consecutive daily samples, most recent first, starting at ``start``."""
    return [
        DailySample(date=start - timedelta(days=i), am_weight=v)
        for i, v in enumerate(values)
    ]


class TestDailyAverage:
    """Tests for the AM/PM combination rule."""

    def test_both_weights_are_averaged(self) -> None:
        assert DailySample(TODAY, 70.0, 72.0).daily_average == pytest.approx(71.0)

    def test_single_weight_is_used_as_is(self) -> None:
        assert DailySample(TODAY, am_weight=70.4).daily_average == pytest.approx(70.4)
        assert DailySample(TODAY, pm_weight=69.8).daily_average == pytest.approx(69.8)

    def test_no_weights_means_no_value(self) -> None:
        assert DailySample(TODAY).daily_average is None


class TestRound2:
    """Tests for final rounding."""

    def test_half_rounds_up(self) -> None:
        # 70.125 is exact in binary, so this is a true tie
        assert round2(70.125) == 70.13

    def test_below_half_rounds_down(self) -> None:
        assert round2(70.4285714) == 70.43
        assert round2(70.4249) == 70.42


class TestEmptyAndSparse:
    """Tests for insufficient data."""

    def test_empty_history_is_all_unavailable(self) -> None:
        result = calculate_averages([], TODAY)

        assert tuple(result) == BASE_FIELDS
        assert all(value is None for value in result.values())

    def test_extended_empty_history_is_all_unavailable(self) -> None:
        result = calculate_averages([], TODAY, extended=True)

        assert tuple(result) == EXTENDED_FIELDS
        assert all(value is None for value in result.values())

    def test_single_sample_today(self) -> None:
        samples = [DailySample(TODAY, am_weight=70, pm_weight=72)]

        result = calculate_averages(samples, TODAY)

        assert result['oneDayAvg'] == 71.00
        for key in ('twoDayAvg', 'threeDayAvg', 'fourDayAvg', 'fiveDayAvg',
                    'sixDayAvg', 'oneWeekAvg', 'oneMonthAvg'):
            assert result[key] is None

    def test_no_sample_today_means_no_one_day_average(self) -> None:
        samples = history([70, 71], start=TODAY - timedelta(days=1))

        result = calculate_averages(samples, TODAY)

        assert result['oneDayAvg'] is None
        assert result['twoDayAvg'] == 70.5

    def test_unavailable_is_never_zero(self) -> None:
        result = calculate_averages(history([70, 71, 72]), TODAY)

        assert result['fourDayAvg'] is None
        assert result['fourDayAvg'] != 0


class TestPositionalWindows:
    """Tests for the n-most-recent-samples windows."""

    def test_one_week_average(self) -> None:
        samples = history([70, 71, 69, 70, 72, 71, 70])

        result = calculate_averages(samples, TODAY)

        assert result['oneWeekAvg'] == 70.43
        assert result['twoDayAvg'] == 70.5
        assert result['threeDayAvg'] == 70.0
        assert result['sixDayAvg'] == 70.5
        assert result['oneMonthAvg'] is None

    def test_windows_skip_calendar_gaps(self) -> None:
        samples = [
            DailySample(TODAY, am_weight=70),
            DailySample(TODAY - timedelta(days=5), am_weight=72),
        ]

        result = calculate_averages(samples, TODAY)

        assert result['twoDayAvg'] == 71.0

    def test_samples_without_weights_are_invisible(self) -> None:
        samples = [
            DailySample(TODAY, am_weight=70),
            DailySample(TODAY - timedelta(days=1)),
            DailySample(TODAY - timedelta(days=2), pm_weight=72),
        ]

        result = calculate_averages(samples, TODAY)

        assert result['twoDayAvg'] == 71.0
        assert result['threeDayAvg'] is None

    def test_one_month_needs_28_samples(self) -> None:
        assert calculate_averages(history([80] * 27), TODAY)['oneMonthAvg'] is None
        assert calculate_averages(history([80] * 28), TODAY)['oneMonthAvg'] == 80.0

    def test_future_samples_are_ignored(self) -> None:
        samples = [DailySample(TODAY + timedelta(days=1), am_weight=90)] + history([70, 72])

        result = calculate_averages(samples, TODAY)

        assert result['oneDayAvg'] == 70.0
        assert result['twoDayAvg'] == 71.0

    def test_unordered_input_is_ranked_by_date(self) -> None:
        samples = list(reversed(history([70, 71, 75])))

        result = calculate_averages(samples, TODAY)

        assert result['twoDayAvg'] == 70.5

    def test_rounding_happens_once_at_the_end(self) -> None:
        # daily averages 70.125 and 70.125 would round to 70.13 each
        samples = [
            DailySample(TODAY, 70.25, 70.0),
            DailySample(TODAY - timedelta(days=1), 70.0, 70.25),
        ]

        result = calculate_averages(samples, TODAY)

        assert result['oneDayAvg'] == 70.13
        assert result['twoDayAvg'] == 70.13


class TestFloorWindows:
    """Tests for the three-month and one-year windows."""

    def test_three_month_needs_90_samples(self) -> None:
        values = [60 + (i % 10) for i in range(89)]

        assert calculate_averages(history(values), TODAY)['threeMonthAvg'] is None

    def test_three_month_average(self) -> None:
        values = [60 + (i % 10) for i in range(90)]

        result = calculate_averages(history(values), TODAY)

        assert result['threeMonthAvg'] == round2(sum(values) / 90)
        assert result['threeMonthAvg'] == 64.5

    def test_three_month_slice_is_capped_at_90(self) -> None:
        values = [60 + (i % 10) for i in range(90)] + [1000]

        result = calculate_averages(history(values), TODAY)

        assert result['threeMonthAvg'] == 64.5

    def test_one_year_average(self) -> None:
        assert calculate_averages(history([80] * 364), TODAY)['oneYearAvg'] is None
        assert calculate_averages(history([80] * 365), TODAY)['oneYearAvg'] == 80.0
        assert calculate_averages(history([80] * 365 + [10]), TODAY)['oneYearAvg'] == 80.0


class TestExtendedAverages:
    """Tests for yesterday and the previous calendar week."""

    def test_yesterday_average(self) -> None:
        samples = history([70, 71.5])

        result = calculate_averages(samples, TODAY, extended=True)

        assert result['yesterdayAvg'] == 71.5

    def test_previous_week_excludes_today(self) -> None:
        samples = [DailySample(TODAY, am_weight=100)] + history(
            [70, 71, 72, 73, 74, 75, 76], start=TODAY - timedelta(days=1)
        )

        result = calculate_averages(samples, TODAY, extended=True)

        assert result['previousWeekAvg'] == 73.0
        assert result['oneWeekAvg'] == round2((100 + 70 + 71 + 72 + 73 + 74 + 75) / 7)

    def test_previous_week_without_today(self) -> None:
        samples = history([70, 71, 72, 73, 74, 75, 76], start=TODAY - timedelta(days=1))

        result = calculate_averages(samples, TODAY, extended=True)

        assert result['previousWeekAvg'] == 73.0
        assert result['oneDayAvg'] is None

    def test_previous_week_missing_a_day_is_unavailable(self) -> None:
        samples = history([70, 71, 72, 73, 74, 75, 76, 77], start=TODAY - timedelta(days=1))
        del samples[3]

        result = calculate_averages(samples, TODAY, extended=True)

        assert result['previousWeekAvg'] is None
        # positional windows still see seven samples
        assert result['oneWeekAvg'] is not None

    def test_previous_week_ignores_eight_days_ago(self) -> None:
        samples = [
            DailySample(TODAY - timedelta(days=d), am_weight=70) for d in (1, 2, 3, 4, 5, 6, 8)
        ]

        result = calculate_averages(samples, TODAY, extended=True)

        assert result['previousWeekAvg'] is None

    def test_base_variant_has_no_extended_keys(self) -> None:
        result = calculate_averages(history([70, 71]), TODAY)

        assert 'yesterdayAvg' not in result
        assert 'previousWeekAvg' not in result


class TestPurity:
    """Tests for idempotence and input handling."""

    def test_repeated_calls_are_identical(self) -> None:
        samples = history([70.2, 71.1, 69.9, 70.4, 72.0, 71.3, 70.8] * 5)

        first = calculate_averages(samples, TODAY, extended=True)
        second = calculate_averages(samples, TODAY, extended=True)

        assert first == second

    def test_input_is_not_modified(self) -> None:
        samples = list(reversed(history([70, 71, 72])))
        before = list(samples)

        calculate_averages(samples, TODAY, extended=True)

        assert samples == before

    def test_values_are_finite_and_two_decimal(self) -> None:
        samples = history([70.333, 71.777, 69.111, 70.999] * 100)

        result = calculate_averages(samples, TODAY, extended=True)

        for value in result.values():
            if value is None:
                continue
            assert math.isfinite(value)
            assert round(value, 2) == value
