"""Tests for the aggregate statistics and the match verdict."""

import pytest

from visual_diff.exceptions import InvalidDimensionsError
from visual_diff.services.statistics_service import StatisticsService


class TestAggregate:
    def test_percentage(self):
        stats = StatisticsService.aggregate(2500, 100, 100)
        assert stats.difference_percentage == 25
        assert stats.colored_area_percentage == stats.difference_percentage
        assert stats.is_match is False

    def test_zero_threshold_requires_exact_match(self):
        assert StatisticsService.aggregate(0, 10, 10, threshold=0).is_match
        assert not StatisticsService.aggregate(1, 10, 10, threshold=0).is_match

    def test_threshold_is_inclusive(self):
        stats = StatisticsService.aggregate(1, 100, 100, threshold=0.01)
        assert stats.difference_percentage == 0.01
        assert stats.is_match

    def test_threshold_monotonic(self):
        thresholds = [0, 0.5, 1, 5, 12.5, 50, 100]
        verdicts = [StatisticsService.aggregate(1250, 100, 100, t).is_match for t in thresholds]
        # Once a threshold matches, every larger one matches too
        first = verdicts.index(True)
        assert all(verdicts[first:])
        assert not any(verdicts[:first])

    def test_zero_area(self):
        with pytest.raises(InvalidDimensionsError):
            StatisticsService.aggregate(0, 0, 100)

    @pytest.mark.parametrize("count", [-1, 10001])
    def test_count_out_of_range(self, count):
        with pytest.raises(ValueError):
            StatisticsService.aggregate(count, 100, 100)
