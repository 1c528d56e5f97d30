"""Tests for recurrence pattern helpers."""

import pytest

from taskboard_cli.models import Recurrence
from taskboard_cli.utils.recurrence import (
    VALID_PATTERNS,
    describe_recurrence,
    resolve_recurrence,
)


class TestResolveRecurrence:
    @pytest.mark.parametrize(
        "pattern,rule_type,interval",
        [
            ("daily", "daily", 1),
            ("weekly", "weekly", 1),
            ("bi-weekly", "weekly", 2),
            ("monthly", "monthly", 1),
            ("quarterly", "monthly", 3),
            ("annually", "annually", 1),
            ("yearly", "annually", 1),
        ],
    )
    def test_known_patterns(self, pattern, rule_type, interval):
        rule = resolve_recurrence(pattern)
        assert rule.type == rule_type
        assert rule.interval == interval

    def test_case_insensitive(self):
        assert resolve_recurrence("DAILY") == Recurrence(type="daily")

    def test_unknown_pattern(self):
        assert resolve_recurrence("fortnightly-ish") is None

    def test_day_of_month_kept_for_monthly(self):
        assert resolve_recurrence("monthly", 31).day_of_month == 31

    def test_day_of_month_ignored_for_weekly(self):
        assert resolve_recurrence("weekly", 15).day_of_month is None


def test_valid_patterns_listed():
    assert "bi-weekly" in VALID_PATTERNS
    assert "daily" in VALID_PATTERNS


class TestDescribeRecurrence:
    def test_every_single_period(self):
        assert describe_recurrence(Recurrence(type="daily")) == "every day"

    def test_every_n_periods(self):
        assert describe_recurrence(Recurrence(type="weekly", interval=2)) == "every 2 weeks"

    def test_monthly_with_day(self):
        rule = Recurrence(type="monthly", day_of_month=15)
        assert describe_recurrence(rule) == "every month on day 15"
