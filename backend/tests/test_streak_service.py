"""
Tests for StreakService.

Tests cover:
1. Consecutive qualifying days
2. Grace for an unlogged today
3. Breaks on gaps, unchecked and unfinished days
4. Start date and lookback limits
"""
from datetime import date, datetime, timedelta

from backend.services.streak_service import StreakService
from backend.tests.conftest import make_log

TODAY = date(2024, 12, 12)


def days_ago(n):
    return TODAY - timedelta(days=n)


class TestCurrentStreak:
    """Tests for calculate_current_streak function"""

    def test_grace_when_today_not_logged(self):
        """Three qualifying days ending yesterday with today unlogged should give 3"""
        logs = [make_log(days_ago(n), logged_food=True) for n in (1, 2, 3)]

        assert StreakService.calculate_current_streak(logs, "logged_food", TODAY) == 3

    def test_today_counts_when_checked(self):
        """A qualifying today extends the streak"""
        logs = [make_log(days_ago(n), logged_food=True) for n in (0, 1, 2, 3)]

        assert StreakService.calculate_current_streak(logs, "logged_food", TODAY) == 4

    def test_today_logged_unchecked_breaks(self):
        """A logged today with the checkbox false should give 0"""
        logs = [make_log(TODAY, logged_food=False)] + [
            make_log(days_ago(n), logged_food=True) for n in (1, 2, 3)
        ]

        assert StreakService.calculate_current_streak(logs, "logged_food", TODAY) == 0

    def test_today_logged_unfinished_breaks(self):
        """A logged but unfinished today is not a missing day"""
        logs = [make_log(TODAY, is_completed=False, logged_food=True)] + [
            make_log(days_ago(n), logged_food=True) for n in (1, 2)
        ]

        assert StreakService.calculate_current_streak(logs, "logged_food", TODAY) == 0

    def test_stops_at_gap(self):
        """A missing day before today should end the streak"""
        logs = [make_log(days_ago(n), logged_food=True) for n in (1, 2, 4, 5)]

        assert StreakService.calculate_current_streak(logs, "logged_food", TODAY) == 2

    def test_grace_only_applies_to_today(self):
        """Missing yesterday and today should give 0"""
        logs = [make_log(days_ago(n), logged_food=True) for n in (2, 3)]

        assert StreakService.calculate_current_streak(logs, "logged_food", TODAY) == 0

    def test_stops_at_unfinished_day(self):
        """An unfinished day in the past should end the streak"""
        logs = [
            make_log(days_ago(1), logged_food=True),
            make_log(days_ago(2), is_completed=False, logged_food=True),
            make_log(days_ago(3), logged_food=True),
        ]

        assert StreakService.calculate_current_streak(logs, "logged_food", TODAY) == 1

    def test_missing_key_breaks(self):
        """A log without the checkbox key counts as unchecked"""
        logs = [make_log(days_ago(1), logged_food=True), make_log(days_ago(2), protein_goal_met=True)]

        assert StreakService.calculate_current_streak(logs, "logged_food", TODAY) == 1

    def test_checkboxes_are_independent(self):
        """Each checkbox should have its own streak"""
        logs = [
            make_log(days_ago(1), logged_food=True, gym_session=True),
            make_log(days_ago(2), logged_food=True, gym_session=False),
        ]

        assert StreakService.calculate_current_streak(logs, "logged_food", TODAY) == 2
        assert StreakService.calculate_current_streak(logs, "gym_session", TODAY) == 1

    def test_stops_before_start_date(self):
        """Days before start_date should never count"""
        logs = [make_log(days_ago(n), logged_food=True) for n in range(0, 10)]

        streak = StreakService.calculate_current_streak(
            logs, "logged_food", TODAY, start_date=days_ago(4)
        )

        assert streak == 5

    def test_respects_max_days(self):
        """Scanning should stop at the iteration cap"""
        logs = [make_log(days_ago(n), logged_food=True) for n in range(0, 50)]

        assert StreakService.calculate_current_streak(logs, "logged_food", TODAY, max_days=20) == 20

    def test_empty_logs(self):
        """No logs should give 0"""
        assert StreakService.calculate_current_streak([], "logged_food", TODAY) == 0
        assert StreakService.calculate_current_streak(None, "logged_food", TODAY) == 0

    def test_unordered_logs(self):
        """Log order should not matter"""
        logs = [make_log(days_ago(n), logged_food=True) for n in (3, 1, 2)]

        assert StreakService.calculate_current_streak(logs, "logged_food", TODAY) == 3


class TestCompletedDaysStreak:
    """Tests for calculate_completed_days_streak function"""

    def test_counts_completed_days_regardless_of_checkboxes(self):
        """Any finished day continues the streak"""
        logs = [make_log(days_ago(n)) for n in (1, 2, 3)]

        assert StreakService.calculate_completed_days_streak(logs, TODAY) == 3

    def test_unfinished_day_breaks(self):
        """An unfinished day should end the streak"""
        logs = [make_log(days_ago(1)), make_log(days_ago(2), is_completed=False), make_log(days_ago(3))]

        assert StreakService.calculate_completed_days_streak(logs, TODAY) == 1


class TestDatetimeArguments:
    """today and start_date given as datetimes should act like their calendar dates"""

    def test_datetime_today(self):
        """Time of day on today should not change the streak"""
        logs = [make_log(days_ago(n), logged_food=True) for n in (1, 2, 3)]

        streak = StreakService.calculate_current_streak(logs, "logged_food", datetime(2024, 12, 12, 15, 45))

        assert streak == 3

    def test_datetime_start_date(self):
        """A start datetime should include its own calendar day"""
        logs = [make_log(days_ago(n), logged_food=True) for n in range(0, 10)]

        streak = StreakService.calculate_current_streak(
            logs, "logged_food", TODAY, start_date=datetime(2024, 12, 8, 20, 0)
        )

        assert streak == 5

    def test_completed_days_streak_with_datetime_today(self):
        logs = [make_log(days_ago(n)) for n in (1, 2)]

        assert StreakService.calculate_completed_days_streak(logs, datetime(2024, 12, 12, 9, 0)) == 2
