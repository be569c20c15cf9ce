"""
Streak calculation service.
Counts consecutive qualifying days walking backward from a caller-supplied "today".
"""
from datetime import date, timedelta
from typing import Callable, Dict, Iterable, Optional

from backend.constants import STREAK_MAX_LOOKBACK_DAYS
from backend.schemas import DailyLogRecord
from backend.services.date_service import DateService


class StreakService:
    """Service for streak calculations"""

    @staticmethod
    def _index_by_date(logs: Optional[Iterable[DailyLogRecord]]) -> Dict[date, DailyLogRecord]:
        # Assumes one log per date; a duplicate date keeps the last record
        return {log.log_date: log for log in (logs or [])}

    @staticmethod
    def _count_back(
        logs: Optional[Iterable[DailyLogRecord]],
        qualifies: Callable[[DailyLogRecord], bool],
        today: date,
        start_date: Optional[date],
        max_days: int
    ) -> int:
        today = DateService.to_local_date(today)
        if start_date is not None:
            start_date = DateService.to_local_date(start_date)

        logs_by_date = StreakService._index_by_date(logs)
        streak = 0
        cursor = today

        for _ in range(max_days):
            if start_date is not None and cursor < start_date:
                break

            log = logs_by_date.get(cursor)
            if log is not None and log.is_completed and qualifies(log):
                streak += 1
            elif cursor == today and log is None:
                # Today not logged yet: not a break
                pass
            else:
                break

            cursor -= timedelta(days=1)

        return streak

    @staticmethod
    def calculate_current_streak(
        logs: Optional[Iterable[DailyLogRecord]],
        checkbox_name: str,
        today: date,
        start_date: Optional[date] = None,
        max_days: int = STREAK_MAX_LOOKBACK_DAYS
    ) -> int:
        """
        Calculate the current streak of a checkbox.

        A day counts when its log is completed and the checkbox is checked.
        An unlogged today is skipped without breaking the streak; a logged
        today that does not qualify ends it at 0.

        Args:
            logs: Day records of one user
            checkbox_name: Checkbox to follow
            today: Day to start walking back from
            start_date: Optional tracking start date; earlier days never count
            max_days: Upper bound on days scanned

        Returns:
            Number of consecutive qualifying days
        """
        return StreakService._count_back(
            logs,
            lambda log: log.checkbox_states.get(checkbox_name) is True,
            today,
            start_date,
            max_days
        )

    @staticmethod
    def calculate_completed_days_streak(
        logs: Optional[Iterable[DailyLogRecord]],
        today: date,
        start_date: Optional[date] = None,
        max_days: int = STREAK_MAX_LOOKBACK_DAYS
    ) -> int:
        """Consecutive completed days regardless of checkboxes, same grace rule for today"""
        return StreakService._count_back(logs, lambda log: True, today, start_date, max_days)
