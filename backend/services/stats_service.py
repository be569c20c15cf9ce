"""
Statistics service.
Fetches snapshots from storage and runs the points and streak engines over them.
"""
import logging
from datetime import date
from typing import Dict, List, Optional
from sqlalchemy.orm import Session

from backend.constants import DAYS_PER_WEEK, WEEKDAY_NAMES
from backend.exceptions import ValidationException
from backend.repositories.checkbox_repository import CheckboxRepository
from backend.repositories.log_repository import DailyLogRepository
from backend.repositories.user_repository import UserRepository
from backend.schemas import (
    CalendarDay, CalendarMonthResponse, CheckboxDefinition, CheckboxStats, CheckboxType,
    CurrentWeekStatsResponse, DailyLogRecord, DailyLogResponse, StatsResponse, WeekCheckboxStats
)
from backend.services.date_service import DateService
from backend.services.points_service import PointsService
from backend.services.streak_service import StreakService

logger = logging.getLogger("habit_tracker.stats")


class StatsService:
    """Service for user statistics"""

    def __init__(self, db: Session):
        self.db = db
        self.log_repo = DailyLogRepository()
        self.checkbox_repo = CheckboxRepository()
        self.user_repo = UserRepository()

    def get_overall_stats(self, user_id: int, today: date) -> StatsResponse:
        """
        Get lifetime statistics from the user's tracking start date.

        Args:
            user_id: User to report on
            today: Current date, used as the streak anchor

        Returns:
            StatsResponse with totals, streaks and per-checkbox stats
        """
        tracking_start_date = self.user_repo.get_or_create(self.db, user_id).tracking_start_date
        definitions = self.checkbox_repo.get_active_snapshots(self.db)
        logs = self.log_repo.get_records(self.db, user_id, start_date=tracking_start_date)

        result = PointsService.calculate_total_points(logs, definitions, tracking_start_date)
        counted_logs = PointsService.filter_counted_logs(logs, tracking_start_date)

        # Streaks run over finalized days only, so an unfinished today is still in progress
        checkbox_stats = self._build_checkbox_stats(
            counted_logs, definitions, result.weekly_breakdown, today, tracking_start_date
        )

        logger.info(f"Stats for user={user_id}: total={result.total_points}")

        return StatsResponse(
            total_points=result.total_points,
            daily_points=result.daily_points,
            weekly_points=result.weekly_points,
            tracking_start_date=tracking_start_date,
            days_logged=len(counted_logs),
            current_streak=StreakService.calculate_completed_days_streak(
                counted_logs, today, tracking_start_date
            ),
            checkbox_stats=checkbox_stats
        )

    def _build_checkbox_stats(
        self,
        counted_logs: List[DailyLogRecord],
        definitions: List[CheckboxDefinition],
        weekly_breakdown: Dict[str, int],
        today: date,
        start_date: Optional[date]
    ) -> Dict[str, CheckboxStats]:
        stats = {}
        for definition in definitions:
            checked_days = sum(
                1 for log in counted_logs if log.checkbox_states.get(definition.name) is True
            )
            if definition.type == CheckboxType.DAILY:
                stats[definition.name] = CheckboxStats(
                    total=checked_days,
                    current_streak=StreakService.calculate_current_streak(
                        counted_logs, definition.name, today, start_date
                    )
                )
            else:
                stats[definition.name] = CheckboxStats(
                    weeks_earned=weekly_breakdown.get(definition.name, 0),
                    total_sessions=checked_days
                )
        return stats

    def get_current_week_stats(self, user_id: int, today: date) -> CurrentWeekStatsResponse:
        """
        Get statistics for the Monday-Sunday week containing today.

        Daily points only count completed days. The weekly bonus runs over
        every stored log of the week, finalized or not.
        """
        week_start, week_end = DateService.week_range(today)
        definitions = self.checkbox_repo.get_active_snapshots(self.db)
        week_logs = self.log_repo.get_records(self.db, user_id, week_start, week_end)
        completed_logs = [log for log in week_logs if log.is_completed]

        daily_points = sum(
            PointsService.calculate_daily_points(log.checkbox_states, definitions)
            for log in completed_logs
        )
        weekly_points_map = PointsService.calculate_weekly_points(
            week_logs, definitions, week_start, week_end
        )
        weekly_points = sum(weekly_points_map.values())

        checkbox_stats = {}
        for definition in definitions:
            completed_count = sum(
                1 for log in completed_logs if log.checkbox_states.get(definition.name) is True
            )
            if definition.type == CheckboxType.WEEKLY:
                is_complete = completed_count >= (definition.weekly_threshold or 0)
            else:
                is_complete = completed_count == DAYS_PER_WEEK

            checkbox_stats[definition.name] = WeekCheckboxStats(
                name=definition.name,
                label=definition.label,
                type=definition.type,
                points=definition.points,
                weekly_threshold=definition.weekly_threshold,
                completed_count=completed_count,
                total_days=DAYS_PER_WEEK,
                is_complete=is_complete
            )

        logs_by_date = {log.log_date: log for log in week_logs}
        daily_logs = {}
        for day_name, day in zip(WEEKDAY_NAMES, DateService.week_days(week_start)):
            log = logs_by_date.get(day)
            daily_logs[day_name] = (
                DailyLogResponse(
                    log_date=log.log_date,
                    checkbox_states=log.checkbox_states,
                    is_completed=log.is_completed
                )
                if log else None
            )

        return CurrentWeekStatsResponse(
            week_start=week_start,
            week_end=week_end,
            total_points=daily_points + weekly_points,
            daily_points=daily_points,
            weekly_points=weekly_points,
            weekly_points_breakdown=weekly_points_map,
            checkbox_stats=checkbox_stats,
            days_logged=len(completed_logs),
            total_days=DAYS_PER_WEEK,
            daily_logs=daily_logs
        )

    def get_calendar_month(
        self,
        user_id: int,
        year: Optional[int],
        month: Optional[int]
    ) -> CalendarMonthResponse:
        """
        Get per-day points of one calendar month plus the lifetime total.

        Day points are daily checkbox points of whatever is stored, finalized
        or not. total_points is the same lifetime aggregate as the overall
        stats, so it matches what the rest of the app shows.

        Raises:
            ValidationException: If year or month is missing or out of range
        """
        if year is None or month is None:
            raise ValidationException("month", "Invalid year or month")
        try:
            month_start, month_end = DateService.month_range(year, month)
        except ValueError:
            raise ValidationException("month", "Invalid year or month")

        tracking_start_date = self.user_repo.get_or_create(self.db, user_id).tracking_start_date
        definitions = self.checkbox_repo.get_active_snapshots(self.db)
        logs = self.log_repo.get_records(self.db, user_id, start_date=tracking_start_date)

        result = PointsService.calculate_total_points(logs, definitions, tracking_start_date)

        month_logs = {}
        for log in self.log_repo.get_records(self.db, user_id, month_start, month_end):
            month_logs[DateService.format_local_date(log.log_date)] = CalendarDay(
                points=PointsService.calculate_daily_points(log.checkbox_states, definitions),
                is_completed=log.is_completed
            )

        logger.debug(f"Calendar {year}-{month:02d} for user={user_id}: {len(month_logs)} days")

        return CalendarMonthResponse(
            year=year,
            month=month,
            tracking_start_date=tracking_start_date,
            logs=month_logs,
            total_points=result.total_points
        )
