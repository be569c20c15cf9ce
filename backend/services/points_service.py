"""
Points calculation service.
Handles daily checkbox points, weekly threshold bonuses and lifetime totals.

Pure computation over snapshots: nothing here touches the database, and
no function raises for empty or partially populated input.
"""
import logging
from datetime import date
from typing import Dict, Iterable, List, Optional

from backend.schemas import (
    AggregateResult, CheckboxDefinition, CheckboxType, DailyLogRecord
)
from backend.services.date_service import DateService

logger = logging.getLogger("habit_tracker.points")


class PointsService:
    """Service for points calculation"""

    @staticmethod
    def _active_of_type(
        definitions: Optional[Iterable[CheckboxDefinition]],
        checkbox_type: CheckboxType
    ) -> List[CheckboxDefinition]:
        return [
            definition for definition in (definitions or [])
            if definition.is_active and definition.type == checkbox_type
        ]

    @staticmethod
    def calculate_daily_points(
        checkbox_states: Optional[Dict[str, bool]],
        definitions: Optional[Iterable[CheckboxDefinition]]
    ) -> int:
        """
        Calculate points for a single day from daily checkboxes only.

        Args:
            checkbox_states: Checkbox name -> checked; missing keys count as unchecked
            definitions: Checkbox definitions (weekly and inactive ones are ignored)

        Returns:
            Sum of points of the checked daily checkboxes
        """
        states = checkbox_states or {}
        return sum(
            definition.points
            for definition in PointsService._active_of_type(definitions, CheckboxType.DAILY)
            if states.get(definition.name) is True
        )

    @staticmethod
    def _threshold_met(definition: CheckboxDefinition, checked_count: int) -> bool:
        # A missing or zero threshold can never be met
        return bool(definition.weekly_threshold) and checked_count >= definition.weekly_threshold

    @staticmethod
    def _count_checked(logs: Iterable[DailyLogRecord], name: str) -> int:
        return sum(1 for log in logs if log.checkbox_states.get(name) is True)

    @staticmethod
    def calculate_weekly_points(
        logs: Optional[Iterable[DailyLogRecord]],
        definitions: Optional[Iterable[CheckboxDefinition]],
        week_start: date,
        week_end: date
    ) -> Dict[str, int]:
        """
        Calculate weekly checkbox bonuses for one week.

        Logs are restricted to [week_start, week_end] inclusive. Completion
        status is NOT checked here; callers that only want finalized days
        must filter beforehand.

        The bonus is flat: exceeding the threshold does not scale it.

        Args:
            logs: Day records, any date range
            definitions: Checkbox definitions
            week_start: First day of the week (inclusive)
            week_end: Last day of the week (inclusive)

        Returns:
            Weekly checkbox name -> bonus points (0 when the threshold is not met)
        """
        week_start = DateService.to_local_date(week_start)
        week_end = DateService.to_local_date(week_end)
        week_logs = [
            log for log in (logs or [])
            if DateService.is_in_range(log.log_date, week_start, week_end)
        ]

        weekly_points = {}
        for definition in PointsService._active_of_type(definitions, CheckboxType.WEEKLY):
            checked_count = PointsService._count_checked(week_logs, definition.name)
            if PointsService._threshold_met(definition, checked_count):
                weekly_points[definition.name] = definition.points
            else:
                weekly_points[definition.name] = 0

        return weekly_points

    @staticmethod
    def filter_counted_logs(
        logs: Optional[Iterable[DailyLogRecord]],
        start_date: Optional[date] = None
    ) -> List[DailyLogRecord]:
        """Completed logs on or after start_date (inclusive)"""
        if start_date is not None:
            start_date = DateService.to_local_date(start_date)
        return [
            log for log in (logs or [])
            if log.is_completed and (start_date is None or log.log_date >= start_date)
        ]

    @staticmethod
    def group_logs_by_week(logs: Iterable[DailyLogRecord]) -> Dict[date, List[DailyLogRecord]]:
        """Bucket logs by the Monday of their week"""
        weeks: Dict[date, List[DailyLogRecord]] = {}
        for log in logs:
            week_start, _ = DateService.week_range(log.log_date)
            weeks.setdefault(week_start, []).append(log)
        return weeks

    @staticmethod
    def calculate_total_points(
        logs: Optional[Iterable[DailyLogRecord]],
        definitions: Optional[Iterable[CheckboxDefinition]],
        start_date: Optional[date] = None
    ) -> AggregateResult:
        """
        Calculate total points for a user over any span of logs.

        Only completed logs on or after start_date count, for daily points,
        weekly thresholds and the breakdown alike. Each distinct week is
        evaluated once, however many logs it contains.

        Args:
            logs: All day records of one user, any order
            definitions: Checkbox definitions
            start_date: Optional tracking start date (inclusive)

        Returns:
            AggregateResult with daily/weekly totals and weeks earned per weekly checkbox
        """
        definitions = list(definitions or [])
        counted_logs = PointsService.filter_counted_logs(logs, start_date)

        daily_points = sum(
            PointsService.calculate_daily_points(log.checkbox_states, definitions)
            for log in counted_logs
        )

        weekly_breakdown = {
            definition.name: 0
            for definition in PointsService._active_of_type(definitions, CheckboxType.WEEKLY)
        }
        weekly_points = 0

        weeks = PointsService.group_logs_by_week(counted_logs)
        for week_start in sorted(weeks):
            _, week_end = DateService.week_range(week_start)
            week_bonuses = PointsService.calculate_weekly_points(
                weeks[week_start], definitions, week_start, week_end
            )
            weekly_points += sum(week_bonuses.values())

            for definition in PointsService._active_of_type(definitions, CheckboxType.WEEKLY):
                checked_count = PointsService._count_checked(weeks[week_start], definition.name)
                if PointsService._threshold_met(definition, checked_count):
                    weekly_breakdown[definition.name] += 1

        logger.debug(
            f"Aggregated {len(counted_logs)} logs over {len(weeks)} weeks: "
            f"daily={daily_points}, weekly={weekly_points}"
        )

        return AggregateResult(
            total_points=daily_points + weekly_points,
            daily_points=daily_points,
            weekly_points=weekly_points,
            weekly_breakdown=weekly_breakdown
        )
