"""
Date calculation and manipulation service.
Handles week boundaries (Monday-Sunday) and canonical date formatting.

All bucketing and filtering works on pure `date` values. Datetimes and
strings are converted once, at the storage/HTTP boundary, with
`to_local_date`.
"""
import calendar
from datetime import datetime, timedelta, date, time
from typing import Union

from backend.constants import DATE_FORMAT, DAYS_PER_WEEK

DateLike = Union[date, datetime, str]


class DateService:
    """Service for date-related operations"""

    @staticmethod
    def to_local_date(value: DateLike) -> date:
        """
        Convert a date-like value to a pure calendar date.

        Timezone-aware datetimes are shifted to local time first, so the
        result is the local calendar day rather than the UTC one. Strings
        must start with an ISO "YYYY-MM-DD" date; anything after it
        (e.g. a time component) is ignored.

        Args:
            value: date, datetime or ISO date string

        Returns:
            Calendar date without time component

        Raises:
            ValueError: If a string value is not an ISO date
        """
        if isinstance(value, datetime):
            if value.tzinfo is not None:
                value = value.astimezone()
            return value.date()
        if isinstance(value, date):
            return value
        return datetime.strptime(value.strip()[:10], DATE_FORMAT).date()

    @staticmethod
    def format_local_date(value: DateLike) -> str:
        """Format as YYYY-MM-DD in the local calendar"""
        return DateService.to_local_date(value).strftime(DATE_FORMAT)

    @staticmethod
    def week_range(value: DateLike) -> tuple[date, date]:
        """
        Get the Monday-Sunday week containing a date.

        Args:
            value: Any date within the week

        Returns:
            Tuple of (week_start, week_end), Monday and Sunday inclusive
        """
        target = DateService.to_local_date(value)
        # weekday(): Monday=0 .. Sunday=6, so Sunday goes back six days
        week_start = target - timedelta(days=target.weekday())
        week_end = week_start + timedelta(days=DAYS_PER_WEEK - 1)
        return week_start, week_end

    @staticmethod
    def week_datetime_range(value: DateLike) -> tuple[datetime, datetime]:
        """
        Get the week containing a date as datetimes.

        Returns:
            Tuple of (Monday 00:00:00, Sunday 23:59:59.999999)
        """
        week_start, week_end = DateService.week_range(value)
        return (
            datetime.combine(week_start, time.min),
            datetime.combine(week_end, time.max),
        )

    @staticmethod
    def week_days(value: DateLike) -> list[date]:
        """Get the seven dates of the week containing a date, Monday first"""
        week_start, _ = DateService.week_range(value)
        return [week_start + timedelta(days=offset) for offset in range(DAYS_PER_WEEK)]

    @staticmethod
    def month_range(year: int, month: int) -> tuple[date, date]:
        """
        Get the first and last day of a calendar month.

        Raises:
            ValueError: If month is not in 1..12 or year is out of range
        """
        _, last_day = calendar.monthrange(year, month)
        return date(year, month, 1), date(year, month, last_day)

    @staticmethod
    def is_in_range(value: date, start: date, end: date) -> bool:
        """Inclusive pure-date range check"""
        return start <= value <= end
