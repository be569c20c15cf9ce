"""
Daily log service.
Reads and upserts a user's day and reports the points that day and its week are worth.
"""
import logging
from datetime import date
from sqlalchemy.orm import Session

from backend.repositories.checkbox_repository import CheckboxRepository
from backend.repositories.log_repository import DailyLogRepository
from backend.repositories.user_repository import UserRepository
from backend.schemas import CalculatedPoints, DailyLogResponse, DailyLogUpsert
from backend.services.date_service import DateService
from backend.services.points_service import PointsService

logger = logging.getLogger("habit_tracker.logs")


class LogService:
    """Service for daily log management"""

    def __init__(self, db: Session):
        self.db = db
        self.log_repo = DailyLogRepository()
        self.checkbox_repo = CheckboxRepository()
        self.user_repo = UserRepository()

    def get_log(self, user_id: int, log_date: date) -> DailyLogResponse:
        """Get a user's log, or an empty unfinished day if none was written"""
        log = self.log_repo.get_by_date(self.db, user_id, log_date)
        if log is None:
            return DailyLogResponse(log_date=log_date, checkbox_states={}, is_completed=False)
        return DailyLogResponse.model_validate(log)

    def save_log(self, user_id: int, data: DailyLogUpsert) -> DailyLogResponse:
        """
        Upsert a user's log and calculate its points.

        The daily figure is the value of this day's checkboxes; the weekly
        figure is the bonus of the week containing it, counted over that
        week's stored logs as the weekly calculator sees them.

        Args:
            user_id: Owner of the log
            data: Date, checkbox states and completion flag

        Returns:
            The stored log with calculated_points
        """
        self.user_repo.get_or_create(self.db, user_id)
        log = self.log_repo.upsert(
            self.db, user_id, data.log_date, data.checkbox_states, data.is_completed
        )

        definitions = self.checkbox_repo.get_active_snapshots(self.db)
        week_start, week_end = DateService.week_range(data.log_date)
        week_logs = self.log_repo.get_records(self.db, user_id, week_start, week_end)

        daily = PointsService.calculate_daily_points(data.checkbox_states, definitions)
        weekly = sum(
            PointsService.calculate_weekly_points(
                week_logs, definitions, week_start, week_end
            ).values()
        )

        logger.info(
            f"Saved log user={user_id} date={DateService.format_local_date(data.log_date)} "
            f"completed={data.is_completed} daily={daily} weekly={weekly}"
        )

        response = DailyLogResponse.model_validate(log)
        response.calculated_points = CalculatedPoints(
            daily=daily, weekly=weekly, total=daily + weekly
        )
        return response
