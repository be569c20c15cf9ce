"""
Daily log repository - Data access layer for DailyLog model.
"""
from datetime import date
from typing import List, Optional
from sqlalchemy.orm import Session

from backend.models import DailyLog
from backend.schemas import DailyLogRecord


class DailyLogRepository:
    """Repository for DailyLog data access"""

    @staticmethod
    def get_by_date(db: Session, user_id: int, log_date: date) -> Optional[DailyLog]:
        """Get a user's log for specific date"""
        return db.query(DailyLog).filter(
            DailyLog.user_id == user_id,
            DailyLog.log_date == log_date
        ).first()

    @staticmethod
    def get_range(
        db: Session,
        user_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None
    ) -> List[DailyLog]:
        """Get a user's logs between two dates (inclusive, either bound optional)"""
        query = db.query(DailyLog).filter(DailyLog.user_id == user_id)
        if start_date is not None:
            query = query.filter(DailyLog.log_date >= start_date)
        if end_date is not None:
            query = query.filter(DailyLog.log_date <= end_date)
        return query.order_by(DailyLog.log_date).all()

    @staticmethod
    def get_records(
        db: Session,
        user_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None
    ) -> List[DailyLogRecord]:
        """Get a user's logs as immutable snapshots for the points engine"""
        return [
            DailyLogRecord.model_validate(row)
            for row in DailyLogRepository.get_range(db, user_id, start_date, end_date)
        ]

    @staticmethod
    def upsert(
        db: Session,
        user_id: int,
        log_date: date,
        checkbox_states: dict,
        is_completed: bool
    ) -> DailyLog:
        """Insert or replace the log of (user, date)"""
        log = DailyLogRepository.get_by_date(db, user_id, log_date)
        if log is None:
            log = DailyLog(user_id=user_id, log_date=log_date)
            db.add(log)

        # Assign a fresh dict so the JSON column is flagged as changed
        log.checkbox_states = dict(checkbox_states)
        log.is_completed = is_completed

        db.commit()
        db.refresh(log)
        return log
