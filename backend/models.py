from sqlalchemy import (
    Column, Integer, String, Boolean, DateTime, Date, JSON, ForeignKey, UniqueConstraint
)
from datetime import datetime
from backend.database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    tracking_start_date = Column(Date, nullable=True)  # Points only count from this date
    created_at = Column(DateTime, default=datetime.utcnow)


class CheckboxDefinition(Base):
    __tablename__ = "checkbox_definitions"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False, unique=True, index=True)  # Key inside checkbox_states
    label = Column(String, nullable=False)
    points = Column(Integer, nullable=False, default=1)
    type = Column(String, nullable=False, default="daily")  # daily, weekly
    weekly_threshold = Column(Integer, nullable=True)  # Required for weekly checkboxes
    display_order = Column(Integer, default=0)
    is_active = Column(Boolean, default=True)  # Soft delete flag

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class DailyLog(Base):
    __tablename__ = "daily_logs"
    __table_args__ = (
        UniqueConstraint("user_id", "log_date", name="uq_daily_logs_user_date"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    log_date = Column(Date, nullable=False, index=True)

    # JSON map of checkbox name -> bool
    checkbox_states = Column(JSON, nullable=False, default=dict)
    is_completed = Column(Boolean, default=False)  # Day finalized by the user

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
