from pydantic import BaseModel, Field
from datetime import datetime, date
from enum import Enum
from typing import Dict, Optional


class CheckboxType(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"


# Checkbox definition schemas
class CheckboxDefinitionBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100, pattern=r"^[a-z0-9_]+$")
    label: str = Field(..., min_length=1, max_length=500)
    points: int = Field(..., ge=0, le=1000)
    type: CheckboxType
    weekly_threshold: Optional[int] = Field(None, ge=1, le=7)  # Required for weekly
    display_order: int = Field(default=0, ge=0)


class CheckboxDefinitionCreate(CheckboxDefinitionBase):
    pass


class CheckboxDefinitionUpdate(BaseModel):
    # name is immutable: it keys historical checkbox_states
    label: Optional[str] = Field(None, min_length=1, max_length=500)
    points: Optional[int] = Field(None, ge=0, le=1000)
    type: Optional[CheckboxType] = None
    weekly_threshold: Optional[int] = Field(None, ge=1, le=7)
    display_order: Optional[int] = Field(None, ge=0)
    is_active: Optional[bool] = None


class CheckboxDefinition(CheckboxDefinitionBase):
    """Immutable snapshot of a checkbox rule, as consumed by the points engine"""
    id: int
    # Snapshots loaded from storage may carry legacy values outside the create limits
    name: str
    points: int = Field(..., ge=0)
    weekly_threshold: Optional[int] = None
    is_active: bool = True

    class Config:
        from_attributes = True
        frozen = True


# Daily log schemas
class DailyLogRecord(BaseModel):
    """Immutable snapshot of one user's day"""
    user_id: int
    log_date: date
    checkbox_states: Dict[str, bool] = Field(default_factory=dict)
    is_completed: bool = False

    class Config:
        from_attributes = True
        frozen = True


class DailyLogUpsert(BaseModel):
    log_date: date = Field(..., alias="date")  # Same key as the GET query parameter
    checkbox_states: Dict[str, bool] = Field(default_factory=dict)
    is_completed: bool = False

    class Config:
        populate_by_name = True


class CalculatedPoints(BaseModel):
    daily: int = 0
    weekly: int = 0
    total: int = 0


class DailyLogResponse(BaseModel):
    log_date: date
    checkbox_states: Dict[str, bool] = Field(default_factory=dict)
    is_completed: bool = False
    updated_at: Optional[datetime] = None
    calculated_points: Optional[CalculatedPoints] = None

    class Config:
        from_attributes = True


# Points engine output
class AggregateResult(BaseModel):
    total_points: int = 0
    daily_points: int = 0
    weekly_points: int = 0
    weekly_breakdown: Dict[str, int] = Field(default_factory=dict)  # name -> weeks earned


# Stats schemas
class CheckboxStats(BaseModel):
    # Daily checkboxes
    total: Optional[int] = None
    current_streak: Optional[int] = None
    # Weekly checkboxes
    weeks_earned: Optional[int] = None
    total_sessions: Optional[int] = None


class StatsResponse(BaseModel):
    total_points: int
    daily_points: int
    weekly_points: int
    tracking_start_date: Optional[date] = None
    days_logged: int = 0
    current_streak: int = 0
    checkbox_stats: Dict[str, CheckboxStats] = Field(default_factory=dict)


class WeekCheckboxStats(BaseModel):
    name: str
    label: str
    type: CheckboxType
    points: int
    weekly_threshold: Optional[int] = None
    completed_count: int = 0
    total_days: int = 7
    is_complete: bool = False


class CurrentWeekStatsResponse(BaseModel):
    week_start: date
    week_end: date
    total_points: int
    daily_points: int
    weekly_points: int
    weekly_points_breakdown: Dict[str, int] = Field(default_factory=dict)
    checkbox_stats: Dict[str, WeekCheckboxStats] = Field(default_factory=dict)
    days_logged: int = 0
    total_days: int = 7
    daily_logs: Dict[str, Optional[DailyLogResponse]] = Field(default_factory=dict)


class CalendarDay(BaseModel):
    points: int = 0  # Daily checkbox points, finalized or not
    is_completed: bool = False


class CalendarMonthResponse(BaseModel):
    year: int
    month: int
    tracking_start_date: Optional[date] = None
    logs: Dict[str, CalendarDay] = Field(default_factory=dict)  # YYYY-MM-DD -> day
    total_points: int = 0  # Lifetime total, not just this month


# Settings schemas
class SettingsUpdate(BaseModel):
    tracking_start_date: Optional[date] = None


class SettingsResponse(BaseModel):
    user_id: int
    tracking_start_date: Optional[date] = None
