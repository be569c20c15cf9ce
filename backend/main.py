from fastapi import FastAPI, Depends, HTTPException, Query, status
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.orm import Session
from typing import List, Optional
import logging
import os
from pathlib import Path
from datetime import date

from backend.database import engine, get_db, Base
from backend import models  # Import all models to register them with Base
from backend.schemas import (
    CheckboxDefinitionCreate, CheckboxDefinitionUpdate, CheckboxDefinition,
    DailyLogUpsert, DailyLogResponse,
    StatsResponse, CurrentWeekStatsResponse, CalendarMonthResponse,
    SettingsUpdate, SettingsResponse
)
from backend.exceptions import (
    CheckboxNotFoundException, DuplicateCheckboxException, ValidationException
)
from backend.services.checkbox_service import CheckboxService
from backend.services.log_service import LogService
from backend.services.settings_service import SettingsService
from backend.services.stats_service import StatsService
from backend.constants import (
    DEFAULT_LOG_DIRECTORY_PROD, DEFAULT_LOG_DIRECTORY_DEV, CORS_ALLOWED_ORIGINS, DEFAULT_USER_ID
)

LOG_DIR = os.getenv("HABIT_TRACKER_LOG_DIR", DEFAULT_LOG_DIRECTORY_PROD)
LOG_FILE = os.getenv("HABIT_TRACKER_LOG_FILE", "app.log")

# Create log directory if it doesn't exist (for development)
try:
    Path(LOG_DIR).mkdir(parents=True, exist_ok=True)
    log_path = Path(LOG_DIR) / LOG_FILE
except PermissionError:
    # Fallback to local directory if no permissions for /var/log
    LOG_DIR = DEFAULT_LOG_DIRECTORY_DEV
    Path(LOG_DIR).mkdir(parents=True, exist_ok=True)
    log_path = Path(LOG_DIR) / LOG_FILE

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.FileHandler(log_path),
        logging.StreamHandler()  # Also log to console
    ]
)

logger = logging.getLogger("habit_tracker")

# Create database tables
Base.metadata.create_all(bind=engine)

app = FastAPI(
    title="Habit Tracker API",
    description="Daily and weekly habit checkboxes with points and streaks",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Startup event
@app.on_event("startup")
async def startup_event():
    logger.info(f"Habit Tracker API started. Logging to: {log_path}")

# Health check
@app.get("/")
async def root():
    return {"message": "Habit Tracker API", "status": "active"}

# Checkbox definitions
@app.get("/api/checkboxes", response_model=List[CheckboxDefinition])
async def get_checkboxes(db: Session = Depends(get_db)):
    """Get active checkbox definitions in display order"""
    return CheckboxService(db).get_active()

@app.post("/api/checkboxes", response_model=CheckboxDefinition, status_code=status.HTTP_201_CREATED)
async def create_checkbox(checkbox: CheckboxDefinitionCreate, db: Session = Depends(get_db)):
    """Create a checkbox definition"""
    try:
        return CheckboxService(db).create(checkbox)
    except ValidationException as e:
        raise HTTPException(status_code=400, detail=str(e))
    except DuplicateCheckboxException as e:
        raise HTTPException(status_code=409, detail=str(e))

@app.put("/api/checkboxes/{checkbox_id}", response_model=CheckboxDefinition)
async def update_checkbox(
    checkbox_id: int,
    checkbox_update: CheckboxDefinitionUpdate,
    db: Session = Depends(get_db)
):
    """Update a checkbox definition"""
    try:
        return CheckboxService(db).update(checkbox_id, checkbox_update)
    except ValidationException as e:
        raise HTTPException(status_code=400, detail=str(e))
    except CheckboxNotFoundException as e:
        raise HTTPException(status_code=404, detail=str(e))

@app.delete("/api/checkboxes/{checkbox_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_checkbox(checkbox_id: int, db: Session = Depends(get_db)):
    """Deactivate a checkbox definition (logs keep their states)"""
    try:
        CheckboxService(db).delete(checkbox_id)
    except CheckboxNotFoundException as e:
        raise HTTPException(status_code=404, detail=str(e))

# Daily logs
@app.get("/api/logs", response_model=DailyLogResponse)
async def get_log(
    log_date: date = Query(..., alias="date"),
    user_id: int = Query(DEFAULT_USER_ID, ge=1),
    db: Session = Depends(get_db)
):
    """Get the log of a date (empty unfinished day if none)"""
    return LogService(db).get_log(user_id, log_date)

@app.post("/api/logs", response_model=DailyLogResponse)
async def save_log(
    log: DailyLogUpsert,
    user_id: int = Query(DEFAULT_USER_ID, ge=1),
    db: Session = Depends(get_db)
):
    """Create or replace the log of a date and return its points"""
    return LogService(db).save_log(user_id, log)

# Statistics
@app.get("/api/stats", response_model=StatsResponse)
async def get_stats(
    user_id: int = Query(DEFAULT_USER_ID, ge=1),
    today: Optional[date] = None,
    db: Session = Depends(get_db)
):
    """Get lifetime points, streaks and per-checkbox stats"""
    return StatsService(db).get_overall_stats(user_id, today or date.today())

@app.get("/api/stats/current-week", response_model=CurrentWeekStatsResponse)
async def get_current_week_stats(
    user_id: int = Query(DEFAULT_USER_ID, ge=1),
    today: Optional[date] = None,
    db: Session = Depends(get_db)
):
    """Get points and checkbox progress for the current Monday-Sunday week"""
    return StatsService(db).get_current_week_stats(user_id, today or date.today())

@app.get("/api/calendar", response_model=CalendarMonthResponse)
async def get_calendar_month(
    year: Optional[int] = None,
    month: Optional[int] = None,
    user_id: int = Query(DEFAULT_USER_ID, ge=1),
    db: Session = Depends(get_db)
):
    """Get per-day points of a month and the lifetime total"""
    try:
        return StatsService(db).get_calendar_month(user_id, year, month)
    except ValidationException as e:
        raise HTTPException(status_code=400, detail=str(e))

# Settings
@app.get("/api/settings", response_model=SettingsResponse)
async def get_settings(
    user_id: int = Query(DEFAULT_USER_ID, ge=1),
    db: Session = Depends(get_db)
):
    """Get user settings"""
    return SettingsService(db).get(user_id)

@app.post("/api/settings", response_model=SettingsResponse)
async def update_settings(
    settings_update: SettingsUpdate,
    user_id: int = Query(DEFAULT_USER_ID, ge=1),
    db: Session = Depends(get_db)
):
    """Update user settings"""
    return SettingsService(db).update(user_id, settings_update)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("backend.main:app", host="0.0.0.0", port=8000, reload=False)
