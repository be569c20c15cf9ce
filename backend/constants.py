"""
Application constants and environment-driven configuration.
"""
import os

# Date handling
DATE_FORMAT = "%Y-%m-%d"
WEEKDAY_NAMES = [
    "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"
]
DAYS_PER_WEEK = 7

# Streaks
# Upper bound for the backward scan; unreachable with realistic usage
STREAK_MAX_LOOKBACK_DAYS = int(os.getenv("HABIT_TRACKER_STREAK_LOOKBACK_DAYS", "1000"))

# Database
DATABASE_URL = os.getenv("HABIT_TRACKER_DATABASE_URL", "sqlite:///./habits.db")

# Logging
DEFAULT_LOG_DIRECTORY_PROD = "/var/log/habit-tracker"
DEFAULT_LOG_DIRECTORY_DEV = "./logs"

# CORS
CORS_ALLOWED_ORIGINS = [
    origin.strip()
    for origin in os.getenv(
        "HABIT_TRACKER_CORS_ORIGINS",
        "http://localhost:3000,http://localhost:5173"
    ).split(",")
    if origin.strip()
]

# Users
# Single-user installs log everything under this id
DEFAULT_USER_ID = 1
