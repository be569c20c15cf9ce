"""
User settings service.
"""
from sqlalchemy.orm import Session

from backend.repositories.user_repository import UserRepository
from backend.schemas import SettingsResponse, SettingsUpdate


class SettingsService:
    """Service for per-user settings"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = UserRepository()

    def get(self, user_id: int) -> SettingsResponse:
        user = self.repo.get_or_create(self.db, user_id)
        return SettingsResponse(user_id=user.id, tracking_start_date=user.tracking_start_date)

    def update(self, user_id: int, data: SettingsUpdate) -> SettingsResponse:
        """Set (or clear, with null) the tracking start date"""
        user = self.repo.get_or_create(self.db, user_id)
        user.tracking_start_date = data.tracking_start_date
        user = self.repo.update(self.db, user)
        return SettingsResponse(user_id=user.id, tracking_start_date=user.tracking_start_date)
