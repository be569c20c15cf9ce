"""
User repository - Data access layer for User model.
Handles per-user settings such as the tracking start date.
"""
from sqlalchemy.orm import Session
from backend.models import User


class UserRepository:
    """Repository for User data access"""

    @staticmethod
    def get_or_create(db: Session, user_id: int) -> User:
        """
        Get user (creates with defaults if not exists).

        Returns:
            User object
        """
        user = db.query(User).filter(User.id == user_id).first()
        if not user:
            user = User(id=user_id)
            db.add(user)
            db.commit()
            db.refresh(user)
        return user

    @staticmethod
    def update(db: Session, user: User) -> User:
        """
        Update user.

        Args:
            db: Database session
            user: User object with updated values

        Returns:
            Updated user
        """
        db.commit()
        db.refresh(user)
        return user
