"""
Checkbox repository - Data access layer for checkbox definitions.
"""
from typing import List, Optional
from sqlalchemy.orm import Session

from backend.models import CheckboxDefinition
from backend.schemas import CheckboxDefinition as CheckboxDefinitionSnapshot


class CheckboxRepository:
    """Repository for CheckboxDefinition data access"""

    @staticmethod
    def get_active(db: Session) -> List[CheckboxDefinition]:
        """Get active definitions ordered for display"""
        return db.query(CheckboxDefinition).filter(
            CheckboxDefinition.is_active == True
        ).order_by(CheckboxDefinition.display_order, CheckboxDefinition.id).all()

    @staticmethod
    def get_active_snapshots(db: Session) -> List[CheckboxDefinitionSnapshot]:
        """Get active definitions as immutable snapshots for the points engine"""
        return [
            CheckboxDefinitionSnapshot.model_validate(row)
            for row in CheckboxRepository.get_active(db)
        ]

    @staticmethod
    def get_by_id(db: Session, checkbox_id: int) -> Optional[CheckboxDefinition]:
        """Get definition by ID (active or not)"""
        return db.query(CheckboxDefinition).filter(
            CheckboxDefinition.id == checkbox_id
        ).first()

    @staticmethod
    def get_by_name(db: Session, name: str) -> Optional[CheckboxDefinition]:
        """Get definition by name (active or not)"""
        return db.query(CheckboxDefinition).filter(
            CheckboxDefinition.name == name
        ).first()

    @staticmethod
    def create(db: Session, definition: CheckboxDefinition) -> CheckboxDefinition:
        """Create new definition"""
        db.add(definition)
        db.commit()
        db.refresh(definition)
        return definition

    @staticmethod
    def update(db: Session, definition: CheckboxDefinition) -> CheckboxDefinition:
        """Update existing definition"""
        db.commit()
        db.refresh(definition)
        return definition
