"""
Checkbox definition management service.
Validates and persists checkbox rules. Deletion is a soft delete so that
historical checkbox_states keep their meaning.
"""
import logging
from typing import List
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from backend.models import CheckboxDefinition
from backend.repositories.checkbox_repository import CheckboxRepository
from backend.schemas import CheckboxDefinitionCreate, CheckboxDefinitionUpdate, CheckboxType
from backend.exceptions import (
    CheckboxNotFoundException, DuplicateCheckboxException, ValidationException
)

logger = logging.getLogger("habit_tracker.checkboxes")


class CheckboxService:
    """Service for checkbox definition management"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = CheckboxRepository()

    def get_active(self) -> List[CheckboxDefinition]:
        """Get active definitions ordered by display_order"""
        return self.repo.get_active(self.db)

    def create(self, data: CheckboxDefinitionCreate) -> CheckboxDefinition:
        """
        Create a checkbox definition.

        Raises:
            ValidationException: If a weekly checkbox has no positive threshold
            DuplicateCheckboxException: If the name is already used
        """
        self._validate_threshold(data.type, data.weekly_threshold)

        if self.repo.get_by_name(self.db, data.name):
            raise DuplicateCheckboxException(data.name)

        definition = CheckboxDefinition(
            name=data.name,
            label=data.label,
            points=data.points,
            type=data.type.value,
            weekly_threshold=data.weekly_threshold if data.type == CheckboxType.WEEKLY else None,
            display_order=data.display_order,
            is_active=True
        )
        try:
            definition = self.repo.create(self.db, definition)
        except IntegrityError:
            self.db.rollback()
            raise DuplicateCheckboxException(data.name)

        logger.info(f"Created {definition.type} checkbox '{definition.name}' ({definition.points} pts)")
        return definition

    def update(self, checkbox_id: int, data: CheckboxDefinitionUpdate) -> CheckboxDefinition:
        """
        Partially update a checkbox definition.

        Changing points, type or threshold re-interprets every existing log.

        Raises:
            ValidationException: If no fields are given or the result is invalid
            CheckboxNotFoundException: If the definition does not exist
        """
        # Only weekly_threshold may be cleared with an explicit null
        updates = {
            field: value
            for field, value in data.model_dump(exclude_unset=True).items()
            if value is not None or field == "weekly_threshold"
        }
        if not updates:
            raise ValidationException("body", "No fields to update")

        definition = self.repo.get_by_id(self.db, checkbox_id)
        if not definition:
            raise CheckboxNotFoundException(checkbox_id)

        if "type" in updates:
            updates["type"] = CheckboxType(updates["type"]).value

        new_type = updates.get("type") or definition.type
        new_threshold = updates.get("weekly_threshold", definition.weekly_threshold)
        self._validate_threshold(CheckboxType(new_type), new_threshold)
        if new_type == CheckboxType.DAILY.value:
            # Daily checkboxes carry no threshold
            updates["weekly_threshold"] = None

        for field, value in updates.items():
            setattr(definition, field, value)

        definition = self.repo.update(self.db, definition)
        logger.info(f"Updated checkbox '{definition.name}': {sorted(updates)}")
        return definition

    def delete(self, checkbox_id: int) -> None:
        """
        Soft delete a checkbox definition.

        Raises:
            CheckboxNotFoundException: If the definition does not exist
        """
        definition = self.repo.get_by_id(self.db, checkbox_id)
        if not definition:
            raise CheckboxNotFoundException(checkbox_id)

        definition.is_active = False
        self.repo.update(self.db, definition)
        logger.info(f"Deactivated checkbox '{definition.name}'")

    @staticmethod
    def _validate_threshold(checkbox_type: CheckboxType, weekly_threshold) -> None:
        if checkbox_type == CheckboxType.WEEKLY and (not weekly_threshold or weekly_threshold <= 0):
            raise ValidationException(
                "weekly_threshold", "Weekly checkboxes must have a positive weekly_threshold"
            )
