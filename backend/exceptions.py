"""
Custom exceptions for the habit tracker application.
Provides specific exception types for better error handling and recovery.
The points engine never raises these; they belong to the storage and
definition-management layers.
"""


class HabitTrackerException(Exception):
    """Base exception for habit tracker application"""
    pass


class CheckboxNotFoundException(HabitTrackerException):
    """Raised when a checkbox definition is not found"""
    def __init__(self, checkbox_id: int):
        self.checkbox_id = checkbox_id
        super().__init__(f"Checkbox with ID {checkbox_id} not found")


class DuplicateCheckboxException(HabitTrackerException):
    """Raised when a checkbox name is already taken"""
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"A checkbox with name '{name}' already exists")


class ValidationException(HabitTrackerException):
    """Raised when data validation fails"""
    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(f"Validation error for {field}: {message}")
