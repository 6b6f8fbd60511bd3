"""
Domain models package - day document models.
"""

from domain.models.day_document import (
    AttendanceRecord,
    DayDocument,
    MealItem,
    Nutrients,
    Responsibility,
)

__all__ = [
    "AttendanceRecord",
    "DayDocument",
    "MealItem",
    "Nutrients",
    "Responsibility",
]
