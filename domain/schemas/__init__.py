"""
Domain schemas package - Pydantic models for validation.
"""

from domain.schemas.day_schemas import (
    AttendanceToggleRequest,
    BulkAssignResult,
    BulkResponsibilityRequest,
    DayDocumentPatch,
    MigrationResult,
    OperationResult,
    ResponsibilityAssignRequest,
    ResponsibilityUpdates,
    TranslateRequest,
    TranslateResponse,
    UserMealEntry,
    UserMeals,
)

__all__ = [
    # Day documents
    "DayDocumentPatch",
    "OperationResult",
    # Ledgers
    "AttendanceToggleRequest",
    "ResponsibilityAssignRequest",
    "ResponsibilityUpdates",
    "BulkResponsibilityRequest",
    "BulkAssignResult",
    # Rollover
    "MigrationResult",
    # Aggregation
    "UserMealEntry",
    "UserMeals",
    # Translation
    "TranslateRequest",
    "TranslateResponse",
]
