"""Request and response schemas for day documents and the ledgers"""

from __future__ import annotations

import datetime as dt
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from domain.enums import MealSlot, ResponsibilitySlot
from domain.models.day_document import MealItem


class DayDocumentPatch(BaseModel):
    """Fields of a day document that may be edited directly.

    Attendance and responsibility are excluded; they are only written through
    their own operations so a patch can never overwrite another user's entry.
    day_of_week is derived from date and is not patchable on its own.
    """

    date: Optional[dt.date] = None
    breakfast: Optional[MealItem] = None
    lunch: Optional[MealItem] = None
    dinner: Optional[MealItem] = None
    total_calories: Optional[float] = Field(default=None, ge=0)

    model_config = ConfigDict(extra="forbid")

    def to_fields(self) -> Dict[str, Any]:
        """Only the explicitly set fields, in stored (JSON) form"""
        fields = self.model_dump(mode="json", exclude_unset=True)
        return {k: v for k, v in fields.items() if v is not None}


class AttendanceToggleRequest(BaseModel):
    meal_slot: MealSlot
    user_id: str = Field(..., min_length=1)
    skipping: bool


class ResponsibilityAssignRequest(BaseModel):
    slot: ResponsibilitySlot
    user_id: Optional[str] = None


class ResponsibilityUpdates(BaseModel):
    """Omitted fields are left untouched; null or "" clears the assignment"""

    breakfastLunchId: Optional[str] = None
    dinnerId: Optional[str] = None

    model_config = ConfigDict(extra="forbid")

    def to_fields(self) -> Dict[str, Optional[str]]:
        fields = self.model_dump(exclude_unset=True)
        return {k: (v or None) for k, v in fields.items()}


class BulkResponsibilityRequest(BaseModel):
    dates: List[str] = Field(default_factory=list, description="'DD', 'D' or 'YYYY-MM-DD'")
    updates: ResponsibilityUpdates

    @field_validator("dates")
    @classmethod
    def strip_blank(cls, v: List[str]) -> List[str]:
        return [d.strip() for d in v if d and d.strip()]


class OperationResult(BaseModel):
    success: bool


class BulkAssignResult(BaseModel):
    """updated_count is the number of documents in the attempted batch"""

    success: bool
    updated_count: int = 0
    error: Optional[str] = None


class MigrationResult(BaseModel):
    success: bool
    updated_count: int = 0
    error: Optional[str] = None
    collisions: List[str] = Field(default_factory=list)
    skipped: List[str] = Field(default_factory=list)


class UserMealEntry(BaseModel):
    date: str
    meal_slot: MealSlot
    meal: MealItem


class UserMeals(BaseModel):
    assigned: List[UserMealEntry] = Field(default_factory=list)
    attending: List[UserMealEntry] = Field(default_factory=list)


class TranslateRequest(BaseModel):
    texts: List[str] = Field(..., min_length=1)
    target_lang: str = Field(..., alias="targetLang", min_length=1)
    source_lang: str = Field(default="en", alias="sourceLang")

    model_config = ConfigDict(populate_by_name=True)


class TranslateResponse(BaseModel):
    translations: List[str]
