"""
Day document models.

One document per calendar day, holding the three meals plus the per-user
attendance map and the cooking responsibility assignment.

Stored documents come from several generations of the app, so these models
read leniently: a stored null means "use the default".
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from core.utils.clock import Clock
from core.utils.timestamps import normalize_timestamp
from domain.enums import MealSlot


class StoredModel(BaseModel):
    @model_validator(mode="before")
    @classmethod
    def null_means_default(cls, data):
        if isinstance(data, Mapping):
            return {k: v for k, v in data.items() if v is not None}
        return data


class Nutrients(StoredModel):
    protein_g: float = 0
    fiber_g: float = 0
    carbs_g: float = 0
    fat_g: float = 0


class MealItem(StoredModel):
    """A single meal (breakfast, lunch or dinner) on a day"""

    item_name: str = ""
    ingredients: List[str] = Field(default_factory=list)
    recipe_url: str = ""
    image_url: str = ""
    calories: float = 0
    prep_time_minutes: int = 0
    is_vegetarian: bool = False
    cooking_instructions: Optional[List[str]] = None
    nutrients: Optional[Nutrients] = None
    # language code -> translated item_name
    translations: Optional[Dict[str, str]] = None

    model_config = ConfigDict(extra="allow")


class AttendanceRecord(StoredModel):
    """True means eating; a missing record means eating all three meals"""

    breakfast: bool = True
    lunch: bool = True
    dinner: bool = True

    def is_eating(self, slot: MealSlot) -> bool:
        return getattr(self, slot.value)


class Responsibility(BaseModel):
    breakfastLunchId: Optional[str] = None
    dinnerId: Optional[str] = None

    @field_validator("breakfastLunchId", "dinnerId", mode="before")
    @classmethod
    def blank_is_unassigned(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v


class DayDocument(StoredModel):
    id: str
    date: str
    day_of_week: str = ""
    breakfast: Optional[MealItem] = None
    lunch: Optional[MealItem] = None
    dinner: Optional[MealItem] = None
    total_calories: float = 0
    attendance: Dict[str, AttendanceRecord] = Field(default_factory=dict)
    responsibility: Responsibility = Field(default_factory=Responsibility)
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(extra="allow")

    def meal(self, slot: MealSlot) -> Optional[MealItem]:
        return getattr(self, slot.value)

    @classmethod
    def from_store(
        cls, key: str, data: Mapping[str, Any], clock: Optional[Clock] = None
    ) -> "DayDocument":
        """Build a document from a raw stored record, normalising its timestamps"""
        payload = {k: v for k, v in data.items() if k != "_id"}
        payload["id"] = key
        payload["date"] = str(payload.get("date") or "")
        payload["attendance"] = payload.get("attendance") or {}
        payload["responsibility"] = payload.get("responsibility") or {}
        payload["created_at"] = normalize_timestamp(data.get("created_at"), clock)
        payload["updated_at"] = normalize_timestamp(data.get("updated_at"), clock)
        return cls.model_validate(payload)
