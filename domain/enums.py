"""
Domain enums for DailyMenu.
Contains all enumeration types used across the domain models.
"""

import enum


class MealSlot(str, enum.Enum):
    """Meals stored on every day document"""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"


class ResponsibilitySlot(str, enum.Enum):
    """Cooking duty fields; breakfast and lunch share one cook"""

    BREAKFAST_LUNCH = "breakfastLunchId"
    DINNER = "dinnerId"

    @property
    def meal_slots(self) -> tuple:
        if self is ResponsibilitySlot.BREAKFAST_LUNCH:
            return (MealSlot.BREAKFAST, MealSlot.LUNCH)
        return (MealSlot.DINNER,)


class UserRole(str, enum.Enum):
    """Household roles"""

    OWNER = "user"
    MEMBER = "member"
    COOK = "cook"
