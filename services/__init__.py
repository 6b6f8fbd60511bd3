"""Services package - Business logic layer"""

from services.day_service import DayService
from services.attendance_service import AttendanceService
from services.responsibility_service import ResponsibilityService
from services.rollover_service import RolloverService
from services.user_meal_service import UserMealService
from services.translation_service import TranslationCache, TranslationService

# Note: permissions contains role rule functions, not a class

__all__ = [
    "DayService",
    "AttendanceService",
    "ResponsibilityService",
    "RolloverService",
    "UserMealService",
    "TranslationCache",
    "TranslationService",
]
