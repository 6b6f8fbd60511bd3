"""Household role rules for editing the schedule"""

from datetime import date
from typing import Union

from domain.enums import UserRole


def is_past_date(meal_date: Union[str, date], today: date) -> bool:
    value = meal_date.isoformat() if isinstance(meal_date, date) else meal_date
    return value < today.isoformat()


def can_edit_meal(role: UserRole, meal_date: Union[str, date], today: date) -> bool:
    """Cooks only view. Owners and members edit today and later, never the past."""
    if role == UserRole.COOK:
        return False
    return not is_past_date(meal_date, today)


def can_manage_users(role: UserRole) -> bool:
    """Only the owner manages the household and runs maintenance"""
    return role == UserRole.OWNER
