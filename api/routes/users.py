"""Per-user meal views"""

import logging

from fastapi import APIRouter, Depends, Path

from api.dependencies import get_user_meal_service
from domain.schemas import UserMeals
from services import UserMealService

router = APIRouter(prefix="/users", tags=["Users"])
logger = logging.getLogger("dailymenu.api.users")


@router.get("/{user_id}/meals", response_model=UserMeals)
def meals_for_user(
    user_id: str = Path(..., min_length=1),
    meals: UserMealService = Depends(get_user_meal_service),
):
    """
    Meals the user cooks (today onwards) and meals the user eats.

    A day without an attendance record for the user counts as eating all
    three meals.
    """
    return meals.for_user(user_id)
