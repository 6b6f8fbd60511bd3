"""
User Meal Service - the meals a user cooks and the meals a user eats.

Used by the "my plates" view. One scan of all day documents produces both
lists, sorted by date.
"""

import logging
from typing import List

from domain.enums import MealSlot, ResponsibilitySlot
from domain.models import DayDocument
from domain.schemas import UserMealEntry, UserMeals
from services.day_service import DayService

logger = logging.getLogger("dailymenu.user_meals")


class UserMealService:
    def __init__(self, days: DayService):
        self.days = days

    def for_user(self, user_id: str) -> UserMeals:
        """
        assigned: meals the user cooks, today and later only.
        attending: meals the user eats. No attendance record for a day means
        every meal that day; inside a record a missing meal also means eating.
        """
        documents = self.days.list_all()
        assigned: List[UserMealEntry] = []
        attending: List[UserMealEntry] = []

        for doc in documents:
            for slot in ResponsibilitySlot:
                if getattr(doc.responsibility, slot.value) != user_id:
                    continue
                assigned.extend(self._entries(doc, slot.meal_slots))

            record = doc.attendance.get(user_id)
            eating = [s for s in MealSlot if record is None or record.is_eating(s)]
            attending.extend(self._entries(doc, eating))

        assigned.sort(key=lambda e: e.date)
        attending.sort(key=lambda e: e.date)

        today = self.days.repo.clock.today().isoformat()
        upcoming = [e for e in assigned if e.date >= today]

        logger.info(
            "User %s: %d upcoming cooking duties, %d meals attending",
            user_id,
            len(upcoming),
            len(attending),
        )
        return UserMeals(assigned=upcoming, attending=attending)

    @staticmethod
    def _entries(doc: DayDocument, slots) -> List[UserMealEntry]:
        entries = []
        for slot in slots:
            meal = doc.meal(slot)
            if meal is not None:
                entries.append(UserMealEntry(date=doc.date, meal_slot=slot, meal=meal))
        return entries
