"""
Attendance Service - per-user meal opt-out on a day document.

A user with no attendance record eats every meal. The first toggle creates
the record with all three meals set to eating and flips only the requested
one. The whole per-user record is written back as ``attendance.<user_id>``
so other users' records are never rewritten.

Known limitation: the read and the write are separate calls. Two toggles by
the same user on the same day for different meals can interleave, and the
later write then carries the earlier read's value for the other meal.
"""

import logging

from app.exceptions import MissingDocumentError, StoreError
from domain.enums import MealSlot
from domain.models import AttendanceRecord
from repositories import DayDocumentRepository

logger = logging.getLogger("dailymenu.attendance")


def is_valid_user_key(user_id: str) -> bool:
    """User ids become a field path segment; dots and leading $ are not allowed"""
    return bool(user_id) and "." not in user_id and not user_id.startswith("$")


class AttendanceService:
    def __init__(self, repo: DayDocumentRepository):
        self.repo = repo

    def toggle(self, day_key: str, slot: MealSlot, user_id: str, skipping: bool) -> bool:
        """Mark ``user_id`` as skipping (or eating) one meal on a day.

        Args:
            day_key: "DD", "D" or "YYYY-MM-DD"
            slot: meal to change
            user_id: household member
            skipping: True to skip the meal, False to eat it

        Returns:
            True when the record was written, False otherwise
        """
        if not is_valid_user_key(user_id):
            logger.warning("Rejected attendance toggle for invalid user id %r", user_id)
            return False

        try:
            day = self.repo.get_by_date(day_key)
            if day is None:
                logger.warning("Cannot toggle attendance: day %s not found", day_key)
                return False

            record = day.attendance.get(user_id) or AttendanceRecord()
            record = record.model_copy(update={slot.value: not skipping})

            self.repo.update_fields(day.id, {f"attendance.{user_id}": record.model_dump()})
        except MissingDocumentError:
            logger.warning("Day %s disappeared before attendance write", day_key)
            return False
        except StoreError:
            logger.exception("Error toggling attendance for %s on day %s", user_id, day_key)
            return False

        logger.info(
            "User %s %s %s on day %s",
            user_id,
            "skips" if skipping else "eats",
            slot.value,
            day.id,
        )
        return True
