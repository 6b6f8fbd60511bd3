"""
Responsibility Service - cooking duty per day.

``breakfastLunchId`` names the cook for breakfast and lunch, ``dinnerId`` the
cook for dinner. None (or an empty string from a form) means unassigned.
"""

import logging
from typing import Dict, Iterable, Optional

from app.exceptions import MissingDocumentError, StoreError
from core.utils.day_keys import resolve_key
from domain.enums import ResponsibilitySlot
from domain.schemas import BulkAssignResult, ResponsibilityUpdates
from repositories import DayDocumentRepository

logger = logging.getLogger("dailymenu.responsibility")


class ResponsibilityService:
    def __init__(self, repo: DayDocumentRepository):
        self.repo = repo

    def assign(self, day_key: str, slot: ResponsibilitySlot, user_id: Optional[str]) -> bool:
        """Set or clear one responsibility field on one day"""
        field = f"responsibility.{slot.value}"
        try:
            written = self.repo.update_fields(day_key, {field: user_id or None})
        except MissingDocumentError:
            logger.warning("Cannot assign %s: day %s not found", slot.value, day_key)
            return False
        except StoreError:
            logger.exception("Error assigning %s on day %s", slot.value, day_key)
            return False
        logger.info("Day %s %s -> %s", written, slot.value, user_id or "unassigned")
        return True

    def bulk_assign(self, day_keys: Iterable[str], updates: ResponsibilityUpdates) -> BulkAssignResult:
        """Apply the same responsibility fields to many days in one atomic batch.

        Only the fields present in ``updates`` are written. ``updated_count`` is
        the number of documents in the attempted batch. When the commit fails
        nothing is persisted, but the attempted count is still reported with
        ``success=False`` and the error.
        """
        keys = []
        for value in day_keys:
            key = resolve_key(value)
            if key not in keys:
                keys.append(key)
        if not keys:
            return BulkAssignResult(success=True, updated_count=0)

        fields: Dict[str, Optional[str]] = {
            f"responsibility.{name}": user_id for name, user_id in updates.to_fields().items()
        }
        if not fields:
            logger.info("Bulk assignment with no fields for %d days, nothing to write", len(keys))
            return BulkAssignResult(success=True, updated_count=0)

        now = self.repo.clock.now()
        batch = self.repo.batch()
        for key in keys:
            batch.update(key, {**fields, "updated_at": now})

        try:
            batch.commit()
        except StoreError as exc:
            logger.exception("Bulk responsibility update for %d days failed", len(keys))
            return BulkAssignResult(success=False, updated_count=len(keys), error=str(exc))

        logger.info("Bulk responsibility update: %d days, fields=%s", len(keys), sorted(fields))
        return BulkAssignResult(success=True, updated_count=len(keys))
