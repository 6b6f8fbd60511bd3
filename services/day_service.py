"""
Day Service - reads and direct edits of single day documents.

Every operation here converts store failures into a plain result (None,
False or an empty list) after logging them; callers never see StoreError.
"""

import logging
from datetime import timedelta
from typing import List, Optional

from app.exceptions import MissingDocumentError, StoreError
from core.utils.day_keys import day_of_week, pad_day, resolve_key
from domain.models import DayDocument
from domain.schemas import DayDocumentPatch
from repositories import DayDocumentRepository

logger = logging.getLogger("dailymenu.days")


class DayService:
    def __init__(self, repo: DayDocumentRepository):
        self.repo = repo

    def get_by_date(self, value: str) -> Optional[DayDocument]:
        """Day document for "YYYY-MM-DD", "DD" or "D"; None when there is none"""
        try:
            return self.repo.get_by_date(value)
        except StoreError:
            logger.exception("Error fetching day document for %s", value)
            return None

    def get_today(self) -> Optional[DayDocument]:
        return self.get_by_date(self.repo.clock.today().isoformat())

    def get_tomorrow(self) -> Optional[DayDocument]:
        tomorrow = self.repo.clock.today() + timedelta(days=1)
        return self.get_by_date(tomorrow.isoformat())

    def update(self, key: str, patch: DayDocumentPatch) -> bool:
        """Merge the patch into an existing day document in a single write.

        Setting ``date`` also rewrites ``day_of_week`` so the two never drift.
        The new date must fall on the day of month the key names; moving a
        day to another key is the rollover's job.
        """
        fields = patch.to_fields()
        if patch.date is not None:
            if pad_day(patch.date.day) != resolve_key(key):
                logger.warning(
                    "Rejected patch for day %s: date %s belongs under key %s",
                    key,
                    patch.date,
                    pad_day(patch.date.day),
                )
                return False
            fields["day_of_week"] = day_of_week(patch.date)
        if not fields:
            logger.info("Empty patch for day %s, nothing to write", key)
            return True
        try:
            written = self.repo.update_fields(key, fields)
        except MissingDocumentError:
            logger.warning("Cannot update day %s: no such document", key)
            return False
        except StoreError:
            logger.exception("Error updating day %s", key)
            return False
        logger.info("Updated day %s fields=%s", written, sorted(fields))
        return True

    def list_all(self) -> List[DayDocument]:
        try:
            return self.repo.list_all()
        except StoreError:
            logger.exception("Error fetching all day documents")
            return []
