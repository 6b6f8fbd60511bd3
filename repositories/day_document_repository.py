"""
Day Document Repository - Data access layer for per-day meal documents
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from pydantic import ValidationError

from app.exceptions import MissingDocumentError
from core.utils.clock import Clock
from core.utils.day_keys import legacy_key, resolve_key
from domain.models import DayDocument
from repositories.base import BaseDocumentRepository, DocumentStore

logger = logging.getLogger("dailymenu.repository.days")

# attendance is keyed by user id; an invalid record drops that user only
_KEYED_FIELDS = {"attendance"}


def _invalid_paths(exc: ValidationError) -> List[Tuple[str, ...]]:
    paths = []
    for error in exc.errors():
        loc = tuple(str(part) for part in error["loc"])
        if not loc:
            continue
        depth = 2 if loc[0] in _KEYED_FIELDS and len(loc) > 1 else 1
        if loc[:depth] not in paths:
            paths.append(loc[:depth])
    return paths


def _without_paths(data: Dict[str, Any], paths: List[Tuple[str, ...]]) -> Dict[str, Any]:
    clean = dict(data)
    for path in paths:
        if len(path) == 1:
            clean.pop(path[0], None)
        elif isinstance(clean.get(path[0]), dict):
            nested = dict(clean[path[0]])
            nested.pop(path[1], None)
            clean[path[0]] = nested
        else:
            clean.pop(path[0], None)
    return clean


class DayDocumentRepository(BaseDocumentRepository[DayDocument]):
    """Repository for day document data access.

    Lookups accept any date form resolve_key understands. Documents written
    before keys were zero-padded ("6" instead of "06") are still found through
    the legacy key fallback.
    """

    def __init__(self, store: DocumentStore, clock: Clock):
        super().__init__(store)
        self.clock = clock

    def to_model(self, key: str, data: Dict[str, Any]) -> Optional[DayDocument]:
        """Stored record as a DayDocument.

        Fields that still fail validation are dropped (a whole meal, or one
        user's attendance record) and the rest of the document is kept, so a
        document that exists is never reported as missing.
        """
        try:
            return DayDocument.from_store(key, data, self.clock)
        except ValidationError as exc:
            paths = _invalid_paths(exc)

        logger.warning(
            "Day document %s: dropping invalid fields %s",
            key,
            sorted(".".join(p) for p in paths),
        )
        try:
            return DayDocument.from_store(key, _without_paths(data, paths), self.clock)
        except ValidationError as exc:
            logger.error("Unreadable day document %s: %s", key, exc)
            return None

    def candidate_keys(self, value: str) -> List[str]:
        """Canonical key first, then its unpadded legacy form if different"""
        key = resolve_key(value)
        keys = [key]
        legacy = legacy_key(key)
        if legacy is not None:
            keys.append(legacy)
        return keys

    def get_by_date(self, value: str) -> Optional[DayDocument]:
        """Get the day document for "YYYY-MM-DD", "DD" or "D".

        Raises:
            StoreError: if the store cannot be read
        """
        keys = self.candidate_keys(value)
        for key in keys:
            data = self.store.get(key)
            if data is not None:
                if key != keys[0]:
                    logger.info("Found day %s under legacy key %s", keys[0], key)
                return self.to_model(key, data)
        return None

    def update_fields(self, value: str, fields: Dict[str, Any]) -> str:
        """Set fields (dot paths allowed) on an existing day and stamp updated_at.

        Returns the key that was written.

        Raises:
            MissingDocumentError: if neither the canonical nor legacy key exists
            StoreError: if the write fails
        """
        payload = dict(fields)
        payload["updated_at"] = self.clock.now()
        keys = self.candidate_keys(value)
        for key in keys:
            try:
                self.store.update(key, payload)
                return key
            except MissingDocumentError:
                logger.debug("No day document under %s", key)
        raise MissingDocumentError(keys[0])

    def list_all(self) -> List[DayDocument]:
        """
        Raises:
            StoreError: if the scan fails
        """
        return self.get_all()

    def list_raw(self) -> List[Tuple[str, Dict[str, Any]]]:
        """Stored records as-is, for rewrites that must keep every field.

        Raises:
            StoreError: if the scan fails
        """
        return sorted(self.store.scan(), key=lambda item: item[0])

    def save(self, key: str, data: Dict[str, Any]) -> None:
        """Create or replace a whole day document under an exact key"""
        self.store.set(key, data)
