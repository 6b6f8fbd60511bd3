"""
Rollover Service - moves every day document onto the current month.

Each document keeps its day of month and gets the current year and month.
Its key becomes the zero-padded day ("07"), which also migrates documents
still keyed by full ISO date ("2025-01-07") or by the unpadded day ("7").

A document whose key is already right is updated in place. Otherwise the old
key is deleted and the new key written, both in the same batch. Readers can
briefly see the day as missing between those two writes, because the batch
deletes and recreates the document rather than renaming it.

A day that does not exist in the target month (the 31st in a 30-day month)
is clamped to the month's last day. When two documents land on the same key,
the last one in iteration order wins. Clamped documents go first, so a
document that really is the 30th overwrites one clamped from the 31st.
Every collision is logged and reported in the result.
"""

from __future__ import annotations

import calendar
import logging
from collections import defaultdict
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Dict, List, Mapping, Optional

from app.exceptions import StoreError
from core.utils.day_keys import day_of_week, pad_day, parse_iso_date, resolve_key
from core.utils.timestamps import normalize_timestamp
from domain.schemas import MigrationResult
from repositories import DayDocumentRepository

logger = logging.getLogger("dailymenu.rollover")

_NOT_COPIED = {"_id", "id", "created_at", "updated_at"}


@dataclass
class _Move:
    source: str
    target: str
    data: Dict[str, Any]
    clamped: bool


def target_date(year: int, month: int, day: int) -> date:
    """Same day of month in year/month (1-based), clamped to the month's length"""
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day, last_day))


def source_day(key: str, data: Mapping[str, Any]) -> Optional[int]:
    """Day of month of a stored document: from its date, else from its key"""
    stored = parse_iso_date(data.get("date"))
    if stored is not None:
        return stored.day
    resolved = resolve_key(key)
    if resolved.isdigit() and 1 <= int(resolved) <= 31:
        return int(resolved)
    return None


class RolloverService:
    def __init__(self, repo: DayDocumentRepository):
        self.repo = repo

    def migrate_to_current_month(self) -> MigrationResult:
        """Rewrite all day documents to the current month in one atomic batch.

        ``updated_count`` is the number of documents in the attempted batch. If
        the commit fails nothing is persisted; the attempted count is still
        reported, alongside ``success=False`` and the error.
        """
        try:
            records = self.repo.list_raw()
        except StoreError as exc:
            logger.exception("Could not read day documents for migration")
            return MigrationResult(success=False, error=str(exc))

        logger.info("Starting month rollover: %d documents", len(records))
        if not records:
            return MigrationResult(success=False, error="No meals found in database")

        now = self.repo.clock.now()
        today = self.repo.clock.today()

        moves: List[_Move] = []
        skipped: List[str] = []
        for key, data in records:
            day = source_day(key, data)
            if day is None:
                logger.warning("Skipping %s: no usable date (%r)", key, data.get("date"))
                skipped.append(key)
                continue
            new_date = target_date(today.year, today.month, day)
            moves.append(
                _Move(
                    source=key,
                    target=pad_day(new_date.day),
                    data=self._rewrite(data, new_date, now),
                    clamped=new_date.day != day,
                )
            )
            logger.debug("Migrating %s -> %s (%s)", key, pad_day(new_date.day), new_date)

        # stable sort: clamped first so an exact day is written last and wins
        moves.sort(key=lambda m: 0 if m.clamped else 1)

        by_target: Dict[str, List[_Move]] = defaultdict(list)
        for move in moves:
            by_target[move.target].append(move)

        collisions = sorted(t for t, group in by_target.items() if len(group) > 1)
        for target in collisions:
            group = by_target[target]
            logger.warning(
                "Key %s is the target of %s; keeping %s",
                target,
                [m.source for m in group],
                group[-1].source,
            )

        batch = self.repo.batch()
        for move in moves:
            if move.source != move.target and move.source not in by_target:
                batch.delete(move.source)
        for target, group in by_target.items():
            winner = group[-1]
            if len(group) == 1 and winner.source == target:
                batch.update(target, winner.data)
            else:
                batch.set(target, winner.data)

        try:
            batch.commit()
        except StoreError as exc:
            logger.exception("Month rollover commit failed")
            return MigrationResult(
                success=False,
                updated_count=len(moves),
                error=str(exc),
                collisions=collisions,
                skipped=skipped,
            )

        logger.info(
            "Month rollover done: %d documents, %d collisions, %d skipped",
            len(moves),
            len(collisions),
            len(skipped),
        )
        return MigrationResult(
            success=True,
            updated_count=len(moves),
            collisions=collisions,
            skipped=skipped,
        )

    def _rewrite(self, data: Mapping[str, Any], new_date: date, now: datetime) -> Dict[str, Any]:
        clean = {k: v for k, v in data.items() if k not in _NOT_COPIED}
        clean["date"] = new_date.isoformat()
        clean["day_of_week"] = day_of_week(new_date)
        clean["updated_at"] = now
        original = data.get("created_at")
        clean["created_at"] = normalize_timestamp(original, self.repo.clock) if original else now
        return clean
