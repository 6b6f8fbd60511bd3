#!/usr/bin/env python3
"""
Seed day documents from a JSON export.

The file holds either a list of day objects or an object keyed by document
id (the shape of a raw collection export). Every day needs a "date"; its key
and day_of_week are derived from it. All days are written in one batch.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from adapters import mongo_adapter
from app.config import settings
from app.exceptions import StoreError
from core.utils.clock import SystemClock
from core.utils.day_keys import day_of_week, parse_iso_date, resolve_key
from repositories import DayDocumentRepository

logging.basicConfig(level=logging.INFO, format=settings.log_format)
logger = logging.getLogger("dailymenu.scripts.seed")


def load_days(path: Path) -> List[Dict[str, Any]]:
    with path.open(encoding="utf-8") as fh:
        raw = json.load(fh)
    if isinstance(raw, dict):
        return [dict(v) for v in raw.values()]
    return [dict(v) for v in raw]


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Seed day documents from a JSON file")
    parser.add_argument("--file", required=True, type=Path, help="Path to the JSON export")
    parser.add_argument("--uri", default=settings.mongo_uri)
    parser.add_argument("--db", default=settings.mongo_db_name)
    parser.add_argument("--collection", default=settings.meals_collection)
    args = parser.parse_args(argv)

    days = load_days(args.file)
    logger.info("Loaded %d days from %s", len(days), args.file)

    try:
        mongo_adapter.connect(args.uri, args.db)
    except StoreError as exc:
        logger.error("%s", exc)
        return 2

    clock = SystemClock(settings.tzinfo())
    try:
        repo = DayDocumentRepository(mongo_adapter.get_store(args.collection), clock)
        batch = repo.batch()
        now = clock.now()
        for day in days:
            parsed = parse_iso_date(day.get("date"))
            if parsed is None:
                logger.warning("Skipping day without a valid date: %r", day.get("date"))
                continue
            day.pop("id", None)
            day.pop("_id", None)
            day["date"] = parsed.isoformat()
            day["day_of_week"] = day_of_week(parsed)
            day.setdefault("created_at", now)
            day["updated_at"] = now
            batch.set(resolve_key(day["date"]), day)
        batch.commit()
        logger.info("Seeded %d day documents", len(batch))
    except StoreError as exc:
        logger.error("Seeding failed: %s", exc)
        return 1
    finally:
        mongo_adapter.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
