#!/usr/bin/env python3
"""
Move every day document onto the current month and the "DD" key format.

Same operation as POST /admin/migrate-current-month, for running from a shell
or a cron job at the start of a month.
"""

import argparse
import json
import logging
import sys
from datetime import datetime
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from adapters import mongo_adapter
from app.config import settings
from app.exceptions import StoreError
from core.utils.clock import FixedClock, SystemClock
from repositories import DayDocumentRepository
from services import RolloverService

logging.basicConfig(level=logging.INFO, format=settings.log_format)
logger = logging.getLogger("dailymenu.scripts.migrate")


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="Rewrite all day documents to the current month (idempotent)."
    )
    parser.add_argument("--uri", default=settings.mongo_uri)
    parser.add_argument("--db", default=settings.mongo_db_name)
    parser.add_argument("--collection", default=settings.meals_collection)
    parser.add_argument(
        "--as-of",
        type=datetime.fromisoformat,
        help="Pretend 'now' is this ISO datetime, e.g. 2026-03-01T00:00:00",
    )
    args = parser.parse_args(argv)

    tz = settings.tzinfo()
    if args.as_of:
        as_of = args.as_of if args.as_of.tzinfo else args.as_of.replace(tzinfo=tz)
        clock = FixedClock(as_of, tz)
    else:
        clock = SystemClock(tz)

    try:
        mongo_adapter.connect(args.uri, args.db)
    except StoreError as exc:
        logger.error("%s", exc)
        return 2

    try:
        repo = DayDocumentRepository(mongo_adapter.get_store(args.collection), clock)
        result = RolloverService(repo).migrate_to_current_month()
    finally:
        mongo_adapter.close()

    print(json.dumps(result.model_dump(), indent=2))
    return 0 if result.success else 1


if __name__ == "__main__":
    sys.exit(main())
