"""
API dependencies for dependency injection
"""

from typing import Generator, Optional

import httpx
from fastapi import Depends, Header

from adapters import mongo_adapter
from app.config import settings
from core.utils.clock import Clock, SystemClock
from domain.enums import UserRole
from repositories import DayDocumentRepository, DocumentStore
from services import (
    AttendanceService,
    DayService,
    ResponsibilityService,
    RolloverService,
    TranslationCache,
    TranslationService,
    UserMealService,
)

# one cache for the life of the process, shared by all requests
_translation_cache = TranslationCache()


def get_clock() -> Clock:
    return SystemClock(settings.tzinfo())


def get_store() -> DocumentStore:
    """
    Document store dependency for FastAPI routes.

    Raises StoreError (rendered as 503) when MongoDB is not connected.
    """
    return mongo_adapter.get_store(settings.meals_collection)


def get_day_repository(
    store: DocumentStore = Depends(get_store), clock: Clock = Depends(get_clock)
) -> DayDocumentRepository:
    return DayDocumentRepository(store, clock)


def get_day_service(repo: DayDocumentRepository = Depends(get_day_repository)) -> DayService:
    return DayService(repo)


def get_attendance_service(
    repo: DayDocumentRepository = Depends(get_day_repository),
) -> AttendanceService:
    return AttendanceService(repo)


def get_responsibility_service(
    repo: DayDocumentRepository = Depends(get_day_repository),
) -> ResponsibilityService:
    return ResponsibilityService(repo)


def get_rollover_service(
    repo: DayDocumentRepository = Depends(get_day_repository),
) -> RolloverService:
    return RolloverService(repo)


def get_user_meal_service(days: DayService = Depends(get_day_service)) -> UserMealService:
    return UserMealService(days)


def get_translation_cache() -> TranslationCache:
    return _translation_cache


def get_translation_service(
    cache: TranslationCache = Depends(get_translation_cache),
) -> Generator[TranslationService, None, None]:
    with httpx.Client(timeout=settings.translate_timeout_sec) as client:
        yield TranslationService(
            settings.google_translate_api_key,
            settings.translate_url,
            cache,
            client=client,
        )


def get_role(x_user_role: Optional[UserRole] = Header(default=None)) -> Optional[UserRole]:
    """Household role of the caller, as forwarded by the auth layer"""
    return x_user_role
