"""Day document routes: reads, direct edits, attendance and responsibility"""

from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends

from api.dependencies import (
    get_attendance_service,
    get_day_service,
    get_responsibility_service,
    get_role,
)
from app.exceptions import NotFoundError, ServiceValidationError, UnauthorizedError
from domain.enums import UserRole
from domain.models import DayDocument
from domain.schemas import (
    AttendanceToggleRequest,
    DayDocumentPatch,
    OperationResult,
    ResponsibilityAssignRequest,
)
from services import AttendanceService, DayService, ResponsibilityService
from services.attendance_service import is_valid_user_key
from services.permissions import can_edit_meal

router = APIRouter(prefix="/days", tags=["Days"])
logger = logging.getLogger("dailymenu.api.days")


def _require_day(day: Optional[DayDocument], label: str) -> DayDocument:
    if day is None:
        raise NotFoundError(f"No meals found for {label}")
    return day


def _check_can_edit(role: Optional[UserRole], key: str, days: DayService) -> None:
    """Without a role header the caller is trusted (the auth layer sits in front)"""
    if role is None:
        return
    day = _require_day(days.get_by_date(key), key)
    if not can_edit_meal(role, day.date, days.repo.clock.today()):
        raise UnauthorizedError(f"Role '{role.value}' cannot edit meals for {day.date}")


@router.get("", response_model=List[DayDocument])
def list_days(days: DayService = Depends(get_day_service)):
    """All day documents, ordered by date"""
    return sorted(days.list_all(), key=lambda d: d.date)


@router.get("/today", response_model=DayDocument)
def get_today(days: DayService = Depends(get_day_service)):
    return _require_day(days.get_today(), "today")


@router.get("/tomorrow", response_model=DayDocument)
def get_tomorrow(days: DayService = Depends(get_day_service)):
    return _require_day(days.get_tomorrow(), "tomorrow")


@router.get("/{date}", response_model=DayDocument)
def get_day(date: str, days: DayService = Depends(get_day_service)):
    """
    Get the day document for a date.

    Accepts "YYYY-MM-DD", "DD" or "D". Documents still stored under an
    unpadded key are found as well.
    """
    return _require_day(days.get_by_date(date), date)


@router.patch("/{key}", response_model=OperationResult)
def update_day(
    key: str,
    patch: DayDocumentPatch,
    role: Optional[UserRole] = Depends(get_role),
    days: DayService = Depends(get_day_service),
):
    """Merge edited meal fields into a day; other fields are left alone"""
    _check_can_edit(role, key, days)
    return OperationResult(success=days.update(key, patch))


@router.put("/{key}/attendance", response_model=OperationResult)
def toggle_attendance(
    key: str,
    body: AttendanceToggleRequest,
    role: Optional[UserRole] = Depends(get_role),
    days: DayService = Depends(get_day_service),
    attendance: AttendanceService = Depends(get_attendance_service),
):
    if not is_valid_user_key(body.user_id):
        raise ServiceValidationError(
            f"Invalid user id: {body.user_id!r}",
            details={"field": "user_id"},
            code="INVALID_USER_ID",
        )
    _check_can_edit(role, key, days)
    ok = attendance.toggle(key, body.meal_slot, body.user_id, body.skipping)
    return OperationResult(success=ok)


@router.put("/{key}/responsibility", response_model=OperationResult)
def assign_responsibility(
    key: str,
    body: ResponsibilityAssignRequest,
    role: Optional[UserRole] = Depends(get_role),
    days: DayService = Depends(get_day_service),
    responsibility: ResponsibilityService = Depends(get_responsibility_service),
):
    """Assign (or clear, with a null user_id) the cook for a meal slot"""
    _check_can_edit(role, key, days)
    ok = responsibility.assign(key, body.slot, body.user_id)
    return OperationResult(success=ok)
