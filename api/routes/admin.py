"""Owner-only maintenance routes: bulk cooking duty and the month rollover"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends

from api.dependencies import get_responsibility_service, get_role, get_rollover_service
from app.exceptions import UnauthorizedError
from domain.enums import UserRole
from domain.schemas import BulkAssignResult, BulkResponsibilityRequest, MigrationResult
from services import ResponsibilityService, RolloverService
from services.permissions import can_manage_users

router = APIRouter(tags=["Admin"])
logger = logging.getLogger("dailymenu.api.admin")


def _require_owner(role: Optional[UserRole]) -> None:
    if role is not None and not can_manage_users(role):
        raise UnauthorizedError(f"Role '{role.value}' cannot manage the household")


@router.post("/responsibility/bulk", response_model=BulkAssignResult)
def bulk_assign_responsibility(
    body: BulkResponsibilityRequest,
    role: Optional[UserRole] = Depends(get_role),
    responsibility: ResponsibilityService = Depends(get_responsibility_service),
):
    """
    Assign the same cooks to many days at once.

    Fields left out of ``updates`` are not touched on any day. The whole batch
    is written atomically: either every day is updated or none is.
    """
    _require_owner(role)
    logger.info("Bulk responsibility for %d dates", len(body.dates))
    return responsibility.bulk_assign(body.dates, body.updates)


@router.post("/admin/migrate-current-month", response_model=MigrationResult)
def migrate_to_current_month(
    role: Optional[UserRole] = Depends(get_role),
    rollover: RolloverService = Depends(get_rollover_service),
):
    """
    Move every day document onto the current month and the "DD" key format.

    ``updated_count`` counts the documents in the attempted batch; when
    ``success`` is false nothing was persisted.
    """
    _require_owner(role)
    return rollover.migrate_to_current_month()
