"""Audit Log Routes — paginated review of recorded actions (ADMIN and above)."""

from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from argan_hr.api.dependencies import page_params, require_role
from argan_hr.core.domain_types import AdminRole, AuditAction, AuditEntity
from argan_hr.core.list_view import PageRequest
from argan_hr.infrastructure.database import get_db
from argan_hr.models.admin import Admin
from argan_hr.schemas.audit_log import AuditLogListResponse
from argan_hr.services.audit_log import AuditLogService

router = APIRouter(prefix="/api/v1/audit-logs", tags=["audit logs"])


@router.get("", response_model=AuditLogListResponse)
async def list_audit_logs(
    page: PageRequest = Depends(page_params),
    action: AuditAction | None = None,
    entity_type: AuditEntity | None = None,
    admin_id: UUID | None = None,
    db: AsyncSession = Depends(get_db),
    _: Admin = Depends(require_role(AdminRole.ADMIN)),
):
    logs, pagination = await AuditLogService(db).list_logs(
        page,
        action=action.value if action else None,
        entity_type=entity_type.value if entity_type else None,
        admin_id=admin_id,
    )
    return {"logs": logs, "pagination": pagination}
