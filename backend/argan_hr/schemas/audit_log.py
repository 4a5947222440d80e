"""Audit Log Schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from argan_hr.schemas.common import Pagination


class AuditLogResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    admin_id: UUID | None = None
    entity_type: str
    entity_id: str | None = None
    action: str
    changes: dict | None = None
    ip_address: str | None = None
    user_agent: str | None = None
    created_at: datetime


class AuditLogListResponse(BaseModel):
    logs: list[AuditLogResponse]
    pagination: Pagination
