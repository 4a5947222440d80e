"""Audit Log Service — records security and data-changing actions, lists them for review.

Invariants:
    - record() only stages the row; the calling service commits it together with the
      change it describes (no audit entry for a rolled-back change)
    - changes payload is JSON-safe (dates, enums, UUIDs encoded)

Design Decisions:
    - RequestMeta carries ip/user agent from the HTTP layer so services stay framework-light
"""

import logging
from dataclasses import dataclass
from uuid import UUID

from fastapi.encoders import jsonable_encoder
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from argan_hr.core.domain_types import AuditAction, AuditEntity
from argan_hr.core.list_view import PageRequest, build_pagination
from argan_hr.models.audit_log import AuditLog

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RequestMeta:
    ip_address: str | None = None
    user_agent: str | None = None


class AuditLogService:
    def __init__(self, db: AsyncSession, meta: RequestMeta | None = None):
        self.db = db
        self.meta = meta or RequestMeta()

    def record(
        self,
        action: AuditAction,
        entity_type: AuditEntity,
        entity_id: object | None = None,
        admin_id: UUID | None = None,
        changes: dict | None = None,
    ) -> AuditLog:
        entry = AuditLog(
            admin_id=admin_id,
            entity_type=entity_type.value,
            entity_id=str(entity_id) if entity_id is not None else None,
            action=action.value,
            changes=jsonable_encoder(changes) if changes else None,
            ip_address=self.meta.ip_address,
            user_agent=(self.meta.user_agent or "")[:500] or None,
        )
        self.db.add(entry)
        logger.info(
            f"Audit {action.value} on {entity_type.value} {entity_id}",
            extra={"admin_id": admin_id, "ip_address": self.meta.ip_address},
        )
        return entry

    async def list_logs(
        self,
        page: PageRequest,
        action: str | None = None,
        entity_type: str | None = None,
        admin_id: UUID | None = None,
    ) -> tuple[list[AuditLog], dict]:
        query = select(AuditLog)
        if action:
            query = query.where(AuditLog.action == action)
        if entity_type:
            query = query.where(AuditLog.entity_type == entity_type)
        if admin_id:
            query = query.where(AuditLog.admin_id == admin_id)

        total = await self.db.scalar(
            select(func.count()).select_from(query.subquery()),
        )
        result = await self.db.execute(
            query.order_by(AuditLog.created_at.desc(), AuditLog.id.desc())
            .limit(page.limit).offset(page.offset),
        )
        return list(result.scalars().all()), build_pagination(page, total or 0)
