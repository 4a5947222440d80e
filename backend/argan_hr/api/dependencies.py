"""Route Dependencies — current admin from the signed session, role guards, request metadata.

Invariants:
    - get_current_admin re-reads the admin row on every request: deactivating an
      admin ends their access immediately even though the cookie is still valid
    - A session pointing at a missing or inactive admin is cleared and rejected (401)
    - require_role() checks the role stored in the DB, never the one in the cookie
"""

import logging
from uuid import UUID

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from argan_hr.core.domain_types import AdminRole
from argan_hr.core.errors import AuthenticationError, InsufficientPermissionsError
from argan_hr.core.list_view import PageRequest
from argan_hr.core.rbac import has_role
from argan_hr.infrastructure.database import get_db
from argan_hr.models.admin import Admin
from argan_hr.services.audit_log import RequestMeta

logger = logging.getLogger(__name__)

SESSION_ADMIN_KEY = "admin_id"


def client_ip(request: Request) -> str | None:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else None


def get_request_meta(request: Request) -> RequestMeta:
    return RequestMeta(
        ip_address=client_ip(request),
        user_agent=request.headers.get("user-agent"),
    )


async def get_current_admin(
    request: Request, db: AsyncSession = Depends(get_db),
) -> Admin:
    raw_id = request.session.get(SESSION_ADMIN_KEY)
    if not raw_id:
        raise AuthenticationError()
    try:
        admin_id = UUID(raw_id)
    except (TypeError, ValueError):
        request.session.clear()
        raise AuthenticationError("Invalid session")
    admin = await db.get(Admin, admin_id)
    if not admin or not admin.is_active:
        request.session.clear()
        raise AuthenticationError("Session is no longer valid")
    return admin


def require_role(role: AdminRole):
    """Dependency factory: the signed-in admin must hold `role` or higher."""

    async def guard(admin: Admin = Depends(get_current_admin)) -> Admin:
        if not has_role(admin.role, role):
            logger.warning(
                f"Role {admin.role} denied, {role.value} required",
                extra={"admin_id": admin.id},
            )
            raise InsufficientPermissionsError(f"access {role.value.lower()} features")
        return admin

    return guard


def page_params(page: int = 1, limit: int = 25) -> PageRequest:
    return PageRequest(page=page, limit=limit)
