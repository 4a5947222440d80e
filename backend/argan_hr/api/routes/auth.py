"""Auth Routes — login, logout and the signed-in admin.

Invariants:
    - Session cookie holds admin_id, role, email, name and issued_at only
    - The session is cleared before a new login is written (no fixation of old data)
    - Logout always clears the cookie, even when the session was already invalid
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from argan_hr.api.dependencies import (
    SESSION_ADMIN_KEY, get_current_admin, get_request_meta,
)
from argan_hr.core import clock
from argan_hr.core.rbac import get_user_permissions
from argan_hr.infrastructure.database import get_db
from argan_hr.models.admin import Admin
from argan_hr.schemas.admin import AdminResponse
from argan_hr.schemas.auth import CurrentAdminResponse, LoginRequest
from argan_hr.schemas.common import MessageResponse
from argan_hr.services.auth_service import AuthService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


def _current_admin_view(admin: Admin) -> CurrentAdminResponse:
    return CurrentAdminResponse(
        admin=AdminResponse.model_validate(admin),
        permissions=get_user_permissions(admin.role),
    )


@router.post("/login", response_model=CurrentAdminResponse)
async def login(
    body: LoginRequest, request: Request, db: AsyncSession = Depends(get_db),
):
    service = AuthService(db, get_request_meta(request))
    admin = await service.login(body.email, body.password)
    request.session.clear()
    request.session.update({
        SESSION_ADMIN_KEY: str(admin.id),
        "role": admin.role,
        "email": admin.email,
        "name": admin.name,
        "issued_at": clock.utc_now().isoformat(),
    })
    return _current_admin_view(admin)


@router.post("/logout", response_model=MessageResponse)
async def logout(request: Request, db: AsyncSession = Depends(get_db)):
    raw_id = request.session.get(SESSION_ADMIN_KEY)
    request.session.clear()
    try:
        admin_id = UUID(raw_id) if raw_id else None
    except ValueError:
        admin_id = None
    if admin_id and await db.get(Admin, admin_id):
        await AuthService(db, get_request_meta(request)).logout(admin_id)
    return MessageResponse(message="Signed out")


@router.get("/me", response_model=CurrentAdminResponse)
async def me(admin: Admin = Depends(get_current_admin)):
    return _current_admin_view(admin)
