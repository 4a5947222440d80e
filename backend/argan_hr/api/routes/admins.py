"""Admin Routes — staff account management.

Invariants:
    - Listing and viewing admins needs ADMIN; every mutation needs SUPER_ADMIN
    - /active (assignee dropdowns) is open to any signed-in admin
    - DELETE is a soft deactivate; POST /{id}/reactivate undoes it
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from argan_hr.api.dependencies import (
    get_current_admin, get_request_meta, page_params, require_role,
)
from argan_hr.core.domain_types import AdminRole
from argan_hr.core.list_view import PageRequest
from argan_hr.infrastructure.database import get_db
from argan_hr.models.admin import Admin
from argan_hr.schemas.admin import (
    AdminCreate, AdminListResponse, AdminOption, AdminResponse, AdminUpdate,
)
from argan_hr.services.admin_service import AdminService

router = APIRouter(prefix="/api/v1/admins", tags=["admins"])

_require_admin = require_role(AdminRole.ADMIN)
_require_super_admin = require_role(AdminRole.SUPER_ADMIN)


@router.get("", response_model=AdminListResponse)
async def list_admins(
    page: PageRequest = Depends(page_params),
    search: str | None = Query(None, max_length=200),
    role: AdminRole | None = None,
    is_active: bool | None = None,
    db: AsyncSession = Depends(get_db),
    _: Admin = Depends(_require_admin),
):
    admins, pagination = await AdminService(db).list_admins(page, search, role, is_active)
    return {"admins": admins, "pagination": pagination}


@router.get("/active", response_model=list[AdminOption])
async def list_active_admins(
    db: AsyncSession = Depends(get_db),
    _: Admin = Depends(get_current_admin),
):
    return await AdminService(db).list_active_admins()


@router.get("/{admin_id}", response_model=AdminResponse)
async def get_admin(
    admin_id: UUID,
    db: AsyncSession = Depends(get_db),
    _: Admin = Depends(_require_admin),
):
    return await AdminService(db).get_admin(admin_id)


@router.post("", response_model=AdminResponse, status_code=status.HTTP_201_CREATED)
async def create_admin(
    body: AdminCreate,
    request: Request,
    db: AsyncSession = Depends(get_db),
    actor: Admin = Depends(_require_super_admin),
):
    return await AdminService(db, actor, get_request_meta(request)).create_admin(body)


@router.patch("/{admin_id}", response_model=AdminResponse)
async def update_admin(
    admin_id: UUID,
    body: AdminUpdate,
    request: Request,
    db: AsyncSession = Depends(get_db),
    actor: Admin = Depends(_require_super_admin),
):
    return await AdminService(db, actor, get_request_meta(request)).update_admin(admin_id, body)


@router.delete("/{admin_id}", response_model=AdminResponse)
async def deactivate_admin(
    admin_id: UUID,
    request: Request,
    db: AsyncSession = Depends(get_db),
    actor: Admin = Depends(_require_super_admin),
):
    return await AdminService(db, actor, get_request_meta(request)).deactivate_admin(admin_id)


@router.post("/{admin_id}/reactivate", response_model=AdminResponse)
async def reactivate_admin(
    admin_id: UUID,
    request: Request,
    db: AsyncSession = Depends(get_db),
    actor: Admin = Depends(_require_super_admin),
):
    return await AdminService(db, actor, get_request_meta(request)).reactivate_admin(admin_id)
