"""Case Routes — case lists (global and per client), create, update, delete.

Invariants:
    - Reads open to every signed-in admin; writes need ADMIN or higher
    - Default order: newest first
"""

from fastapi import APIRouter, Depends, Query, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from argan_hr.api.dependencies import (
    get_current_admin, get_request_meta, page_params, require_role,
)
from argan_hr.core.domain_types import ActionParty, AdminRole, CaseStatus
from argan_hr.core.list_view import PageRequest
from argan_hr.infrastructure.database import get_db
from argan_hr.models.admin import Admin
from argan_hr.schemas.case import CaseCreate, CaseListResponse, CaseResponse, CaseUpdate
from argan_hr.services.case_service import CaseService

router = APIRouter(prefix="/api/v1", tags=["cases"])

_require_admin = require_role(AdminRole.ADMIN)


class CaseFilters:
    def __init__(
        self,
        status: CaseStatus | None = None,
        assigned_to: str | None = Query(None, max_length=200),
        action_required_by: ActionParty | None = None,
        search: str | None = Query(None, max_length=200),
        sort_by: str | None = None,
        sort_dir: str = "desc",
    ):
        self.status = status
        self.assigned_to = assigned_to
        self.action_required_by = action_required_by
        self.search = search
        self.sort_by = sort_by
        self.sort_dir = sort_dir


async def _list(db: AsyncSession, page: PageRequest, filters: CaseFilters, client_id=None):
    cases, pagination = await CaseService(db).list_cases(
        page, client_id=client_id, status=filters.status,
        assigned_to=filters.assigned_to, action_required_by=filters.action_required_by,
        search=filters.search, sort_by=filters.sort_by, sort_dir=filters.sort_dir,
    )
    return {"cases": cases, "pagination": pagination}


@router.get("/cases", response_model=CaseListResponse)
async def list_all_cases(
    page: PageRequest = Depends(page_params),
    filters: CaseFilters = Depends(),
    db: AsyncSession = Depends(get_db),
    _: Admin = Depends(get_current_admin),
):
    return await _list(db, page, filters)


@router.get("/clients/{client_id}/cases", response_model=CaseListResponse)
async def list_client_cases(
    client_id: int,
    page: PageRequest = Depends(page_params),
    filters: CaseFilters = Depends(),
    db: AsyncSession = Depends(get_db),
    _: Admin = Depends(get_current_admin),
):
    return await _list(db, page, filters, client_id=client_id)


@router.post(
    "/clients/{client_id}/cases", response_model=CaseResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_case(
    client_id: int, body: CaseCreate, request: Request,
    db: AsyncSession = Depends(get_db), actor: Admin = Depends(_require_admin),
):
    return await CaseService(db, actor, get_request_meta(request)).create_case(client_id, body)


@router.get("/cases/{case_id}", response_model=CaseResponse)
async def get_case(
    case_id: int,
    db: AsyncSession = Depends(get_db),
    _: Admin = Depends(get_current_admin),
):
    return await CaseService(db).get_case(case_id)


@router.patch("/cases/{case_id}", response_model=CaseResponse)
async def update_case(
    case_id: int, body: CaseUpdate, request: Request,
    db: AsyncSession = Depends(get_db), actor: Admin = Depends(_require_admin),
):
    return await CaseService(db, actor, get_request_meta(request)).update_case(case_id, body)


@router.delete("/cases/{case_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_case(
    case_id: int, request: Request,
    db: AsyncSession = Depends(get_db), actor: Admin = Depends(_require_admin),
):
    await CaseService(db, actor, get_request_meta(request)).delete_case(case_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
