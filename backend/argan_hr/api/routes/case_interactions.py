"""Case Interaction Routes — interaction log, active action and case files."""

from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from argan_hr.api.dependencies import get_current_admin, get_request_meta, require_role
from argan_hr.core.domain_types import AdminRole
from argan_hr.infrastructure.database import get_db
from argan_hr.models.admin import Admin
from argan_hr.schemas.case import (
    CaseFileCreate, CaseFileResponse, InteractionCreate, InteractionResponse,
)
from argan_hr.services.case_service import CaseService

router = APIRouter(prefix="/api/v1/cases/{case_id}", tags=["case interactions"])

_require_admin = require_role(AdminRole.ADMIN)


def _service(request: Request, db: AsyncSession, actor: Admin) -> CaseService:
    return CaseService(db, actor, get_request_meta(request))


@router.get("/interactions", response_model=list[InteractionResponse])
async def list_interactions(
    case_id: int,
    db: AsyncSession = Depends(get_db),
    _: Admin = Depends(get_current_admin),
):
    return await CaseService(db).list_interactions(case_id)


@router.post(
    "/interactions", response_model=InteractionResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_interaction(
    case_id: int, body: InteractionCreate, request: Request,
    db: AsyncSession = Depends(get_db), actor: Admin = Depends(_require_admin),
):
    return await _service(request, db, actor).create_interaction(case_id, body)


@router.delete("/interactions/{interaction_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_interaction(
    case_id: int, interaction_id: int, request: Request,
    db: AsyncSession = Depends(get_db), actor: Admin = Depends(_require_admin),
):
    await _service(request, db, actor).delete_interaction(case_id, interaction_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/interactions/{interaction_id}/active-action", response_model=InteractionResponse)
async def set_active_action(
    case_id: int, interaction_id: int, request: Request,
    db: AsyncSession = Depends(get_db), actor: Admin = Depends(_require_admin),
):
    return await _service(request, db, actor).set_active_action(case_id, interaction_id)


@router.delete("/interactions/{interaction_id}/active-action", response_model=InteractionResponse)
async def unset_active_action(
    case_id: int, interaction_id: int, request: Request,
    db: AsyncSession = Depends(get_db), actor: Admin = Depends(_require_admin),
):
    return await _service(request, db, actor).unset_active_action(case_id, interaction_id)


@router.get("/files", response_model=list[CaseFileResponse])
async def list_files(
    case_id: int,
    interaction_id: int | None = None,
    db: AsyncSession = Depends(get_db),
    _: Admin = Depends(get_current_admin),
):
    return await CaseService(db).list_files(case_id, interaction_id)


@router.post("/files", response_model=CaseFileResponse, status_code=status.HTTP_201_CREATED)
async def add_file(
    case_id: int, body: CaseFileCreate, request: Request,
    db: AsyncSession = Depends(get_db), actor: Admin = Depends(_require_admin),
):
    return await _service(request, db, actor).add_file(case_id, body)
