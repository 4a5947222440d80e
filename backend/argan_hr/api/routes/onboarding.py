"""Onboarding Routes — per-client checklist and flag toggles."""

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from argan_hr.api.dependencies import get_current_admin, get_request_meta, require_role
from argan_hr.core.domain_types import AdminRole
from argan_hr.infrastructure.database import get_db
from argan_hr.models.admin import Admin
from argan_hr.schemas.onboarding import OnboardingChecklist, OnboardingUpdate
from argan_hr.services.onboarding_service import OnboardingService

router = APIRouter(prefix="/api/v1/clients/{client_id}/onboarding", tags=["onboarding"])


@router.get("", response_model=OnboardingChecklist)
async def get_onboarding(
    client_id: int,
    db: AsyncSession = Depends(get_db),
    _: Admin = Depends(get_current_admin),
):
    return await OnboardingService(db).get_checklist(client_id)


@router.patch("", response_model=OnboardingChecklist)
async def update_onboarding(
    client_id: int,
    body: OnboardingUpdate,
    request: Request,
    db: AsyncSession = Depends(get_db),
    actor: Admin = Depends(require_role(AdminRole.ADMIN)),
):
    service = OnboardingService(db, actor, get_request_meta(request))
    return await service.update_flag(client_id, body.scope, body.field, body.value)
