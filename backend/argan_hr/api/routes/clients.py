"""Client Routes — list/search, create, detail, update and status toggle.

Invariants:
    - Reads open to every signed-in admin; writes need ADMIN or higher
    - Every mutation returns the authoritative record so list UIs can reconcile
      optimistic edits (or roll them back on error)
    - DELETE never removes rows: it toggles ACTIVE <-> INACTIVE like status-toggle
"""

from fastapi import APIRouter, Body, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from argan_hr.api.dependencies import (
    get_current_admin, get_request_meta, page_params, require_role,
)
from argan_hr.core.domain_types import AdminRole, ClientStatus, ServiceTier
from argan_hr.core.list_view import PageRequest
from argan_hr.infrastructure.database import get_db
from argan_hr.models.admin import Admin
from argan_hr.models.client import Client
from argan_hr.schemas.client import (
    ClientCreate, ClientDetail, ClientListResponse, ClientSummary, ClientUpdate,
    StatusToggleRequest,
)
from argan_hr.schemas.contract import ContractResponse
from argan_hr.services.client_service import ClientService
from argan_hr.services.contract_service import ContractService
from argan_hr.services.onboarding_service import build_checklist

router = APIRouter(prefix="/api/v1/clients", tags=["clients"])

_require_admin = require_role(AdminRole.ADMIN)


async def build_client_detail(db: AsyncSession, client: Client) -> ClientDetail:
    contracts = await ContractService(db).list_contracts(client.id)
    active = next((c for c in contracts if c.status == "ACTIVE"), None)
    detail = ClientDetail.model_validate(client)
    detail.contracts = [ContractResponse.model_validate(c) for c in contracts]
    detail.onboarding = build_checklist(client, active)
    return detail


@router.get("", response_model=ClientListResponse)
async def list_clients(
    page: PageRequest = Depends(page_params),
    search: str | None = Query(None, max_length=200),
    status_filter: ClientStatus | None = Query(None, alias="status"),
    service_tier: ServiceTier | None = None,
    sector: str | None = Query(None, max_length=100),
    sort_by: str | None = None,
    sort_dir: str | None = None,
    db: AsyncSession = Depends(get_db),
    _: Admin = Depends(get_current_admin),
):
    clients, pagination = await ClientService(db).list_clients(
        page, search, status_filter, service_tier, sector, sort_by, sort_dir,
    )
    return {"clients": clients, "pagination": pagination}


@router.get("/sectors", response_model=list[str])
async def list_sectors(
    db: AsyncSession = Depends(get_db),
    _: Admin = Depends(get_current_admin),
):
    return await ClientService(db).get_unique_sectors()


@router.post("", response_model=ClientDetail, status_code=status.HTTP_201_CREATED)
async def create_client(
    body: ClientCreate,
    request: Request,
    db: AsyncSession = Depends(get_db),
    actor: Admin = Depends(_require_admin),
):
    client = await ClientService(db, actor, get_request_meta(request)).create_client(body)
    return await build_client_detail(db, client)


@router.get("/{client_id}", response_model=ClientDetail)
async def get_client(
    client_id: int,
    db: AsyncSession = Depends(get_db),
    _: Admin = Depends(get_current_admin),
):
    client = await ClientService(db).get_client(client_id)
    return await build_client_detail(db, client)


@router.patch("/{client_id}", response_model=ClientDetail)
async def update_client(
    client_id: int,
    body: ClientUpdate,
    request: Request,
    db: AsyncSession = Depends(get_db),
    actor: Admin = Depends(_require_admin),
):
    client = await ClientService(db, actor, get_request_meta(request)).update_client(client_id, body)
    return await build_client_detail(db, client)


@router.post("/{client_id}/status-toggle", response_model=ClientSummary)
async def toggle_client_status(
    client_id: int,
    request: Request,
    body: StatusToggleRequest | None = Body(None),
    db: AsyncSession = Depends(get_db),
    actor: Admin = Depends(_require_admin),
):
    target = (body or StatusToggleRequest()).target_status
    service = ClientService(db, actor, get_request_meta(request))
    return await service.toggle_status(client_id, target)


@router.delete("/{client_id}", response_model=ClientSummary)
async def delete_client(
    client_id: int,
    request: Request,
    db: AsyncSession = Depends(get_db),
    actor: Admin = Depends(_require_admin),
):
    service = ClientService(db, actor, get_request_meta(request))
    return await service.toggle_status(client_id, ClientStatus.INACTIVE.value)
