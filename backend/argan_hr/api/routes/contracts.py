"""Contract Routes — client contracts, service scope, documents and activation.

Invariants:
    - Reads open to every signed-in admin; writes need ADMIN or higher
    - Contract ids are always resolved through their client (foreign ids are 404)
"""

from fastapi import APIRouter, Depends, Query, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from argan_hr.api.dependencies import get_current_admin, get_request_meta, require_role
from argan_hr.core.contract_rules import (
    AVAILABLE_SERVICES_IN_SCOPE, AVAILABLE_SERVICES_OUT_OF_SCOPE,
    DEFAULT_SERVICES_IN_SCOPE, DEFAULT_SERVICES_OUT_OF_SCOPE,
)
from argan_hr.core.domain_types import AdminRole, ContractStatus
from argan_hr.infrastructure.database import get_db
from argan_hr.models.admin import Admin
from argan_hr.schemas.contract import (
    ActiveContractCheck, ContractCreate, ContractResponse, ContractUpdate,
    ContractUrlsUpdate, ServiceCatalogResponse, ServicesUpdate,
)
from argan_hr.services.contract_service import ContractService

router = APIRouter(prefix="/api/v1", tags=["contracts"])

_require_admin = require_role(AdminRole.ADMIN)
_BASE = "/clients/{client_id}/contracts"


def _service(request: Request, db: AsyncSession, actor: Admin) -> ContractService:
    return ContractService(db, actor, get_request_meta(request))


@router.get("/contracts/services", response_model=ServiceCatalogResponse)
async def service_catalog(_: Admin = Depends(get_current_admin)):
    return ServiceCatalogResponse(
        in_scope=list(AVAILABLE_SERVICES_IN_SCOPE),
        out_of_scope=list(AVAILABLE_SERVICES_OUT_OF_SCOPE),
        default_in_scope=list(DEFAULT_SERVICES_IN_SCOPE),
        default_out_of_scope=list(DEFAULT_SERVICES_OUT_OF_SCOPE),
    )


@router.get(_BASE, response_model=list[ContractResponse])
async def list_contracts(
    client_id: int,
    status_filter: ContractStatus | None = Query(None, alias="status"),
    db: AsyncSession = Depends(get_db),
    _: Admin = Depends(get_current_admin),
):
    return await ContractService(db).list_contracts(client_id, status_filter)


@router.get(_BASE + "/active", response_model=ActiveContractCheck)
async def get_active_contract(
    client_id: int,
    db: AsyncSession = Depends(get_db),
    _: Admin = Depends(get_current_admin),
):
    contract = await ContractService(db).get_active_contract(client_id)
    return ActiveContractCheck(
        has_active_contract=contract is not None,
        contract=ContractResponse.model_validate(contract) if contract else None,
    )


@router.post(_BASE, response_model=ContractResponse, status_code=status.HTTP_201_CREATED)
async def create_contract(
    client_id: int, body: ContractCreate, request: Request,
    db: AsyncSession = Depends(get_db), actor: Admin = Depends(_require_admin),
):
    return await _service(request, db, actor).create_contract(client_id, body)


@router.get(_BASE + "/{contract_id}", response_model=ContractResponse)
async def get_contract(
    client_id: int, contract_id: int,
    db: AsyncSession = Depends(get_db),
    _: Admin = Depends(get_current_admin),
):
    return await ContractService(db).get_contract(client_id, contract_id)


@router.patch(_BASE + "/{contract_id}", response_model=ContractResponse)
async def update_contract(
    client_id: int, contract_id: int, body: ContractUpdate, request: Request,
    db: AsyncSession = Depends(get_db), actor: Admin = Depends(_require_admin),
):
    return await _service(request, db, actor).update_contract(client_id, contract_id, body)


@router.put(_BASE + "/{contract_id}/services-in-scope", response_model=ContractResponse)
async def update_services_in_scope(
    client_id: int, contract_id: int, body: ServicesUpdate, request: Request,
    db: AsyncSession = Depends(get_db), actor: Admin = Depends(_require_admin),
):
    service = _service(request, db, actor)
    return await service.update_services_in_scope(client_id, contract_id, body.services)


@router.put(_BASE + "/{contract_id}/services-out-of-scope", response_model=ContractResponse)
async def update_services_out_of_scope(
    client_id: int, contract_id: int, body: ServicesUpdate, request: Request,
    db: AsyncSession = Depends(get_db), actor: Admin = Depends(_require_admin),
):
    service = _service(request, db, actor)
    return await service.update_services_out_of_scope(client_id, contract_id, body.services)


@router.put(_BASE + "/{contract_id}/documents", response_model=ContractResponse)
async def update_contract_documents(
    client_id: int, contract_id: int, body: ContractUrlsUpdate, request: Request,
    db: AsyncSession = Depends(get_db), actor: Admin = Depends(_require_admin),
):
    return await _service(request, db, actor).update_urls(client_id, contract_id, body)


@router.post(_BASE + "/{contract_id}/activate", response_model=ContractResponse)
async def activate_contract(
    client_id: int, contract_id: int, request: Request,
    db: AsyncSession = Depends(get_db), actor: Admin = Depends(_require_admin),
):
    return await _service(request, db, actor).set_active(client_id, contract_id)


@router.delete(_BASE + "/{contract_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_contract(
    client_id: int, contract_id: int, request: Request,
    db: AsyncSession = Depends(get_db), actor: Admin = Depends(_require_admin),
):
    await _service(request, db, actor).delete_contract(client_id, contract_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
