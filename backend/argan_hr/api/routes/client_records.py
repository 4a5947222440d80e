"""Client Record Routes — contacts, addresses and external audits nested under a client."""

from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from argan_hr.api.dependencies import get_request_meta, require_role
from argan_hr.core.domain_types import AdminRole
from argan_hr.infrastructure.database import get_db
from argan_hr.models.admin import Admin
from argan_hr.schemas.client import (
    AddressInput, AddressResponse, AddressUpdate, AuditInput, AuditResponse,
    AuditUpdate, ContactInput, ContactResponse, ContactUpdate,
)
from argan_hr.services.client_records import ClientRecordService

router = APIRouter(prefix="/api/v1/clients/{client_id}", tags=["client records"])

_require_admin = require_role(AdminRole.ADMIN)


def _service(request: Request, db: AsyncSession, actor: Admin) -> ClientRecordService:
    return ClientRecordService(db, actor, get_request_meta(request))


# ─── Contacts ────────────────────────────────────────────────────

@router.post("/contacts", response_model=ContactResponse, status_code=status.HTTP_201_CREATED)
async def add_contact(
    client_id: int, body: ContactInput, request: Request,
    db: AsyncSession = Depends(get_db), actor: Admin = Depends(_require_admin),
):
    return await _service(request, db, actor).add_contact(client_id, body)


@router.patch("/contacts/{contact_id}", response_model=ContactResponse)
async def update_contact(
    client_id: int, contact_id: int, body: ContactUpdate, request: Request,
    db: AsyncSession = Depends(get_db), actor: Admin = Depends(_require_admin),
):
    return await _service(request, db, actor).update_contact(client_id, contact_id, body)


@router.delete("/contacts/{contact_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_contact(
    client_id: int, contact_id: int, request: Request,
    db: AsyncSession = Depends(get_db), actor: Admin = Depends(_require_admin),
):
    await _service(request, db, actor).delete_contact(client_id, contact_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ─── Addresses ───────────────────────────────────────────────────

@router.post("/addresses", response_model=AddressResponse, status_code=status.HTTP_201_CREATED)
async def add_address(
    client_id: int, body: AddressInput, request: Request,
    db: AsyncSession = Depends(get_db), actor: Admin = Depends(_require_admin),
):
    return await _service(request, db, actor).add_address(client_id, body)


@router.patch("/addresses/{address_id}", response_model=AddressResponse)
async def update_address(
    client_id: int, address_id: int, body: AddressUpdate, request: Request,
    db: AsyncSession = Depends(get_db), actor: Admin = Depends(_require_admin),
):
    return await _service(request, db, actor).update_address(client_id, address_id, body)


@router.delete("/addresses/{address_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_address(
    client_id: int, address_id: int, request: Request,
    db: AsyncSession = Depends(get_db), actor: Admin = Depends(_require_admin),
):
    await _service(request, db, actor).delete_address(client_id, address_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ─── External audits ─────────────────────────────────────────────

@router.post("/audits", response_model=AuditResponse, status_code=status.HTTP_201_CREATED)
async def add_audit(
    client_id: int, body: AuditInput, request: Request,
    db: AsyncSession = Depends(get_db), actor: Admin = Depends(_require_admin),
):
    return await _service(request, db, actor).add_audit(client_id, body)


@router.patch("/audits/{audit_id}", response_model=AuditResponse)
async def update_audit(
    client_id: int, audit_id: int, body: AuditUpdate, request: Request,
    db: AsyncSession = Depends(get_db), actor: Admin = Depends(_require_admin),
):
    return await _service(request, db, actor).update_audit(client_id, audit_id, body)


@router.post("/audits/{audit_id}/schedule-next", response_model=AuditResponse)
async def schedule_next_audit(
    client_id: int, audit_id: int, request: Request,
    db: AsyncSession = Depends(get_db), actor: Admin = Depends(_require_admin),
):
    return await _service(request, db, actor).schedule_next_audit(client_id, audit_id)


@router.delete("/audits/{audit_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_audit(
    client_id: int, audit_id: int, request: Request,
    db: AsyncSession = Depends(get_db), actor: Admin = Depends(_require_admin),
):
    await _service(request, db, actor).delete_audit(client_id, audit_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
