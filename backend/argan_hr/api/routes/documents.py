"""Document Routes — per-client document repository."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from argan_hr.api.dependencies import get_current_admin
from argan_hr.infrastructure.database import get_db
from argan_hr.models.admin import Admin
from argan_hr.schemas.document import ClientDocuments, ClientDocumentSummary
from argan_hr.services.document_service import DocumentService

router = APIRouter(prefix="/api/v1/documents", tags=["documents"])


@router.get("", response_model=list[ClientDocumentSummary])
async def list_document_clients(
    search: str | None = Query(None, max_length=200),
    db: AsyncSession = Depends(get_db),
    _: Admin = Depends(get_current_admin),
):
    return await DocumentService(db).list_clients(search)


@router.get("/{client_id}", response_model=ClientDocuments)
async def get_client_documents(
    client_id: int,
    db: AsyncSession = Depends(get_db),
    _: Admin = Depends(get_current_admin),
):
    return await DocumentService(db).get_client_documents(client_id)
