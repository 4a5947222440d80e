"""Document Schemas — per-client document repository views."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel

from argan_hr.core.domain_types import ClientStatus


class ClientDocumentSummary(BaseModel):
    client_id: int
    company_name: str
    status: ClientStatus
    contract_document_count: int
    case_file_count: int


class DocumentItem(BaseModel):
    kind: Literal["contract", "signed_contract", "case_file"]
    title: str
    url: str
    created_at: datetime
    contract_id: int | None = None
    case_id: int | None = None
    case_number: str | None = None
    file_size: int | None = None


class ClientDocuments(BaseModel):
    client_id: int
    company_name: str
    documents: list[DocumentItem]
