"""Document Service — the document repository: contract documents and case files per client."""

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from argan_hr.core.errors import ResourceNotFoundError
from argan_hr.core.list_view import like_pattern
from argan_hr.models.case import Case, CaseFile
from argan_hr.models.client import Client
from argan_hr.models.contract import Contract
from argan_hr.schemas.document import ClientDocuments, ClientDocumentSummary, DocumentItem


class DocumentService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_clients(self, search: str | None = None) -> list[ClientDocumentSummary]:
        contract_docs = (
            select(func.count(Contract.id))
            .where(Contract.client_id == Client.id)
            .where(or_(Contract.doc_url.is_not(None), Contract.signed_contract_url.is_not(None)))
            .correlate(Client).scalar_subquery()
        )
        case_files = (
            select(func.count(CaseFile.id))
            .join(Case, Case.id == CaseFile.case_id)
            .where(Case.client_id == Client.id)
            .correlate(Client).scalar_subquery()
        )
        query = select(Client.id, Client.company_name, Client.status, contract_docs, case_files)
        if search and search.strip():
            query = query.where(Client.company_name.ilike(like_pattern(search), escape="\\"))
        result = await self.db.execute(query.order_by(Client.company_name))
        return [
            ClientDocumentSummary(
                client_id=cid, company_name=name, status=status,
                contract_document_count=docs or 0, case_file_count=files or 0,
            )
            for cid, name, status, docs, files in result.all()
        ]

    async def get_client_documents(self, client_id: int) -> ClientDocuments:
        client = await self.db.get(Client, client_id)
        if not client:
            raise ResourceNotFoundError("Client", client_id)

        documents: list[DocumentItem] = []
        contracts = await self.db.execute(
            select(Contract).where(Contract.client_id == client_id)
            .order_by(Contract.version.desc()),
        )
        for contract in contracts.scalars().all():
            if contract.doc_url:
                documents.append(DocumentItem(
                    kind="contract", title=f"Contract {contract.contract_number}",
                    url=contract.doc_url, created_at=contract.created_at,
                    contract_id=contract.id,
                ))
            if contract.signed_contract_url:
                documents.append(DocumentItem(
                    kind="signed_contract",
                    title=f"Signed contract {contract.contract_number}",
                    url=contract.signed_contract_url, created_at=contract.updated_at,
                    contract_id=contract.id,
                ))

        files = await self.db.execute(
            select(CaseFile, Case.case_number)
            .join(Case, Case.id == CaseFile.case_id)
            .where(Case.client_id == client_id)
            .order_by(CaseFile.created_at.desc(), CaseFile.id.desc()),
        )
        for case_file, case_number in files.all():
            documents.append(DocumentItem(
                kind="case_file", title=case_file.file_title or case_file.file_name,
                url=case_file.file_url, created_at=case_file.created_at,
                case_id=case_file.case_id, case_number=case_number,
                file_size=case_file.file_size,
            ))
        return ClientDocuments(
            client_id=client.id, company_name=client.company_name, documents=documents,
        )
