"""Client Service — client list/search, creation with related records, updates, status toggle.

Invariants:
    - contact_email unique (case-insensitive) among ACTIVE clients
    - create_client writes client, contacts, addresses, external audits and the first
      ACTIVE contract in one transaction
    - Payment method decides which payment onboarding flags apply (core/onboarding.py)
    - toggle_status: ACTIVE -> target (INACTIVE or PENDING); anything else -> ACTIVE
    - Clients are never hard-deleted

Design Decisions:
    - Sorting through a whitelist (core/list_view.resolve_sort); default order is
      status then company name so active clients lead the table
    - The primary SERVICE contact is kept in sync with contact_name/contact_email
"""

import logging

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from argan_hr.core.domain_types import (
    AddressType, AuditAction, AuditEntity, ClientStatus, ContactType, ServiceTier,
)
from argan_hr.core.errors import EmailAlreadyExistsError, ResourceNotFoundError
from argan_hr.core.list_view import (
    PageRequest, build_pagination, like_pattern, resolve_sort,
)
from argan_hr.core.onboarding import payment_method_defaults, reapply_payment_method
from argan_hr.core.validation import (
    check_email, check_required, normalize_email, raise_if_errors,
)
from argan_hr.models.admin import Admin
from argan_hr.models.client import Client, ClientAddress, ClientAudit, ClientContact
from argan_hr.schemas.client import (
    AddressInput, AuditInput, ClientCreate, ClientUpdate, ContactInput,
)
from argan_hr.services.audit_log import AuditLogService, RequestMeta
from argan_hr.services.contract_service import ContractService

logger = logging.getLogger(__name__)

CLIENT_SORT_FIELDS = {
    "company_name": Client.company_name,
    "created_at": Client.created_at,
    "status": Client.status,
    "service_tier": Client.service_tier,
    "monthly_retainer": Client.monthly_retainer,
}
REQUIRED_FIELDS = ["company_name", "contact_name", "contact_email", "service_tier"]
# NOT NULL columns with a default: optional on create, never cleared on update
NON_NULL_FIELDS = ["client_type", "external_audit"]


def _contact(data: ContactInput, force_type: ContactType | None = None) -> ClientContact:
    return ClientContact(
        type=(force_type or data.type).value,
        name=data.name.strip(),
        email=normalize_email(data.email),
        phone=data.phone,
        role=data.role,
        description=data.description,
    )


def _address(data: AddressInput, force_type: AddressType) -> ClientAddress:
    return ClientAddress(
        type=force_type.value,
        address_line_1=data.address_line_1.strip(),
        address_line_2=data.address_line_2,
        city=data.city.strip(),
        postcode=data.postcode.strip().upper(),
        country=data.country.strip(),
        description=data.description,
    )


class ClientService:
    def __init__(
        self, db: AsyncSession, actor: Admin | None = None,
        meta: RequestMeta | None = None,
    ):
        self.db = db
        self.actor = actor
        self.audit = AuditLogService(db, meta)
        self.contracts = ContractService(db, actor, meta)

    # ─── Queries ──────────────────────────────────────────────────

    async def list_clients(
        self,
        page: PageRequest,
        search: str | None = None,
        status: ClientStatus | None = None,
        service_tier: ServiceTier | None = None,
        sector: str | None = None,
        sort_by: str | None = None,
        sort_dir: str | None = None,
    ) -> tuple[list[Client], dict]:
        query = select(Client)
        if search and search.strip():
            pattern = like_pattern(search)
            query = query.where(or_(
                Client.company_name.ilike(pattern, escape="\\"),
                Client.contact_email.ilike(pattern, escape="\\"),
                Client.contact_name.ilike(pattern, escape="\\"),
            ))
        if status:
            query = query.where(Client.status == status.value)
        if service_tier:
            query = query.where(Client.service_tier == service_tier.value)
        if sector:
            query = query.where(Client.sector == sector)

        total = await self.db.scalar(
            select(func.count()).select_from(query.subquery()),
        )
        if sort_by:
            column, descending = resolve_sort(sort_by, sort_dir, CLIENT_SORT_FIELDS, "company_name")
            ordering = [column.desc() if descending else column.asc(), Client.id]
        else:
            ordering = [Client.status.asc(), Client.company_name.asc(), Client.id]
        result = await self.db.execute(
            query.order_by(*ordering).limit(page.limit).offset(page.offset),
        )
        return list(result.scalars().all()), build_pagination(page, total or 0)

    async def get_unique_sectors(self) -> list[str]:
        result = await self.db.execute(
            select(Client.sector).where(Client.sector.is_not(None))
            .where(Client.sector != "").distinct().order_by(Client.sector),
        )
        return [row for row in result.scalars().all()]

    async def get_client(self, client_id: int) -> Client:
        result = await self.db.execute(
            select(Client).where(Client.id == client_id)
            .execution_options(populate_existing=True),
        )
        client = result.scalar_one_or_none()
        if not client:
            raise ResourceNotFoundError("Client", client_id)
        return client

    async def ensure_email_available(
        self, email: str, exclude_client_id: int | None = None,
    ) -> None:
        query = (
            select(Client.id)
            .where(func.lower(Client.contact_email) == normalize_email(email))
            .where(Client.status == ClientStatus.ACTIVE.value)
        )
        if exclude_client_id is not None:
            query = query.where(Client.id != exclude_client_id)
        if await self.db.scalar(query.limit(1)) is not None:
            raise EmailAlreadyExistsError(normalize_email(email))

    # ─── Mutations ────────────────────────────────────────────────

    async def create_client(self, data: ClientCreate) -> Client:
        errors = check_required(data.model_dump(), REQUIRED_FIELDS)
        errors += check_email("contact_email", data.contact_email)
        if data.secondary_contact:
            errors += check_email("secondary_contact.email", data.secondary_contact.email)
        if data.invoice_contact:
            errors += check_email("invoice_contact.email", data.invoice_contact.email)
        audits = list(data.audits)
        if data.audited_by and data.audit_interval and data.next_audit_date:
            audits.append(AuditInput(
                audited_by=data.audited_by, interval=data.audit_interval,
                next_audit_date=data.next_audit_date,
            ))
        if data.external_audit and not audits:
            errors.append({
                "field": "audits",
                "message": "At least one external audit is required when external audit is enabled",
            })
        raise_if_errors(errors)

        email = normalize_email(data.contact_email)
        await self.ensure_email_available(email)

        contacts = [ClientContact(
            type=ContactType.SERVICE.value,
            name=data.contact_name.strip(),
            email=email,
            phone=data.contact_phone,
            role="Primary contact",
        )]
        if data.secondary_contact:
            contacts.append(_contact(data.secondary_contact, ContactType.SERVICE))
        if data.invoice_contact:
            contacts.append(_contact(data.invoice_contact, ContactType.INVOICE))

        addresses = []
        if data.service_address:
            addresses.append(_address(data.service_address, AddressType.SERVICE))
        if data.invoice_address:
            addresses.append(_address(data.invoice_address, AddressType.INVOICE))

        client = Client(
            company_name=data.company_name.strip(),
            client_type=data.client_type.value,
            business_id=data.business_id,
            sector=data.sector.strip() if data.sector else None,
            service_tier=data.service_tier.value,
            monthly_retainer=data.monthly_retainer,
            contact_name=data.contact_name.strip(),
            contact_email=email,
            contact_phone=data.contact_phone,
            status=ClientStatus.ACTIVE.value,
            external_audit=data.external_audit,
            payment_method=data.payment_method.value if data.payment_method else None,
            last_price_increase=data.last_price_increase,
            created_by=self.actor.id if self.actor else None,
            contacts=contacts,
            addresses=addresses,
            audits=[
                ClientAudit(
                    audited_by=a.audited_by.strip(), interval=a.interval.value,
                    next_audit_date=a.next_audit_date,
                )
                for a in (audits if data.external_audit else [])
            ],
            **payment_method_defaults(data.payment_method),
        )
        self.db.add(client)
        await self.db.flush()

        contract = self.contracts.build_initial_contract(client.id, data.contract)
        await self.db.flush()
        self.audit.record(
            AuditAction.CLIENT_CREATED, AuditEntity.CLIENT, client.id,
            admin_id=self.actor.id if self.actor else None,
            changes={
                "company_name": client.company_name,
                "service_tier": client.service_tier,
                "contract_number": contract.contract_number,
            },
        )
        await self.db.commit()
        logger.info(
            f"Client created: {client.company_name}", extra={"client_id": client.id},
        )
        return await self.get_client(client.id)

    async def update_client(self, client_id: int, data: ClientUpdate) -> Client:
        client = await self.get_client(client_id)
        changes = data.model_dump(exclude_unset=True)

        errors = [
            {"field": name, "message": f"{name.replace('_', ' ').capitalize()} cannot be empty"}
            for name in REQUIRED_FIELDS
            if name in changes and (changes[name] is None or not str(changes[name]).strip())
        ]
        errors += [
            {"field": name, "message": f"{name.replace('_', ' ').capitalize()} cannot be null"}
            for name in NON_NULL_FIELDS
            if name in changes and changes[name] is None
        ]
        if changes.get("contact_email"):
            errors += check_email("contact_email", changes["contact_email"])
        raise_if_errors(errors)

        if "contact_email" in changes:
            email = normalize_email(changes["contact_email"])
            if email != normalize_email(client.contact_email):
                if client.status == ClientStatus.ACTIVE.value:
                    await self.ensure_email_available(email, exclude_client_id=client.id)
            changes["contact_email"] = email

        if "payment_method" in changes:
            current = {
                name: getattr(client, name)
                for name in ("direct_debit_setup", "direct_debit_confirmed", "recurring_invoice_setup")
            }
            for name, value in reapply_payment_method(current, changes["payment_method"]).items():
                setattr(client, name, value)

        for name, value in changes.items():
            if hasattr(value, "value"):
                value = value.value
            elif isinstance(value, str):
                value = value.strip()
            setattr(client, name, value)
        self._sync_primary_contact(client, changes)

        self.audit.record(
            AuditAction.CLIENT_UPDATED, AuditEntity.CLIENT, client.id,
            admin_id=self.actor.id if self.actor else None, changes=changes,
        )
        await self.db.commit()
        return await self.get_client(client.id)

    async def toggle_status(
        self, client_id: int, target_status: str = ClientStatus.INACTIVE.value,
    ) -> Client:
        client = await self.get_client(client_id)
        previous = client.status
        if previous == ClientStatus.ACTIVE.value:
            client.status = ClientStatus(target_status).value
            action = AuditAction.CLIENT_ARCHIVED
        else:
            await self.ensure_email_available(client.contact_email, exclude_client_id=client.id)
            client.status = ClientStatus.ACTIVE.value
            action = AuditAction.CLIENT_REACTIVATED

        self.audit.record(
            action, AuditEntity.CLIENT, client.id,
            admin_id=self.actor.id if self.actor else None,
            changes={"from": previous, "to": client.status},
        )
        await self.db.commit()
        logger.info(
            f"Client status {previous} -> {client.status}", extra={"client_id": client.id},
        )
        return client

    def _sync_primary_contact(self, client: Client, changes: dict) -> None:
        primary = next(
            (c for c in client.contacts if c.type == ContactType.SERVICE.value), None,
        )
        if primary is None:
            return
        if "contact_name" in changes:
            primary.name = client.contact_name
        if "contact_email" in changes:
            primary.email = client.contact_email
        if "contact_phone" in changes:
            primary.phone = client.contact_phone
