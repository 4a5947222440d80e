"""Client Records — contacts, addresses and external audit schedule under a client.

Invariants:
    - Every record is addressed through its client: a record id belonging to another
      client is reported as not found
    - Contact emails validated and stored lowercase
    - Updates never clear a NOT NULL column: an explicit null is a 400 field error
    - Audit next dates may be derived from the interval when omitted (schedule_next_audit)
"""

import logging
from typing import TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from argan_hr.core import clock
from argan_hr.core.audit_schedule import next_audit_due
from argan_hr.core.domain_types import AuditAction, AuditEntity
from argan_hr.core.errors import ResourceNotFoundError
from argan_hr.core.validation import check_email, normalize_email, raise_if_errors
from argan_hr.models.admin import Admin
from argan_hr.models.client import Client, ClientAddress, ClientAudit, ClientContact
from argan_hr.schemas.client import (
    AddressInput, AddressUpdate, AuditInput, AuditUpdate, ContactInput, ContactUpdate,
)
from argan_hr.services.audit_log import AuditLogService, RequestMeta

logger = logging.getLogger(__name__)

Record = TypeVar("Record", ClientContact, ClientAddress, ClientAudit)

# NOT NULL columns a partial update may not clear
CONTACT_REQUIRED_FIELDS = ("type", "name", "email")


def _plain(changes: dict) -> dict:
    return {k: (v.value if hasattr(v, "value") else v) for k, v in changes.items()}


class ClientRecordService:
    def __init__(
        self, db: AsyncSession, actor: Admin | None = None,
        meta: RequestMeta | None = None,
    ):
        self.db = db
        self.actor = actor
        self.audit = AuditLogService(db, meta)

    # ─── Contacts ─────────────────────────────────────────────────

    async def add_contact(self, client_id: int, data: ContactInput) -> ClientContact:
        await self._require_client(client_id)
        raise_if_errors(check_email("email", data.email))
        contact = ClientContact(
            client_id=client_id, **_plain(data.model_dump()),
        )
        contact.email = normalize_email(contact.email)
        return await self._save(client_id, contact, "contact_added")

    async def update_contact(
        self, client_id: int, contact_id: int, data: ContactUpdate,
    ) -> ClientContact:
        contact = await self._get(ClientContact, client_id, contact_id, "Contact")
        changes = _plain(data.model_dump(exclude_unset=True))
        errors = [
            {"field": name, "message": f"{name.capitalize()} cannot be empty"}
            for name in CONTACT_REQUIRED_FIELDS
            if name in changes and changes[name] is None
        ]
        if changes.get("email") is not None:
            errors += check_email("email", changes["email"])
        raise_if_errors(errors)
        if "email" in changes:
            changes["email"] = normalize_email(changes["email"])
        return await self._apply(client_id, contact, changes, "contact_updated")

    async def delete_contact(self, client_id: int, contact_id: int) -> None:
        contact = await self._get(ClientContact, client_id, contact_id, "Contact")
        await self._delete(client_id, contact, "contact_deleted")

    # ─── Addresses ────────────────────────────────────────────────

    async def add_address(self, client_id: int, data: AddressInput) -> ClientAddress:
        await self._require_client(client_id)
        address = ClientAddress(client_id=client_id, **_plain(data.model_dump()))
        address.postcode = address.postcode.strip().upper()
        return await self._save(client_id, address, "address_added")

    async def update_address(
        self, client_id: int, address_id: int, data: AddressUpdate,
    ) -> ClientAddress:
        address = await self._get(ClientAddress, client_id, address_id, "Address")
        changes = {
            k: v for k, v in _plain(data.model_dump(exclude_unset=True)).items()
            if v is not None or k in ("address_line_2", "description")
        }
        if changes.get("postcode"):
            changes["postcode"] = changes["postcode"].strip().upper()
        return await self._apply(client_id, address, changes, "address_updated")

    async def delete_address(self, client_id: int, address_id: int) -> None:
        address = await self._get(ClientAddress, client_id, address_id, "Address")
        await self._delete(client_id, address, "address_deleted")

    # ─── External audits ──────────────────────────────────────────

    async def add_audit(self, client_id: int, data: AuditInput) -> ClientAudit:
        client = await self._require_client(client_id)
        audit = ClientAudit(client_id=client_id, **_plain(data.model_dump()))
        client.external_audit = True
        return await self._save(client_id, audit, "audit_added")

    async def update_audit(
        self, client_id: int, audit_id: int, data: AuditUpdate,
    ) -> ClientAudit:
        audit = await self._get(ClientAudit, client_id, audit_id, "Audit")
        changes = {
            k: v for k, v in _plain(data.model_dump(exclude_unset=True)).items()
            if v is not None
        }
        return await self._apply(client_id, audit, changes, "audit_updated")

    async def schedule_next_audit(self, client_id: int, audit_id: int) -> ClientAudit:
        """Roll next_audit_date forward one interval from the later of the current date or today."""
        audit = await self._get(ClientAudit, client_id, audit_id, "Audit")
        base = max(audit.next_audit_date, clock.today())
        return await self._apply(
            client_id, audit,
            {"next_audit_date": next_audit_due(base, audit.interval)},
            "audit_rescheduled",
        )

    async def delete_audit(self, client_id: int, audit_id: int) -> None:
        audit = await self._get(ClientAudit, client_id, audit_id, "Audit")
        await self._delete(client_id, audit, "audit_deleted")

    # ─── Internals ────────────────────────────────────────────────

    async def _require_client(self, client_id: int) -> Client:
        client = await self.db.get(Client, client_id)
        if not client:
            raise ResourceNotFoundError("Client", client_id)
        return client

    async def _get(
        self, model: type[Record], client_id: int, record_id: int, label: str,
    ) -> Record:
        record = await self.db.get(model, record_id)
        if not record or record.client_id != client_id:
            raise ResourceNotFoundError(label, record_id)
        return record

    async def _save(self, client_id: int, record: Record, event: str) -> Record:
        self.db.add(record)
        await self.db.flush()
        self._record(client_id, {"event": event, "record_id": record.id})
        await self.db.commit()
        return record

    async def _apply(
        self, client_id: int, record: Record, changes: dict, event: str,
    ) -> Record:
        for name, value in changes.items():
            setattr(record, name, value)
        self._record(client_id, {"event": event, "record_id": record.id, **changes})
        await self.db.commit()
        return record

    async def _delete(self, client_id: int, record: Record, event: str) -> None:
        self._record(client_id, {"event": event, "record_id": record.id})
        await self.db.delete(record)
        await self.db.commit()

    def _record(self, client_id: int, changes: dict) -> None:
        self.audit.record(
            AuditAction.CLIENT_UPDATED, AuditEntity.CLIENT, client_id,
            admin_id=self.actor.id if self.actor else None, changes=changes,
        )
