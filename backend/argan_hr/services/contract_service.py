"""Contract Service — versioned client contracts and the single-active rule.

Invariants:
    - At most one ACTIVE contract per client at any committed point
    - set_active archives every other ACTIVE contract in the same transaction and
      verifies exactly one ACTIVE remains before committing
    - DRAFT contracts cannot be activated directly and are the only deletable ones
    - version = highest existing version + 1; contract_number derived from it
    - Renewal date strictly after start date (re-checked against stored values on update)

Design Decisions:
    - Status ordering done in SQL with a CASE over CONTRACT_STATUS_ORDER
    - build_initial_contract stages without committing so ClientService can create
      client and first contract atomically
"""

import logging

from sqlalchemy import case, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from argan_hr.core import clock
from argan_hr.core.contract_rules import (
    CONTRACT_STATUS_ORDER, DEFAULT_SERVICES_IN_SCOPE, DEFAULT_SERVICES_OUT_OF_SCOPE,
    check_date_order, default_renewal_date, format_contract_number, validate_services,
)
from argan_hr.core.domain_types import AuditAction, AuditEntity, ContractStatus
from argan_hr.core.errors import (
    BusinessRuleError, ConflictError, ResourceNotFoundError,
)
from argan_hr.models.admin import Admin
from argan_hr.models.client import Client
from argan_hr.models.contract import Contract
from argan_hr.schemas.contract import (
    ContractCreate, ContractTerms, ContractUpdate, ContractUrlsUpdate,
    InitialContractTerms,
)
from argan_hr.services.audit_log import AuditLogService, RequestMeta

logger = logging.getLogger(__name__)

# Term columns that cannot hold NULL: a None in an update body means "leave as is"
_NON_NULLABLE_TERMS = {
    "inclusive_hours_hr_admin_period", "inclusive_hours_employment_law_period",
    "services_in_scope", "services_out_of_scope",
    "hr_admin_rate_unit", "hr_admin_rate_not_needed",
    "employment_law_rate_unit", "employment_law_rate_not_needed",
    "mileage_rate_not_needed", "overnight_rate_not_needed",
}


def _term_values(terms: ContractTerms, *, partial: bool) -> dict:
    values = terms.model_dump(
        include=set(ContractTerms.model_fields), exclude_unset=partial,
    )
    values = {
        k: (v.value if hasattr(v, "value") else v)
        for k, v in values.items()
        if not (v is None and (k in _NON_NULLABLE_TERMS or not partial))
    }
    if "services_in_scope" in values:
        values["services_in_scope"] = validate_services(values["services_in_scope"], in_scope=True)
    if "services_out_of_scope" in values:
        values["services_out_of_scope"] = validate_services(values["services_out_of_scope"], in_scope=False)
    return values


def _with_default_services(values: dict) -> dict:
    return {
        "services_in_scope": list(DEFAULT_SERVICES_IN_SCOPE),
        "services_out_of_scope": list(DEFAULT_SERVICES_OUT_OF_SCOPE),
        **values,
    }


class ContractService:
    def __init__(
        self, db: AsyncSession, actor: Admin | None = None,
        meta: RequestMeta | None = None,
    ):
        self.db = db
        self.actor = actor
        self.audit = AuditLogService(db, meta)

    # ─── Queries ──────────────────────────────────────────────────

    async def list_contracts(
        self, client_id: int, status: ContractStatus | None = None,
    ) -> list[Contract]:
        status_rank = case(CONTRACT_STATUS_ORDER, value=Contract.status, else_=99)
        query = select(Contract).where(Contract.client_id == client_id)
        if status:
            query = query.where(Contract.status == status.value)
        result = await self.db.execute(
            query.order_by(status_rank, Contract.version.desc()),
        )
        return list(result.scalars().all())

    async def get_contract(self, client_id: int, contract_id: int) -> Contract:
        contract = await self.db.get(Contract, contract_id)
        if not contract or contract.client_id != client_id:
            raise ResourceNotFoundError("Contract", contract_id)
        return contract

    async def get_active_contract(self, client_id: int) -> Contract | None:
        result = await self.db.execute(
            select(Contract)
            .where(Contract.client_id == client_id)
            .where(Contract.status == ContractStatus.ACTIVE.value)
            .order_by(Contract.version.desc())
            .limit(1),
        )
        return result.scalar_one_or_none()

    async def has_active_contract(self, client_id: int) -> bool:
        return await self._count_active(client_id) > 0

    # ─── Creation ─────────────────────────────────────────────────

    def build_initial_contract(
        self, client_id: int, terms: InitialContractTerms | None,
    ) -> Contract:
        """Stage version 1 (ACTIVE) for a freshly flushed client. Caller commits."""
        terms = terms or InitialContractTerms()
        start = terms.contract_start_date or clock.today()
        renewal = terms.contract_renewal_date or default_renewal_date(start)
        check_date_order(start, renewal)
        contract = Contract(
            client_id=client_id,
            contract_number=format_contract_number(client_id, 1),
            version=1,
            status=ContractStatus.ACTIVE.value,
            contract_start_date=start,
            contract_renewal_date=renewal,
            **_with_default_services(_term_values(terms, partial=False)),
        )
        self.db.add(contract)
        return contract

    async def create_contract(self, client_id: int, data: ContractCreate) -> Contract:
        if not await self.db.get(Client, client_id):
            raise ResourceNotFoundError("Client", client_id)
        check_date_order(data.contract_start_date, data.contract_renewal_date)
        terms = _term_values(data, partial=False)

        if data.replace_existing:
            await self._archive_active(client_id)
        elif data.status == ContractStatus.ACTIVE and await self.has_active_contract(client_id):
            raise ConflictError(
                "Client already has an active contract. "
                "Set replace_existing to archive it, or create a DRAFT.",
                "ACTIVE_CONTRACT_EXISTS",
            )

        version = await self._next_version(client_id)
        contract = Contract(
            client_id=client_id,
            contract_number=format_contract_number(client_id, version),
            version=version,
            status=data.status.value,
            contract_start_date=data.contract_start_date,
            contract_renewal_date=data.contract_renewal_date,
            doc_url=data.doc_url,
            signed_contract_url=data.signed_contract_url,
            **_with_default_services(terms),
        )
        self.db.add(contract)
        await self.db.flush()
        self._audit(AuditAction.CONTRACT_CREATED, contract, {
            "contract_number": contract.contract_number,
            "status": contract.status,
            "replace_existing": data.replace_existing,
        })
        await self.db.commit()
        logger.info(
            f"Contract {contract.contract_number} created",
            extra={"client_id": client_id, "contract_id": contract.id},
        )
        return contract

    # ─── Updates ──────────────────────────────────────────────────

    async def update_contract(
        self, client_id: int, contract_id: int, data: ContractUpdate,
    ) -> Contract:
        contract = await self.get_contract(client_id, contract_id)
        changes = _term_values(data, partial=True)
        for name in ("contract_start_date", "contract_renewal_date", "doc_url", "signed_contract_url"):
            if name in data.model_fields_set:
                value = getattr(data, name)
                if value is None and name.startswith("contract_"):
                    continue
                changes[name] = value

        check_date_order(
            changes.get("contract_start_date", contract.contract_start_date),
            changes.get("contract_renewal_date", contract.contract_renewal_date),
        )
        return await self._apply(contract, changes)

    async def update_services_in_scope(
        self, client_id: int, contract_id: int, services: list[str],
    ) -> Contract:
        contract = await self.get_contract(client_id, contract_id)
        return await self._apply(contract, {
            "services_in_scope": validate_services(services, in_scope=True),
        })

    async def update_services_out_of_scope(
        self, client_id: int, contract_id: int, services: list[str],
    ) -> Contract:
        contract = await self.get_contract(client_id, contract_id)
        return await self._apply(contract, {
            "services_out_of_scope": validate_services(services, in_scope=False),
        })

    async def update_urls(
        self, client_id: int, contract_id: int, data: ContractUrlsUpdate,
    ) -> Contract:
        contract = await self.get_contract(client_id, contract_id)
        return await self._apply(contract, data.model_dump(exclude_unset=True))

    async def set_active(self, client_id: int, contract_id: int) -> Contract:
        contract = await self.get_contract(client_id, contract_id)
        if contract.status == ContractStatus.DRAFT.value:
            raise BusinessRuleError(
                "Draft contracts cannot be activated. Finalise the draft first.",
            )
        if contract.status == ContractStatus.ACTIVE.value:
            return contract

        await self._archive_active(client_id, keep_id=contract.id)
        contract.status = ContractStatus.ACTIVE.value
        await self.db.flush()
        active = await self._count_active(client_id)
        if active != 1:
            await self.db.rollback()
            raise ConflictError(
                f"Expected exactly one active contract, found {active}",
                "CONTRACT_ACTIVATION_CONFLICT",
            )
        self._audit(AuditAction.CONTRACT_ACTIVATED, contract, {
            "contract_number": contract.contract_number,
        })
        await self.db.commit()
        return contract

    async def delete_contract(self, client_id: int, contract_id: int) -> None:
        contract = await self.get_contract(client_id, contract_id)
        if contract.status != ContractStatus.DRAFT.value:
            raise BusinessRuleError(
                "Only DRAFT contracts can be deleted.",
            )
        self._audit(AuditAction.CONTRACT_DELETED, contract, {
            "contract_number": contract.contract_number,
        })
        await self.db.delete(contract)
        await self.db.commit()

    # ─── Internals ────────────────────────────────────────────────

    async def _apply(self, contract: Contract, changes: dict) -> Contract:
        for name, value in changes.items():
            setattr(contract, name, value)
        if changes:
            self._audit(AuditAction.CONTRACT_UPDATED, contract, changes)
        await self.db.commit()
        return contract

    async def _archive_active(self, client_id: int, keep_id: int | None = None) -> None:
        stmt = (
            update(Contract)
            .where(Contract.client_id == client_id)
            .where(Contract.status == ContractStatus.ACTIVE.value)
        )
        if keep_id is not None:
            stmt = stmt.where(Contract.id != keep_id)
        await self.db.execute(
            stmt.values(status=ContractStatus.ARCHIVED.value),
            execution_options={"synchronize_session": "fetch"},
        )

    async def _count_active(self, client_id: int) -> int:
        return await self.db.scalar(
            select(func.count(Contract.id))
            .where(Contract.client_id == client_id)
            .where(Contract.status == ContractStatus.ACTIVE.value),
        ) or 0

    async def _next_version(self, client_id: int) -> int:
        highest = await self.db.scalar(
            select(func.max(Contract.version)).where(Contract.client_id == client_id),
        )
        return (highest or 0) + 1

    def _audit(self, action: AuditAction, contract: Contract, changes: dict) -> None:
        self.audit.record(
            action, AuditEntity.CONTRACT, contract.id,
            admin_id=self.actor.id if self.actor else None,
            changes={"client_id": contract.client_id, **changes},
        )
