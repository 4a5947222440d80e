"""Onboarding Service — per-client checklist view and single-flag updates.

Invariants:
    - Client flags live on the client row; contract flags on the ACTIVE contract only
    - A client flag that is N/A for the payment method (None) cannot be set
    - Contract-scope updates without an active contract raise ResourceNotFoundError
    - Progress counts applicable client flags plus the active contract's flags
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from argan_hr.core.domain_types import AuditAction, AuditEntity, OnboardingScope
from argan_hr.core.errors import BusinessRuleError, ResourceNotFoundError
from argan_hr.core.onboarding import (
    CLIENT_ONBOARDING_FIELDS, CONTRACT_ONBOARDING_FIELDS,
    check_onboarding_field, compute_progress,
)
from argan_hr.models.admin import Admin
from argan_hr.models.client import Client
from argan_hr.models.contract import Contract
from argan_hr.schemas.onboarding import OnboardingChecklist
from argan_hr.services.audit_log import AuditLogService, RequestMeta
from argan_hr.services.contract_service import ContractService

logger = logging.getLogger(__name__)


def build_checklist(client: Client, contract: Contract | None) -> OnboardingChecklist:
    client_flags = {name: getattr(client, name) for name in CLIENT_ONBOARDING_FIELDS}
    contract_flags = (
        {name: bool(getattr(contract, name)) for name in CONTRACT_ONBOARDING_FIELDS}
        if contract else None
    )
    flags = list(client_flags.values()) + list((contract_flags or {}).values())
    return OnboardingChecklist(
        client_id=client.id,
        payment_method=client.payment_method,
        client=client_flags,
        contract_id=contract.id if contract else None,
        contract=contract_flags,
        progress=compute_progress(flags),
    )


class OnboardingService:
    def __init__(
        self, db: AsyncSession, actor: Admin | None = None,
        meta: RequestMeta | None = None,
    ):
        self.db = db
        self.actor = actor
        self.audit = AuditLogService(db, meta)
        self.contracts = ContractService(db)

    async def get_checklist(self, client_id: int) -> OnboardingChecklist:
        client = await self._get_client(client_id)
        contract = await self.contracts.get_active_contract(client_id)
        return build_checklist(client, contract)

    async def update_flag(
        self, client_id: int, scope: OnboardingScope, field: str, value: bool,
    ) -> OnboardingChecklist:
        check_onboarding_field(scope, field)
        client = await self._get_client(client_id)
        contract = await self.contracts.get_active_contract(client_id)

        if scope is OnboardingScope.CLIENT:
            if getattr(client, field) is None:
                raise BusinessRuleError(
                    f"'{field}' does not apply to this client's payment method",
                )
            setattr(client, field, value)
            entity_id = client.id
        else:
            if contract is None:
                raise ResourceNotFoundError("Active contract for client", client_id)
            setattr(contract, field, value)
            entity_id = contract.id

        self.audit.record(
            AuditAction.ONBOARDING_UPDATED, AuditEntity.CLIENT, client.id,
            admin_id=self.actor.id if self.actor else None,
            changes={"scope": scope.value, "field": field, "value": value, "record_id": entity_id},
        )
        await self.db.commit()
        logger.info(f"Onboarding {scope.value}.{field} = {value}", extra={"client_id": client_id})
        return build_checklist(client, contract)

    async def _get_client(self, client_id: int) -> Client:
        client = await self.db.get(Client, client_id)
        if not client:
            raise ResourceNotFoundError("Client", client_id)
        return client
