"""Dashboard Service — headline numbers, recent clients and action deadlines.

Invariants:
    - Only ACTIVE clients count towards totals, tiers, revenue and recent clients
    - Upcoming renewals: ACTIVE contracts of ACTIVE clients renewing between today and
      today + window (inclusive)
    - Action deadlines: active-action interactions with a due date, soonest first,
      flagged overdue when the date is before today
"""

from datetime import date, timedelta

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from argan_hr.core.case_rules import is_overdue
from argan_hr.core.domain_types import ClientStatus, ContractStatus, ServiceTier
from argan_hr.models.case import Case, CaseInteraction
from argan_hr.models.client import Client
from argan_hr.models.contract import Contract
from argan_hr.schemas.dashboard import ActionDeadline, DashboardMetrics, RecentClient

_ACTIVE = ClientStatus.ACTIVE.value


class DashboardService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_metrics(self, today: date, renewal_window_days: int) -> DashboardMetrics:
        tier_rows = await self.db.execute(
            select(Client.service_tier, func.count(Client.id))
            .where(Client.status == _ACTIVE)
            .group_by(Client.service_tier),
        )
        tiers = {tier: 0 for tier in ServiceTier}
        for tier, count in tier_rows.all():
            tiers[ServiceTier(tier)] = count

        revenue = await self.db.scalar(
            select(func.coalesce(func.sum(Client.monthly_retainer), 0))
            .where(Client.status == _ACTIVE),
        )
        renewals = await self.db.scalar(
            select(func.count(Contract.id))
            .join(Client, Client.id == Contract.client_id)
            .where(Client.status == _ACTIVE)
            .where(Contract.status == ContractStatus.ACTIVE.value)
            .where(Contract.contract_renewal_date >= today)
            .where(Contract.contract_renewal_date <= today + timedelta(days=renewal_window_days)),
        )
        return DashboardMetrics(
            total_clients=sum(tiers.values()),
            tier_breakdown=tiers,
            total_monthly_revenue=round(float(revenue or 0), 2),
            upcoming_renewals=renewals or 0,
        )

    async def recent_clients(self, limit: int = 5) -> list[RecentClient]:
        result = await self.db.execute(
            select(Client).where(Client.status == _ACTIVE)
            .order_by(Client.created_at.desc(), Client.id.desc()).limit(limit),
        )
        return [
            RecentClient(
                id=c.id, company_name=c.company_name,
                service_tier=c.service_tier, created_at=c.created_at,
            )
            for c in result.scalars().all()
        ]

    async def actions_with_deadlines(
        self, today: date, limit: int | None = None,
    ) -> list[ActionDeadline]:
        query = (
            select(CaseInteraction, Case, Client.company_name)
            .join(Case, Case.id == CaseInteraction.case_id)
            .join(Client, Client.id == Case.client_id)
            .where(CaseInteraction.is_active_action.is_(True))
            .where(CaseInteraction.action_required_by_date.is_not(None))
            .order_by(CaseInteraction.action_required_by_date.asc(), CaseInteraction.id)
        )
        if limit:
            query = query.limit(limit)
        result = await self.db.execute(query)
        return [
            ActionDeadline(
                interaction_id=interaction.id,
                case_id=case.id,
                case_number=case.case_number,
                case_title=case.title,
                client_id=case.client_id,
                company_name=company_name,
                action_required=interaction.action_required,
                action_required_by=interaction.action_required_by,
                action_required_by_date=interaction.action_required_by_date,
                overdue=is_overdue(interaction.action_required_by_date, today),
            )
            for interaction, case, company_name in result.all()
        ]
