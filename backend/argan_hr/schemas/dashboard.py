"""Dashboard Schemas — headline metrics, recent clients and action deadlines."""

from datetime import date, datetime

from pydantic import BaseModel

from argan_hr.core.domain_types import ActionParty, ServiceTier


class DashboardMetrics(BaseModel):
    total_clients: int
    tier_breakdown: dict[ServiceTier, int]
    total_monthly_revenue: float
    upcoming_renewals: int


class RecentClient(BaseModel):
    id: int
    company_name: str
    service_tier: ServiceTier
    created_at: datetime


class ActionDeadline(BaseModel):
    interaction_id: int
    case_id: int
    case_number: str
    case_title: str
    client_id: int
    company_name: str
    action_required: str | None = None
    action_required_by: ActionParty | None = None
    action_required_by_date: date
    overdue: bool
