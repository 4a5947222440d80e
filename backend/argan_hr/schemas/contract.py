"""Contract Schemas — service terms, create/update bodies and contract views.

Invariants:
    - ContractTerms fields are all optional: the same model carries partial updates
    - Rates and hours are non-negative
    - renewal_urgency is derived from contract_renewal_date and today's date

Design Decisions:
    - computed_field for renewal_urgency: every contract view carries it without
      routes having to remember to add it
"""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field, computed_field

from argan_hr.core import clock
from argan_hr.core.contract_rules import renewal_urgency
from argan_hr.core.domain_types import (
    ContractStatus, HoursPeriod, RateUnit, RenewalUrgency,
)


class ContractTerms(BaseModel):
    inclusive_hours_hr_admin: float | None = Field(None, ge=0)
    inclusive_hours_hr_admin_period: HoursPeriod | None = None
    inclusive_hours_employment_law: float | None = Field(None, ge=0)
    inclusive_hours_employment_law_period: HoursPeriod | None = None
    services_in_scope: list[str] | None = None
    services_out_of_scope: list[str] | None = None
    hr_admin_rate: float | None = Field(None, ge=0)
    hr_admin_rate_unit: RateUnit | None = None
    hr_admin_rate_not_needed: bool | None = None
    employment_law_rate: float | None = Field(None, ge=0)
    employment_law_rate_unit: RateUnit | None = None
    employment_law_rate_not_needed: bool | None = None
    mileage_rate: float | None = Field(None, ge=0)
    mileage_rate_not_needed: bool | None = None
    overnight_rate: float | None = Field(None, ge=0)
    overnight_rate_not_needed: bool | None = None


class ContractCreate(ContractTerms):
    contract_start_date: date
    contract_renewal_date: date
    status: ContractStatus = ContractStatus.ACTIVE
    replace_existing: bool = False
    doc_url: str | None = Field(None, max_length=1000)
    signed_contract_url: str | None = Field(None, max_length=1000)


class InitialContractTerms(ContractTerms):
    """Terms for the first contract created alongside a new client."""
    contract_start_date: date | None = None
    contract_renewal_date: date | None = None


class ContractUpdate(ContractTerms):
    contract_start_date: date | None = None
    contract_renewal_date: date | None = None
    doc_url: str | None = Field(None, max_length=1000)
    signed_contract_url: str | None = Field(None, max_length=1000)


class ServicesUpdate(BaseModel):
    services: list[str]


class ContractUrlsUpdate(BaseModel):
    doc_url: str | None = Field(None, max_length=1000)
    signed_contract_url: str | None = Field(None, max_length=1000)


class ContractResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    client_id: int
    contract_number: str
    version: int
    status: ContractStatus
    contract_start_date: date
    contract_renewal_date: date
    doc_url: str | None = None
    signed_contract_url: str | None = None
    inclusive_hours_hr_admin: float | None = None
    inclusive_hours_hr_admin_period: HoursPeriod
    inclusive_hours_employment_law: float | None = None
    inclusive_hours_employment_law_period: HoursPeriod
    services_in_scope: list[str]
    services_out_of_scope: list[str]
    hr_admin_rate: float | None = None
    hr_admin_rate_unit: RateUnit
    hr_admin_rate_not_needed: bool
    employment_law_rate: float | None = None
    employment_law_rate_unit: RateUnit
    employment_law_rate_not_needed: bool
    mileage_rate: float | None = None
    mileage_rate_not_needed: bool
    overnight_rate: float | None = None
    overnight_rate_not_needed: bool
    signed_contract_received: bool
    contract_uploaded: bool
    contract_sent_to_client: bool
    payment_terms_agreed: bool
    created_at: datetime
    updated_at: datetime

    @computed_field
    @property
    def renewal_urgency(self) -> RenewalUrgency:
        return renewal_urgency(self.contract_renewal_date, clock.today())


class ServiceCatalogResponse(BaseModel):
    in_scope: list[str]
    out_of_scope: list[str]
    default_in_scope: list[str]
    default_out_of_scope: list[str]


class ActiveContractCheck(BaseModel):
    has_active_contract: bool
    contract: ContractResponse | None = None
