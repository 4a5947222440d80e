"""Client Schemas — create/update bodies, nested records and client views.

Invariants:
    - ClientCreate keeps required business fields optional at the type level so
      ClientService can report every missing field in one FieldValidationError
    - ClientUpdate is partial: only fields present in the body are applied
    - external audits may arrive as a list (`audits`) or the legacy single triple
      (audited_by / audit_interval / next_audit_date)

Design Decisions:
    - Nested contact/address inputs reused by the per-record endpoints
"""

from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from argan_hr.core.domain_types import (
    AddressType, AuditInterval, ClientStatus, ClientType, ContactType,
    PaymentMethod, ServiceTier,
)
from argan_hr.schemas.common import Pagination
from argan_hr.schemas.contract import ContractResponse, InitialContractTerms
from argan_hr.schemas.onboarding import OnboardingChecklist


# ─── Contacts ────────────────────────────────────────────────────

class ContactInput(BaseModel):
    type: ContactType = ContactType.SERVICE
    name: str = Field(min_length=1, max_length=200)
    email: str = Field(min_length=1, max_length=255)
    phone: str | None = Field(None, max_length=50)
    role: str | None = Field(None, max_length=100)
    description: str | None = None


class ContactUpdate(BaseModel):
    type: ContactType | None = None
    name: str | None = Field(None, min_length=1, max_length=200)
    email: str | None = Field(None, min_length=1, max_length=255)
    phone: str | None = Field(None, max_length=50)
    role: str | None = Field(None, max_length=100)
    description: str | None = None


class ContactResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    client_id: int
    type: ContactType
    name: str
    email: str
    phone: str | None = None
    role: str | None = None
    description: str | None = None


# ─── Addresses ───────────────────────────────────────────────────

class AddressInput(BaseModel):
    type: AddressType = AddressType.SERVICE
    address_line_1: str = Field(min_length=1, max_length=255)
    address_line_2: str | None = Field(None, max_length=255)
    city: str = Field(min_length=1, max_length=100)
    postcode: str = Field(min_length=1, max_length=20)
    country: str = Field("United Kingdom", min_length=1, max_length=100)
    description: str | None = None


class AddressUpdate(BaseModel):
    type: AddressType | None = None
    address_line_1: str | None = Field(None, min_length=1, max_length=255)
    address_line_2: str | None = Field(None, max_length=255)
    city: str | None = Field(None, min_length=1, max_length=100)
    postcode: str | None = Field(None, min_length=1, max_length=20)
    country: str | None = Field(None, min_length=1, max_length=100)
    description: str | None = None


class AddressResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    client_id: int
    type: AddressType
    address_line_1: str
    address_line_2: str | None = None
    city: str
    postcode: str
    country: str
    description: str | None = None


# ─── External audits ─────────────────────────────────────────────

class AuditInput(BaseModel):
    audited_by: str = Field(min_length=1, max_length=200)
    interval: AuditInterval
    next_audit_date: date


class AuditUpdate(BaseModel):
    audited_by: str | None = Field(None, min_length=1, max_length=200)
    interval: AuditInterval | None = None
    next_audit_date: date | None = None


class AuditResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    client_id: int
    audited_by: str
    interval: AuditInterval
    next_audit_date: date


# ─── Clients ─────────────────────────────────────────────────────

class ClientCreate(BaseModel):
    company_name: str | None = Field(None, max_length=255)
    client_type: ClientType = ClientType.COMPANY
    business_id: str | None = Field(None, max_length=100)
    sector: str | None = Field(None, max_length=100)
    service_tier: ServiceTier | None = None
    monthly_retainer: float | None = Field(None, ge=0)
    contact_name: str | None = Field(None, max_length=200)
    contact_email: str | None = Field(None, max_length=255)
    contact_phone: str | None = Field(None, max_length=50)
    secondary_contact: ContactInput | None = None
    invoice_contact: ContactInput | None = None
    service_address: AddressInput | None = None
    invoice_address: AddressInput | None = None
    external_audit: bool = False
    audits: list[AuditInput] = Field(default_factory=list)
    audited_by: str | None = Field(None, max_length=200)
    audit_interval: AuditInterval | None = None
    next_audit_date: date | None = None
    payment_method: PaymentMethod | None = None
    last_price_increase: date | None = None
    contract: InitialContractTerms | None = None


class ClientUpdate(BaseModel):
    company_name: str | None = Field(None, max_length=255)
    client_type: ClientType | None = None
    business_id: str | None = Field(None, max_length=100)
    sector: str | None = Field(None, max_length=100)
    service_tier: ServiceTier | None = None
    monthly_retainer: float | None = Field(None, ge=0)
    contact_name: str | None = Field(None, max_length=200)
    contact_email: str | None = Field(None, max_length=255)
    contact_phone: str | None = Field(None, max_length=50)
    external_audit: bool | None = None
    payment_method: PaymentMethod | None = None
    last_price_increase: date | None = None


class StatusToggleRequest(BaseModel):
    target_status: Literal["INACTIVE", "PENDING"] = "INACTIVE"


class ClientSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    company_name: str
    client_type: ClientType
    sector: str | None = None
    service_tier: ServiceTier
    monthly_retainer: float | None = None
    contact_name: str
    contact_email: str
    status: ClientStatus
    payment_method: PaymentMethod | None = None
    created_at: datetime


class ClientDetail(ClientSummary):
    business_id: str | None = None
    contact_phone: str | None = None
    external_audit: bool
    last_price_increase: date | None = None
    updated_at: datetime
    contacts: list[ContactResponse]
    addresses: list[AddressResponse]
    audits: list[AuditResponse]
    contracts: list[ContractResponse] = Field(default_factory=list)
    onboarding: OnboardingChecklist | None = None


class ClientListResponse(BaseModel):
    clients: list[ClientSummary]
    pagination: Pagination
