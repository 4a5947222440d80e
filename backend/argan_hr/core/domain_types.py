"""Domain Types — enums and identity types shared by models, services and schemas.

Invariants:
    - Every stored status/kind column holds the value of one of these enums
    - Enum values are uppercase strings, identical to what the API accepts and returns

Design Decisions:
    - str Enums: serialize to JSON and compare with raw column values without converters
    - NewType ids: zero runtime cost, make service signatures self-describing
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

AdminId = NewType("AdminId", UUID)
ClientId = NewType("ClientId", int)
ContractId = NewType("ContractId", int)
CaseId = NewType("CaseId", int)


# ─── Admins ──────────────────────────────────────────────────────

class AdminRole(str, Enum):
    """Admin roles, highest first. Ranking lives in core/rbac.py."""
    SUPER_ADMIN = "SUPER_ADMIN"
    ADMIN = "ADMIN"
    READ_ONLY = "READ_ONLY"


# ─── Clients ─────────────────────────────────────────────────────

class ClientStatus(str, Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    PENDING = "PENDING"


class ClientType(str, Enum):
    COMPANY = "COMPANY"
    INDIVIDUAL = "INDIVIDUAL"


class ServiceTier(str, Enum):
    TIER_1 = "TIER_1"
    DOC_ONLY = "DOC_ONLY"
    AD_HOC = "AD_HOC"


class PaymentMethod(str, Enum):
    INVOICE = "INVOICE"
    DIRECT_DEBIT = "DIRECT_DEBIT"


class ContactType(str, Enum):
    SERVICE = "SERVICE"
    INVOICE = "INVOICE"


class AddressType(str, Enum):
    SERVICE = "SERVICE"
    INVOICE = "INVOICE"


class AuditInterval(str, Enum):
    """How often a client's external audit recurs."""
    QUARTERLY = "QUARTERLY"
    ANNUALLY = "ANNUALLY"
    TWO_YEARS = "TWO_YEARS"
    THREE_YEARS = "THREE_YEARS"
    FIVE_YEARS = "FIVE_YEARS"


# ─── Contracts ───────────────────────────────────────────────────

class ContractStatus(str, Enum):
    ACTIVE = "ACTIVE"
    DRAFT = "DRAFT"
    ARCHIVED = "ARCHIVED"


class RateUnit(str, Enum):
    HOURLY = "HOURLY"
    DAILY = "DAILY"


class HoursPeriod(str, Enum):
    WEEKLY = "WEEKLY"
    MONTHLY = "MONTHLY"
    QUARTERLY = "QUARTERLY"
    YEARLY = "YEARLY"


class RenewalUrgency(str, Enum):
    NONE = "NONE"
    URGENT = "URGENT"
    WARNING = "WARNING"
    SAFE = "SAFE"


# ─── Cases ───────────────────────────────────────────────────────

class CaseStatus(str, Enum):
    OPEN = "OPEN"
    AWAITING = "AWAITING"
    CLOSED = "CLOSED"


class ActionParty(str, Enum):
    """Who has to act next on a case or interaction."""
    ARGAN = "ARGAN"
    CLIENT = "CLIENT"
    CONTRACTOR = "CONTRACTOR"
    EMPLOYEE = "EMPLOYEE"
    THIRD_PARTY = "THIRD_PARTY"


# ─── Onboarding ──────────────────────────────────────────────────

class OnboardingScope(str, Enum):
    """Which record an onboarding flag lives on."""
    CLIENT = "client"
    CONTRACT = "contract"


# ─── Audit Trail ─────────────────────────────────────────────────

class AuditAction(str, Enum):
    LOGIN_SUCCESS = "LOGIN_SUCCESS"
    LOGIN_FAILED = "LOGIN_FAILED"
    LOGOUT = "LOGOUT"
    ADMIN_CREATED = "ADMIN_CREATED"
    ADMIN_UPDATED = "ADMIN_UPDATED"
    ADMIN_DEACTIVATED = "ADMIN_DEACTIVATED"
    ADMIN_REACTIVATED = "ADMIN_REACTIVATED"
    CLIENT_CREATED = "CLIENT_CREATED"
    CLIENT_UPDATED = "CLIENT_UPDATED"
    CLIENT_ARCHIVED = "CLIENT_ARCHIVED"
    CLIENT_REACTIVATED = "CLIENT_REACTIVATED"
    CONTRACT_CREATED = "CONTRACT_CREATED"
    CONTRACT_UPDATED = "CONTRACT_UPDATED"
    CONTRACT_ACTIVATED = "CONTRACT_ACTIVATED"
    CONTRACT_DELETED = "CONTRACT_DELETED"
    ONBOARDING_UPDATED = "ONBOARDING_UPDATED"
    CASE_CREATED = "CASE_CREATED"
    CASE_UPDATED = "CASE_UPDATED"
    CASE_DELETED = "CASE_DELETED"


class AuditEntity(str, Enum):
    AUTH = "AUTH"
    ADMIN = "ADMIN"
    CLIENT = "CLIENT"
    CONTRACT = "CONTRACT"
    CASE = "CASE"
