"""ORM models. Importing this package registers every table on Base.metadata."""

from argan_hr.models.admin import Admin
from argan_hr.models.audit_log import AuditLog
from argan_hr.models.case import Case, CaseFile, CaseInteraction
from argan_hr.models.client import Client, ClientAddress, ClientAudit, ClientContact
from argan_hr.models.contract import Contract

__all__ = [
    "Admin", "AuditLog", "Case", "CaseFile", "CaseInteraction",
    "Client", "ClientAddress", "ClientAudit", "ClientContact", "Contract",
]
