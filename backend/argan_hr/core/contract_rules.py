"""Contract Rules — numbering, service catalogue, date checks and renewal urgency.

Invariants:
    - Contract number format: CON-{batch}-{position:03}-{sequence:03}
      batch = (client_id - 1) // 999 + 1, position = (client_id - 1) % 999 + 1
    - Renewal date strictly after start date
    - Services must come from the catalogue for their scope
    - Renewal urgency: NONE (no date), URGENT (<= 30 days, overdue included),
      WARNING (<= 90 days), SAFE otherwise

Design Decisions:
    - Pure functions over dates passed in: tests never depend on the wall clock
    - Status ordering expressed as a rank table reused by the SQL ORDER BY
"""

from datetime import date, timedelta

from argan_hr.core.domain_types import ContractStatus, RenewalUrgency
from argan_hr.core.errors import FieldValidationError, ValidationError

AVAILABLE_SERVICES_IN_SCOPE = (
    "HR Admin Support",
    "Employment Law Support",
    "Employee Support",
    "Auto Policy Review and Updates",
    "Service Analytics",
)
AVAILABLE_SERVICES_OUT_OF_SCOPE = (
    "Case Management",
    "On Site Support",
    "External Audit Reviews",
)
DEFAULT_SERVICES_IN_SCOPE = list(AVAILABLE_SERVICES_IN_SCOPE)
DEFAULT_SERVICES_OUT_OF_SCOPE: list[str] = []

DEFAULT_CONTRACT_TERM_DAYS = 365
URGENT_RENEWAL_DAYS = 30
WARNING_RENEWAL_DAYS = 90

# ACTIVE first, then DRAFT, then ARCHIVED
CONTRACT_STATUS_ORDER: dict[str, int] = {
    ContractStatus.ACTIVE.value: 0,
    ContractStatus.DRAFT.value: 1,
    ContractStatus.ARCHIVED.value: 2,
}


def format_contract_number(client_id: int, sequence: int) -> str:
    batch = (client_id - 1) // 999 + 1
    position = (client_id - 1) % 999 + 1
    return f"CON-{batch}-{position:03d}-{sequence:03d}"


def default_renewal_date(start: date) -> date:
    return start + timedelta(days=DEFAULT_CONTRACT_TERM_DAYS)


def check_date_order(start: date | None, renewal: date | None) -> None:
    if start and renewal and renewal <= start:
        raise ValidationError(
            "Renewal date must be after start date", field="contract_renewal_date",
        )


def validate_services(services: list[str], *, in_scope: bool) -> list[str]:
    """Reject unknown services and drop duplicates, keeping first-seen order."""
    catalogue = AVAILABLE_SERVICES_IN_SCOPE if in_scope else AVAILABLE_SERVICES_OUT_OF_SCOPE
    field = "services_in_scope" if in_scope else "services_out_of_scope"
    unknown = [s for s in services if s not in catalogue]
    if unknown:
        raise FieldValidationError([
            {"field": field, "message": f"Unknown service: {name}"} for name in unknown
        ])
    return list(dict.fromkeys(services))


def days_until(target: date, today: date) -> int:
    return (target - today).days


def renewal_urgency(renewal_date: date | None, today: date) -> RenewalUrgency:
    if renewal_date is None:
        return RenewalUrgency.NONE
    days = days_until(renewal_date, today)
    if days <= URGENT_RENEWAL_DAYS:
        return RenewalUrgency.URGENT
    if days <= WARNING_RENEWAL_DAYS:
        return RenewalUrgency.WARNING
    return RenewalUrgency.SAFE
