"""Onboarding Checklist — flag catalogue, payment-method rules and progress.

Invariants:
    - A flag value of None means "not applicable" and is excluded from progress
    - DIRECT_DEBIT: direct-debit flags pending, recurring invoice N/A
    - INVOICE: recurring invoice pending, direct-debit flags N/A
    - No payment method: all three payment flags N/A
    - percentage = round-half-up(completed / total * 100), 0 when total == 0
"""

import math
from typing import Iterable

from argan_hr.core.domain_types import OnboardingScope, PaymentMethod
from argan_hr.core.errors import ValidationError

CLIENT_ONBOARDING_FIELDS = (
    "welcome_email_sent",
    "direct_debit_setup",
    "direct_debit_confirmed",
    "contract_added_to_xero",
    "recurring_invoice_setup",
    "dpa_signed_gdpr",
    "first_invoice_sent",
    "first_payment_made",
)
CONTRACT_ONBOARDING_FIELDS = (
    "signed_contract_received",
    "contract_uploaded",
    "contract_sent_to_client",
    "payment_terms_agreed",
)
DIRECT_DEBIT_FIELDS = ("direct_debit_setup", "direct_debit_confirmed")
INVOICE_FIELDS = ("recurring_invoice_setup",)


def payment_method_defaults(method: PaymentMethod | str | None) -> dict[str, bool | None]:
    """Initial payment-dependent flags for a new client."""
    method = PaymentMethod(method) if method else None
    dd = False if method == PaymentMethod.DIRECT_DEBIT else None
    invoice = False if method == PaymentMethod.INVOICE else None
    return {
        "direct_debit_setup": dd,
        "direct_debit_confirmed": dd,
        "recurring_invoice_setup": invoice,
    }


def reapply_payment_method(
    current: dict[str, bool | None], method: PaymentMethod | str | None,
) -> dict[str, bool | None]:
    """Payment flags after a method change; progress on still-relevant flags is kept."""
    result = {}
    for name, default in payment_method_defaults(method).items():
        if default is None:
            result[name] = None
        else:
            existing = current.get(name)
            result[name] = existing if existing is not None else False
    return result


def compute_progress(flags: Iterable[bool | None]) -> dict:
    applicable = [f for f in flags if f is not None]
    total = len(applicable)
    completed = sum(1 for f in applicable if f)
    percentage = math.floor(completed * 100 / total + 0.5) if total else 0
    return {"completed": completed, "total": total, "percentage": percentage}


def fields_for_scope(scope: OnboardingScope | str) -> tuple[str, ...]:
    if OnboardingScope(scope) is OnboardingScope.CLIENT:
        return CLIENT_ONBOARDING_FIELDS
    return CONTRACT_ONBOARDING_FIELDS


def check_onboarding_field(scope: OnboardingScope | str, field: str) -> None:
    if field not in fields_for_scope(scope):
        raise ValidationError(
            f"Unknown {OnboardingScope(scope).value} onboarding field: {field}",
            field="field",
        )
