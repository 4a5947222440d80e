"""Contract rules — numbering, date order, service catalogue, renewal urgency."""

from datetime import date, timedelta

import pytest

from argan_hr.core.contract_rules import (
    check_date_order, default_renewal_date, format_contract_number,
    renewal_urgency, validate_services,
)
from argan_hr.core.domain_types import RenewalUrgency
from argan_hr.core.errors import FieldValidationError, ValidationError

TODAY = date(2026, 3, 1)


@pytest.mark.parametrize("client_id, seq, expected", [
    (1, 1, "CON-1-001-001"),
    (42, 3, "CON-1-042-003"),
    (999, 1, "CON-1-999-001"),
    (1000, 1, "CON-2-001-001"),
    (1998, 12, "CON-2-999-012"),
])
def test_contract_number_batches_every_999_clients(client_id, seq, expected):
    assert format_contract_number(client_id, seq) == expected


def test_default_renewal_is_one_year_later():
    assert default_renewal_date(date(2026, 1, 1)) == date(2027, 1, 1)


def test_renewal_must_follow_start():
    check_date_order(date(2026, 1, 1), date(2026, 1, 2))
    with pytest.raises(ValidationError) as exc:
        check_date_order(date(2026, 1, 1), date(2026, 1, 1))
    assert exc.value.field == "contract_renewal_date"


def test_date_order_skipped_when_a_date_is_missing():
    check_date_order(None, date(2026, 1, 1))


def test_validate_services_dedupes_in_order():
    services = ["Employee Support", "HR Admin Support", "Employee Support"]
    assert validate_services(services, in_scope=True) == ["Employee Support", "HR Admin Support"]


def test_validate_services_rejects_wrong_scope():
    with pytest.raises(FieldValidationError) as exc:
        validate_services(["Case Management"], in_scope=True)
    assert exc.value.errors[0]["field"] == "services_in_scope"
    assert validate_services(["Case Management"], in_scope=False) == ["Case Management"]


@pytest.mark.parametrize("days, expected", [
    (-5, RenewalUrgency.URGENT),
    (0, RenewalUrgency.URGENT),
    (30, RenewalUrgency.URGENT),
    (31, RenewalUrgency.WARNING),
    (90, RenewalUrgency.WARNING),
    (91, RenewalUrgency.SAFE),
])
def test_renewal_urgency_thresholds(days, expected):
    assert renewal_urgency(TODAY + timedelta(days=days), TODAY) is expected


def test_renewal_urgency_without_date():
    assert renewal_urgency(None, TODAY) is RenewalUrgency.NONE
