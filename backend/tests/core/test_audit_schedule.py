"""External audit scheduling — month arithmetic per interval."""

from datetime import date

import pytest

from argan_hr.core.audit_schedule import add_months, next_audit_due
from argan_hr.core.domain_types import AuditInterval


@pytest.mark.parametrize("interval, expected", [
    (AuditInterval.QUARTERLY, date(2026, 4, 15)),
    (AuditInterval.ANNUALLY, date(2027, 1, 15)),
    (AuditInterval.TWO_YEARS, date(2028, 1, 15)),
    (AuditInterval.THREE_YEARS, date(2029, 1, 15)),
    (AuditInterval.FIVE_YEARS, date(2031, 1, 15)),
])
def test_next_audit_due_per_interval(interval, expected):
    assert next_audit_due(date(2026, 1, 15), interval) == expected


def test_add_months_clamps_to_month_end():
    assert add_months(date(2026, 1, 31), 1) == date(2026, 2, 28)
    assert add_months(date(2027, 11, 30), 3) == date(2028, 2, 29)


def test_interval_accepts_plain_string():
    assert next_audit_due(date(2026, 6, 1), "QUARTERLY") == date(2026, 9, 1)
