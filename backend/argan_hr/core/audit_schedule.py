"""External audit scheduling — next due date from an audit interval."""

import calendar
from datetime import date

from argan_hr.core.domain_types import AuditInterval

INTERVAL_MONTHS: dict[AuditInterval, int] = {
    AuditInterval.QUARTERLY: 3,
    AuditInterval.ANNUALLY: 12,
    AuditInterval.TWO_YEARS: 24,
    AuditInterval.THREE_YEARS: 36,
    AuditInterval.FIVE_YEARS: 60,
}


def add_months(start: date, months: int) -> date:
    """Calendar month arithmetic; day clamped to the target month's length."""
    index = start.month - 1 + months
    year, month = start.year + index // 12, index % 12 + 1
    day = min(start.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def next_audit_due(last_audit: date, interval: AuditInterval | str) -> date:
    return add_months(last_audit, INTERVAL_MONTHS[AuditInterval(interval)])
