"""Case Rules — per-client case references and action deadlines.

Invariants:
    - Case references are CASE-0001, CASE-0002, ... per client
    - The next reference follows the client's latest reference, not the row count
    - An action is overdue only when its due date is strictly before today
"""

import re
from datetime import date

CASE_NUMBER_PREFIX = "CASE-"
_CASE_NUMBER_RE = re.compile(r"^CASE-(\d+)$")


def format_case_number(sequence: int) -> str:
    return f"{CASE_NUMBER_PREFIX}{sequence:04d}"


def next_case_number(last_case_number: str | None) -> str:
    """Reference for the next case given the client's latest one (None for the first)."""
    if not last_case_number:
        return format_case_number(1)
    match = _CASE_NUMBER_RE.match(last_case_number)
    last = int(match.group(1)) if match else 0
    return format_case_number(last + 1)


def is_overdue(due: date | None, today: date) -> bool:
    return due is not None and due < today
