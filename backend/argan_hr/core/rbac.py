"""Role-Based Access Control — pure permission checks, no IO.

Invariants:
    - Role hierarchy: SUPER_ADMIN (3) > ADMIN (2) > READ_ONLY (1)
    - has_role() is hierarchical: a higher role satisfies any lower requirement
    - Unknown actions and unknown roles are always denied

Design Decisions:
    - Action table maps each action to its minimum role instead of listing roles
      per action: adding a role never requires touching the table (ADR: single source)
"""

from argan_hr.core.domain_types import AdminRole

ROLE_RANK: dict[AdminRole, int] = {
    AdminRole.SUPER_ADMIN: 3,
    AdminRole.ADMIN: 2,
    AdminRole.READ_ONLY: 1,
}

ACTION_MIN_ROLE: dict[str, AdminRole] = {
    # Admin management
    "create_admin": AdminRole.SUPER_ADMIN,
    "update_admin": AdminRole.SUPER_ADMIN,
    "delete_admin": AdminRole.SUPER_ADMIN,
    "modify_system_settings": AdminRole.SUPER_ADMIN,
    # Data management
    "create_client": AdminRole.ADMIN,
    "update_client": AdminRole.ADMIN,
    "delete_client": AdminRole.ADMIN,
    "manage_contracts": AdminRole.ADMIN,
    "manage_cases": AdminRole.ADMIN,
    "view_audit_logs": AdminRole.ADMIN,
    # Read access
    "view_clients": AdminRole.READ_ONLY,
    "view_dashboard": AdminRole.READ_ONLY,
    "view_cases": AdminRole.READ_ONLY,
    "view_documents": AdminRole.READ_ONLY,
}


def _rank(role: AdminRole | str) -> int:
    try:
        return ROLE_RANK[AdminRole(role)]
    except ValueError:
        return 0


def has_role(user_role: AdminRole | str, required_role: AdminRole | str) -> bool:
    """True when user_role is at least required_role."""
    user = _rank(user_role)
    return user > 0 and user >= _rank(required_role)


def can_perform_action(role: AdminRole | str, action: str) -> bool:
    required = ACTION_MIN_ROLE.get(action)
    if required is None:
        return False
    return has_role(role, required)


def get_user_permissions(role: AdminRole | str) -> list[str]:
    """All actions granted to role, in table order."""
    return [action for action in ACTION_MIN_ROLE if can_perform_action(role, action)]
