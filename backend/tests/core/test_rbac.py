"""RBAC — role hierarchy and the action permission table.

Tests:
    - Higher roles satisfy lower requirements, never the reverse
    - Admin management is SUPER_ADMIN only; data changes need ADMIN
    - Unknown roles and actions are denied
"""

import pytest

from argan_hr.core.domain_types import AdminRole
from argan_hr.core.rbac import (
    can_perform_action, get_user_permissions, has_role,
)


def test_has_role_is_hierarchical():
    assert has_role(AdminRole.SUPER_ADMIN, AdminRole.ADMIN)
    assert has_role(AdminRole.ADMIN, AdminRole.ADMIN)
    assert has_role("ADMIN", "READ_ONLY")
    assert not has_role(AdminRole.READ_ONLY, AdminRole.ADMIN)
    assert not has_role(AdminRole.ADMIN, AdminRole.SUPER_ADMIN)


def test_unknown_role_has_no_rank():
    assert not has_role("GUEST", AdminRole.READ_ONLY)
    assert not can_perform_action("GUEST", "view_clients")


@pytest.mark.parametrize("action", ["create_admin", "update_admin", "delete_admin", "modify_system_settings"])
def test_admin_management_needs_super_admin(action):
    assert can_perform_action(AdminRole.SUPER_ADMIN, action)
    assert not can_perform_action(AdminRole.ADMIN, action)


@pytest.mark.parametrize("action", ["create_client", "manage_contracts", "manage_cases", "view_audit_logs"])
def test_data_changes_need_admin(action):
    assert can_perform_action(AdminRole.ADMIN, action)
    assert not can_perform_action(AdminRole.READ_ONLY, action)


def test_unknown_action_is_denied():
    assert not can_perform_action(AdminRole.SUPER_ADMIN, "launch_rockets")


def test_read_only_permissions_are_view_only():
    assert get_user_permissions(AdminRole.READ_ONLY) == [
        "view_clients", "view_dashboard", "view_cases", "view_documents",
    ]


def test_super_admin_gets_every_action():
    perms = get_user_permissions(AdminRole.SUPER_ADMIN)
    assert "create_admin" in perms
    assert "view_documents" in perms
    assert len(perms) == 14
