import pytest

from enums.user_role import UserRole
from utils.logging_setup import mask_sensitive
from utils.permissions import PERMISSIONS, allowed_roles, has_permission, require_permission


def test_fleet_roles_manage_bikes_but_only_admin_deletes():
    for role in (UserRole.ADMIN, UserRole.INDIVIDUAL_OWNER, UserRole.RENTAL_BUSINESS):
        assert has_permission(role, "bikes", "create")
        assert has_permission(role, "bikes", "update")
    assert not has_permission(UserRole.CUSTOMER, "bikes", "create")
    assert not has_permission(UserRole.DELIVERY_PARTNER, "bikes", "update")
    assert allowed_roles("bikes", "delete") == {UserRole.ADMIN}


def test_every_role_may_book():
    for action in ("read", "create", "update", "cancel"):
        assert allowed_roles("bookings", action) == set(UserRole)


def test_customers_are_kept_out_of_operational_booking_views():
    for action in ("read_by_bike", "read_by_status", "read_conflicts", "read_by_date", "transition"):
        assert not has_permission(UserRole.CUSTOMER, "bookings", action)
        assert has_permission(UserRole.DELIVERY_PARTNER, "bookings", action)


def test_each_dashboard_belongs_to_one_role():
    expected = {
        "customer": UserRole.CUSTOMER,
        "admin": UserRole.ADMIN,
        "owner": UserRole.INDIVIDUAL_OWNER,
        "business": UserRole.RENTAL_BUSINESS,
        "partner": UserRole.DELIVERY_PARTNER,
    }
    for action, role in expected.items():
        assert PERMISSIONS[("dashboard", action)] == {role}


def test_unknown_rule_fails_when_dependency_is_declared():
    with pytest.raises(KeyError):
        require_permission("bikes", "paint")


def test_log_masking_hides_tokens_and_passwords():
    line = mask_sensitive("Authorization: Bearer abc.def.ghi password=hunter2 token=xyz")

    assert "abc.def.ghi" not in line
    assert "hunter2" not in line
    assert "xyz" not in line
