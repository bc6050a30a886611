"""
Tests for the access policy.
"""
import itertools

import pytest

from foodorder import policy
from foodorder.policy import ALL_ORDERS, Location, OrderScope, Role

ALL_COMBINATIONS = list(itertools.product(policy.ROLES, policy.LOCATIONS))


class TestCartAndPaymentAccess:
    """Cart and payment access depends on role and location."""

    @pytest.mark.parametrize("role,location", ALL_COMBINATIONS)
    def test_matrix(self, role, location):
        expected = role in ("Admin", "Manager") or (role == "Member" and location == "India")
        assert policy.can_access_cart_and_payment(role, location) is expected

    def test_member_outside_india_denied(self):
        assert policy.can_access_cart_and_payment("Member", "America") is False
        assert policy.can_access_cart_and_payment("Member", "Wakanda") is False

    def test_accepts_enum_members(self):
        assert policy.can_access_cart_and_payment(Role.MEMBER, Location.INDIA) is True
        assert policy.can_access_cart_and_payment(Role.MEMBER, Location.WAKANDA) is False

    @pytest.mark.parametrize("role", ["SuperAdmin", "", None, "admin"])
    def test_unknown_role_denied(self, role):
        assert policy.can_access_cart_and_payment(role, "India") is False

    def test_member_unknown_location_denied(self):
        assert policy.can_access_cart_and_payment("Member", "Narnia") is False


class TestManagementPermissions:
    """Catalog and order status management is for Admins and Managers."""

    @pytest.mark.parametrize("role,allowed", [
        ("Admin", True),
        ("Manager", True),
        ("Member", False),
        ("SuperAdmin", False),
    ])
    def test_catalog_and_status(self, role, allowed):
        assert policy.can_manage_catalog(role) is allowed
        assert policy.can_manage_order_status(role) is allowed


class TestOrderVisibility:
    """Which orders a caller may see."""

    @pytest.mark.parametrize("role", ["Admin", "Manager"])
    def test_management_sees_all(self, role):
        scope = policy.order_visibility_scope(role, 7)
        assert scope == ALL_ORDERS
        assert scope.is_all

    def test_member_sees_own(self):
        scope = policy.order_visibility_scope("Member", 7)
        assert scope == OrderScope(owner_id=7)
        assert not scope.is_all

    def test_unknown_role_limited_to_own(self):
        assert policy.order_visibility_scope("Guest", 3) == OrderScope(owner_id=3)

    def test_decisions_are_repeatable(self):
        first = [policy.permissions_for(role, location) for role, location in ALL_COMBINATIONS]
        second = [policy.permissions_for(role, location) for role, location in ALL_COMBINATIONS]
        assert first == second


class TestPermissionsFor:
    """The advisory permission set mirrors the enforced decisions."""

    def test_member_in_wakanda(self):
        assert policy.permissions_for("Member", "Wakanda") == {
            "can_access_cart_and_payment": False,
            "can_manage_catalog": False,
            "can_manage_order_status": False,
            "can_view_all_orders": False,
        }

    def test_manager_in_america(self):
        assert policy.permissions_for("Manager", "America") == {
            "can_access_cart_and_payment": True,
            "can_manage_catalog": True,
            "can_manage_order_status": True,
            "can_view_all_orders": True,
        }
