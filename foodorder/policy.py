"""
Access policy for the food ordering service.

Every authorization decision in the service is made here. The functions are
pure: they look only at the role, location and user id they are given, and
anything not explicitly allowed is denied.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Role(str, Enum):
    """User roles, from most to least privileged."""
    ADMIN = "Admin"
    MANAGER = "Manager"
    MEMBER = "Member"


class Location(str, Enum):
    """Locations a user can belong to."""
    INDIA = "India"
    AMERICA = "America"
    WAKANDA = "Wakanda"


ROLES = tuple(role.value for role in Role)
LOCATIONS = tuple(location.value for location in Location)

MANAGEMENT_ROLES = frozenset({Role.ADMIN.value, Role.MANAGER.value})

# Members outside these locations may browse the catalog but not order or pay
CART_LOCATIONS = frozenset({Location.INDIA.value})


@dataclass(frozen=True)
class OrderScope:
    """
    The set of orders a caller may list or modify.

    Attributes:
        owner_id: Restrict to orders owned by this user, or None for all orders
    """
    owner_id: Optional[int] = None

    @property
    def is_all(self) -> bool:
        return self.owner_id is None


ALL_ORDERS = OrderScope()


def _value(member) -> Optional[str]:
    # Accept both enum members and the raw strings carried in tokens
    return member.value if isinstance(member, Enum) else member


def is_manager(role) -> bool:
    """True for Admin and Manager."""
    return _value(role) in MANAGEMENT_ROLES


def can_access_cart_and_payment(role, location) -> bool:
    """
    Decide whether a caller may place orders or change payment details.

    Admins and Managers always may. Members may only when located in India;
    Members in America or Wakanda are denied, as is any unknown role.

    Args:
        role: Caller's role
        location: Caller's location

    Returns:
        True if cart and payment operations are allowed
    """
    if is_manager(role):
        return True
    if _value(role) == Role.MEMBER.value:
        return _value(location) in CART_LOCATIONS
    return False


def can_manage_catalog(role) -> bool:
    """Only Admins and Managers may add or edit food items."""
    return is_manager(role)


def can_manage_order_status(role) -> bool:
    """Only Admins and Managers may change an order's status."""
    return is_manager(role)


def order_visibility_scope(role, user_id: int) -> OrderScope:
    """
    Compute which orders a caller may see.

    Args:
        role: Caller's role
        user_id: Caller's user id

    Returns:
        ALL_ORDERS for Admins and Managers, otherwise a scope limited to the
        caller's own orders
    """
    if is_manager(role):
        return ALL_ORDERS
    return OrderScope(owner_id=user_id)


def permissions_for(role, location) -> dict:
    """
    Advisory permission set for clients that gate their UI.

    The server still enforces every decision; this only mirrors it.
    """
    return {
        "can_access_cart_and_payment": can_access_cart_and_payment(role, location),
        "can_manage_catalog": can_manage_catalog(role),
        "can_manage_order_status": can_manage_order_status(role),
        "can_view_all_orders": order_visibility_scope(role, 0).is_all,
    }
