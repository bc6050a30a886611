"""
Business-rule validation for order requests.

Checks that go beyond schema validation and must hold no matter how the
workflow is called.
"""
from decimal import Decimal
from typing import Iterable, Optional, Tuple

from . import schemas


def validate_order_lines(items: Iterable[schemas.OrderLine]) -> Tuple[bool, str]:
    """
    Validate requested order lines.

    Args:
        items: Requested lines

    Returns:
        Tuple of (is_valid, error_message)
    """
    items = list(items or [])
    if not items:
        return False, "Order items are required"

    for item in items:
        if item.quantity < 1:
            return False, f"Item {item.food_item_id}: quantity must be at least 1"
        if item.quantity > schemas.MAX_QUANTITY:
            return False, f"Item {item.food_item_id}: quantity exceeds maximum ({schemas.MAX_QUANTITY})"

    return True, ""


def validate_label(value: Optional[str], field: str) -> Tuple[bool, str]:
    """
    Validate a free-text label such as a status or payment method.

    Any non-blank text is accepted.

    Returns:
        Tuple of (is_valid, error_message)
    """
    if value is None or not value.strip():
        return False, f"{field} is required"
    return True, ""


def validate_price(price: Optional[Decimal]) -> Tuple[bool, str]:
    """A price must be given and must not be negative."""
    if price is None:
        return False, "Price is required"
    if price < 0:
        return False, "Price cannot be negative"
    return True, ""
