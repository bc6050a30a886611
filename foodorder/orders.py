"""
Order workflow: placing, listing and updating orders.

Every operation consults the access policy before touching the database.
Order placement validates, checks the caller, resolves all lines against the
menu and only then writes the order and its lines in a single transaction.
"""
import logging
from decimal import Decimal
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from . import crud, models, policy, schemas, validators
from .auth import CurrentUser
from .exceptions import ForbiddenError, NotFoundError, StorageError, ValidationError

logger = logging.getLogger(__name__)

LOCATION_DENIED_MESSAGE = (
    "Team Members from America and Wakanda do not have access to cart and payment features."
)


def ensure_cart_access(caller: CurrentUser) -> None:
    """
    Raise ForbiddenError unless the caller may use cart and payment features.

    Raises:
        ForbiddenError: 403 for Members outside India and unknown roles
    """
    if not policy.can_access_cart_and_payment(caller.role, caller.location):
        raise ForbiddenError(
            "use cart and payment features",
            message=LOCATION_DENIED_MESSAGE,
            extra={"role": caller.role, "location": caller.location},
            user_id=caller.id,
        )


def place_order(
    db: Session,
    caller: CurrentUser,
    items: List[schemas.OrderLine],
    payment_method: Optional[str],
) -> models.Order:
    """
    Create an order for the caller.

    Args:
        db: Database session
        caller: Authenticated user placing the order
        items: Requested lines (food item ID and quantity)
        payment_method: Free-text payment label

    Returns:
        The created order with its lines loaded

    Raises:
        ValidationError: no items, a quantity below 1, or no payment method
        ForbiddenError: the caller may not use cart and payment features
        NotFoundError: a food item is missing or unavailable; nothing is written
        StorageError: the order could not be written; nothing is kept
    """
    is_valid, error_message = validators.validate_order_lines(items)
    if not is_valid:
        raise ValidationError(error_message)
    is_valid, error_message = validators.validate_label(payment_method, "Payment method")
    if not is_valid:
        raise ValidationError(error_message)

    ensure_cart_access(caller)

    # Resolve every line before writing anything
    resolved = []
    total_amount = Decimal("0")
    for line in items:
        food_item = crud.get_available_food_item(db, line.food_item_id)
        if food_item is None:
            raise NotFoundError(message=f"Food item {line.food_item_id} not found or unavailable")
        unit_price = Decimal(food_item.price)
        resolved.append((food_item, line.quantity, unit_price))
        total_amount += unit_price * line.quantity

    try:
        db_order = crud.add_order(db, user_id=caller.id, total_amount=total_amount, payment_method=payment_method)
        crud.add_order_items(db, db_order, resolved)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        raise StorageError("Error creating order", detail=str(e), user_id=caller.id)

    db.refresh(db_order)
    logger.info(f"Order {db_order.id} created by user {caller.id}: {len(resolved)} lines, total {total_amount}")
    return db_order


def list_orders(db: Session, caller: CurrentUser) -> List[models.Order]:
    """
    List the orders the caller may see, newest first.

    Members get their own orders; Admins and Managers get every order.
    """
    scope = policy.order_visibility_scope(caller.role, caller.id)
    return crud.get_orders(db, scope)


def set_order_status(db: Session, caller: CurrentUser, order_id: int, status: Optional[str]) -> None:
    """
    Change an order's status.

    Any non-blank label is accepted, in any direction.

    Raises:
        ForbiddenError: the caller is not an Admin or Manager
        ValidationError: status is missing or blank
        NotFoundError: no such order
    """
    if not policy.can_manage_order_status(caller.role):
        raise ForbiddenError("update order status", extra={"role": caller.role}, user_id=caller.id)
    is_valid, error_message = validators.validate_label(status, "Status")
    if not is_valid:
        raise ValidationError(error_message)

    if crud.update_order_status(db, order_id, status) == 0:
        raise NotFoundError("Order", order_id)
    logger.info(f"Order {order_id} status set to '{status}' by user {caller.id}")


def set_payment_method(db: Session, caller: CurrentUser, order_id: int, payment_method: Optional[str]) -> None:
    """
    Change an order's payment method.

    Members can only change their own orders. An order that exists but
    belongs to someone else is reported exactly like a missing one.

    Raises:
        ValidationError: payment method is missing or blank
        ForbiddenError: the caller may not use cart and payment features
        NotFoundError: no such order inside the caller's scope
    """
    is_valid, error_message = validators.validate_label(payment_method, "Payment method")
    if not is_valid:
        raise ValidationError(error_message)
    ensure_cart_access(caller)

    scope = policy.order_visibility_scope(caller.role, caller.id)
    if crud.update_order_payment_method(db, order_id, payment_method, scope) == 0:
        raise NotFoundError(message="Order not found or access denied", order_id=order_id, user_id=caller.id)
    logger.info(f"Order {order_id} payment method updated by user {caller.id}")
