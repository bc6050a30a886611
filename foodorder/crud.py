"""
CRUD (Create, Read, Update, Delete) operations for the food ordering service.

This module contains all database operations. Functions that are steps of a
larger unit of work only flush; the caller decides when to commit.
"""
from decimal import Decimal
from typing import Iterable, List, Optional, Tuple
from sqlalchemy import func
from sqlalchemy.orm import Session, selectinload

from . import models
from .policy import OrderScope


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------

def get_user_by_email(db: Session, email: str) -> Optional[models.User]:
    """
    Retrieve a user by email address.

    Args:
        db: Database session
        email: Email address to search for, compared case-insensitively

    Returns:
        User object or None if not found
    """
    return db.query(models.User).filter(func.lower(models.User.email) == email.lower()).first()


def create_user(db: Session, name: str, email: str, password_hash: str, role: str, location: str) -> models.User:
    """Insert a user and commit."""
    db_user = models.User(
        name=name,
        email=email,
        password_hash=password_hash,
        role=role,
        location=location,
    )
    db.add(db_user)
    db.commit()
    db.refresh(db_user)
    return db_user


def count_users(db: Session) -> int:
    return db.query(models.User).count()


# ---------------------------------------------------------------------------
# Food items
# ---------------------------------------------------------------------------

def get_food_item(db: Session, item_id: int) -> Optional[models.FoodItem]:
    return db.query(models.FoodItem).filter(models.FoodItem.id == item_id).first()


def get_available_food_item(db: Session, item_id: int) -> Optional[models.FoodItem]:
    """
    Retrieve a food item only if it can currently be ordered.

    Args:
        db: Database session
        item_id: ID of the food item

    Returns:
        FoodItem object, or None if missing or unavailable
    """
    return (
        db.query(models.FoodItem)
        .filter(models.FoodItem.id == item_id, models.FoodItem.available.is_(True))
        .first()
    )


def get_available_food_items(db: Session) -> List[models.FoodItem]:
    """Retrieve every food item on the menu, ordered by ID."""
    return (
        db.query(models.FoodItem)
        .filter(models.FoodItem.available.is_(True))
        .order_by(models.FoodItem.id)
        .all()
    )


def create_food_item(db: Session, name: str, description: Optional[str], price: Decimal) -> models.FoodItem:
    """Insert a food item and commit. New items are available."""
    db_item = models.FoodItem(name=name, description=description, price=price, available=True)
    db.add(db_item)
    db.commit()
    db.refresh(db_item)
    return db_item


def update_food_item(db: Session, item_id: int, fields: dict) -> Optional[models.FoodItem]:
    """
    Update an existing food item.

    Args:
        db: Database session
        item_id: ID of the food item to update
        fields: Column values to set; keys absent from the dict are left alone

    Returns:
        Updated FoodItem object or None if not found
    """
    db_item = get_food_item(db, item_id)
    if db_item is None:
        return None

    for key, value in fields.items():
        setattr(db_item, key, value)

    db.commit()
    db.refresh(db_item)
    return db_item


def count_food_items(db: Session) -> int:
    return db.query(models.FoodItem).count()


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------

def add_order(db: Session, user_id: int, total_amount: Decimal, payment_method: str) -> models.Order:
    """
    Stage an order header and flush it to obtain its ID.

    Does not commit; the caller owns the transaction.
    """
    db_order = models.Order(
        user_id=user_id,
        status="pending",
        total_amount=total_amount,
        payment_method=payment_method,
    )
    db.add(db_order)
    db.flush()
    return db_order


def add_order_items(db: Session, order: models.Order,
                    lines: Iterable[Tuple[models.FoodItem, int, Decimal]]) -> List[models.OrderItem]:
    """
    Stage the lines of an order and flush them.

    Args:
        db: Database session
        order: Order the lines belong to (already flushed)
        lines: (food item, quantity, frozen unit price) tuples

    Returns:
        The created OrderItem objects
    """
    db_items = [
        models.OrderItem(order_id=order.id, food_item_id=food_item.id, quantity=quantity, price=price)
        for food_item, quantity, price in lines
    ]
    db.add_all(db_items)
    db.flush()
    return db_items


def get_orders(db: Session, scope: OrderScope) -> List[models.Order]:
    """
    Retrieve orders visible in a scope, newest first, with their lines and food items loaded.

    Args:
        db: Database session
        scope: Visibility scope computed by the access policy

    Returns:
        List of Order objects
    """
    query = db.query(models.Order).options(
        selectinload(models.Order.items).selectinload(models.OrderItem.food_item)
    )
    if not scope.is_all:
        query = query.filter(models.Order.user_id == scope.owner_id)
    return query.order_by(models.Order.created_at.desc(), models.Order.id.desc()).all()


def update_order_status(db: Session, order_id: int, status: str) -> int:
    """
    Set an order's status.

    Returns:
        Number of rows updated (0 if the order does not exist)
    """
    updated = (
        db.query(models.Order)
        .filter(models.Order.id == order_id)
        .update({models.Order.status: status}, synchronize_session=False)
    )
    db.commit()
    return updated


def update_order_payment_method(db: Session, order_id: int, payment_method: str, scope: OrderScope) -> int:
    """
    Set an order's payment method, restricted to orders inside the scope.

    Returns:
        Number of rows updated (0 if the order is missing or out of scope)
    """
    query = db.query(models.Order).filter(models.Order.id == order_id)
    if not scope.is_all:
        query = query.filter(models.Order.user_id == scope.owner_id)
    updated = query.update({models.Order.payment_method: payment_method}, synchronize_session=False)
    db.commit()
    return updated
