"""
SQLAlchemy ORM models for the food ordering service.

Defines the database schema for users, food items, orders and order items.
Role, location, price and quantity rules are also enforced by CHECK
constraints so the database rejects rows the application would.
"""
from datetime import datetime
from sqlalchemy import (
    Boolean, CheckConstraint, Column, DateTime, ForeignKey, Integer, Numeric, String, Text,
)
from sqlalchemy.orm import relationship

from .database import Base
from .policy import LOCATIONS, ROLES


def _in_list(column: str, values) -> str:
    quoted = ", ".join(f"'{value}'" for value in values)
    return f"{column} IN ({quoted})"


class User(Base):
    """
    User model representing a person who can log in.

    Attributes:
        id (int): Primary key, auto-incremented user ID
        name (str): User's display name
        email (str): User's email address (unique)
        password_hash (str): bcrypt hash of the password
        role (str): Admin, Manager or Member
        location (str): India, America or Wakanda
    """
    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint(_in_list("role", ROLES), name="ck_users_role"),
        CheckConstraint(_in_list("location", LOCATIONS), name="ck_users_location"),
    )

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)
    role = Column(String, nullable=False)
    location = Column(String, nullable=False)

    orders = relationship("Order", back_populates="user")


class FoodItem(Base):
    """
    Food item on the menu.

    Items are never deleted; setting available to False hides them from the
    menu and from new orders.
    """
    __tablename__ = "food_items"
    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_food_items_price"),
    )

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    price = Column(Numeric(10, 2), nullable=False)
    available = Column(Boolean, nullable=False, default=True)


class Order(Base):
    """
    Order model representing a customer order.

    Attributes:
        id (int): Primary key, auto-incremented order ID
        user_id (int): ID of the user who placed the order
        status (str): Free-text status, "pending" on creation
        total_amount (Decimal): Sum of price * quantity over the order items
        payment_method (str): Free-text payment label
        created_at (datetime): Timestamp when the order was created
    """
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    status = Column(String, nullable=False, default="pending")
    total_amount = Column(Numeric(10, 2), nullable=False)
    payment_method = Column(String, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    user = relationship("User", back_populates="orders")
    items = relationship("OrderItem", back_populates="order", order_by="OrderItem.id")


class OrderItem(Base):
    """
    A line of an order.

    price is the unit price copied from the food item when the order was
    placed; later menu price changes do not touch it.
    """
    __tablename__ = "order_items"
    __table_args__ = (
        CheckConstraint("quantity >= 1", name="ck_order_items_quantity"),
    )

    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(Integer, ForeignKey("orders.id"), nullable=False, index=True)
    food_item_id = Column(Integer, ForeignKey("food_items.id"), nullable=False)
    quantity = Column(Integer, nullable=False)
    price = Column(Numeric(10, 2), nullable=False)

    order = relationship("Order", back_populates="items")
    food_item = relationship("FoodItem")

    @property
    def name(self):
        return self.food_item.name if self.food_item else None

    @property
    def description(self):
        return self.food_item.description if self.food_item else None
