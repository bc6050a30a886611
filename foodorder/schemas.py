"""
Pydantic schemas for request/response validation in the food ordering service.

These schemas define the structure of data for API requests and responses.
Business rules (allowed roles, non-empty orders, policy checks) are applied
by the service functions, not here, so that they hold for every caller.
"""
from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, EmailStr, Field

# Largest value a SQL BIGINT (and SQLite INTEGER) column holds
MAX_ID = 2 ** 63 - 1
MAX_QUANTITY = 10000


# ---------------------------------------------------------------------------
# Users and tokens
# ---------------------------------------------------------------------------

class UserRegister(BaseModel):
    """Schema for user registration."""
    name: str = Field(..., min_length=1)
    email: EmailStr
    password: str = Field(..., min_length=1)
    role: str
    location: str


class UserLogin(BaseModel):
    """
    Schema for user login.

    Email is not format-checked so every failure looks the same. Blank
    fields are rejected by the login operation itself.
    """
    email: Optional[str] = None
    password: Optional[str] = None


class User(BaseModel):
    """Schema for user responses, never includes the password hash."""
    id: int
    name: str
    email: str
    role: str
    location: str

    class Config:
        from_attributes = True


class AuthResponse(BaseModel):
    """Response for login and registration."""
    message: str
    access_token: str
    token_type: str = "bearer"
    user: User


class Permissions(BaseModel):
    """Advisory permission flags for client-side gating."""
    can_access_cart_and_payment: bool
    can_manage_catalog: bool
    can_manage_order_status: bool
    can_view_all_orders: bool


class Me(BaseModel):
    """Response for the current-user endpoint."""
    user: User
    permissions: Permissions


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------

class FoodItemCreate(BaseModel):
    """Schema for creating a food item."""
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    price: Decimal = Field(..., ge=0, description="Unit price")


class FoodItemUpdate(BaseModel):
    """Schema for updating a food item. All fields are optional; omitted or null fields keep their value."""
    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    price: Optional[Decimal] = Field(default=None, ge=0)
    available: Optional[bool] = None


class FoodItem(BaseModel):
    """Schema for food item responses."""
    id: int
    name: str
    description: Optional[str] = None
    price: Decimal
    available: bool

    class Config:
        from_attributes = True


class FoodItemList(BaseModel):
    items: List[FoodItem]


class FoodItemResponse(BaseModel):
    message: str
    item: FoodItem


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------

class OrderLine(BaseModel):
    """Schema for one requested order line."""
    food_item_id: int = Field(..., ge=1, le=MAX_ID)
    quantity: int = Field(..., le=MAX_QUANTITY, description="Quantity ordered, at least 1")


class OrderCreate(BaseModel):
    """Schema for placing an order."""
    items: List[OrderLine] = Field(default_factory=list)
    payment_method: Optional[str] = None


class OrderStatusUpdate(BaseModel):
    status: Optional[str] = None


class PaymentMethodUpdate(BaseModel):
    payment_method: Optional[str] = None


class OrderItem(BaseModel):
    """
    Schema for an order line in responses.

    Attributes:
        food_item_id (int): Referenced food item
        name (str): Food item name
        description (str): Food item description
        quantity (int): Quantity ordered
        price (Decimal): Unit price frozen at order time
    """
    id: int
    food_item_id: int
    name: Optional[str] = None
    description: Optional[str] = None
    quantity: int
    price: Decimal

    class Config:
        from_attributes = True


class Order(BaseModel):
    """
    Schema for order responses.

    Attributes:
        id (int): Order's unique identifier
        user_id (int): ID of the user who placed the order
        status (str): Order status
        total_amount (Decimal): Total amount of the order
        payment_method (str): Payment label
        created_at (datetime): When the order was created
        items (List[OrderItem]): Order lines
    """
    id: int
    user_id: int
    status: str
    total_amount: Decimal
    payment_method: str
    created_at: datetime
    items: List[OrderItem] = Field(default_factory=list)

    class Config:
        from_attributes = True


class OrderResponse(BaseModel):
    message: str
    order: Order


class OrderList(BaseModel):
    orders: List[Order]


class Message(BaseModel):
    message: str
