"""
Catalog operations on food items.

Anyone signed in can read the menu; only Admins and Managers can change it.
"""
from decimal import Decimal
from typing import List, Optional

from sqlalchemy.orm import Session

from . import crud, models, policy, validators
from .auth import CurrentUser
from .exceptions import ForbiddenError, NotFoundError, ValidationError


def _ensure_can_manage(caller: CurrentUser) -> None:
    if not policy.can_manage_catalog(caller.role):
        raise ForbiddenError("manage food items", extra={"role": caller.role}, user_id=caller.id)


def list_available(db: Session) -> List[models.FoodItem]:
    """Return every food item currently on the menu."""
    return crud.get_available_food_items(db)


def create_item(
    db: Session,
    caller: CurrentUser,
    name: Optional[str],
    description: Optional[str],
    price: Optional[Decimal],
) -> models.FoodItem:
    """
    Add a food item to the menu.

    Raises:
        ForbiddenError: the caller is not an Admin or Manager
        ValidationError: name or price missing, or price negative
    """
    _ensure_can_manage(caller)
    if not name or not name.strip():
        raise ValidationError("Name and price are required")
    is_valid, error_message = validators.validate_price(price)
    if not is_valid:
        raise ValidationError(error_message)
    return crud.create_food_item(db, name=name, description=description, price=price)


def update_item(db: Session, caller: CurrentUser, item_id: int, fields: dict) -> models.FoodItem:
    """
    Partially update a food item.

    Fields that are absent or None keep their current value. Setting
    available to False takes the item off the menu.

    Raises:
        ForbiddenError: the caller is not an Admin or Manager
        ValidationError: a negative price or blank name
        NotFoundError: no such food item
    """
    _ensure_can_manage(caller)
    changes = {key: value for key, value in fields.items() if value is not None}
    if "price" in changes:
        is_valid, error_message = validators.validate_price(changes["price"])
        if not is_valid:
            raise ValidationError(error_message)
    if "name" in changes and not changes["name"].strip():
        raise ValidationError("Name cannot be blank")

    db_item = crud.update_food_item(db, item_id, changes)
    if db_item is None:
        raise NotFoundError("Food item", item_id)
    return db_item
