"""
Initial data for the food ordering service.

Creates the tables and fills empty users/food_items tables with a starter
set. Safe to run repeatedly: a table that already has rows is left alone.

Usage:
    python -m foodorder.seed
"""
import logging
from decimal import Decimal

from sqlalchemy.orm import Session

from . import crud, models
from .auth import get_password_hash
from .database import Base, SessionLocal, engine

logger = logging.getLogger(__name__)

DEFAULT_PASSWORD = "password123"

USERS = [
    {"name": "Captain Marvel", "email": "marvel@nick.fury", "role": "Admin", "location": "India"},
    {"name": "Captain America", "email": "america@nick.fury", "role": "Manager", "location": "America"},
    {"name": "Thanos", "email": "thanos@nick.fury", "role": "Member", "location": "India"},
    {"name": "Thor", "email": "thor@nick.fury", "role": "Member", "location": "Wakanda"},
    {"name": "Travis", "email": "travis@nick.fury", "role": "Member", "location": "America"},
]

FOOD_ITEMS = [
    {"name": "Margherita Pizza", "description": "Classic pizza with tomato sauce, mozzarella, and basil", "price": "12.99"},
    {"name": "Chicken Burger", "description": "Grilled chicken burger with lettuce and mayo", "price": "8.99"},
    {"name": "Caesar Salad", "description": "Fresh romaine lettuce with Caesar dressing", "price": "7.99"},
    {"name": "Pasta Carbonara", "description": "Creamy pasta with bacon and parmesan", "price": "11.99"},
    {"name": "Fish Tacos", "description": "Three tacos with grilled fish and salsa", "price": "10.99"},
    {"name": "Veggie Wrap", "description": "Healthy wrap with mixed vegetables", "price": "6.99"},
    {"name": "Steak Sandwich", "description": "Tender steak with caramelized onions", "price": "14.99"},
    {"name": "Soup of the Day", "description": "Ask server for today's special", "price": "5.99"},
]


def seed_users(db: Session) -> int:
    """Insert the starter users if the users table is empty. Returns the number inserted."""
    if crud.count_users(db) > 0:
        return 0
    for user in USERS:
        db.add(models.User(password_hash=get_password_hash(DEFAULT_PASSWORD), **user))
        logger.info(f"Seeded user {user['name']} ({user['role']}, {user['location']})")
    db.commit()
    return len(USERS)


def seed_food_items(db: Session) -> int:
    """Insert the starter menu if the food_items table is empty. Returns the number inserted."""
    if crud.count_food_items(db) > 0:
        return 0
    for item in FOOD_ITEMS:
        db.add(models.FoodItem(
            name=item["name"],
            description=item["description"],
            price=Decimal(item["price"]),
            available=True,
        ))
    db.commit()
    logger.info(f"Seeded {len(FOOD_ITEMS)} food items")
    return len(FOOD_ITEMS)


def init_db() -> None:
    """Create all tables and seed them."""
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        seed_users(db)
        seed_food_items(db)
    finally:
        db.close()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    init_db()
