"""
Pytest configuration and fixtures for the food ordering service tests.
"""
import os

# Must be set before foodorder.config is imported
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SEED_ON_STARTUP", "false")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("ENVIRONMENT", "development")

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from foodorder import auth, crud, models
from foodorder.database import Base, get_db
from foodorder.main import app

PASSWORD = "password123"

# SQLite in-memory database for testing
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db_session():
    """
    Create a fresh database session for each test.
    Uses SQLite in-memory for isolation.
    """
    Base.metadata.create_all(bind=engine)

    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db_session):
    """
    Create a test client with database session override.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db_session):
    """Factory creating a user with the shared test password."""
    def _make_user(name, role, location, email=None):
        return crud.create_user(
            db_session,
            name=name,
            email=email or f"{name.lower().replace(' ', '.')}@nick.fury",
            password_hash=auth.get_password_hash(PASSWORD),
            role=role,
            location=location,
        )
    return _make_user


@pytest.fixture
def admin(make_user):
    return make_user("Captain Marvel", "Admin", "India")


@pytest.fixture
def admin_america(make_user):
    return make_user("Nick Fury", "Admin", "America")


@pytest.fixture
def manager(make_user):
    return make_user("Captain America", "Manager", "America")


@pytest.fixture
def member_india(make_user):
    return make_user("Thanos", "Member", "India")


@pytest.fixture
def other_member_india(make_user):
    return make_user("Gamora", "Member", "India")


@pytest.fixture
def member_america(make_user):
    return make_user("Travis", "Member", "America")


@pytest.fixture
def member_wakanda(make_user):
    return make_user("Thor", "Member", "Wakanda")


@pytest.fixture
def food_items(db_session):
    """Two orderable items (12.99 and 8.99) and one taken off the menu."""
    pizza = models.FoodItem(name="Margherita Pizza", description="Classic pizza", price=Decimal("12.99"), available=True)
    burger = models.FoodItem(name="Chicken Burger", description="Grilled chicken", price=Decimal("8.99"), available=True)
    retired = models.FoodItem(name="Old Special", description="No longer served", price=Decimal("4.50"), available=False)
    db_session.add_all([pizza, burger, retired])
    db_session.commit()
    for item in (pizza, burger, retired):
        db_session.refresh(item)
    return {"pizza": pizza, "burger": burger, "retired": retired}


def caller_for(user) -> auth.CurrentUser:
    """The identity a token for this user would carry."""
    return auth.CurrentUser(id=user.id, email=user.email, name=user.name, role=user.role, location=user.location)


def headers_for(user) -> dict:
    """Authorization headers with a fresh token for this user."""
    return {"Authorization": f"Bearer {auth.create_access_token(user)}"}
