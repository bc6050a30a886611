"""
Configuration for the food ordering service.

All values are read from environment variables once at import time, with
defaults suitable for local development.
"""
import os

# Database connection string (SQLite file by default, PostgreSQL in deployment)
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./foodorder.db")

# JWT settings
SECRET_KEY = os.getenv("SECRET_KEY", "dev-only-5f1c0d2b9e8a4c7f8b3e6a1d2c9f0e7b4a5d8c3e2f1a0b9c")
ALGORITHM = os.getenv("ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "1440"))  # 24 hours

# Password hashing cost
BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", "12"))

# "production" hides internal storage errors from API responses
ENVIRONMENT = os.getenv("ENVIRONMENT", "development")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Create tables and insert the initial users/food items on startup
SEED_ON_STARTUP = os.getenv("SEED_ON_STARTUP", "true").lower() in ("true", "1", "yes")

CORS_ORIGINS = [origin.strip() for origin in os.getenv("CORS_ORIGINS", "*").split(",") if origin.strip()]


def is_production() -> bool:
    """Return True when running with ENVIRONMENT=production."""
    return ENVIRONMENT.lower() == "production"
