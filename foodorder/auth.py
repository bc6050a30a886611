"""
Authentication utilities.

Provides password hashing, JWT token creation/validation, registration and
login, and the FastAPI dependency that turns a bearer token into the caller.
Tokens are self-contained: the caller's role and location come from the
token claims, so a role change only takes effect with a new token.
"""
from datetime import datetime, timedelta
from typing import Optional
import logging
from jose import JWTError, jwt
from passlib.context import CryptContext
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from pydantic import BaseModel
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from . import crud, models
from .config import SECRET_KEY, ALGORITHM, ACCESS_TOKEN_EXPIRE_MINUTES, BCRYPT_ROUNDS
from .exceptions import ConflictError, InvalidCredentials, Unauthenticated, ValidationError
from .policy import LOCATIONS, ROLES

logger = logging.getLogger(__name__)

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=BCRYPT_ROUNDS)

# Security scheme for JWT bearer tokens; missing headers are reported by get_current_user
security = HTTPBearer(auto_error=False)

# Hash checked when the email is unknown, so both login failures cost the same
_DUMMY_HASH = pwd_context.hash("not-a-real-password")


class CurrentUser(BaseModel):
    """Current authenticated user information, taken from the token claims."""
    id: int
    email: str
    name: str
    role: str
    location: str


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a plain password against a hashed password.

    Args:
        plain_password: The plain text password to verify
        hashed_password: The hashed password to compare against

    Returns:
        True if the password matches, False otherwise
    """
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """
    Hash a password for secure storage.

    Args:
        password: The plain text password to hash

    Returns:
        The salted bcrypt hash
    """
    return pwd_context.hash(password)


def create_access_token(user: models.User, expires_delta: Optional[timedelta] = None) -> str:
    """
    Create a JWT access token for a user.

    Args:
        user: User the token identifies
        expires_delta: Optional custom expiration time delta

    Returns:
        Encoded JWT token string
    """
    if expires_delta:
        expire = datetime.utcnow() + expires_delta
    else:
        expire = datetime.utcnow() + timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)

    to_encode = {
        "sub": str(user.id),
        "email": user.email,
        "name": user.name,
        "role": user.role,
        "location": user.location,
        "exp": expire,
    }
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)


def decode_access_token(token: str) -> CurrentUser:
    """
    Verify a token and return the identity it carries.

    Raises:
        Unauthenticated: if the signature, expiry or claims are invalid
    """
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
        user_id_str = payload.get("sub")
        claims = {key: payload.get(key) for key in ("email", "name", "role", "location")}
        if user_id_str is None or any(value is None for value in claims.values()):
            raise Unauthenticated(reason="missing claims")
        return CurrentUser(id=int(user_id_str), **claims)
    except (JWTError, ValueError) as e:
        logger.warning(f"JWT validation error: {e}")
        raise Unauthenticated()


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> CurrentUser:
    """
    FastAPI dependency to get the current authenticated user from the JWT token.

    Args:
        credentials: HTTP Authorization credentials (injected)

    Returns:
        Current authenticated user information

    Raises:
        Unauthenticated: 401 if the token is missing or invalid
    """
    if credentials is None or not credentials.credentials:
        raise Unauthenticated("Access token required")
    return decode_access_token(credentials.credentials)


def authenticate_user(db: Session, email: Optional[str], password: Optional[str]) -> models.User:
    """
    Authenticate a user by email and password.

    Args:
        db: Database session
        email: User's email address
        password: Plain text password to verify

    Returns:
        The authenticated User

    Raises:
        ValidationError: email or password is missing or blank
        InvalidCredentials: for an unknown email or a wrong password alike
    """
    if not email or not email.strip() or not password:
        raise ValidationError("Email and password are required")

    user = crud.get_user_by_email(db, email)
    if user is None:
        verify_password(password, _DUMMY_HASH)
        raise InvalidCredentials()
    if not verify_password(password, user.password_hash):
        raise InvalidCredentials(user_id=user.id)
    return user


def register_user(db: Session, name: str, email: str, password: str, role: str, location: str) -> models.User:
    """
    Create a new user account.

    Raises:
        ValidationError: role or location is not one of the known values
        ConflictError: email already registered
    """
    if role not in ROLES:
        raise ValidationError("Invalid role", extra={"allowed": list(ROLES)})
    if location not in LOCATIONS:
        raise ValidationError("Invalid location", extra={"allowed": list(LOCATIONS)})
    if crud.get_user_by_email(db, email) is not None:
        raise ConflictError("Email already exists", email=email)

    try:
        return crud.create_user(
            db,
            name=name,
            email=email,
            password_hash=get_password_hash(password),
            role=role,
            location=location,
        )
    except IntegrityError:
        # Lost a race with a concurrent registration of the same email
        db.rollback()
        raise ConflictError("Email already exists", email=email)
