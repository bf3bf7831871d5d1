"""Authentication service for JWT and password handling."""

import logging
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy import or_
from sqlalchemy.orm import Session

from src.config import get_settings
from src.models.user import User

logger = logging.getLogger(__name__)
settings = get_settings()

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


def create_access_token(user_id: int, username: str) -> str:
    """Create a signed session token for a user.

    The token only expires when ``jwt_expiration_minutes`` is configured;
    otherwise it stays valid for as long as the signature verifies.
    """
    to_encode: dict = {
        "sub": str(user_id),
        "username": username,
    }
    if settings.jwt_expiration_minutes is not None:
        to_encode["exp"] = datetime.now(UTC) + timedelta(minutes=settings.jwt_expiration_minutes)
    return jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> dict | None:
    """Decode and validate a JWT token, returning None if it does not verify."""
    try:
        return jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None


def get_user_by_username(db: Session, username: str) -> User | None:
    """Get a user by username."""
    return db.query(User).filter(User.username == username).first()


def find_conflicting_user(db: Session, username: str, email: str) -> User | None:
    """Find a user that already holds the username or the email."""
    return db.query(User).filter(or_(User.username == username, User.email == email)).first()


def authenticate_user(db: Session, username: str, password: str) -> User | None:
    """Authenticate a user by username and password.

    Unknown usernames and wrong passwords both return None so callers cannot
    tell them apart; the reason is only logged.
    """
    user = get_user_by_username(db, username)
    if not user:
        logger.info(f"Login failed: unknown username '{username}'")
        return None
    if not verify_password(password, user.password_hash):
        logger.info(f"Login failed: wrong password for user {user.id}")
        return None
    return user


def create_user(db: Session, username: str, email: str, password: str) -> User:
    """Create a new user with a hashed password."""
    user = User(username=username, email=email, password_hash=get_password_hash(password))
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info(f"Registered user {user.id} ('{user.username}')")
    return user
