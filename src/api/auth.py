"""Authentication API endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from src.api.dependencies import get_current_user
from src.database import get_db
from src.models.user import User
from src.schemas.auth import LoginResponse, RegisterResponse, UserLogin, UserRegister, UserResponse
from src.services.auth import (
    authenticate_user,
    create_access_token,
    create_user,
    find_conflicting_user,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
def register(
    user_data: UserRegister,
    db: Annotated[Session, Depends(get_db)],
):
    """Register a new user. Log in afterwards to get a token."""
    if find_conflicting_user(db, user_data.username, user_data.email):
        logger.info(f"Registration rejected: '{user_data.username}' or email already taken")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="User already exists",
        )

    try:
        create_user(db, user_data.username, user_data.email, user_data.password)
    except IntegrityError:
        # Lost a race against a concurrent registration for the same name or email
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="User already exists",
        ) from None
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Error creating user")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error creating user",
        ) from None

    return RegisterResponse(message="User created successfully")


@router.post("/login", response_model=LoginResponse)
def login(
    credentials: UserLogin,
    db: Annotated[Session, Depends(get_db)],
):
    """Login with username and password."""
    user = authenticate_user(db, credentials.username, credentials.password)

    if not user:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid username or password",
        )

    return LoginResponse(
        token=create_access_token(user.id, user.username),
        username=user.username,
    )


@router.get("/me", response_model=UserResponse)
def get_me(
    current_user: Annotated[User, Depends(get_current_user)],
):
    """Get current user information."""
    return current_user
