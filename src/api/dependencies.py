"""FastAPI dependencies for authentication and services."""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from src.database import get_db
from src.models.user import User
from src.services.auth import decode_access_token
from src.services.stats_service import StatsService
from src.services.task_service import TaskService

# auto_error is off so a missing header (401) can be told apart from a bad token (403)
security = HTTPBearer(auto_error=False)


def _invalid_token() -> HTTPException:
    return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Invalid token")


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
) -> User:
    """Get the current authenticated user from the bearer token."""
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Access denied",
            headers={"WWW-Authenticate": "Bearer"},
        )

    payload = decode_access_token(credentials.credentials)
    if payload is None:
        raise _invalid_token()

    user_id = payload.get("sub")
    if user_id is None or not str(user_id).isdigit():
        raise _invalid_token()

    user = db.query(User).filter(User.id == int(user_id)).first()
    if user is None:
        raise _invalid_token()

    return user


def get_task_service(
    db: Annotated[Session, Depends(get_db)],
) -> TaskService:
    """Get task service bound to the request session."""
    return TaskService(db)


def get_stats_service(
    db: Annotated[Session, Depends(get_db)],
) -> StatsService:
    """Get statistics service bound to the request session."""
    return StatsService(db)
