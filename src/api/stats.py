"""Statistics API endpoint."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError

from src.api.dependencies import get_current_user, get_stats_service
from src.models.user import User
from src.schemas.stats import StatsResponse
from src.services.stats_service import StatsService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/stats", tags=["stats"])


@router.get("", response_model=StatsResponse)
def get_stats(
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[StatsService, Depends(get_stats_service)],
):
    """Get task statistics for the current user's dashboard."""
    try:
        return service.compute_stats(current_user.id)
    except SQLAlchemyError:
        logger.exception(f"Error computing statistics for user {current_user.id}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error fetching statistics",
        ) from None
