"""Statistics over one user's tasks."""

import logging
from datetime import UTC, datetime, timedelta
from typing import Any

from sqlalchemy import case, func
from sqlalchemy.orm import Session

from src.models.task import Task

logger = logging.getLogger(__name__)

UPCOMING_WINDOW = timedelta(days=7)
UPCOMING_LIMIT = 5


def completion_rate(completed: int, total: int) -> float:
    """Percentage of completed tasks, rounded to one decimal. 0 when there are none."""
    if not total:
        return 0
    return round(completed / total * 100, 1)


class StatsService:
    """Computes dashboard statistics straight from the tasks table."""

    def __init__(self, db: Session):
        self.db = db

    def _count(self, user_id: int, *criteria) -> int:
        return (
            self.db.query(func.count(Task.id))
            .filter(Task.owner_id == user_id, *criteria)
            .scalar()
        ) or 0

    def compute_stats(self, user_id: int, now: datetime | None = None) -> dict[str, Any]:
        """Compute the statistics snapshot for a user.

        Returns:
            {
                "total_tasks": int,
                "completed_tasks": int,
                "pending_tasks": int,
                "overdue_tasks": int,
                "upcoming": [Task, ...],  # at most 5, soonest deadline first
                "category_distribution": [
                    {"category": str, "total": int, "completed": int, "pending": int}
                ],
                "completion_rate": float,
            }
        """
        if now is None:
            now = datetime.now(UTC)

        total = self._count(user_id)
        completed = self._count(user_id, Task.completed.is_(True))
        overdue = self._count(user_id, Task.completed.is_(False), Task.deadline < now)

        upcoming = (
            self.db.query(Task)
            .filter(
                Task.owner_id == user_id,
                Task.completed.is_(False),
                Task.deadline >= now,
                Task.deadline <= now + UPCOMING_WINDOW,
            )
            .order_by(Task.deadline)
            .limit(UPCOMING_LIMIT)
            .all()
        )

        return {
            "total_tasks": total,
            "completed_tasks": completed,
            "pending_tasks": total - completed,
            "overdue_tasks": overdue,
            "upcoming": upcoming,
            "category_distribution": self.category_distribution(user_id),
            "completion_rate": completion_rate(completed, total),
        }

    def category_distribution(self, user_id: int) -> list[dict[str, Any]]:
        """Count total, completed and pending tasks per category."""
        completed_count = func.sum(case((Task.completed.is_(True), 1), else_=0))
        rows = (
            self.db.query(Task.category, func.count(Task.id), completed_count)
            .filter(Task.owner_id == user_id)
            .group_by(Task.category)
            .order_by(Task.category)
            .all()
        )

        distribution = []
        for category, total, completed in rows:
            completed = int(completed or 0)
            distribution.append(
                {
                    "category": category,
                    "total": total,
                    "completed": completed,
                    "pending": total - completed,
                }
            )
        return distribution
