"""Task service: owner-scoped create/read/update/delete for tasks."""

import logging
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import and_, func, not_
from sqlalchemy.orm import Query, Session

from src.models.enums import DEFAULT_CATEGORY
from src.models.task import Task

logger = logging.getLogger(__name__)

# Columns a client may write through update(); everything else is system managed
UPDATABLE_FIELDS = ("name", "deadline", "category", "completed")
# Columns that must always hold a value, so an explicit null is ignored
NON_NULLABLE_FIELDS = ("name", "category", "completed")


class TaskService:
    """Service for task operations.

    Every method takes the acting user's id and only ever touches rows
    owned by that user. A task owned by somebody else behaves exactly like
    a task that does not exist.
    """

    def __init__(self, db: Session):
        self.db = db

    def _owned(self, user_id: int, task_id: int) -> Query:
        return self.db.query(Task).filter(Task.id == task_id, Task.owner_id == user_id)

    def list_tasks(
        self,
        user_id: int,
        category: str | None = None,
        completed: bool | None = None,
        overdue: bool | None = None,
        now: datetime | None = None,
    ) -> list[Task]:
        """Get all tasks owned by a user, oldest first.

        ``overdue=True`` keeps only incomplete tasks whose deadline is before
        ``now``; ``overdue=False`` keeps everything else.
        """
        query = self.db.query(Task).filter(Task.owner_id == user_id)
        if category is not None:
            query = query.filter(Task.category == category)
        if completed is not None:
            query = query.filter(Task.completed.is_(completed))
        if overdue is not None:
            is_overdue = and_(
                Task.completed.is_(False),
                Task.deadline.is_not(None),
                Task.deadline < (now or datetime.now(UTC)),
            )
            query = query.filter(is_overdue if overdue else not_(is_overdue))
        return query.order_by(Task.created_at, Task.id).all()

    def get_task(self, user_id: int, task_id: int) -> Task | None:
        """Get a single task if it exists and belongs to the user."""
        return self._owned(user_id, task_id).first()

    def create_task(
        self,
        user_id: int,
        name: str,
        deadline: datetime | None = None,
        category: str | None = None,
    ) -> Task:
        """Create a new, incomplete task owned by the user."""
        task = Task(
            owner_id=user_id,
            name=name,
            deadline=deadline,
            category=category or DEFAULT_CATEGORY,
            completed=False,
        )
        self.db.add(task)
        self.db.commit()
        self.db.refresh(task)
        logger.info(f"Created task {task.id} for user {user_id}")
        return task

    def update_task(self, user_id: int, task_id: int, fields: dict[str, Any]) -> Task | None:
        """Apply a partial update to a task.

        Only keys present in ``fields`` are written. A ``None`` deadline clears
        the deadline; ``None`` for any other field is ignored. Returns None when
        the task does not exist or is owned by another user.
        """
        values: dict[str, Any] = {}
        for key in UPDATABLE_FIELDS:
            if key not in fields:
                continue
            value = fields[key]
            if value is None and key in NON_NULLABLE_FIELDS:
                continue
            if key == "category" and not value:
                value = DEFAULT_CATEGORY
            values[key] = value

        # Ownership check and write happen in the same statement
        values["updated_at"] = func.now()
        updated = self._owned(user_id, task_id).update(values, synchronize_session=False)
        if not updated:
            self.db.rollback()
            return None

        self.db.commit()
        logger.debug(f"Updated task {task_id} for user {user_id}: {sorted(values)}")
        return self.get_task(user_id, task_id)

    def toggle_completion(self, user_id: int, task_id: int) -> Task | None:
        """Flip a task's completed flag in one conditional update."""
        updated = self._owned(user_id, task_id).update(
            {"completed": not_(Task.completed), "updated_at": func.now()},
            synchronize_session=False,
        )
        if not updated:
            self.db.rollback()
            return None

        self.db.commit()
        task = self.get_task(user_id, task_id)
        logger.debug(f"Toggled task {task_id} for user {user_id} to completed={task.completed}")
        return task

    def delete_task(self, user_id: int, task_id: int) -> bool:
        """Permanently delete a task. Returns False if the user owns no such task."""
        deleted = self._owned(user_id, task_id).delete(synchronize_session=False)
        if not deleted:
            self.db.rollback()
            return False

        self.db.commit()
        logger.info(f"Deleted task {task_id} for user {user_id}")
        return True
