"""Statistics schemas.

The top-level statistics keys are camelCase, which is what the dashboard charts
read. Tasks inside ``upcoming`` keep the snake_case ``TaskResponse`` shape so
they match the objects returned by the task endpoints.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from src.schemas.task import TaskResponse


class CategoryCount(BaseModel):
    """Task counts for one category."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    category: str
    total: int
    completed: int
    pending: int


class StatsResponse(BaseModel):
    """Dashboard statistics for the current user."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    total_tasks: int
    completed_tasks: int
    pending_tasks: int
    overdue_tasks: int
    upcoming: list[TaskResponse]
    category_distribution: list[CategoryCount]
    completion_rate: float
