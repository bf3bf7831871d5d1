"""Task schemas."""

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.models.enums import DEFAULT_CATEGORY


def _blank_deadline_to_none(value):
    # Empty date inputs are submitted as ""
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _deadline_to_utc(value: datetime | None) -> datetime | None:
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def _require_name(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    if not value:
        raise ValueError("Task name must not be empty")
    return value


class TaskCreate(BaseModel):
    """Create a new task."""

    name: str = Field(..., max_length=255)
    deadline: datetime | None = None
    category: str | None = Field(DEFAULT_CATEGORY, max_length=50)

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value):
        return _require_name(value)

    @field_validator("deadline", mode="before")
    @classmethod
    def blank_deadline_is_none(cls, value):
        return _blank_deadline_to_none(value)

    @field_validator("deadline")
    @classmethod
    def deadline_in_utc(cls, value):
        return _deadline_to_utc(value)


class TaskUpdate(BaseModel):
    """Update a task. Only the fields sent are changed."""

    name: str | None = Field(None, max_length=255)
    deadline: datetime | None = None
    category: str | None = Field(None, max_length=50)
    completed: bool | None = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value):
        return _require_name(value)

    @field_validator("deadline", mode="before")
    @classmethod
    def blank_deadline_is_none(cls, value):
        return _blank_deadline_to_none(value)

    @field_validator("deadline")
    @classmethod
    def deadline_in_utc(cls, value):
        return _deadline_to_utc(value)


class TaskResponse(BaseModel):
    """Task response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    owner_id: int
    name: str
    completed: bool
    deadline: datetime | None
    category: str
    created_at: datetime
    updated_at: datetime
