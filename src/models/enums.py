"""Enums for model fields."""

from enum import StrEnum


class TaskCategory(StrEnum):
    """Categories the frontend offers for tasks.

    The store does not restrict categories to these values.
    """

    GENERAL = "general"
    WORK = "work"
    PERSONAL = "personal"
    SHOPPING = "shopping"


DEFAULT_CATEGORY = TaskCategory.GENERAL.value
