"""Task model."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from src.database import Base
from src.models.enums import DEFAULT_CATEGORY
from src.models.mixins import TimestampMixin


class Task(Base, TimestampMixin):
    """A single to-do item owned by exactly one user."""

    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True, index=True)
    owner_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    completed = Column(Boolean, default=False, nullable=False, index=True)
    deadline = Column(DateTime(timezone=True), nullable=True, index=True)
    # Open set of values; see TaskCategory for the ones the frontend knows about
    category = Column(String(50), default=DEFAULT_CATEGORY, nullable=False)

    # Relationships
    owner = relationship("User", backref="tasks")
