"""Pydantic schemas for API requests and responses."""

from src.schemas.auth import LoginResponse, RegisterResponse, UserLogin, UserRegister, UserResponse
from src.schemas.stats import CategoryCount, StatsResponse
from src.schemas.task import TaskCreate, TaskResponse, TaskUpdate

__all__ = [
    "UserRegister",
    "UserLogin",
    "RegisterResponse",
    "LoginResponse",
    "UserResponse",
    "TaskCreate",
    "TaskUpdate",
    "TaskResponse",
    "CategoryCount",
    "StatsResponse",
]
