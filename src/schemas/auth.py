"""Authentication schemas."""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator


def _clean_username(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("Username must not be empty")
    return value


class UserRegister(BaseModel):
    """User registration request."""

    username: str = Field(..., min_length=1, max_length=50)
    email: EmailStr = Field(..., max_length=255)
    password: str = Field(..., min_length=8, max_length=72)

    @field_validator("username")
    @classmethod
    def username_not_blank(cls, value):
        return _clean_username(value)


class UserLogin(BaseModel):
    """User login request."""

    username: str = Field(..., min_length=1, max_length=50)
    password: str = Field(..., min_length=1, max_length=72)

    @field_validator("username")
    @classmethod
    def username_not_blank(cls, value):
        return _clean_username(value)


class RegisterResponse(BaseModel):
    """Registration acknowledgement. No token is issued on registration."""

    message: str


class LoginResponse(BaseModel):
    """Session token issued on a successful login."""

    token: str
    username: str
    token_type: str = "bearer"  # noqa: S105


class UserResponse(BaseModel):
    """User information response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    email: str
