from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# Request bodies keep every field optional so that a missing field is
# reported by the services as a 400 rather than by FastAPI as a 422.

class RegisterRequest(BaseModel):
    username: Optional[str] = Field(None, max_length=64, description="User's username")
    email: Optional[str] = Field(None, max_length=128)
    password: Optional[str] = Field(None, max_length=256)


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class UserOut(BaseModel):
    id: int
    username: str
    email: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class AuthResponse(BaseModel):
    message: str
    token: str
    user: UserOut


class CurrentUser(BaseModel):
    """Identity carried by a verified bearer token."""
    id: int
    username: str


class TaskCreate(BaseModel):
    title: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = Field(default=None, description="Task details")


class TaskUpdate(BaseModel):
    title: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = None
    status: Optional[str] = Field(None, description="'pending' or 'completed'")


class TaskOut(BaseModel):
    id: int
    user_id: int
    title: str
    description: str
    status: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class TaskDeleted(BaseModel):
    message: str
    task: TaskOut


class ErrorOut(BaseModel):
    error: str
