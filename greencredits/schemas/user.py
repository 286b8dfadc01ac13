"""User-related schemas."""

from datetime import datetime

from pydantic import BaseModel


class UserResponse(BaseModel):
    """Public user representation."""

    id: str
    name: str
    email: str | None = None
    created_at: datetime
