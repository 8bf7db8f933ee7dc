from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class LoginRequest(BaseModel):
    # Presence is checked by the service so a missing field is a 400, not a 422
    username: Optional[str] = None
    password: Optional[str] = None


class AdminProfile(BaseModel):
    id: int
    username: str
    email: str
    created_at: datetime

    class Config:
        from_attributes = True


class LoginResponse(AdminProfile):
    access_token: str
    token_type: str = "bearer"
