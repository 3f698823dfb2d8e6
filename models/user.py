from pydantic import BaseModel, EmailStr, ConfigDict
from typing import Optional


class UserCreate(BaseModel):
    """Site user record. Carries no credentials; admin login is separate."""
    email: EmailStr
    name: Optional[str] = None
    photoURL: Optional[str] = None

    model_config = ConfigDict(
        populate_by_name=True,
        extra="allow"
    )


class LoginRequest(BaseModel):
    username: str
    password: str
