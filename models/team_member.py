from pydantic import BaseModel, ConfigDict, EmailStr, field_validator
from typing import Optional, List, Any

from models.common import empty_str_to_none, optional_int


class TeamMemberUpdate(BaseModel):
    name: Optional[str] = None
    position: Optional[str] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    bio: Optional[str] = None
    image: Optional[str] = None
    expertise: Optional[List[str]] = None
    isActive: Optional[bool] = None
    displayOrder: Optional[int] = None

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    @field_validator("email", mode="before")
    @classmethod
    def blank_email(cls, v: Any) -> Any:
        return empty_str_to_none(v)

    @field_validator("displayOrder", mode="before")
    @classmethod
    def parse_display_order(cls, v: Any) -> Any:
        return optional_int(v)


class TeamMemberCreate(TeamMemberUpdate):
    name: str
    isActive: bool = True
    displayOrder: int = 0

    @field_validator("displayOrder", mode="before")
    @classmethod
    def parse_display_order(cls, v: Any) -> Any:
        parsed = optional_int(v)
        return 0 if parsed is None else parsed
