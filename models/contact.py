from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from typing import Optional, Literal, Any


class ContactCreate(BaseModel):
    """Public contact form submission."""
    name: str
    email: EmailStr
    phone: Optional[str] = None
    subject: Optional[str] = None
    message: str

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @field_validator("phone", "subject", mode="before")
    @classmethod
    def blank_to_none(cls, v: Any) -> Any:
        if v == "":
            return None
        return v


class ContactStatusUpdate(BaseModel):
    status: Literal['new', 'read', 'replied', 'spam']


class ReplyCreate(BaseModel):
    message: str
    adminEmail: Optional[str] = None
    trackingId: Optional[str] = None


class EmailWebhookPayload(BaseModel):
    """Inbound email as posted by the mail provider."""
    from_: Optional[str] = Field(None, alias="from")
    to: Optional[Any] = None
    subject: Optional[str] = None
    text: Optional[str] = None
    html: Optional[str] = None
    messageId: Optional[str] = None
    inReplyTo: Optional[str] = None
    references: Optional[Any] = None

    model_config = ConfigDict(populate_by_name=True, extra="ignore")
