from pydantic import BaseModel, ConfigDict, Field
from typing import Optional


class TrackVisitorRequest(BaseModel):
    """Beacon sent by the website on every navigation."""
    ipAddress: Optional[str] = None
    userAgent: Optional[str] = None
    country: Optional[str] = None
    city: Optional[str] = None
    countryCode: Optional[str] = None
    device: Optional[str] = None
    browser: Optional[str] = None
    deviceId: Optional[str] = None
    path: Optional[str] = None
    referrer: Optional[str] = None

    model_config = ConfigDict(extra="ignore")


class PageTimeUpdate(BaseModel):
    visitorId: str
    path: str
    timeOnPage: float = Field(ge=0)
