from pydantic import BaseModel, ConfigDict, field_validator
from typing import Optional, Literal, Any

from models.common import optional_int

MediaType = Literal['Image', 'Document', 'Video', 'Audio']


class MediaUpdate(BaseModel):
    """Partial media body; only fields the client sent are written."""
    name: Optional[str] = None
    type: Optional[MediaType] = None
    size: Optional[int] = None
    originalName: Optional[str] = None
    url: Optional[str] = None
    display_url: Optional[str] = None
    thumb_url: Optional[str] = None
    medium_url: Optional[str] = None
    delete_url: Optional[str] = None
    alt: Optional[str] = None
    mimeType: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None
    imgbb_id: Optional[str] = None
    imgbb_filename: Optional[str] = None
    storage_provider: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v: Any) -> Any:
        return v.strip() if isinstance(v, str) else v

    @field_validator("width", "height", mode="before")
    @classmethod
    def parse_dimension(cls, v: Any) -> Optional[int]:
        return optional_int(v)


class MediaCreate(MediaUpdate):
    name: str
    type: MediaType
    size: int
    alt: str = ""
    mimeType: str = ""
    storage_provider: str = "local"

    def to_document(self) -> dict:
        data = self.model_dump()
        data["originalName"] = self.originalName or self.name
        data["display_url"] = self.display_url or self.url
        data["storage_provider"] = self.storage_provider or "local"
        return data
