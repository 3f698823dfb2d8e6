from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List, Literal

from constants import BlogStatus


def status_for(publish: Optional[bool]) -> str:
    return BlogStatus.PUBLISHED if publish else BlogStatus.DRAFT


class BlogUpdate(BaseModel):
    title: Optional[str] = None
    excerpt: Optional[str] = None
    content: Optional[str] = None
    author: Optional[str] = None
    category: Optional[str] = None
    tags: Optional[List[str]] = None
    image: Optional[str] = None
    status: Optional[Literal['Draft', 'Published']] = None

    # Write-time intent only; never persisted
    publishImmediately: Optional[bool] = None

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    def to_document(self) -> dict:
        """Fields the client sent, with publishImmediately turned into a status."""
        data = self.model_dump(exclude_unset=True, exclude={"publishImmediately"})
        if self.publishImmediately is not None:
            data["status"] = status_for(self.publishImmediately)
        return data


class BlogCreate(BlogUpdate):
    title: str
    tags: List[str] = Field(default_factory=list)

    def to_document(self) -> dict:
        data = self.model_dump(exclude_none=True, exclude={"publishImmediately", "status"})
        data["status"] = status_for(self.publishImmediately)
        data["views"] = 0
        return data
