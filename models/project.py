from pydantic import BaseModel, ConfigDict
from typing import Optional


class ProjectUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    clientName: Optional[str] = None
    category: Optional[str] = None
    isActive: Optional[bool] = None
    image: Optional[str] = None
    liveUrl: Optional[str] = None

    # Projects carry free-form extras (technologies, gallery, ...)
    model_config = ConfigDict(populate_by_name=True, extra="allow")


class ProjectCreate(ProjectUpdate):
    title: str
    isActive: bool = True
