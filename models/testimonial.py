from pydantic import BaseModel, ConfigDict, field_validator
from typing import Optional, Any

from models.common import coerce_int

DEFAULT_RATING = 5
DEFAULT_DISPLAY_ORDER = 0


class TestimonialUpdate(BaseModel):
    """
    Partial testimonial body.
    rating and displayOrder go through the same lenient parsing as on create
    whenever they are present; absent fields are left untouched.
    """
    name: Optional[str] = None
    company: Optional[str] = None
    position: Optional[str] = None
    testimonial: Optional[str] = None
    image: Optional[str] = None
    rating: Optional[int] = None
    featured: Optional[bool] = None
    active: Optional[bool] = None
    displayOrder: Optional[int] = None

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    @field_validator("rating", mode="before")
    @classmethod
    def parse_rating(cls, v: Any) -> int:
        return coerce_int(v, DEFAULT_RATING)

    @field_validator("displayOrder", mode="before")
    @classmethod
    def parse_display_order(cls, v: Any) -> int:
        return coerce_int(v, DEFAULT_DISPLAY_ORDER)


class TestimonialCreate(TestimonialUpdate):
    name: str
    rating: int = DEFAULT_RATING
    featured: bool = False
    active: bool = True
    displayOrder: int = DEFAULT_DISPLAY_ORDER


class FeaturedToggle(BaseModel):
    featured: bool


class ActiveToggle(BaseModel):
    active: bool
