from datetime import datetime

from pydantic import BaseModel, Field

from portfolio_api.schemas.common import WritePayload


class TestimonialResponse(BaseModel):
    id: int
    name: str
    position: str | None = None
    company: str | None = None
    content: str
    avatar_url: str | None = None
    rating: int
    is_featured: bool
    sort_order: int
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}


class TestimonialWrite(WritePayload):
    name: str = Field(..., max_length=255)
    content: str
    rating: int = Field(..., ge=1, le=5)
    position: str | None = Field(None, max_length=255)
    company: str | None = Field(None, max_length=255)
    is_featured: bool = False
    sort_order: int = 0
