from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from portfolio_api.schemas.common import WritePayload, string_list_input, string_list_output


class GalleryItemResponse(BaseModel):
    id: int
    title: str
    description: str | None = None
    image_url: str
    thumbnail_url: str | None = None
    category: str | None = None
    tags: list[str] = []
    is_featured: bool
    sort_order: int
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}

    @field_validator("tags", mode="before")
    @classmethod
    def parse_tags(cls, value):
        return string_list_output(value)


class GalleryItemWrite(WritePayload):
    title: str = Field(..., max_length=255)
    description: str | None = None
    category: str | None = Field(None, max_length=100)
    tags: list[str] = []
    is_featured: bool = False
    sort_order: int = 0

    @field_validator("tags", mode="before")
    @classmethod
    def normalize_tags(cls, value):
        return string_list_input(value)
