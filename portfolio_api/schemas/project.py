from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field, field_validator

from portfolio_api.schemas.common import WritePayload, string_list_input, string_list_output


class ProjectStatus(str, Enum):
    completed = "completed"
    in_progress = "in_progress"
    planned = "planned"


class ProjectResponse(BaseModel):
    id: int
    title: str
    description: str | None = None
    long_description: str | None = None
    technologies: list[str] = []
    image_url: str | None = None
    gallery_images: list[str] = []
    github_url: str | None = None
    demo_url: str | None = None
    is_featured: bool
    status: ProjectStatus
    sort_order: int
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}

    @field_validator("technologies", "gallery_images", mode="before")
    @classmethod
    def parse_lists(cls, value):
        return string_list_output(value)


class ProjectWrite(WritePayload):
    title: str = Field(..., max_length=255)
    description: str
    long_description: str | None = None
    technologies: list[str] = []
    gallery_images: list[str] = []
    github_url: str | None = Field(None, max_length=500)
    demo_url: str | None = Field(None, max_length=500)
    is_featured: bool = False
    status: ProjectStatus = ProjectStatus.completed
    sort_order: int = 0

    @field_validator("technologies", "gallery_images", mode="before")
    @classmethod
    def normalize_lists(cls, value):
        return string_list_input(value)
