from datetime import datetime

from pydantic import BaseModel, EmailStr, Field

from portfolio_api.schemas.common import WritePayload


class ProfileResponse(BaseModel):
    id: int
    name: str
    title: str
    bio: str | None = None
    email: str | None = None
    phone: str | None = None
    location: str | None = None
    resume_url: str | None = None
    profile_image: str | None = None
    github_url: str | None = None
    linkedin_url: str | None = None
    twitter_url: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}


class ProfileUpdate(WritePayload):
    name: str = Field(..., max_length=255)
    title: str = Field(..., max_length=255)
    email: EmailStr
    bio: str | None = None
    phone: str | None = Field(None, max_length=50)
    location: str | None = Field(None, max_length=255)
    resume_url: str | None = Field(None, max_length=500)
    github_url: str | None = Field(None, max_length=500)
    linkedin_url: str | None = Field(None, max_length=500)
    twitter_url: str | None = Field(None, max_length=500)
