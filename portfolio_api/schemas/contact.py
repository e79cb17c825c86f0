from datetime import datetime
from enum import Enum

from pydantic import BaseModel, EmailStr, Field

from portfolio_api.schemas.common import WritePayload


class ContactStatus(str, Enum):
    unread = "unread"
    read = "read"
    replied = "replied"


class ContactMessageCreate(WritePayload):
    name: str = Field(..., max_length=255)
    email: EmailStr
    subject: str | None = Field(None, max_length=255)
    message: str


class ContactStatusUpdate(BaseModel):
    status: ContactStatus


class ContactMessageResponse(BaseModel):
    id: int
    name: str
    email: str
    subject: str | None = None
    message: str
    status: ContactStatus
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}


class ContactStats(BaseModel):
    total: int
    unread: int
    read: int
    replied: int
