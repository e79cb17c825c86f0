from datetime import datetime

from pydantic import BaseModel, Field

from portfolio_api.schemas.common import WritePayload


class SkillResponse(BaseModel):
    id: int
    name: str
    level: int
    category: str | None = None
    icon: str | None = None
    is_featured: bool
    sort_order: int
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}


class SkillWrite(WritePayload):
    name: str = Field(..., max_length=255)
    level: int = Field(..., ge=0, le=100)
    category: str | None = Field(None, max_length=100)
    icon: str | None = Field(None, max_length=100)
    is_featured: bool = False
    sort_order: int = 0
