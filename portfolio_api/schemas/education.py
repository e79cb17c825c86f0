from datetime import date, datetime

from pydantic import BaseModel, Field, model_validator

from portfolio_api.schemas.common import WritePayload


class EducationResponse(BaseModel):
    id: int
    institution: str
    degree: str
    field_of_study: str | None = None
    start_date: date | None = None
    end_date: date | None = None
    is_current: bool
    description: str | None = None
    grade: str | None = None
    activities: str | None = None
    sort_order: int
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}


class EducationWrite(WritePayload):
    institution: str = Field(..., max_length=255)
    degree: str = Field(..., max_length=255)
    field_of_study: str | None = Field(None, max_length=255)
    start_date: date | None = None
    end_date: date | None = None
    is_current: bool = False
    description: str | None = None
    grade: str | None = Field(None, max_length=50)
    activities: str | None = None
    sort_order: int = 0

    @model_validator(mode="after")
    def check_date_order(self):
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self
