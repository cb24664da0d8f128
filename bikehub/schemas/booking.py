from datetime import date, datetime

from pydantic import BaseModel, Field, field_validator

from bikehub.db.models.booking import PREFERRED_TIME_SLOTS, BookingStatus
from bikehub.schemas.bike import BikeSummary
from bikehub.schemas.dealer import DealerSummary
from bikehub.schemas.user import UserSummary


class BookingCreateRequest(BaseModel):
    bike_id: int
    dealer_id: int
    booking_date: date
    preferred_time: str
    message: str | None = Field(default=None, max_length=1000)

    @field_validator("preferred_time")
    @classmethod
    def validate_preferred_time(cls, value: str) -> str:
        if value not in PREFERRED_TIME_SLOTS:
            raise ValueError(f"preferred_time must be one of {', '.join(PREFERRED_TIME_SLOTS)}")
        return value


class BookingDecisionRequest(BaseModel):
    message: str | None = Field(default=None, max_length=1000)


class BookingRescheduleRequest(BaseModel):
    rescheduled_date: date | None = None
    rescheduled_time: str | None = None
    message: str | None = Field(default=None, max_length=1000)


class BookingResponse(BaseModel):
    id: int
    user_id: int
    bike_id: int
    dealer_id: int
    booking_date: date
    preferred_time: str
    status: BookingStatus
    message: str | None
    dealer_response: str | None
    rescheduled_date: date | None
    rescheduled_time: str | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class BookingDetailResponse(BookingResponse):
    user: UserSummary
    bike: BikeSummary
    dealer: DealerSummary
