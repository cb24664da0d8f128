from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, EmailStr, Field

from bikehub.db.models.dealer import DealerType
from bikehub.schemas.bike import BikeResponse


class DealerCreateRequest(BaseModel):
    name: str = Field(min_length=1, max_length=160)
    type: DealerType
    email: EmailStr
    phone: str = Field(min_length=1, max_length=40)
    street: str | None = None
    city: str | None = None
    state: str | None = None
    country: str = "Nepal"
    latitude: float | None = Field(default=None, ge=-90, le=90)
    longitude: float | None = Field(default=None, ge=-180, le=180)
    map_link: str | None = None
    brands: list[str] = Field(default_factory=list)
    services: list[str] = Field(default_factory=list)


class DealerResponse(BaseModel):
    id: int
    name: str
    type: str
    email: str
    phone: str
    street: str | None
    city: str | None
    state: str | None
    country: str
    latitude: float | None
    longitude: float | None
    map_link: str | None
    brands: list[str]
    services: list[str]
    is_active: bool

    model_config = {"from_attributes": True}


class DealerSummary(BaseModel):
    id: int
    name: str
    phone: str
    street: str | None
    city: str | None

    model_config = {"from_attributes": True}


class ListingUpsertRequest(BaseModel):
    bike_id: int
    available_for_test_ride: bool | None = None
    available_for_purchase: bool | None = None
    on_road_price: Decimal | None = Field(default=None, ge=0, max_digits=12, decimal_places=2)
    stock: int | None = Field(default=None, ge=0)
    notes: str | None = Field(default=None, max_length=500)


class ListingResponse(BaseModel):
    id: int
    dealer_id: int
    bike_id: int
    available_for_test_ride: bool
    available_for_purchase: bool
    on_road_price: Decimal | None
    stock: int
    notes: str | None
    is_active: bool
    created_at: datetime
    bike: BikeResponse

    model_config = {"from_attributes": True}


class DealerBikesResponse(BaseModel):
    dealer: DealerResponse
    listings: list[ListingResponse]
