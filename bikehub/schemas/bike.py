from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from bikehub.db.models.bike import BikeCategory


class EngineSpec(BaseModel):
    displacement: str | None = None
    max_power: str | None = Field(default=None, alias="maxPower")
    max_torque: str | None = Field(default=None, alias="maxTorque")
    cooling: str | None = None
    transmission: str | None = None

    model_config = {"populate_by_name": True}


class DimensionsSpec(BaseModel):
    length: str | None = None
    width: str | None = None
    height: str | None = None
    wheelbase: str | None = None
    ground_clearance: str | None = Field(default=None, alias="groundClearance")
    seat_height: str | None = Field(default=None, alias="seatHeight")
    kerb_weight: str | None = Field(default=None, alias="kerbWeight")

    model_config = {"populate_by_name": True}


class PerformanceSpec(BaseModel):
    top_speed: str | None = Field(default=None, alias="topSpeed")
    mileage: str | None = None
    fuel_capacity: str | None = Field(default=None, alias="fuelCapacity")

    model_config = {"populate_by_name": True}


class BrakesSpec(BaseModel):
    front: str | None = None
    rear: str | None = None
    abs: bool | None = None


class PairSpec(BaseModel):
    front: str | None = None
    rear: str | None = None


class Specifications(BaseModel):
    engine: EngineSpec = Field(default_factory=EngineSpec)
    dimensions: DimensionsSpec = Field(default_factory=DimensionsSpec)
    performance: PerformanceSpec = Field(default_factory=PerformanceSpec)
    brakes: BrakesSpec = Field(default_factory=BrakesSpec)
    suspension: PairSpec = Field(default_factory=PairSpec)
    tyres: PairSpec = Field(default_factory=PairSpec)
    colors: list[str] = Field(default_factory=list)

    def to_storage(self) -> dict:
        """Nested groups keyed the way they are stored on ``Bike.specifications``."""
        return self.model_dump(by_alias=True, exclude_none=True)


class BikeImage(BaseModel):
    url: str
    alt: str | None = None


class BikeCreateRequest(BaseModel):
    name: str = Field(min_length=1, max_length=160)
    brand: str = Field(min_length=1, max_length=120)
    category: BikeCategory
    price: Decimal = Field(ge=0, max_digits=12, decimal_places=2)
    ex_showroom_price: Decimal = Field(ge=0, max_digits=12, decimal_places=2)
    description: str = ""
    specifications: Specifications = Field(default_factory=Specifications)
    images: list[BikeImage] = Field(default_factory=list)
    is_available: bool = True
    featured: bool = False


class BikeUpdateRequest(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=160)
    brand: str | None = Field(default=None, min_length=1, max_length=120)
    category: BikeCategory | None = None
    price: Decimal | None = Field(default=None, ge=0, max_digits=12, decimal_places=2)
    ex_showroom_price: Decimal | None = Field(default=None, ge=0, max_digits=12, decimal_places=2)
    description: str | None = None
    specifications: Specifications | None = None
    images: list[BikeImage] | None = None
    is_available: bool | None = None
    featured: bool | None = None


class BikeResponse(BaseModel):
    id: int
    name: str
    brand: str
    category: str
    price: Decimal
    ex_showroom_price: Decimal
    description: str
    specifications: dict
    images: list[dict]
    is_available: bool
    featured: bool
    views: int
    comparisons: int
    created_at: datetime

    model_config = {"from_attributes": True}


class BikeSummary(BaseModel):
    id: int
    name: str
    brand: str
    price: Decimal
    images: list[dict]

    model_config = {"from_attributes": True}
