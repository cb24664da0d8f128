from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any

from sqlalchemy import JSON, Boolean, DateTime, Integer, Numeric, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from bikehub.db.base import Base


class BikeCategory(str, Enum):
    SPORTS = "Sports"
    CRUISER = "Cruiser"
    TOURING = "Touring"
    ADVENTURE = "Adventure"
    NAKED = "Naked"
    SCOOTER = "Scooter"
    ELECTRIC = "Electric"


class Bike(Base):
    __tablename__ = "bikes"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(160), nullable=False, index=True)
    brand: Mapped[str] = mapped_column(String(120), nullable=False, index=True)
    category: Mapped[str] = mapped_column(String(40), nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    ex_showroom_price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    specifications: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    images: Mapped[list[dict[str, str]]] = mapped_column(JSON, nullable=False, default=list)
    is_available: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    featured: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    views: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    comparisons: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    def spec(self, group: str, field: str) -> Any:
        """Return one leaf of the nested specification groups, or None when absent."""
        group_values = (self.specifications or {}).get(group) or {}
        if not isinstance(group_values, dict):
            return None
        return group_values.get(field)
