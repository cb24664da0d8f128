from datetime import datetime
from decimal import Decimal

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, Numeric, String, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bikehub.db.base import Base


class DealerBikeListing(Base):
    __tablename__ = "dealer_bike_listings"
    __table_args__ = (
        UniqueConstraint("dealer_id", "bike_id", name="uq_dealer_bike_listings_dealer_bike"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    dealer_id: Mapped[int] = mapped_column(ForeignKey("dealers.id", ondelete="CASCADE"), nullable=False, index=True)
    bike_id: Mapped[int] = mapped_column(ForeignKey("bikes.id", ondelete="CASCADE"), nullable=False, index=True)
    available_for_test_ride: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    available_for_purchase: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    on_road_price: Mapped[Decimal | None] = mapped_column(Numeric(12, 2), nullable=True)
    stock: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    notes: Mapped[str | None] = mapped_column(String(500), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    dealer = relationship("Dealer", back_populates="listings")
    bike = relationship("Bike")
