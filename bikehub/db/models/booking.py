from datetime import date, datetime
from enum import Enum

from sqlalchemy import CheckConstraint, Date, DateTime, ForeignKey, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bikehub.core.exceptions import InvalidTransitionError
from bikehub.db.base import Base


class BookingStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    RESCHEDULED = "rescheduled"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


# Only consulted in strict mode. Re-applying the current status is always allowed.
ALLOWED_TRANSITIONS: dict[BookingStatus, frozenset[BookingStatus]] = {
    BookingStatus.PENDING: frozenset(
        {BookingStatus.APPROVED, BookingStatus.REJECTED, BookingStatus.RESCHEDULED}
    ),
}

PREFERRED_TIME_SLOTS: tuple[str, ...] = tuple(
    f"{hour:02d}:{minute:02d}" for hour in range(9, 18) for minute in (0, 30) if (hour, minute) <= (17, 0)
)


class Booking(Base):
    __tablename__ = "bookings"
    __table_args__ = (
        CheckConstraint(
            "status IN (" + ", ".join(f"'{status.value}'" for status in BookingStatus) + ")",
            name="ck_bookings_status",
        ),
    )

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="RESTRICT"), nullable=False, index=True)
    bike_id: Mapped[int] = mapped_column(ForeignKey("bikes.id", ondelete="RESTRICT"), nullable=False, index=True)
    dealer_id: Mapped[int] = mapped_column(ForeignKey("dealers.id", ondelete="RESTRICT"), nullable=False, index=True)
    booking_date: Mapped[date] = mapped_column(Date, nullable=False)
    preferred_time: Mapped[str] = mapped_column(String(5), nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default=BookingStatus.PENDING.value)
    message: Mapped[str | None] = mapped_column(Text, nullable=True)
    dealer_response: Mapped[str | None] = mapped_column(Text, nullable=True)
    rescheduled_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    rescheduled_time: Mapped[str | None] = mapped_column(String(5), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now()
    )

    user = relationship("User", back_populates="bookings")
    bike = relationship("Bike")
    dealer = relationship("Dealer", back_populates="bookings")

    def can_transition_to(self, target: BookingStatus, strict: bool = False) -> bool:
        if not strict or self.status == target.value:
            return True
        return target in ALLOWED_TRANSITIONS.get(BookingStatus(self.status), frozenset())

    def _move_to(self, target: BookingStatus, response: str | None, strict: bool) -> None:
        if not self.can_transition_to(target, strict=strict):
            raise InvalidTransitionError(current_status=self.status, target_status=target.value)
        self.status = target.value
        if response:
            self.dealer_response = response.strip()

    def approve(self, response: str | None = None, strict: bool = False) -> None:
        self._move_to(BookingStatus.APPROVED, response, strict)
        self.rescheduled_date = None
        self.rescheduled_time = None

    def reject(self, response: str | None = None, strict: bool = False) -> None:
        self._move_to(BookingStatus.REJECTED, response, strict)
        self.rescheduled_date = None
        self.rescheduled_time = None

    def reschedule(
        self,
        new_date: date,
        new_time: str,
        response: str | None = None,
        strict: bool = False,
    ) -> None:
        self._move_to(BookingStatus.RESCHEDULED, response, strict)
        self.rescheduled_date = new_date
        self.rescheduled_time = new_time
