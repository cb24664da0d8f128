import logging
from datetime import UTC, date, datetime, timedelta

from sqlalchemy import and_, or_, select
from sqlalchemy.orm import Session

from bikehub.core.config import settings
from bikehub.db.models import Booking, BookingStatus
from bikehub.db.session import SessionLocal
from bikehub.tasks.celery_app import celery_app

logger = logging.getLogger(__name__)


def find_upcoming_test_rides(db: Session, today: date | None = None) -> list[Booking]:
    """Approved or rescheduled bookings whose ride day falls within the lookahead window."""
    start = today or datetime.now(UTC).date()
    end = start + timedelta(days=settings.reminder_lookahead_days)

    return list(
        db.scalars(
            select(Booking)
            .where(
                or_(
                    and_(
                        Booking.status == BookingStatus.APPROVED.value,
                        Booking.booking_date >= start,
                        Booking.booking_date <= end,
                    ),
                    and_(
                        Booking.status == BookingStatus.RESCHEDULED.value,
                        Booking.rescheduled_date >= start,
                        Booking.rescheduled_date <= end,
                    ),
                )
            )
            .order_by(Booking.id)
        ).all()
    )


@celery_app.task(name="bookings.remind_upcoming_test_rides")
def remind_upcoming_test_rides_task() -> dict[str, int]:
    db = SessionLocal()
    try:
        upcoming = find_upcoming_test_rides(db=db)
        for booking in upcoming:
            logger.info(
                "test_ride_reminder booking_id=%s user_id=%s dealer_id=%s",
                booking.id,
                booking.user_id,
                booking.dealer_id,
            )
        return {"to_remind": len(upcoming)}
    finally:
        db.close()
