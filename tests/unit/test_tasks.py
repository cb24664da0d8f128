from datetime import date
from decimal import Decimal

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from bikehub.db.base import Base
from bikehub.db.models import Bike, Booking, BookingStatus, Dealer, User, UserRole
from bikehub.tasks import reminders
from bikehub.tasks.reminders import find_upcoming_test_rides, remind_upcoming_test_rides_task

TODAY = date(2026, 11, 2)


def _build_sessionmaker() -> sessionmaker:
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)


def _seed_rider_bike_dealer(db: Session) -> tuple[User, Bike, Dealer]:
    rider = User(name="Rider", email="task-rider@example.com", hashed_password="x", role=UserRole.USER.value)
    bike = Bike(
        name="Classic 350",
        brand="Royal Enfield",
        category="Cruiser",
        price=Decimal("193000"),
        ex_showroom_price=Decimal("193000"),
    )
    dealer = Dealer(name="Lalitpur Moto", type="showroom", email="lalitpur@example.com", phone="01-5551234")
    db.add_all([rider, bike, dealer])
    db.flush()
    return rider, bike, dealer


def _booking(rider, bike, dealer, status, booking_date, rescheduled_date=None) -> Booking:
    return Booking(
        user_id=rider.id,
        bike_id=bike.id,
        dealer_id=dealer.id,
        booking_date=booking_date,
        preferred_time="11:00",
        status=status.value,
        rescheduled_date=rescheduled_date,
        rescheduled_time="15:00" if rescheduled_date else None,
    )


def _seed_bookings(db: Session) -> dict[str, Booking]:
    rider, bike, dealer = _seed_rider_bike_dealer(db)
    bookings = {
        "approved_tomorrow": _booking(rider, bike, dealer, BookingStatus.APPROVED, date(2026, 11, 3)),
        "approved_next_week": _booking(rider, bike, dealer, BookingStatus.APPROVED, date(2026, 11, 9)),
        "pending_tomorrow": _booking(rider, bike, dealer, BookingStatus.PENDING, date(2026, 11, 3)),
        "moved_to_today": _booking(
            rider, bike, dealer, BookingStatus.RESCHEDULED, date(2026, 10, 30), rescheduled_date=TODAY
        ),
        "moved_away": _booking(
            rider, bike, dealer, BookingStatus.RESCHEDULED, TODAY, rescheduled_date=date(2026, 11, 20)
        ),
    }
    db.add_all(bookings.values())
    db.commit()
    return bookings


def test_find_upcoming_test_rides_uses_effective_ride_date():
    db = _build_sessionmaker()()
    bookings = _seed_bookings(db)

    upcoming = find_upcoming_test_rides(db=db, today=TODAY)

    assert [booking.id for booking in upcoming] == sorted(
        [bookings["approved_tomorrow"].id, bookings["moved_to_today"].id]
    )
    db.close()


def test_remind_task_counts_upcoming_rides(monkeypatch):
    session_factory = _build_sessionmaker()
    db = session_factory()
    _seed_bookings(db)
    db.close()
    monkeypatch.setattr(reminders, "SessionLocal", session_factory)
    monkeypatch.setattr(
        reminders,
        "find_upcoming_test_rides",
        lambda db: find_upcoming_test_rides(db=db, today=TODAY),
    )

    result = remind_upcoming_test_rides_task()

    assert result == {"to_remind": 2}
