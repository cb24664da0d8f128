import logging
from datetime import date

from sqlalchemy import select
from sqlalchemy.orm import Session

from bikehub.core.config import settings
from bikehub.core.exceptions import BadRequestError, ForbiddenError, NotFoundError
from bikehub.core.metrics import BOOKING_TRANSITIONS
from bikehub.db.models import Bike, Booking, BookingStatus, Dealer, User, UserRole

logger = logging.getLogger(__name__)

BOOKING_NOT_FOUND_DETAIL = "Booking not found"
DEALER_OR_ADMIN_DETAIL = "Dealer or Admin access required"

RESPONDER_ROLES = frozenset({UserRole.DEALER.value, UserRole.ADMIN.value})


def resolve_dealer_for_user(db: Session, user: User) -> Dealer | None:
    """Find the dealer record a login account operates.

    The explicit ``dealer_id`` link wins; accounts without one are matched to a
    dealer by email, which is how dealer accounts were historically linked.
    """
    if user.dealer_id is not None:
        dealer = db.get(Dealer, user.dealer_id)
        if dealer is not None:
            return dealer
    return db.scalar(select(Dealer).where(Dealer.email == user.email.lower()).order_by(Dealer.id))


def create_booking(
    db: Session,
    user: User,
    bike_id: int,
    dealer_id: int,
    booking_date: date,
    preferred_time: str,
    message: str | None = None,
) -> Booking:
    if db.get(Bike, bike_id) is None:
        raise NotFoundError("Bike not found")
    if db.get(Dealer, dealer_id) is None:
        raise NotFoundError("Dealer not found")

    booking = Booking(
        user_id=user.id,
        bike_id=bike_id,
        dealer_id=dealer_id,
        booking_date=booking_date,
        preferred_time=preferred_time,
        message=message.strip() if message else None,
        status=BookingStatus.PENDING.value,
    )
    db.add(booking)
    db.commit()
    db.refresh(booking)
    logger.info("booking_created booking_id=%s user_id=%s dealer_id=%s", booking.id, user.id, dealer_id)
    return booking


def list_bookings(db: Session, user: User) -> list[Booking]:
    query = select(Booking).order_by(Booking.created_at.desc(), Booking.id.desc())
    if user.role == UserRole.DEALER.value:
        dealer = resolve_dealer_for_user(db=db, user=user)
        if dealer is None:
            return []
        query = query.where(Booking.dealer_id == dealer.id)
    else:
        # Admins land here too and only see bookings they requested themselves.
        query = query.where(Booking.user_id == user.id)
    return list(db.scalars(query).all())


def list_dealer_bookings(db: Session, dealer: Dealer) -> list[Booking]:
    return list(
        db.scalars(
            select(Booking)
            .where(Booking.dealer_id == dealer.id)
            .order_by(Booking.created_at.desc(), Booking.id.desc())
        ).all()
    )


def get_booking(db: Session, booking_id: int, user: User) -> Booking:
    booking = db.get(Booking, booking_id)
    if booking is None:
        raise NotFoundError(BOOKING_NOT_FOUND_DETAIL)
    if user.role not in RESPONDER_ROLES and booking.user_id != user.id:
        raise ForbiddenError("Not authorized")
    return booking


def _get_booking_for_response(db: Session, booking_id: int, actor: User) -> Booking:
    booking = db.get(Booking, booking_id)
    if booking is None:
        raise NotFoundError(BOOKING_NOT_FOUND_DETAIL)
    if actor.role not in RESPONDER_ROLES:
        raise ForbiddenError(DEALER_OR_ADMIN_DETAIL)
    return booking


def _save_transition(db: Session, booking: Booking, actor: User) -> Booking:
    db.commit()
    db.refresh(booking)
    BOOKING_TRANSITIONS.labels(status=booking.status).inc()
    logger.info(
        "booking_status_changed booking_id=%s status=%s actor_id=%s actor_role=%s",
        booking.id,
        booking.status,
        actor.id,
        actor.role,
    )
    return booking


def approve_booking(db: Session, booking_id: int, actor: User, message: str | None = None) -> Booking:
    booking = _get_booking_for_response(db=db, booking_id=booking_id, actor=actor)
    booking.approve(response=message, strict=settings.booking_strict_transitions)
    return _save_transition(db=db, booking=booking, actor=actor)


def reject_booking(db: Session, booking_id: int, actor: User, message: str | None = None) -> Booking:
    booking = _get_booking_for_response(db=db, booking_id=booking_id, actor=actor)
    booking.reject(response=message, strict=settings.booking_strict_transitions)
    return _save_transition(db=db, booking=booking, actor=actor)


def reschedule_booking(
    db: Session,
    booking_id: int,
    actor: User,
    new_date: date | None,
    new_time: str | None,
    message: str | None = None,
) -> Booking:
    booking = _get_booking_for_response(db=db, booking_id=booking_id, actor=actor)
    if new_date is None or not (new_time or "").strip():
        raise BadRequestError("Rescheduled date and time are required")

    booking.reschedule(
        new_date=new_date,
        new_time=new_time.strip(),
        response=message,
        strict=settings.booking_strict_transitions,
    )
    return _save_transition(db=db, booking=booking, actor=actor)
