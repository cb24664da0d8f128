from datetime import date

import pytest

from bikehub.core.exceptions import InvalidTransitionError
from bikehub.db.models import Booking, BookingStatus
from bikehub.db.models.booking import PREFERRED_TIME_SLOTS


def _pending_booking() -> Booking:
    return Booking(
        user_id=1,
        bike_id=1,
        dealer_id=1,
        booking_date=date(2026, 11, 2),
        preferred_time="10:00",
        status=BookingStatus.PENDING.value,
    )


def test_preferred_time_slots_cover_business_hours():
    assert PREFERRED_TIME_SLOTS[0] == "09:00"
    assert PREFERRED_TIME_SLOTS[-1] == "17:00"
    assert "12:30" in PREFERRED_TIME_SLOTS
    assert len(PREFERRED_TIME_SLOTS) == 17


def test_reschedule_then_reject_clears_new_slot():
    booking = _pending_booking()

    booking.reschedule(date(2026, 11, 4), "15:30", response="Thursday works better")
    assert booking.status == BookingStatus.RESCHEDULED.value
    assert booking.rescheduled_date == date(2026, 11, 4)
    assert booking.rescheduled_time == "15:30"

    booking.reject()
    assert booking.status == BookingStatus.REJECTED.value
    assert booking.rescheduled_date is None
    assert booking.rescheduled_time is None
    assert booking.dealer_response == "Thursday works better"


def test_blank_response_keeps_previous_dealer_response():
    booking = _pending_booking()
    booking.approve(response="Bring your licence")

    booking.approve(response="")

    assert booking.dealer_response == "Bring your licence"


@pytest.mark.parametrize(
    "current",
    [BookingStatus.APPROVED, BookingStatus.REJECTED, BookingStatus.COMPLETED, BookingStatus.CANCELLED],
)
def test_strict_mode_only_allows_decisions_on_pending(current):
    booking = _pending_booking()
    booking.status = current.value

    with pytest.raises(InvalidTransitionError) as exc_info:
        booking.reschedule(date(2026, 11, 4), "15:30", strict=True)

    assert exc_info.value.status_code == 409
    assert exc_info.value.current_status == current.value
    assert booking.status == current.value
    assert booking.rescheduled_date is None


def test_strict_mode_allows_reapplying_current_status():
    booking = _pending_booking()
    booking.approve(strict=True)

    booking.approve(strict=True)

    assert booking.status == BookingStatus.APPROVED.value


def test_loose_mode_allows_any_decision():
    booking = _pending_booking()
    booking.status = BookingStatus.CANCELLED.value

    assert booking.can_transition_to(BookingStatus.APPROVED) is True
    assert booking.can_transition_to(BookingStatus.APPROVED, strict=True) is False
