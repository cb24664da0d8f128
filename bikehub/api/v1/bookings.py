from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from bikehub.api.deps import get_current_user
from bikehub.db.models import User
from bikehub.db.session import get_db
from bikehub.schemas.booking import (
    BookingCreateRequest,
    BookingDecisionRequest,
    BookingDetailResponse,
    BookingRescheduleRequest,
)
from bikehub.services.booking_service import (
    approve_booking,
    create_booking,
    get_booking,
    list_bookings,
    reject_booking,
    reschedule_booking,
)

router = APIRouter(prefix="/bookings", tags=["bookings"])


@router.post("", response_model=BookingDetailResponse, status_code=status.HTTP_201_CREATED)
def create_test_ride_booking(
    payload: BookingCreateRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> BookingDetailResponse:
    booking = create_booking(
        db=db,
        user=current_user,
        bike_id=payload.bike_id,
        dealer_id=payload.dealer_id,
        booking_date=payload.booking_date,
        preferred_time=payload.preferred_time,
        message=payload.message,
    )
    return BookingDetailResponse.model_validate(booking)


@router.get("", response_model=list[BookingDetailResponse], status_code=status.HTTP_200_OK)
def list_my_bookings(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> list[BookingDetailResponse]:
    return [BookingDetailResponse.model_validate(booking) for booking in list_bookings(db=db, user=current_user)]


@router.get("/{booking_id}", response_model=BookingDetailResponse, status_code=status.HTTP_200_OK)
def get_booking_by_id(
    booking_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> BookingDetailResponse:
    booking = get_booking(db=db, booking_id=booking_id, user=current_user)
    return BookingDetailResponse.model_validate(booking)


@router.put("/{booking_id}/approve", response_model=BookingDetailResponse, status_code=status.HTTP_200_OK)
def approve(
    booking_id: int,
    payload: BookingDecisionRequest | None = None,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> BookingDetailResponse:
    booking = approve_booking(
        db=db,
        booking_id=booking_id,
        actor=current_user,
        message=payload.message if payload else None,
    )
    return BookingDetailResponse.model_validate(booking)


@router.put("/{booking_id}/reject", response_model=BookingDetailResponse, status_code=status.HTTP_200_OK)
def reject(
    booking_id: int,
    payload: BookingDecisionRequest | None = None,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> BookingDetailResponse:
    booking = reject_booking(
        db=db,
        booking_id=booking_id,
        actor=current_user,
        message=payload.message if payload else None,
    )
    return BookingDetailResponse.model_validate(booking)


@router.put("/{booking_id}/reschedule", response_model=BookingDetailResponse, status_code=status.HTTP_200_OK)
def reschedule(
    booking_id: int,
    payload: BookingRescheduleRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> BookingDetailResponse:
    booking = reschedule_booking(
        db=db,
        booking_id=booking_id,
        actor=current_user,
        new_date=payload.rescheduled_date,
        new_time=payload.rescheduled_time,
        message=payload.message,
    )
    return BookingDetailResponse.model_validate(booking)
