from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy import select
from sqlalchemy.orm import Session

from bikehub.api.deps import get_current_dealer, require_roles
from bikehub.core.exceptions import NotFoundError
from bikehub.db.models import Dealer, DealerType, User, UserRole
from bikehub.db.session import get_db
from bikehub.schemas.booking import BookingDetailResponse
from bikehub.schemas.dealer import (
    DealerBikesResponse,
    DealerCreateRequest,
    DealerResponse,
    ListingResponse,
    ListingUpsertRequest,
)
from bikehub.services.booking_service import list_dealer_bookings
from bikehub.services.listing_service import deactivate_listing, list_dealer_listings, upsert_listing

router = APIRouter(prefix="/dealers", tags=["dealers"])


@router.get("", response_model=list[DealerResponse], status_code=status.HTTP_200_OK)
def list_dealers(
    type: DealerType | None = None,
    city: str | None = None,
    state: str | None = None,
    db: Session = Depends(get_db),
) -> list[DealerResponse]:
    query = select(Dealer).where(Dealer.is_active.is_(True))
    if type:
        query = query.where(Dealer.type == type.value)
    if city:
        query = query.where(Dealer.city.ilike(f"%{city.strip()}%"))
    if state:
        query = query.where(Dealer.state.ilike(f"%{state.strip()}%"))
    dealers = db.scalars(query.order_by(Dealer.created_at.desc(), Dealer.id.desc())).all()
    return [DealerResponse.model_validate(dealer) for dealer in dealers]


@router.post("", response_model=DealerResponse, status_code=status.HTTP_201_CREATED)
def create_dealer(
    payload: DealerCreateRequest,
    _: User = Depends(require_roles(UserRole.ADMIN)),
    db: Session = Depends(get_db),
) -> DealerResponse:
    dealer = Dealer(
        **payload.model_dump(exclude={"type", "email"}),
        type=payload.type.value,
        email=payload.email.lower(),
    )
    db.add(dealer)
    db.flush()

    account = db.scalar(select(User).where(User.email == dealer.email))
    if account is not None and account.dealer_id is None:
        account.dealer_id = dealer.id

    db.commit()
    db.refresh(dealer)
    return DealerResponse.model_validate(dealer)


@router.get("/me/listings", response_model=list[ListingResponse], status_code=status.HTTP_200_OK)
def list_my_listings(
    dealer: Dealer = Depends(get_current_dealer),
    db: Session = Depends(get_db),
) -> list[ListingResponse]:
    return [ListingResponse.model_validate(listing) for listing in list_dealer_listings(db=db, dealer=dealer)]


@router.post("/me/listings", response_model=ListingResponse, status_code=status.HTTP_201_CREATED)
def list_bike(
    payload: ListingUpsertRequest,
    dealer: Dealer = Depends(get_current_dealer),
    db: Session = Depends(get_db),
) -> JSONResponse:
    listing, status_code = upsert_listing(db=db, dealer=dealer, payload=payload)
    return JSONResponse(
        status_code=status_code,
        content=ListingResponse.model_validate(listing).model_dump(mode="json"),
    )


@router.delete("/me/listings/{listing_id}", response_model=ListingResponse, status_code=status.HTTP_200_OK)
def remove_listing(
    listing_id: int,
    dealer: Dealer = Depends(get_current_dealer),
    current_user: User = Depends(require_roles(UserRole.DEALER, UserRole.ADMIN)),
    db: Session = Depends(get_db),
) -> ListingResponse:
    listing = deactivate_listing(db=db, listing_id=listing_id, dealer=dealer, actor=current_user)
    return ListingResponse.model_validate(listing)


@router.get("/me/bookings", response_model=list[BookingDetailResponse], status_code=status.HTTP_200_OK)
def list_my_dealer_bookings(
    dealer: Dealer = Depends(get_current_dealer),
    db: Session = Depends(get_db),
) -> list[BookingDetailResponse]:
    return [BookingDetailResponse.model_validate(booking) for booking in list_dealer_bookings(db=db, dealer=dealer)]


@router.get("/{dealer_id}/bikes", response_model=DealerBikesResponse, status_code=status.HTTP_200_OK)
def list_dealer_bikes(dealer_id: int, db: Session = Depends(get_db)) -> DealerBikesResponse:
    dealer = db.get(Dealer, dealer_id)
    if dealer is None:
        raise NotFoundError("Dealer not found")
    listings = list_dealer_listings(db=db, dealer=dealer, only_public=True)
    return DealerBikesResponse(
        dealer=DealerResponse.model_validate(dealer),
        listings=[ListingResponse.model_validate(listing) for listing in listings],
    )
