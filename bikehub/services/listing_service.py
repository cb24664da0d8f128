import logging

from fastapi import status
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from bikehub.core.exceptions import BadRequestError, ForbiddenError, NotFoundError
from bikehub.db.models import Bike, Dealer, DealerBikeListing, User, UserRole
from bikehub.schemas.dealer import ListingUpsertRequest

logger = logging.getLogger(__name__)

ALREADY_LISTED_DETAIL = "Bike is already listed"


def upsert_listing(db: Session, dealer: Dealer, payload: ListingUpsertRequest) -> tuple[DealerBikeListing, int]:
    """Create the dealer's listing for a bike, or refresh the one that exists.

    Returns the listing and the HTTP status that describes what happened.
    """
    if db.get(Bike, payload.bike_id) is None:
        raise NotFoundError("Bike not found")

    listing = db.scalar(
        select(DealerBikeListing).where(
            DealerBikeListing.dealer_id == dealer.id,
            DealerBikeListing.bike_id == payload.bike_id,
        )
    )
    if listing is not None:
        if payload.available_for_test_ride is not None:
            listing.available_for_test_ride = payload.available_for_test_ride
        if payload.available_for_purchase is not None:
            listing.available_for_purchase = payload.available_for_purchase
        if payload.on_road_price:
            listing.on_road_price = payload.on_road_price
        if payload.stock is not None:
            listing.stock = payload.stock
        if payload.notes:
            listing.notes = payload.notes
        listing.is_active = True
        db.commit()
        db.refresh(listing)
        return listing, status.HTTP_200_OK

    listing = DealerBikeListing(
        dealer_id=dealer.id,
        bike_id=payload.bike_id,
        available_for_test_ride=True if payload.available_for_test_ride is None else payload.available_for_test_ride,
        available_for_purchase=True if payload.available_for_purchase is None else payload.available_for_purchase,
        on_road_price=payload.on_road_price,
        stock=payload.stock or 0,
        notes=payload.notes,
    )
    db.add(listing)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise BadRequestError(ALREADY_LISTED_DETAIL) from None
    db.refresh(listing)
    logger.info("listing_created listing_id=%s dealer_id=%s bike_id=%s", listing.id, dealer.id, listing.bike_id)
    return listing, status.HTTP_201_CREATED


def deactivate_listing(db: Session, listing_id: int, dealer: Dealer, actor: User) -> DealerBikeListing:
    listing = db.get(DealerBikeListing, listing_id)
    if listing is None:
        raise NotFoundError("Listing not found")
    if listing.dealer_id != dealer.id and actor.role != UserRole.ADMIN.value:
        raise ForbiddenError("Not authorized")

    listing.is_active = False
    db.commit()
    db.refresh(listing)
    return listing


def list_dealer_listings(db: Session, dealer: Dealer, only_public: bool = False) -> list[DealerBikeListing]:
    query = select(DealerBikeListing).where(DealerBikeListing.dealer_id == dealer.id)
    if only_public:
        query = (
            query.join(Bike, DealerBikeListing.bike_id == Bike.id)
            .where(DealerBikeListing.is_active.is_(True), Bike.is_available.is_(True))
        )
    return list(db.scalars(query.order_by(DealerBikeListing.created_at.desc(), DealerBikeListing.id.desc())).all())
