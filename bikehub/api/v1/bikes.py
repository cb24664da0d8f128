from decimal import Decimal

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import Response
from sqlalchemy import func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from bikehub.api.deps import get_current_user, require_roles
from bikehub.api.pagination import LimitParam, OffsetParam
from bikehub.core.exceptions import ConflictError, NotFoundError
from bikehub.db.models import Bike, BikeCategory, User, UserRole
from bikehub.db.session import get_db
from bikehub.schemas.bike import BikeCreateRequest, BikeResponse, BikeUpdateRequest

router = APIRouter(prefix="/bikes", tags=["bikes"])

BIKE_NOT_FOUND_DETAIL = "Bike not found"


def _get_bike_or_404(db: Session, bike_id: int) -> Bike:
    bike = db.get(Bike, bike_id)
    if bike is None:
        raise NotFoundError(BIKE_NOT_FOUND_DETAIL)
    return bike


@router.get("", response_model=list[BikeResponse], status_code=status.HTTP_200_OK)
def list_bikes(
    brand: str | None = None,
    category: BikeCategory | None = None,
    search: str | None = None,
    min_price: Decimal | None = Query(default=None, ge=0),
    max_price: Decimal | None = Query(default=None, ge=0),
    featured: bool | None = None,
    limit: LimitParam = 20,
    offset: OffsetParam = 0,
    db: Session = Depends(get_db),
) -> list[BikeResponse]:
    query = select(Bike)
    if brand:
        query = query.where(Bike.brand == brand)
    if category:
        query = query.where(Bike.category == category.value)
    if featured:
        query = query.where(Bike.featured.is_(True))
    if min_price is not None:
        query = query.where(Bike.price >= min_price)
    if max_price is not None:
        query = query.where(Bike.price <= max_price)
    if search and search.strip():
        pattern = f"%{search.strip().lower()}%"
        query = query.where(
            or_(
                func.lower(Bike.name).like(pattern),
                func.lower(Bike.brand).like(pattern),
                func.lower(Bike.category).like(pattern),
                func.lower(Bike.description).like(pattern),
            )
        )

    bikes = db.scalars(query.order_by(Bike.created_at.desc(), Bike.id.desc()).limit(limit).offset(offset)).all()
    return [BikeResponse.model_validate(bike) for bike in bikes]


@router.get("/brands", response_model=list[str], status_code=status.HTTP_200_OK)
def list_brands(db: Session = Depends(get_db)) -> list[str]:
    return list(db.scalars(select(Bike.brand).distinct().order_by(Bike.brand)).all())


@router.get("/categories", response_model=list[str], status_code=status.HTTP_200_OK)
def list_categories(db: Session = Depends(get_db)) -> list[str]:
    return list(db.scalars(select(Bike.category).distinct().order_by(Bike.category)).all())


@router.get("/{bike_id}", response_model=BikeResponse, status_code=status.HTTP_200_OK)
def get_bike(bike_id: int, db: Session = Depends(get_db)) -> BikeResponse:
    bike = _get_bike_or_404(db, bike_id)
    bike.views += 1
    db.commit()
    db.refresh(bike)
    return BikeResponse.model_validate(bike)


@router.post("/{bike_id}/compare", response_model=BikeResponse, status_code=status.HTTP_200_OK)
def record_comparison(
    bike_id: int,
    _: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> BikeResponse:
    bike = _get_bike_or_404(db, bike_id)
    bike.comparisons += 1
    db.commit()
    db.refresh(bike)
    return BikeResponse.model_validate(bike)


@router.post("", response_model=BikeResponse, status_code=status.HTTP_201_CREATED)
def create_bike(
    payload: BikeCreateRequest,
    _: User = Depends(require_roles(UserRole.ADMIN)),
    db: Session = Depends(get_db),
) -> BikeResponse:
    bike = Bike(
        name=payload.name.strip(),
        brand=payload.brand.strip(),
        category=payload.category.value,
        price=payload.price,
        ex_showroom_price=payload.ex_showroom_price,
        description=payload.description,
        specifications=payload.specifications.to_storage(),
        images=[image.model_dump(exclude_none=True) for image in payload.images],
        is_available=payload.is_available,
        featured=payload.featured,
    )
    db.add(bike)
    db.commit()
    db.refresh(bike)
    return BikeResponse.model_validate(bike)


@router.put("/{bike_id}", response_model=BikeResponse, status_code=status.HTTP_200_OK)
def update_bike(
    bike_id: int,
    payload: BikeUpdateRequest,
    _: User = Depends(require_roles(UserRole.ADMIN)),
    db: Session = Depends(get_db),
) -> BikeResponse:
    bike = _get_bike_or_404(db, bike_id)
    changes = payload.model_dump(exclude_unset=True, exclude={"specifications", "images", "category"})
    for field, value in changes.items():
        if value is not None:
            setattr(bike, field, value)
    if payload.category is not None:
        bike.category = payload.category.value
    if payload.specifications is not None:
        bike.specifications = payload.specifications.to_storage()
    if payload.images is not None:
        bike.images = [image.model_dump(exclude_none=True) for image in payload.images]

    db.commit()
    db.refresh(bike)
    return BikeResponse.model_validate(bike)


@router.delete("/{bike_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_bike(
    bike_id: int,
    _: User = Depends(require_roles(UserRole.ADMIN)),
    db: Session = Depends(get_db),
) -> Response:
    bike = _get_bike_or_404(db, bike_id)
    db.delete(bike)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError("Bike is referenced by bookings or listings") from None
    return Response(status_code=status.HTTP_204_NO_CONTENT)
