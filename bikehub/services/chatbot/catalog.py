from typing import Protocol

from sqlalchemy import func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, load_only

from bikehub.db.models import Bike


class BikeCatalog(Protocol):
    """Read-only bike lookups the chatbot needs."""

    def find_one(self, fragment: str) -> Bike | None: ...

    def find_many(self, fragment: str, limit: int) -> list[Bike]: ...

    def with_spec(self, group: str, field: str) -> list[Bike]: ...

    def cheapest(self, limit: int) -> list[Bike]: ...


def _name_or_brand_matches(fragment: str):
    escaped = fragment.strip().lower().replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    pattern = f"%{escaped}%"
    return or_(
        func.lower(Bike.name).like(pattern, escape="\\"),
        func.lower(Bike.brand).like(pattern, escape="\\"),
        func.lower(Bike.brand.concat(" ").concat(Bike.name)).like(pattern, escape="\\"),
    )


class SqlBikeCatalog:
    def __init__(self, db: Session) -> None:
        self._db = db

    def _scalars(self, query) -> list[Bike]:
        try:
            return list(self._db.scalars(query).all())
        except SQLAlchemyError:
            # Leave the session usable for whatever the caller does next.
            self._db.rollback()
            raise

    def find_one(self, fragment: str) -> Bike | None:
        bikes = self._scalars(select(Bike).where(_name_or_brand_matches(fragment)).order_by(Bike.id).limit(1))
        return bikes[0] if bikes else None

    def find_many(self, fragment: str, limit: int) -> list[Bike]:
        return self._scalars(select(Bike).where(_name_or_brand_matches(fragment)).order_by(Bike.id).limit(limit))

    def with_spec(self, group: str, field: str) -> list[Bike]:
        # JSON path operators differ between PostgreSQL and SQLite, so the leaf is checked in Python.
        bikes = self._scalars(
            select(Bike).options(load_only(Bike.id, Bike.name, Bike.specifications)).order_by(Bike.id)
        )
        return [bike for bike in bikes if str(bike.spec(group, field) or "").strip()]

    def cheapest(self, limit: int) -> list[Bike]:
        return self._scalars(
            select(Bike).where(Bike.price.is_not(None)).order_by(Bike.price.asc(), Bike.id).limit(limit)
        )
