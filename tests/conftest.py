import os
import sys
from decimal import Decimal
from pathlib import Path

os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")
os.environ.setdefault("RATE_LIMIT_BACKEND", "memory")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

sys.path.append(str(Path(__file__).resolve().parents[1]))

from bikehub.core.config import settings
from bikehub.core.rate_limiter import rate_limiter
from bikehub.db.base import Base
from bikehub.db.models import Bike, Booking, Dealer, DealerBikeListing, User  # noqa: F401
from bikehub.db.session import get_db
from bikehub.main import app

TEST_DATABASE_URL = "sqlite+pysqlite:///:memory:"
engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

PASSWORD = "StrongPass123"


@pytest.fixture(autouse=True)
def reset_database() -> None:
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    rate_limiter.reset()


@pytest.fixture()
def db() -> Session:
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client() -> TestClient:
    def override_get_db():
        session = TestingSessionLocal()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def register_and_login(client: TestClient, email: str, role: str = "user", name: str = "Rider") -> dict[str, str]:
    payload = {"name": name, "email": email, "password": PASSWORD, "role": role}
    if role != "user":
        payload["admin_token"] = settings.admin_secret
    response = client.post("/auth/register", json=payload)
    assert response.status_code == 201, response.text

    login = client.post("/auth/login", json={"email": email, "password": PASSWORD})
    assert login.status_code == 200, login.text
    return {"Authorization": f"Bearer {login.json()['access_token']}"}


def make_bike(
    name: str,
    brand: str,
    price: int | str = 200000,
    category: str = "Sports",
    **specifications,
) -> Bike:
    return Bike(
        name=name,
        brand=brand,
        category=category,
        price=Decimal(str(price)),
        ex_showroom_price=Decimal(str(price)),
        description=f"{brand} {name}",
        specifications=specifications,
        images=[],
    )


def make_dealer(email: str, name: str = "Kathmandu Motors", city: str = "Kathmandu") -> Dealer:
    return Dealer(name=name, type="showroom", email=email, phone="+977-1-5550000", city=city, state="Bagmati")


@pytest.fixture()
def catalog_seed(db: Session) -> dict[str, int]:
    """A dealer with two bikes; returns their ids."""
    dealer = make_dealer(email="showroom@example.com")
    pulsar = make_bike(
        "Pulsar NS200",
        "Bajaj",
        price=200000,
        engine={"displacement": "199.5 cc", "maxPower": "24.5 PS", "cooling": ""},
        performance={"mileage": "35 kmpl", "topSpeed": "136 km/h"},
    )
    apache = make_bike(
        "Apache RTR 160",
        "TVS",
        price=180000,
        engine={"displacement": "159.7 cc", "maxPower": "16 PS"},
        performance={"mileage": "40 kmpl"},
    )
    db.add_all([dealer, pulsar, apache])
    db.commit()
    return {"dealer_id": dealer.id, "pulsar_id": pulsar.id, "apache_id": apache.id}
