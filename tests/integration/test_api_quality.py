import logging

from conftest import make_bike
from fastapi import APIRouter
from fastapi.testclient import TestClient

from bikehub.main import app


def test_error_response_has_unified_shape(client):
    response = client.get("/users/me")
    assert response.status_code == 401
    body = response.json()
    assert "error" in body
    assert "code" in body["error"]
    assert "message" in body["error"]
    assert "detail" in body
    assert "request_id" in body


def test_health_endpoint_returns_ok_and_request_id(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
    assert "x-request-id" in response.headers


def test_validation_errors_use_bad_request(client):
    response = client.post("/auth/login", json={"email": "not-an-email"})

    assert response.status_code == 400
    body = response.json()
    assert body["error"]["code"] == "validation_error"
    assert isinstance(body["detail"], list)


def test_bikes_pagination_limit_offset(client, db):
    bikes = [make_bike(f"Model {index}", "Hero", price=100000 + index) for index in range(3)]
    db.add_all(bikes)
    db.commit()

    everything = client.get("/bikes").json()
    paged = client.get("/bikes?limit=1&offset=1")

    assert paged.status_code == 200
    data = paged.json()
    assert len(data) == 1
    assert data[0]["id"] == everything[1]["id"]
    assert client.get("/bikes?limit=0").status_code == 400


def test_unhandled_errors_return_internal_error_payload(caplog):

    router = APIRouter()

    @router.get("/__boom")
    def boom():
        raise RuntimeError("catalog exploded")

    app.include_router(router)
    try:
        with caplog.at_level(logging.ERROR, logger="bikehub.core.exceptions"), TestClient(
            app, raise_server_exceptions=False
        ) as test_client:
            response = test_client.get("/__boom")
    finally:
        app.router.routes = [route for route in app.router.routes if getattr(route, "path", None) != "/__boom"]

    assert response.status_code == 500
    assert response.json()["error"]["code"] == "internal_error"
    assert response.json()["detail"] == "catalog exploded"
    records = [record for record in caplog.records if record.name == "bikehub.core.exceptions"]
    assert records and records[-1].exc_info is not None
