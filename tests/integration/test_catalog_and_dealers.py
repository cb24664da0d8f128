from conftest import register_and_login

BIKE_PAYLOAD = {
    "name": "Duke 390",
    "brand": "KTM",
    "category": "Naked",
    "price": "550000",
    "ex_showroom_price": "530000",
    "description": "Street naked with a 373 cc single",
    "specifications": {
        "engine": {"displacement": "373 cc", "maxPower": "44 PS"},
        "performance": {"mileage": "28 kmpl"},
        "brakes": {"abs": True},
    },
}

DEALER_PAYLOAD = {
    "name": "Bhaktapur Bikes",
    "type": "showroom",
    "email": "Bhaktapur@Example.com",
    "phone": "01-6612345",
    "city": "Bhaktapur",
    "state": "Bagmati",
    "brands": ["KTM", "Bajaj"],
}


def test_admin_creates_bike_with_camel_case_specifications(client):
    admin = register_and_login(client, "catalog-admin@example.com", role="admin")

    response = client.post("/bikes", headers=admin, json=BIKE_PAYLOAD)

    assert response.status_code == 201
    data = response.json()
    assert data["specifications"]["engine"]["maxPower"] == "44 PS"
    assert data["specifications"]["brakes"]["abs"] is True
    assert data["views"] == 0


def test_plain_user_cannot_create_bike(client):
    user = register_and_login(client, "catalog-user@example.com")

    response = client.post("/bikes", headers=user, json=BIKE_PAYLOAD)

    assert response.status_code == 403
    assert response.json()["detail"] == "Not enough permissions"


def test_bike_filters_brands_and_view_counter(client, catalog_seed):
    by_brand = client.get("/bikes", params={"brand": "TVS"}).json()
    assert [bike["name"] for bike in by_brand] == ["Apache RTR 160"]

    cheap = client.get("/bikes", params={"max_price": 190000}).json()
    assert [bike["name"] for bike in cheap] == ["Apache RTR 160"]

    searched = client.get("/bikes", params={"search": "pulsar"}).json()
    assert [bike["name"] for bike in searched] == ["Pulsar NS200"]

    assert client.get("/bikes/brands").json() == ["Bajaj", "TVS"]

    first = client.get(f"/bikes/{catalog_seed['pulsar_id']}").json()
    second = client.get(f"/bikes/{catalog_seed['pulsar_id']}").json()
    assert second["views"] == first["views"] + 1

    assert client.get("/bikes/9999").status_code == 404


def test_comparison_counter_requires_login(client, catalog_seed):
    bike_id = catalog_seed["apache_id"]
    assert client.post(f"/bikes/{bike_id}/compare").status_code == 401

    user = register_and_login(client, "comparer@example.com")
    response = client.post(f"/bikes/{bike_id}/compare", headers=user)

    assert response.status_code == 200
    assert response.json()["comparisons"] == 1


def test_admin_updates_and_deletes_bike(client, catalog_seed):
    admin = register_and_login(client, "editor@example.com", role="admin")
    bike_id = catalog_seed["apache_id"]

    updated = client.put(f"/bikes/{bike_id}", headers=admin, json={"featured": True, "price": "175000"})
    assert updated.status_code == 200
    assert updated.json()["featured"] is True
    assert float(updated.json()["price"]) == 175000

    assert client.delete(f"/bikes/{bike_id}", headers=admin).status_code == 204
    assert client.get(f"/bikes/{bike_id}").status_code == 404


def test_admin_creates_dealer_and_links_existing_account(client):
    dealer_account = register_and_login(client, "bhaktapur@example.com", role="dealer")
    admin = register_and_login(client, "dealer-admin@example.com", role="admin")

    created = client.post("/dealers", headers=admin, json=DEALER_PAYLOAD)
    assert created.status_code == 201
    assert created.json()["email"] == "bhaktapur@example.com"

    me = client.get("/users/me", headers=dealer_account).json()
    assert me["dealer_id"] == created.json()["id"]

    listed = client.get("/dealers", params={"city": "bhakta", "type": "showroom"}).json()
    assert [dealer["name"] for dealer in listed] == ["Bhaktapur Bikes"]
    assert client.get("/dealers", params={"type": "service_center"}).json() == []


def test_dealer_listing_upsert_creates_then_updates(client, catalog_seed):
    dealer = register_and_login(client, "showroom@example.com", role="dealer")
    payload = {"bike_id": catalog_seed["pulsar_id"], "on_road_price": "215000", "stock": 3}

    created = client.post("/dealers/me/listings", headers=dealer, json=payload)
    assert created.status_code == 201
    assert created.json()["stock"] == 3
    assert created.json()["available_for_test_ride"] is True

    updated = client.post(
        "/dealers/me/listings",
        headers=dealer,
        json={"bike_id": catalog_seed["pulsar_id"], "stock": 1},
    )
    assert updated.status_code == 200
    assert updated.json()["id"] == created.json()["id"]
    assert updated.json()["stock"] == 1
    assert float(updated.json()["on_road_price"]) == 215000

    mine = client.get("/dealers/me/listings", headers=dealer).json()
    assert len(mine) == 1


def test_deactivated_listing_is_hidden_from_public_dealer_page(client, catalog_seed):
    dealer = register_and_login(client, "showroom@example.com", role="dealer")
    for bike_key in ("pulsar_id", "apache_id"):
        client.post("/dealers/me/listings", headers=dealer, json={"bike_id": catalog_seed[bike_key]})
    listing_id = client.get("/dealers/me/listings", headers=dealer).json()[0]["id"]

    removed = client.delete(f"/dealers/me/listings/{listing_id}", headers=dealer)
    assert removed.status_code == 200
    assert removed.json()["is_active"] is False

    public = client.get(f"/dealers/{catalog_seed['dealer_id']}/bikes").json()
    assert public["dealer"]["id"] == catalog_seed["dealer_id"]
    assert len(public["listings"]) == 1
    assert listing_id not in [listing["id"] for listing in public["listings"]]


def test_dealer_account_without_dealer_record_gets_404(client, catalog_seed):
    dealer = register_and_login(client, "unlinked@example.com", role="dealer")

    response = client.get("/dealers/me/listings", headers=dealer)

    assert response.status_code == 404
    assert response.json()["detail"] == "Dealer not found"


def test_dealer_sees_own_bookings(client, catalog_seed):
    rider = register_and_login(client, "dealer-bookings-rider@example.com")
    client.post(
        "/bookings",
        headers=rider,
        json={
            "bike_id": catalog_seed["apache_id"],
            "dealer_id": catalog_seed["dealer_id"],
            "booking_date": "2026-11-10",
            "preferred_time": "09:30",
        },
    )
    dealer = register_and_login(client, "showroom@example.com", role="dealer")

    response = client.get("/dealers/me/bookings", headers=dealer)

    assert response.status_code == 200
    assert [booking["bike"]["name"] for booking in response.json()] == ["Apache RTR 160"]
