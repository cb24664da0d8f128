from conftest import PASSWORD, register_and_login

from bikehub.core.config import settings


def _register(client, email, **overrides):
    payload = {"name": "Sita Rai", "email": email, "password": PASSWORD, "phone": "9800000000"}
    payload.update(overrides)
    return client.post("/auth/register", json=payload)


def test_register_success(client):
    response = _register(client, "user1@example.com")

    assert response.status_code == 201
    data = response.json()
    assert data["email"] == "user1@example.com"
    assert data["name"] == "Sita Rai"
    assert data["role"] == "user"
    assert data["dealer_id"] is None
    assert data["is_active"] is True
    assert "id" in data
    assert "hashed_password" not in data


def test_register_normalizes_email_case(client):
    response = _register(client, "Mixed.Case@Example.com")

    assert response.status_code == 201
    assert response.json()["email"] == "mixed.case@example.com"


def test_register_duplicate_email(client):
    first = _register(client, "duplicate@example.com")
    second = _register(client, "DUPLICATE@example.com")

    assert first.status_code == 201
    assert second.status_code == 409
    assert second.json()["detail"] == "User with this email already exists"


def test_register_rejects_short_password(client):
    response = _register(client, "short@example.com", password="12345")

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "validation_error"


def test_elevated_role_requires_admin_token(client):
    without_token = _register(client, "wannabe@example.com", role="dealer")
    wrong_token = _register(client, "guesser@example.com", role="admin", admin_token="nope")
    with_token = _register(client, "dealer@example.com", role="dealer", admin_token=settings.admin_secret)

    assert without_token.json()["role"] == "user"
    assert wrong_token.json()["role"] == "user"
    assert with_token.json()["role"] == "dealer"


def test_login_success(client):
    _register(client, "login@example.com")

    response = client.post("/auth/login", json={"email": "login@example.com", "password": PASSWORD})

    assert response.status_code == 200
    data = response.json()
    assert data["token_type"] == "bearer"
    assert isinstance(data["access_token"], str)
    assert len(data["access_token"]) > 20


def test_login_with_wrong_password(client):
    _register(client, "wrongpass@example.com")

    response = client.post("/auth/login", json={"email": "wrongpass@example.com", "password": "NotThePassword"})

    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid email or password"


def test_users_me_with_token(client):
    headers = register_and_login(client, "me@example.com", name="Me Myself")

    response = client.get("/users/me", headers=headers)

    assert response.status_code == 200
    data = response.json()
    assert data["email"] == "me@example.com"
    assert data["name"] == "Me Myself"
    assert data["role"] == "user"


def test_users_me_without_token(client):
    response = client.get("/users/me")
    assert response.status_code == 401


def test_users_me_with_garbage_token(client):
    response = client.get("/users/me", headers={"Authorization": "Bearer not-a-jwt"})

    assert response.status_code == 401
    assert response.json()["detail"] == "Not authorized, token failed"


def test_admin_lists_users_by_role(client):
    register_and_login(client, "plain@example.com")
    register_and_login(client, "seller@example.com", role="dealer")
    admin = register_and_login(client, "root@example.com", role="admin")

    everyone = client.get("/users", headers=admin)
    dealers = client.get("/users", headers=admin, params={"role": "dealer"})

    assert everyone.status_code == 200
    assert len(everyone.json()) == 3
    assert [user["email"] for user in dealers.json()] == ["seller@example.com"]


def test_non_admin_cannot_list_users(client):
    dealer = register_and_login(client, "nosy-dealer@example.com", role="dealer")

    response = client.get("/users", headers=dealer)

    assert response.status_code == 403
    assert response.json()["detail"] == "Not enough permissions"
