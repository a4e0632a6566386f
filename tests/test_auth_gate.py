from storefront_admin.models import AdminActivityLog
from storefront_admin.utils.security import create_access_token
from tests.conftest import PASSWORD, make_user

ADMIN_ENDPOINTS = [
    ("get", "/api/admin/categories"),
    ("post", "/api/admin/categories"),
    ("get", "/api/admin/brands"),
    ("get", "/api/admin/products"),
    ("get", "/api/admin/images"),
    ("get", "/api/admin/dashboard"),
]


def test_admin_endpoints_require_a_session(client):
    for method, path in ADMIN_ENDPOINTS:
        response = getattr(client, method)(path)
        assert response.status_code == 401, path
        assert response.json() == {"error": "Not authenticated"}


def test_admin_endpoints_require_admin_flag(client, shopper_headers):
    for method, path in ADMIN_ENDPOINTS:
        response = getattr(client, method)(path, headers=shopper_headers)
        assert response.status_code == 403, path
        assert response.json() == {"error": "Admin access required"}


def test_invalid_token_is_rejected(client):
    response = client.get("/api/admin/categories", headers={"Authorization": "Bearer not-a-token"})
    assert response.status_code == 401
    assert response.json()["error"] == "Invalid or expired token"


def test_inactive_account_is_rejected(client, db):
    user = make_user(db, "gone@example.com", is_admin=True, is_active=False)
    headers = {"Authorization": f"Bearer {create_access_token({'sub': user.id})}"}
    response = client.get("/api/admin/categories", headers=headers)
    assert response.status_code == 403
    assert response.json()["error"] == "Account is inactive"


def test_login_returns_token_usable_on_admin_routes(client, admin_user, db):
    response = client.post("/api/auth/login", json={"email": "admin@example.com", "password": PASSWORD})
    assert response.status_code == 200
    data = response.json()
    assert data["user"] == {"id": admin_user.id, "email": "admin@example.com", "name": "Admin", "isAdmin": True}

    headers = {"Authorization": f"Bearer {data['token']}"}
    assert client.get("/api/admin/categories", headers=headers).status_code == 200
    assert client.get("/api/auth/me", headers=headers).json()["isAdmin"] is True
    assert db.query(AdminActivityLog).filter(AdminActivityLog.action == "admin_login").count() == 1


def test_login_with_wrong_password(client, admin_user):
    response = client.post("/api/auth/login", json={"email": "admin@example.com", "password": "wrong"})
    assert response.status_code == 401
    assert response.json() == {"error": "Invalid email or password"}


def test_login_body_validation_uses_error_shape(client):
    response = client.post("/api/auth/login", json={"email": "not-an-email", "password": "x"})
    assert response.status_code == 422
    assert response.json()["error"].startswith("email:")


def test_health(client):
    assert client.get("/health").json()["status"] == "healthy"
    assert "version" in client.get("/").json()
