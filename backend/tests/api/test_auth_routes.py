"""Auth Routes — login, refresh, current user, and role checks.

Tests:
    - Login returns access + refresh tokens; email is case-insensitive
    - Wrong password, unknown email and inactive users all get the same 401
    - Refresh accepts only refresh tokens
    - Editors cannot reach admin-only routes
"""

from portfolio.core.domain_types import UserRole

PASSWORD = "admin-password-123"


async def test_login_returns_tokens(client, admin_user):
    res = await client.post(
        "/api/v1/auth/login",
        json={"email": "ADMIN@example.com", "password": PASSWORD},
    )
    assert res.status_code == 200
    body = res.json()
    assert body["token"] and body["refresh_token"]
    assert body["token_type"] == "bearer"
    assert body["user"]["email"] == "admin@example.com"
    assert body["user"]["role"] == "admin"
    assert "password_hash" not in body["user"]


async def test_login_wrong_password(client, admin_user):
    res = await client.post(
        "/api/v1/auth/login",
        json={"email": "admin@example.com", "password": "wrong"},
    )
    assert res.status_code == 401
    assert res.headers["www-authenticate"] == "Bearer"
    assert res.json()["error"]["message"] == "Invalid credentials"


async def test_login_unknown_email_same_error(client):
    res = await client.post(
        "/api/v1/auth/login",
        json={"email": "ghost@example.com", "password": "whatever"},
    )
    assert res.status_code == 401
    assert res.json()["error"]["message"] == "Invalid credentials"


async def test_login_inactive_user(client, make_user):
    await make_user("gone@example.com", active=False)
    res = await client.post(
        "/api/v1/auth/login",
        json={"email": "gone@example.com", "password": PASSWORD},
    )
    assert res.status_code == 401


async def test_me_requires_token(client):
    res = await client.get("/api/v1/auth/me")
    assert res.status_code == 401
    assert res.json()["error"]["code"] == "NOT_AUTHENTICATED"


async def test_me_returns_current_user(client, editor_user, editor_headers):
    res = await client.get("/api/v1/auth/me", headers=editor_headers)
    assert res.status_code == 200
    assert res.json()["id"] == str(editor_user.id)
    assert res.json()["role"] == "editor"


async def test_refresh_issues_new_access_token(client, admin_user):
    login = await client.post(
        "/api/v1/auth/login",
        json={"email": "admin@example.com", "password": PASSWORD},
    )
    res = await client.post(
        "/api/v1/auth/refresh",
        json={"refresh_token": login.json()["refresh_token"]},
    )
    assert res.status_code == 200
    assert res.json()["token"]
    assert res.json()["refresh_token"] is None

    me = await client.get(
        "/api/v1/auth/me", headers={"Authorization": f"Bearer {res.json()['token']}"},
    )
    assert me.status_code == 200


async def test_refresh_rejects_access_token(client, admin_headers):
    access = admin_headers["Authorization"].split(" ", 1)[1]
    res = await client.post("/api/v1/auth/refresh", json={"refresh_token": access})
    assert res.status_code == 401


async def test_editor_cannot_manage_users(client, editor_headers):
    res = await client.get("/api/v1/users", headers=editor_headers)
    assert res.status_code == 403
    assert res.json()["error"]["code"] == "PERMISSION_DENIED"


async def test_admin_creates_and_lists_users(client, admin_headers):
    res = await client.post(
        "/api/v1/users",
        json={"username": "writer", "email": "Writer@Example.com", "password": "long-password"},
        headers=admin_headers,
    )
    assert res.status_code == 201
    assert res.json()["email"] == "writer@example.com"
    assert res.json()["role"] == UserRole.EDITOR.value

    listing = await client.get("/api/v1/users", headers=admin_headers)
    assert {u["email"] for u in listing.json()} == {"admin@example.com", "writer@example.com"}


async def test_duplicate_user_email_conflicts(client, admin_headers, editor_user):
    res = await client.post(
        "/api/v1/users",
        json={"username": "again", "email": "editor@example.com", "password": "long-password"},
        headers=admin_headers,
    )
    assert res.status_code == 409


async def test_admin_cannot_delete_self(client, admin_user, admin_headers):
    res = await client.delete(f"/api/v1/users/{admin_user.id}", headers=admin_headers)
    assert res.status_code == 400


async def test_deactivated_user_token_stops_working(
    client, admin_headers, editor_user, editor_headers,
):
    res = await client.patch(
        f"/api/v1/users/{editor_user.id}", json={"is_active": False}, headers=admin_headers,
    )
    assert res.status_code == 200
    assert res.json()["is_active"] is False
    me = await client.get("/api/v1/auth/me", headers=editor_headers)
    assert me.status_code == 401
