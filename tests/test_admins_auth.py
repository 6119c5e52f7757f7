import uuid
from datetime import datetime, timedelta, timezone

from app.core.config import jwt_settings
from app.db.repositories.admins import AdminRepository
from app.security.password import hash_password, verify_password
from app.security.tokens import JWTSettings, create_access_token

# identifiants de la fixture `admin`
ADMIN_LOGIN = "admin"
ADMIN_PASSWORD = "secret123"


def test_password_hashing():
    hashed = hash_password("secret123")
    assert hashed != "secret123"
    assert verify_password("secret123", hashed)
    assert not verify_password("wrong", hashed)
    assert not verify_password("secret123", "not-a-bcrypt-hash")


# -----------------------------
# Login
# -----------------------------
def test_login_success_updates_last_login(client, admin):
    assert admin.last_login is None
    resp = client.post("/api/admins/login", json={"login": ADMIN_LOGIN, "password": ADMIN_PASSWORD})
    assert resp.status_code == 200
    body = resp.json()
    assert body["message"] == "Authentification réussie"
    assert body["data"]["token"]
    assert body["data"]["admin"]["login"] == ADMIN_LOGIN
    assert body["data"]["admin"]["last_login"] is not None
    assert "hashed_password" not in body["data"]["admin"]

    me = client.get("/api/admins/me", headers={"Authorization": f"Bearer {body['data']['token']}"})
    assert me.status_code == 200
    assert me.json()["data"]["id"] == str(admin.id)


def test_login_wrong_password_or_unknown_login(client, admin):
    wrong = client.post("/api/admins/login", json={"login": ADMIN_LOGIN, "password": "nope"})
    unknown = client.post("/api/admins/login", json={"login": "ghost", "password": ADMIN_PASSWORD})
    for resp in (wrong, unknown):
        assert resp.status_code == 401
        assert resp.json()["message"] == "Identifiants invalides"


def test_login_inactive_account(client, session, admin):
    AdminRepository(session).update(admin, is_active=False)
    resp = client.post("/api/admins/login", json={"login": ADMIN_LOGIN, "password": ADMIN_PASSWORD})
    assert resp.status_code == 403
    assert resp.json()["message"] == "Compte administrateur désactivé"


# -----------------------------
# Bearer : un message par cas d'échec
# -----------------------------
def _me(client, headers=None):
    return client.get("/api/admins/me", headers=headers or {})


def test_missing_header(client, admin):
    resp = _me(client)
    assert resp.status_code == 401
    assert resp.json()["message"].startswith("Token d'authentification manquant")


def test_malformed_header(client, token):
    for value in (f"Basic {token}", "Bearer", f"Token {token}"):
        resp = _me(client, {"Authorization": value})
        assert resp.status_code == 401
        assert resp.json()["message"] == "Format de token invalide."


def test_invalid_token(client, admin):
    resp = _me(client, {"Authorization": "Bearer not.a.jwt"})
    assert resp.status_code == 401
    assert resp.json()["message"] == "Token invalide"

    forged = create_access_token(
        admin_id=admin.id, login=admin.login, settings=JWTSettings(secret="another-secret")
    )
    resp = _me(client, {"Authorization": f"Bearer {forged}"})
    assert resp.json()["message"] == "Token invalide"


def test_expired_token(client, admin):
    expired = create_access_token(
        admin_id=admin.id,
        login=admin.login,
        settings=jwt_settings,
        now=datetime.now(timezone.utc) - timedelta(days=2),
    )
    resp = _me(client, {"Authorization": f"Bearer {expired}"})
    assert resp.status_code == 401
    assert resp.json()["message"] == "Token expiré"


def test_unknown_admin(client):
    token = create_access_token(admin_id=uuid.uuid4(), login="ghost", settings=jwt_settings)
    resp = _me(client, {"Authorization": f"Bearer {token}"})
    assert resp.status_code == 401
    assert resp.json()["message"] == "Administrateur non trouvé"


def test_inactive_admin_token(client, session, admin, auth_headers):
    AdminRepository(session).update(admin, is_active=False)
    resp = _me(client, auth_headers)
    assert resp.status_code == 403
    assert resp.json()["message"] == "Compte administrateur désactivé"


# -----------------------------
# CRUD
# -----------------------------
def test_admin_crud(client, auth_headers):
    created = client.post(
        "/api/admins",
        json={"login": "editor", "password": "editor123", "email": "editor@example.com", "nom": "Martin"},
        headers=auth_headers,
    )
    assert created.status_code == 201
    editor = created.json()["data"]
    assert "password" not in editor and "hashed_password" not in editor

    dup = client.post("/api/admins", json={"login": "editor", "password": "another1"}, headers=auth_headers)
    assert dup.status_code == 409

    updated = client.put(f"/api/admins/{editor['id']}", json={"prenom": "Léa"}, headers=auth_headers)
    assert updated.json()["data"]["prenom"] == "Léa"
    assert updated.json()["data"]["nom"] == "Martin"

    logins = [a["login"] for a in client.get("/api/admins", headers=auth_headers).json()["data"]]
    assert set(logins) == {ADMIN_LOGIN, "editor"}

    assert client.delete(f"/api/admins/{editor['id']}", headers=auth_headers).status_code == 200
    assert client.get(f"/api/admins/{editor['id']}", headers=auth_headers).status_code == 404
    assert client.post(f"/api/admins/{editor['id']}/restore", headers=auth_headers).status_code == 200


def test_admin_password_change_allows_new_login(client, auth_headers, admin):
    client.put(f"/api/admins/{admin.id}", json={"password": "brand-new"}, headers=auth_headers)
    resp = client.post("/api/admins/login", json={"login": ADMIN_LOGIN, "password": "brand-new"})
    assert resp.status_code == 200


def test_admin_input_validation(client, auth_headers):
    short = client.post("/api/admins", json={"login": "ab", "password": "secret1"}, headers=auth_headers)
    weak = client.post("/api/admins", json={"login": "editor", "password": "123"}, headers=auth_headers)
    email = client.post(
        "/api/admins", json={"login": "editor", "password": "secret1", "email": "not-an-email"}, headers=auth_headers
    )
    for resp in (short, weak, email):
        assert resp.status_code == 400
        assert resp.json()["message"] == "Erreur de validation"


def test_admin_routes_require_bearer(client):
    assert client.get("/api/admins").status_code == 401


def test_health(client):
    body = client.get("/api/health").json()
    assert body["success"] is True
