"""Shared pytest fixtures: in-memory SQLite, TestClient, admin + Bearer token."""

import os

# avant tout import de l'application (Settings lues à l'import)
os.environ.setdefault("ENV", "test")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SEED_ON_STARTUP", "false")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel

from app.core.config import jwt_settings
from app.db.repositories.admins import AdminRepository
from app.db.session import build_engine, get_session
from app.main import app
from app.security.password import hash_password
from app.security.tokens import create_access_token

ADMIN_LOGIN = "admin"
ADMIN_PASSWORD = "secret123"


@pytest.fixture
def engine():
    engine = build_engine("sqlite://", poolclass=StaticPool)
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def client(session):
    """TestClient sans lifespan (pas de seed), branché sur la session de test."""

    def _get_session():
        return session

    app.dependency_overrides[get_session] = _get_session
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def admin(session):
    return AdminRepository(session).create(
        login=ADMIN_LOGIN,
        hashed_password=hash_password(ADMIN_PASSWORD),
        nom="Doe",
        prenom="Jane",
        email="jane@example.com",
    )


@pytest.fixture
def token(admin):
    return create_access_token(admin_id=admin.id, login=admin.login, settings=jwt_settings)


@pytest.fixture
def auth_headers(token):
    return {"Authorization": f"Bearer {token}"}


# -----------------------------
# Catalogue helpers
# -----------------------------
@pytest.fixture
def make_site_category(client, auth_headers):
    def _make(libelle="Electromenagers", **extra):
        resp = client.post("/api/site-categories", json={"libelle": libelle, **extra}, headers=auth_headers)
        assert resp.status_code == 201, resp.text
        return resp.json()["data"]
    return _make


@pytest.fixture
def make_category(client, auth_headers):
    def _make(site_category_id, libelle="Réfrigérateurs", **extra):
        body = {"libelle": libelle, "site_category_id": site_category_id, **extra}
        resp = client.post("/api/categories", json=body, headers=auth_headers)
        assert resp.status_code == 201, resp.text
        return resp.json()["data"]
    return _make


@pytest.fixture
def make_marque(client, auth_headers):
    def _make(site_category_id, libelle="Samsung", **extra):
        body = {"libelle": libelle, "site_category_id": site_category_id, **extra}
        resp = client.post("/api/brands", json=body, headers=auth_headers)
        assert resp.status_code == 201, resp.text
        return resp.json()["data"]
    return _make


@pytest.fixture
def make_produit(client, auth_headers):
    def _make(marque_id, libelle="Réfrigérateur combiné", **extra):
        body = {"libelle": libelle, "marque_id": marque_id, **extra}
        resp = client.post("/api/products", json=body, headers=auth_headers)
        assert resp.status_code == 201, resp.text
        return resp.json()["data"]
    return _make
