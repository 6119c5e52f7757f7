from pathlib import Path

import pytest

from app.db.repositories.admins import AdminRepository
from app.db.repositories.categories import CategoryRepository
from app.db.repositories.marques import MarqueRepository
from app.db.repositories.site_categories import SiteCategoryRepository
from app.db.seed import load_seed_yaml, seed_all
from app.features.categories.electro import GROS_ELECTRO_SUBCATEGORIES, PETIT_ELECTRO_SUBCATEGORIES

SEED_PATH = Path(__file__).resolve().parent.parent / "app" / "db" / "seed_data.yaml"


def _counts(session):
    return (
        SiteCategoryRepository(session).count(),
        CategoryRepository(session).count(),
        MarqueRepository(session).count(),
        AdminRepository(session).count(),
    )


def test_seed_is_idempotent(session):
    seed_all(session, SEED_PATH, admin_login="root", admin_password="rootpass")
    first = _counts(session)
    seed_all(session, SEED_PATH, admin_login="root", admin_password="rootpass")
    assert _counts(session) == first

    site_categories, categories, marques, admins = first
    assert site_categories == 4
    assert categories == 2 + len(GROS_ELECTRO_SUBCATEGORIES) + len(PETIT_ELECTRO_SUBCATEGORIES)
    assert marques == 22
    assert admins == 1


def test_seeded_catalog_is_served(client, session):
    seed_all(session, SEED_PATH, admin_login="root", admin_password="rootpass")

    organized = client.get("/api/site-categories/electromenagers/organized").json()["data"]
    assert len(organized["gros_electromenager"]["subcategories"]) == len(GROS_ELECTRO_SUBCATEGORIES)
    assert len(organized["petit_electromenager"]["subcategories"]) == len(PETIT_ELECTRO_SUBCATEGORIES)

    login = client.post("/api/admins/login", json={"login": "root", "password": "rootpass"})
    assert login.status_code == 200


def test_load_seed_yaml_errors(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_seed_yaml(tmp_path / "missing.yaml")

    bad = tmp_path / "bad.yaml"
    bad.write_text("- just\n- a list\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_seed_yaml(bad)
