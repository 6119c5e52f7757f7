import uuid

import pytest
from sqlalchemy.exc import IntegrityError

from app.db.repositories.categories import CategoryRepository
from app.db.repositories.marques import MarqueRepository
from app.db.repositories.site_categories import SiteCategoryRepository


def test_unique_per_site_category(client, auth_headers, make_site_category, make_marque):
    elec = make_site_category("Electromenagers")
    phones = make_site_category("Telephones")
    make_marque(elec["id"], "Samsung")

    dup = client.post("/api/brands", json={"libelle": "Samsung", "site_category_id": elec["id"]}, headers=auth_headers)
    assert dup.status_code == 409
    make_marque(phones["id"], "Samsung")


def test_write_requires_bearer(client, make_site_category):
    sc = make_site_category("Telephones")
    resp = client.post("/api/brands", json={"libelle": "Apple", "site_category_id": sc["id"]})
    assert resp.status_code == 401


def test_list_with_site_category(client, make_site_category, make_marque):
    sc = make_site_category("Telephones")
    make_marque(sc["id"], "Xiaomi")
    make_marque(sc["id"], "Apple", is_active=False)

    rows = client.get("/api/brands").json()["data"]
    assert [r["libelle"] for r in rows] == ["Apple", "Xiaomi"]
    assert rows[0]["site_category"]["libelle"] == "Telephones"

    active = client.get("/api/brands", params={"is_active": True}).json()["data"]
    assert [r["libelle"] for r in active] == ["Xiaomi"]


def test_detail_lists_live_products(client, make_site_category, make_marque, make_produit):
    sc = make_site_category("Electromenagers")
    marque = make_marque(sc["id"], "Bosch")
    make_produit(marque["id"], "Lave-vaisselle", prix="399.90")
    gone = make_produit(marque["id"], "Four")
    client.delete(f"/api/products/{gone['id']}")

    data = client.get(f"/api/brands/{marque['id']}").json()["data"]
    assert data["site_category"]["id"] == sc["id"]
    assert [p["libelle"] for p in data["produits"]] == ["Lave-vaisselle"]
    assert set(data["produits"][0]) == {"id", "libelle", "prix", "is_active", "is_available"}


def test_delete_blocked_while_products_live(client, auth_headers, make_site_category, make_marque, make_produit):
    sc = make_site_category("Electromenagers")
    marque = make_marque(sc["id"], "Bosch")
    produit = make_produit(marque["id"])

    blocked = client.delete(f"/api/brands/{marque['id']}", headers=auth_headers)
    assert blocked.status_code == 400
    assert blocked.json()["details"] == {"produits": 1}
    assert "1 produit" in blocked.json()["message"]

    client.delete(f"/api/products/{produit['id']}")
    assert client.delete(f"/api/brands/{marque['id']}", headers=auth_headers).status_code == 200
    assert client.get(f"/api/brands/{marque['id']}").status_code == 404


def test_restore(client, auth_headers, make_site_category, make_marque):
    sc = make_site_category("Telephones")
    marque = make_marque(sc["id"], "Apple")

    not_deleted = client.post(f"/api/brands/{marque['id']}/restore", headers=auth_headers)
    assert not_deleted.status_code == 400
    assert not_deleted.json()["message"] == "La marque n'a pas été supprimée"

    client.delete(f"/api/brands/{marque['id']}", headers=auth_headers)
    resp = client.post(f"/api/brands/{marque['id']}/restore", headers=auth_headers)
    assert resp.status_code == 200
    assert resp.json()["data"]["deleted_at"] is None


def test_update_logo_and_clear(client, auth_headers, make_site_category, make_marque):
    sc = make_site_category("Telephones")
    marque = make_marque(sc["id"], "Apple", logo="/uploads/apple.png")

    resp = client.put(f"/api/brands/{marque['id']}", json={"logo": None}, headers=auth_headers)
    assert resp.status_code == 200
    assert resp.json()["data"]["logo"] is None
    assert resp.json()["data"]["libelle"] == "Apple"


def test_stats(client, make_site_category, make_marque, make_produit):
    sc = make_site_category("Electromenagers")
    marque = make_marque(sc["id"], "Bosch")
    make_produit(marque["id"], "Produit A", quantite_stock=2)
    make_produit(marque["id"], "Produit B", is_available=False)

    stats = client.get(f"/api/brands/{marque['id']}/stats").json()["data"]
    assert stats == {
        "total_produits": 2,
        "produits_actifs": 2,
        "produits_disponibles": 1,
        "produits_en_stock": 1,
    }


def test_active_filter_hides_deleted(client, auth_headers, make_site_category, make_marque):
    sc = make_site_category("Telephones")
    make_marque(sc["id"], "Xiaomi")
    gone = make_marque(sc["id"], "Nokia")
    client.delete(f"/api/brands/{gone['id']}", headers=auth_headers)

    active = client.get("/api/brands", params={"is_active": True}).json()["data"]
    assert [r["libelle"] for r in active] == ["Xiaomi"]


def test_store_refuses_purging_referenced_marque(session, make_site_category, make_marque, make_produit):
    sc = make_site_category("Electromenagers")
    marque = make_marque(sc["id"], "Bosch")
    make_produit(marque["id"])

    repo = MarqueRepository(session)
    entity = repo.get(uuid.UUID(marque["id"]))
    with pytest.raises(IntegrityError):
        repo.purge(entity)
    session.rollback()
    assert repo.get(uuid.UUID(marque["id"])) is not None


def test_purging_site_category_cascades_to_children(session, make_site_category, make_category):
    sc = make_site_category("Mobiliers")
    cat = make_category(sc["id"], "Canapés")

    SiteCategoryRepository(session).purge(SiteCategoryRepository(session).get(uuid.UUID(sc["id"])))
    assert CategoryRepository(session).get(uuid.UUID(cat["id"]), include_deleted=True) is None
