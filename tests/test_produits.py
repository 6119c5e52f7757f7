import base64
import re
import uuid
from decimal import Decimal

import pytest

from app.domain.errors import ValidationFailedError
from app.features.produits.services import compute_stock, generate_reference

PNG_BYTES = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAQAAAC1HAwCAAAAC0lEQVR42mNkYAAAAAYAAjCB0C8AAAAASUVORK5CYII="
)


@pytest.fixture
def marque(make_site_category, make_marque):
    sc = make_site_category("Electromenagers")
    return make_marque(sc["id"], "Bosch")


# -----------------------------
# Unitaires
# -----------------------------
@pytest.mark.parametrize(
    "operation, quantity, expected",
    [("subtract", 15, 0), ("add", 5, 15), ("set", 3, 3), ("subtract", 4, 6)],
)
def test_compute_stock(operation, quantity, expected):
    assert compute_stock(10, quantity, operation) == expected


def test_compute_stock_rejects_unknown_operation():
    with pytest.raises(ValidationFailedError):
        compute_stock(10, 1, "multiply")


def test_generate_reference_format():
    assert re.fullmatch(r"PROD-1700000000000-[0-9A-Z]{9}", generate_reference(1700000000000))
    assert generate_reference() != generate_reference()


# -----------------------------
# API
# -----------------------------
def test_create_generates_reference_and_defaults(client, marque, make_produit):
    produit = make_produit(marque["id"], prix="199.99")
    assert produit["reference"].startswith("PROD-")
    assert produit["quantite_minimale"] == 1
    assert produit["quantite_stock"] == 0
    assert produit["featured"] is False
    assert produit["images"] == []
    assert produit["caracteristiques"] == {}
    assert Decimal(produit["prix"]) == Decimal("199.99")


def test_reference_unique(client, auth_headers, marque, make_produit):
    make_produit(marque["id"], reference="REF-001")
    dup = client.post(
        "/api/products",
        json={"libelle": "Autre", "marque_id": marque["id"], "reference": "REF-001"},
        headers=auth_headers,
    )
    assert dup.status_code == 409


def test_parents_must_exist(client, auth_headers, marque):
    no_marque = client.post(
        "/api/products", json={"libelle": "Four", "marque_id": str(uuid.uuid4())}, headers=auth_headers
    )
    assert no_marque.status_code == 404
    assert no_marque.json()["message"] == "Marque non trouvée"

    no_category = client.post(
        "/api/products",
        json={"libelle": "Four", "marque_id": marque["id"], "category_id": str(uuid.uuid4())},
        headers=auth_headers,
    )
    assert no_category.status_code == 404


def test_field_validation(client, auth_headers, marque):
    for body in (
        {"libelle": "Four", "marque_id": marque["id"], "prix": -1},
        {"libelle": "Four", "marque_id": marque["id"], "quantite_minimale": 0},
        {"libelle": "Four", "marque_id": marque["id"], "quantite_stock": -5},
        {"libelle": "F", "marque_id": marque["id"]},
        {"libelle": "Four"},
    ):
        resp = client.post("/api/products", json=body, headers=auth_headers)
        assert resp.status_code == 400, body


def test_images_kept_and_validated(client, auth_headers, marque, make_produit):
    produit = make_produit(
        marque["id"],
        image_principale="data:image/png;base64,AAAA",
        images=["/uploads/a.jpg", "https://example.com/b.jpg", None],
    )
    assert produit["image_principale"] == "data:image/png;base64,AAAA"
    assert produit["images"] == ["/uploads/a.jpg", "https://example.com/b.jpg", None]

    bad_main = client.post(
        "/api/products",
        json={"libelle": "Four", "marque_id": marque["id"], "image_principale": "data:image/bmp;base64,AAAA"},
        headers=auth_headers,
    )
    assert bad_main.status_code == 400

    bad_list = client.put(
        f"/api/products/{produit['id']}",
        json={"images": ["/uploads/a.jpg", "data:image/bmp;base64,AAAA"]},
        headers=auth_headers,
    )
    assert bad_list.status_code == 400
    assert bad_list.json()["details"] == {"index": 1}


def test_list_filters(client, auth_headers, marque, make_site_category, make_marque, make_produit):
    other = make_marque(make_site_category("Telephones")["id"], "Apple")
    make_produit(marque["id"], "Four", prix="100.00", featured=True)
    make_produit(marque["id"], "Hotte", prix="300.00", is_available=False)
    make_produit(other["id"], "iPhone", prix="900.00")
    gone = make_produit(marque["id"], "Ancien", prix="150.00")
    client.delete(f"/api/products/{gone['id']}")

    def names(**params):
        return {p["libelle"] for p in client.get("/api/products", params=params).json()["data"]}

    assert names() == {"Four", "Hotte", "iPhone"}
    assert names(marque_id=marque["id"]) == {"Four", "Hotte"}
    assert names(min_price="100", max_price="300") == {"Four", "Hotte"}
    assert names(min_price="300.01") == {"iPhone"}
    assert names(featured=True) == {"Four"}
    assert names(is_available=False) == {"Hotte"}
    assert names(include_deleted=True) == {"Four", "Hotte", "iPhone", "Ancien"}


def test_detail_with_relations(client, marque, make_category, make_produit):
    cat = make_category(marque["site_category_id"], "Fours")
    produit = make_produit(marque["id"], category_id=cat["id"])

    data = client.get(f"/api/products/{produit['id']}").json()["data"]
    assert data["marque"]["libelle"] == "Bosch"
    assert data["marque"]["site_category"]["libelle"] == "Electromenagers"
    assert data["category"] == {"id": cat["id"], "libelle": "Fours"}


def test_update_partial_keeps_other_fields(client, auth_headers, marque, make_produit):
    produit = make_produit(marque["id"], description="Grand modèle", quantite_stock=4)
    resp = client.put(f"/api/products/{produit['id']}", json={"featured": True}, headers=auth_headers)
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["featured"] is True
    assert data["description"] == "Grand modèle"
    assert data["quantite_stock"] == 4
    assert data["reference"] == produit["reference"]


@pytest.mark.parametrize(
    "operation, quantity, expected",
    [("subtract", 15, 0), ("add", 5, 15), ("set", 3, 3)],
)
def test_update_stock(client, auth_headers, marque, make_produit, operation, quantity, expected):
    produit = make_produit(marque["id"], quantite_stock=10)
    resp = client.put(
        f"/api/products/{produit['id']}/stock",
        json={"quantite_stock": quantity, "operation": operation},
        headers=auth_headers,
    )
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["ancien_stock"] == 10
    assert data["nouveau_stock"] == expected


def test_update_stock_invalid_operation_changes_nothing(client, auth_headers, marque, make_produit):
    produit = make_produit(marque["id"], quantite_stock=10)
    resp = client.put(
        f"/api/products/{produit['id']}/stock",
        json={"quantite_stock": 2, "operation": "multiply"},
        headers=auth_headers,
    )
    assert resp.status_code == 400
    assert client.get(f"/api/products/{produit['id']}").json()["data"]["quantite_stock"] == 10


def test_update_stock_requires_bearer(client, marque, make_produit):
    produit = make_produit(marque["id"])
    resp = client.put(f"/api/products/{produit['id']}/stock", json={"quantite_stock": 1})
    assert resp.status_code == 401


def test_delete_and_restore_open(client, marque, make_produit):
    produit = make_produit(marque["id"], reference="REF-42")
    assert client.post(f"/api/products/{produit['id']}/restore").json()["message"] == "Le produit n'a pas été supprimé"
    assert client.delete(f"/api/products/{produit['id']}").status_code == 200
    assert client.get(f"/api/products/{produit['id']}").status_code == 404
    assert client.post(f"/api/products/{produit['id']}/restore").status_code == 200
    assert client.post(f"/api/products/{uuid.uuid4()}/restore").status_code == 404


def test_upload_images(client, auth_headers, marque, make_produit):
    produit = make_produit(marque["id"], image_principale="/uploads/old.jpg")
    resp = client.post(
        f"/api/products/{produit['id']}/images",
        files=[
            ("image_principale", ("main.png", PNG_BYTES, "image/png")),
            ("images", ("a.png", PNG_BYTES, "image/png")),
            ("images", ("b.png", PNG_BYTES, "image/png")),
        ],
        headers=auth_headers,
    )
    assert resp.status_code == 200, resp.text
    data = resp.json()["data"]
    assert data["image_principale"].startswith("data:image/png;base64,")
    assert len(data["images"]) == 2
    assert all(i.startswith("data:image/png;base64,") for i in data["images"])


def test_upload_rejects_non_images(client, auth_headers, marque, make_produit):
    produit = make_produit(marque["id"])
    resp = client.post(
        f"/api/products/{produit['id']}/images",
        files=[("image_principale", ("fake.png", b"not an image", "image/png"))],
        headers=auth_headers,
    )
    assert resp.status_code == 400

    empty = client.post(f"/api/products/{produit['id']}/images", headers=auth_headers)
    assert empty.status_code == 400


def test_active_filter_hides_deleted(client, marque, make_produit):
    make_produit(marque["id"], "Four")
    gone = make_produit(marque["id"], "Hotte")
    client.delete(f"/api/products/{gone['id']}")

    active = client.get("/api/products", params={"is_active": True}).json()["data"]
    assert [p["libelle"] for p in active] == ["Four"]


def test_update_ignores_null_reference(client, auth_headers, marque, make_produit):
    produit = make_produit(marque["id"])
    resp = client.put(f"/api/products/{produit['id']}", json={"reference": None}, headers=auth_headers)
    assert resp.status_code == 200
    assert resp.json()["data"]["reference"] == produit["reference"]
