import pytest
from fastapi.testclient import TestClient

from conftest import FakeApiClient
from shophub.domain.errors import MalformedResponseError, NetworkError, ServerError
from shophub.main import create_app
from shophub.services.session import StorefrontSession


@pytest.fixture
def api():
    return FakeApiClient()


@pytest.fixture
def client(api):
    return TestClient(create_app(StorefrontSession(api=api)))


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok", "backend": "http://backend.test"}


def test_products_loaded_once_and_filtered(client, api):
    first = client.get("/store/products")
    filtered = client.get("/store/products", params={"q": "red"})

    assert first.status_code == 200
    assert [p["id"] for p in first.json()] == ["a", "b", "c"]
    assert [p["id"] for p in filtered.json()] == ["a", "c"]
    assert api.methods() == ["GET"]


def test_products_refresh_flag_refetches(client, api):
    client.get("/store/products")
    client.get("/store/products", params={"refresh": "true"})
    assert api.methods() == ["GET", "GET"]


@pytest.mark.parametrize("error,status", [
    (NetworkError("Request timeout. Server took too long to respond."), 503),
    (ServerError("Backend exploded", status_code=500), 502),
    (MalformedResponseError("Invalid response format"), 502),
])
def test_fetch_errors_are_mapped(client, api, error, status):
    api.fail_with["GET"] = error

    resp = client.get("/store/products")

    assert resp.status_code == status
    assert resp.json()["detail"] == error.message


def test_cart_flow(client):
    client.get("/store/products")

    client.post("/store/cart/items", json={"product_id": "a"})
    client.post("/store/cart/items", json={"product_id": "a"})
    resp = client.post("/store/cart/items", json={"product_id": "c"})

    body = resp.json()
    assert [(i["product_id"], i["quantity"]) for i in body["items"]] == [("a", 2), ("c", 1)]
    assert body["count"] == 3
    assert body["total"] == "47.50"

    resp = client.delete("/store/cart/items/a")
    assert resp.json()["count"] == 1

    resp = client.delete("/store/cart")
    assert resp.json() == {"items": [], "count": 0, "total": "0.00"}


def test_add_unknown_product_is_404(client):
    client.get("/store/products")
    resp = client.post("/store/cart/items", json={"product_id": "ghost"})
    assert resp.status_code == 404
    assert client.get("/store/cart").json()["count"] == 0


def test_admin_create_flow(client, api):
    client.get("/admin/products")

    assert client.get("/admin/draft").json() is None
    assert client.post("/admin/draft").json()["mode"] == "create"

    resp = client.patch("/admin/draft", json={
        "name": "Green Scarf", "description": "Soft knit", "price": "15.50", "category": "apparel",
    })
    assert resp.json()["name"] == "Green Scarf"

    resp = client.put("/admin/draft/image", files={"image": ("scarf.png", b"\x89PNG", "image/png")})
    assert resp.json()["image_filename"] == "scarf.png"

    resp = client.post("/admin/draft/submit")

    assert resp.status_code == 200
    assert resp.json()["id"] == "new-id"
    assert client.get("/admin/draft").json() is None
    assert api.methods() == ["GET", "POST", "GET"]
    assert api.calls[1][3]["image"] == ("scarf.png", b"\x89PNG", "image/png")


def test_admin_submit_validation_error(client, api):
    client.post("/admin/draft")
    client.patch("/admin/draft", json={"description": "d", "price": "1", "category": "c"})

    resp = client.post("/admin/draft/submit")

    assert resp.status_code == 400
    assert "name" in resp.json()["detail"]
    assert api.methods() == []
    assert client.get("/admin/draft").json()["description"] == "d"


def test_admin_submit_without_draft_is_conflict(client):
    assert client.post("/admin/draft/submit").status_code == 409


def test_admin_edit_and_cancel(client):
    client.get("/admin/products")

    resp = client.post("/admin/products/b/draft")
    assert resp.json()["mode"] == "update"
    assert resp.json()["target_id"] == "b"

    assert client.delete("/admin/draft").status_code == 204
    assert client.get("/admin/draft").json() is None


def test_admin_edit_product_with_id_submit():
    api = FakeApiClient([{"_id": "submit", "name": "Odd Id", "price": 5}])
    client = TestClient(create_app(StorefrontSession(api=api)))
    client.get("/admin/products")

    resp = client.post("/admin/products/submit/draft")

    assert resp.status_code == 200
    assert resp.json()["mode"] == "update"
    assert resp.json()["target_id"] == "submit"
    assert api.methods() == ["GET"]


def test_admin_delete(client, api):
    client.get("/admin/products")

    resp = client.delete("/admin/products/c")

    assert resp.status_code == 204
    assert api.methods() == ["GET", "DELETE", "GET"]


def test_admin_delete_server_error(client, api):
    api.fail_with["DELETE"] = ServerError("Product not found", status_code=404)

    resp = client.delete("/admin/products/zzz")

    assert resp.status_code == 502
    assert resp.json()["detail"] == "Product not found"
