# tests/test_products.py
import uuid

from fastapi.testclient import TestClient

from catalog_api.core.storage_utils import PLACEHOLDER_IMAGE_URL

from conftest import image_file


def test_create_without_images_uses_placeholder(client, create_product):
    product = create_product()
    assert product["image"] == PLACEHOLDER_IMAGE_URL
    assert product["images"] == [PLACEHOLDER_IMAGE_URL]
    assert product["mediaHandles"] == []


def test_create_then_get_primary_image_is_first_image(client, media, create_product):
    created = create_product(images=3, fabricType="Cotton", care="Dry clean only")

    resp = client.get(f"/api/products/{created['id']}")
    assert resp.status_code == 200
    product = resp.json()

    assert len(product["images"]) == 3
    assert product["image"] == product["images"][0]
    assert product["mediaHandles"] == ["products/1", "products/2", "products/3"]
    assert product["fabricType"] == "Cotton"
    assert product["care"] == "Dry clean only"
    assert [u[0] for u in media.uploads] == ["products"] * 3


def test_create_with_colors_json(create_product):
    product = create_product(colors='[{"name": "White", "images": ["https://img/w1"]}]')
    assert product["colors"] == [{"name": "White", "images": ["https://img/w1"]}]


def test_create_rejects_malformed_colors(client, auth_headers):
    resp = client.post(
        "/api/admin/products",
        data={"name": "Cap", "price": "₦5,000", "category": "Accessories", "colors": "[oops"},
        headers=auth_headers,
    )
    assert resp.status_code == 400
    assert "error" in resp.json()


def test_create_rejects_unknown_category(client, auth_headers):
    resp = client.post(
        "/api/admin/products",
        data={"name": "Cap", "price": "₦5,000", "category": "Shoes"},
        headers=auth_headers,
    )
    assert resp.status_code == 400


def test_create_rejects_missing_name(client, auth_headers):
    resp = client.post(
        "/api/admin/products",
        data={"price": "₦5,000", "category": "Casual"},
        headers=auth_headers,
    )
    assert resp.status_code == 400


def test_create_rejects_more_than_ten_images(client, auth_headers, media):
    files = [("images", image_file(f"img{i}.png")) for i in range(11)]
    resp = client.post(
        "/api/admin/products",
        data={"name": "Cap", "price": "₦5,000", "category": "Accessories"},
        files=files,
        headers=auth_headers,
    )
    assert resp.status_code == 400
    assert media.uploads == []


def test_create_rejects_unsupported_image_type(client, auth_headers, media):
    resp = client.post(
        "/api/admin/products",
        data={"name": "Cap", "price": "₦5,000", "category": "Accessories"},
        files=[("images", ("notes.txt", b"hello", "text/plain"))],
        headers=auth_headers,
    )
    assert resp.status_code == 400
    assert media.uploads == []


def test_list_is_newest_first(client, create_product):
    first = create_product(name="First")
    second = create_product(name="Second")

    resp = client.get("/api/products")
    assert resp.status_code == 200
    ids = [p["id"] for p in resp.json()]
    assert ids == [second["id"], first["id"]]


def test_get_unknown_product_is_not_found(client):
    resp = client.get(f"/api/products/{uuid.uuid4()}")
    assert resp.status_code == 404
    assert resp.json() == {"error": "Product not found"}


def test_update_price_only_keeps_other_fields(client, auth_headers, create_product):
    created = create_product(images=2, name="Premium Agbada", category="Premium")

    resp = client.put(
        f"/api/admin/products/{created['id']}",
        data={"price": "₦20,000"},
        headers=auth_headers,
    )
    assert resp.status_code == 200
    updated = resp.json()

    assert updated["price"] == "₦20,000"
    assert updated["name"] == "Premium Agbada"
    assert updated["category"] == "Premium"
    assert updated["images"] == created["images"]
    assert updated["image"] == created["image"]


def test_update_blank_fields_are_ignored(client, auth_headers, create_product):
    created = create_product(description="Soft cotton")

    resp = client.put(
        f"/api/admin/products/{created['id']}",
        data={"name": "", "description": "   ", "texture": "Smooth"},
        headers=auth_headers,
    )
    assert resp.status_code == 200
    updated = resp.json()
    assert updated["name"] == created["name"]
    assert updated["description"] == "Soft cotton"
    assert updated["texture"] == "Smooth"


def test_update_without_images_keeps_media(client, auth_headers, media, create_product):
    created = create_product(images=2)

    client.put(
        f"/api/admin/products/{created['id']}",
        data={"name": "Renamed"},
        headers=auth_headers,
    )
    assert media.deleted == []


def test_update_with_images_replaces_whole_set(client, auth_headers, media, create_product):
    created = create_product(images=2)
    old_handles = created["mediaHandles"]

    resp = client.put(
        f"/api/admin/products/{created['id']}",
        files=[("images", image_file("new.png"))],
        headers=auth_headers,
    )
    assert resp.status_code == 200
    updated = resp.json()

    assert media.deleted == old_handles
    assert updated["images"] == ["https://media.test/products/3"]
    assert updated["image"] == updated["images"][0]
    assert updated["mediaHandles"] == ["products/3"]


def test_update_tolerates_media_delete_failure(client, auth_headers, media, create_product):
    created = create_product(images=1)
    media.fail_deletes = True

    resp = client.put(
        f"/api/admin/products/{created['id']}",
        files=[("images", image_file("new.png"))],
        headers=auth_headers,
    )
    assert resp.status_code == 200
    assert resp.json()["mediaHandles"] == ["products/2"]


def test_update_unknown_product_is_not_found(client, auth_headers):
    resp = client.put(
        f"/api/admin/products/{uuid.uuid4()}",
        data={"price": "₦1"},
        headers=auth_headers,
    )
    assert resp.status_code == 404


def test_delete_removes_record_and_media(client, auth_headers, media, create_product):
    created = create_product(images=2)

    resp = client.delete(f"/api/admin/products/{created['id']}", headers=auth_headers)
    assert resp.status_code == 200
    assert resp.json() == {"message": "Product deleted successfully"}
    assert media.deleted == created["mediaHandles"]
    assert client.get(f"/api/products/{created['id']}").status_code == 404


def test_delete_succeeds_when_media_delete_fails(client, auth_headers, media, create_product):
    created = create_product(images=2)
    media.fail_deletes = True

    resp = client.delete(f"/api/admin/products/{created['id']}", headers=auth_headers)
    assert resp.status_code == 200
    # one attempt per handle, even after the first failure
    assert media.deleted == created["mediaHandles"]
    assert client.get(f"/api/products/{created['id']}").status_code == 404


def test_delete_unknown_product_is_not_found(client, auth_headers):
    resp = client.delete(f"/api/admin/products/{uuid.uuid4()}", headers=auth_headers)
    assert resp.status_code == 404


def test_media_upload_failure_is_internal_error(app, auth_headers, media):
    media.fail_uploads = True
    with TestClient(app, raise_server_exceptions=False) as c:
        resp = c.post(
            "/api/admin/products",
            data={"name": "Cap", "price": "₦5,000", "category": "Accessories"},
            files=[("images", image_file())],
            headers=auth_headers,
        )
    assert resp.status_code == 500
    assert resp.json() == {"error": "Internal server error"}


def test_failed_upload_removes_earlier_uploads(app, auth_headers, media):
    media.fail_after = 2
    with TestClient(app, raise_server_exceptions=False) as c:
        resp = c.post(
            "/api/admin/products",
            data={"name": "Cap", "price": "₦5,000", "category": "Accessories"},
            files=[("images", image_file(f"img{i}.png")) for i in range(3)],
            headers=auth_headers,
        )
        listed = c.get("/api/products").json()
    assert resp.status_code == 500
    assert media.deleted == ["products/1", "products/2"]
    assert listed == []
