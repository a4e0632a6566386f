from tests.conftest import add_brand, add_category, add_product

PRODUCTS = "/api/admin/products"
BRANDS = "/api/admin/brands"


def product_body(**overrides):
    body = {"name": "Floral Dress", "price": 59.9, "quantity": 5}
    body.update(overrides)
    return body


def test_create_product_with_category_is_active(client, admin_headers, db):
    dresses = add_category(db, "Dresses")
    brand = add_brand(db, "Acme")
    response = client.post(
        PRODUCTS,
        json=product_body(
            categoryId=dresses.id,
            brandId=brand.id,
            images=["/products/a.png", " ", "/products/b.png"],
            availableSizes=["S", "M"],
        ),
        headers=admin_headers
    )
    assert response.status_code == 201
    product = response.json()["product"]
    assert product["slug"] == "floral-dress"
    assert product["isActive"] is True
    assert product["images"] == ["/products/a.png", "/products/b.png"]
    assert product["thumbnail"] == "/products/a.png"
    assert product["category"] == {"id": dresses.id, "name": "Dresses", "slug": "dresses"}
    assert product["brand"] == {"id": brand.id, "name": "Acme"}
    assert product["availableSizes"] == ["S", "M"]


def test_product_without_category_is_saved_as_draft(client, admin_headers):
    response = client.post(PRODUCTS, json=product_body(isActive=True), headers=admin_headers)
    assert response.status_code == 201
    assert response.json()["product"]["isActive"] is False


def test_derived_product_slugs_are_unique(client, admin_headers, db):
    add_product(db, "Floral Dress")
    response = client.post(PRODUCTS, json=product_body(), headers=admin_headers)
    assert response.json()["product"]["slug"] == "floral-dress-1"


def test_explicit_duplicate_product_slug_conflicts(client, admin_headers, db):
    add_product(db, "Floral Dress")
    response = client.post(PRODUCTS, json=product_body(slug="floral-dress"), headers=admin_headers)
    assert response.status_code == 409


def test_product_rejects_unknown_references(client, admin_headers):
    response = client.post(PRODUCTS, json=product_body(categoryId="missing"), headers=admin_headers)
    assert response.status_code == 400
    assert response.json()["error"] == "Category not found"

    response = client.post(PRODUCTS, json=product_body(brandId="missing"), headers=admin_headers)
    assert response.status_code == 400
    assert response.json()["error"] == "Brand not found"


def test_product_validation_errors(client, admin_headers):
    response = client.post(PRODUCTS, json=product_body(price=-1), headers=admin_headers)
    assert response.status_code == 422
    assert response.json()["error"].startswith("price:")


def test_list_products_by_status(client, admin_headers, db):
    shoes = add_category(db, "Shoes")
    add_product(db, "Sneaker", category=shoes)
    add_product(db, "Prototype", is_active=False)

    def names(response):
        return sorted(p["name"] for p in response.json()["products"])

    assert names(client.get(PRODUCTS, headers=admin_headers)) == ["Prototype", "Sneaker"]
    assert names(client.get(PRODUCTS, params={"status": "active"}, headers=admin_headers)) == ["Sneaker"]
    assert names(client.get(PRODUCTS, params={"status": "draft"}, headers=admin_headers)) == ["Prototype"]
    assert names(client.get(PRODUCTS, params={"search": "sneak"}, headers=admin_headers)) == ["Sneaker"]
    assert names(client.get(PRODUCTS, params={"categoryId": shoes.id}, headers=admin_headers)) == ["Sneaker"]


def test_update_and_delete_product(client, admin_headers, db):
    product = add_product(db, "Old Name")
    response = client.put(f"{PRODUCTS}/{product.id}", json=product_body(name="New Name"), headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["product"]["slug"] == "new-name"

    assert client.delete(f"{PRODUCTS}/{product.id}", headers=admin_headers).status_code == 204
    assert client.get(f"{PRODUCTS}/{product.id}", headers=admin_headers).status_code == 404


def test_brand_crud(client, admin_headers):
    response = client.post(BRANDS, json={"name": "Acme Co"}, headers=admin_headers)
    assert response.status_code == 201
    brand = response.json()["brand"]
    assert brand["slug"] == "acme-co"

    second = client.post(BRANDS, json={"name": "Acme Co"}, headers=admin_headers).json()["brand"]
    assert second["slug"] == "acme-co-1"

    response = client.post(BRANDS, json={"name": "Other", "slug": "acme-co"}, headers=admin_headers)
    assert response.status_code == 409

    response = client.put(f"{BRANDS}/{brand['id']}", json={"name": "Acme", "slug": "acme"}, headers=admin_headers)
    assert response.json()["brand"]["slug"] == "acme"

    listed = client.get(BRANDS, headers=admin_headers).json()["brands"]
    assert [b["name"] for b in listed] == ["Acme", "Acme Co"]

    assert client.delete(f"{BRANDS}/{brand['id']}", headers=admin_headers).status_code == 204


def test_brand_with_products_cannot_be_deleted(client, admin_headers, db):
    brand = add_brand(db, "Acme")
    add_product(db, "Anvil", brand=brand)
    response = client.delete(f"{BRANDS}/{brand.id}", headers=admin_headers)
    assert response.status_code == 409
    assert response.json()["error"].startswith("Cannot delete brand with products.")
