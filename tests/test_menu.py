"""
Tests for menu categories, menu items and the public menu
"""

from dinedash.models.staff import StaffRole
from conftest import create_staff


def test_public_categories_need_restaurant(client):
    response = client.get("/api/categories")

    assert response.status_code == 400
    assert response.json() == {"error": "Restaurant ID required"}


def test_list_categories_by_tenant(client, tenant, menu):
    response = client.get("/api/categories", params={"tenant_id": str(tenant.id)})

    assert response.status_code == 200
    assert [c["name"] for c in response.json()] == ["Mains"]


def test_create_category_appends_to_menu(client, login_as, manager, menu):
    login_as(manager)

    first = client.post("/api/categories", json={"name": "Desserts"})
    second = client.post("/api/categories", json={"name": "Drinks"})

    assert first.status_code == 201
    assert first.json()["sort_order"] == 1
    assert second.json()["sort_order"] == 2


def test_first_category_starts_at_zero(client, login_as, owner):
    login_as(owner)

    response = client.post("/api/categories", json={"name": "Starters"})

    assert response.json()["sort_order"] == 0


def test_waiter_cannot_edit_menu(client, login_as, waiter):
    login_as(waiter)

    response = client.post("/api/categories", json={"name": "Secret Menu"})

    assert response.status_code == 403
    assert response.json() == {"error": "Forbidden"}


def test_delete_category_hides_it(client, login_as, manager, tenant, menu):
    login_as(manager)

    response = client.delete(f"/api/categories/{menu['category'].id}")

    assert response.status_code == 200
    assert client.get("/api/categories").json() == []


def test_update_other_tenants_category(client, db, login_as, other_tenant, menu):
    intruder = create_staff(db, other_tenant, StaffRole.MANAGER, "manager@other.com")
    login_as(intruder)

    response = client.patch(f"/api/categories/{menu['category'].id}", json={"name": "Hijacked"})

    assert response.status_code == 404


def test_create_menu_item_with_customizations(client, login_as, manager, menu):
    login_as(manager)

    response = client.post(
        "/api/menu-items",
        json={
            "category_id": str(menu["category"].id),
            "name": "Paneer Tikka",
            "price": 249.0,
            "is_veg": True,
            "customizations": [
                {"name": "Spice", "options": [{"name": "Mild"}, {"name": "Hot", "price": 10}], "required": True}
            ],
        },
    )

    assert response.status_code == 201
    body = response.json()
    assert body["price"] == 249.0
    assert body["customizations"][0]["name"] == "Spice"
    assert body["customizations"][0]["options"][1] == {"name": "Hot", "price": 10.0}


def test_create_menu_item_in_unknown_category(client, login_as, manager, other_tenant):
    login_as(manager)

    response = client.post(
        "/api/menu-items",
        json={"category_id": str(other_tenant.id), "name": "Ghost", "price": 1},
    )

    assert response.status_code == 400
    assert response.json() == {"error": "Category not found"}


def test_put_replaces_customizations(client, login_as, manager, menu):
    login_as(manager)
    item_id = menu["burger"].id
    client.post(f"/api/menu-items/{item_id}/customizations", json={"name": "Cheese", "options": [{"name": "Cheddar"}]})

    response = client.put(
        f"/api/menu-items/{item_id}",
        json={
            "category_id": str(menu["category"].id),
            "name": "Double Burger",
            "price": 14,
            "customizations": [{"name": "Bun", "options": [{"name": "Brioche"}]}],
        },
    )

    assert response.status_code == 200
    assert response.json()["name"] == "Double Burger"
    assert [c["name"] for c in response.json()["customizations"]] == ["Bun"]


def test_patch_toggles_availability(client, login_as, manager, tenant, menu):
    login_as(manager)

    response = client.patch(f"/api/menu-items/{menu['burger'].id}", json={"is_available": False})

    assert response.status_code == 200
    assert response.json()["is_available"] is False
    assert response.json()["price"] == 10.0


def test_delete_menu_item_keeps_order_history(client, login_as, manager, menu, place_order):
    order = place_order((menu["burger"], 1))
    login_as(manager)

    deleted = client.delete(f"/api/menu-items/{menu['burger'].id}")
    fetched = client.get(f"/api/orders/{order['id']}")

    assert deleted.status_code == 200
    assert client.get(f"/api/menu-items/{menu['burger'].id}").status_code == 404
    assert fetched.json()["line_items"][0]["name"] == "Burger"


def test_customization_lifecycle(client, login_as, manager, menu):
    login_as(manager)
    item_id = menu["fries"].id

    added = client.post(f"/api/menu-items/{item_id}/customizations", json={"name": "Size", "options": []})
    customization_id = added.json()["id"]
    removed = client.delete(f"/api/menu-items/{item_id}/customizations/{customization_id}")
    missing = client.delete(f"/api/menu-items/{item_id}/customizations/{customization_id}")

    assert added.status_code == 201
    assert removed.status_code == 200
    assert missing.status_code == 404


def test_public_menu(client, tenant, menu):
    response = client.get(f"/api/restaurants/{tenant.slug}/menu")

    assert response.status_code == 200
    body = response.json()
    assert body["restaurant"]["slug"] == "test-bistro"
    assert len(body["categories"]) == 1
    # Unavailable items are hidden from diners
    assert [item["name"] for item in body["categories"][0]["items"]] == ["Burger", "Fries"]


def test_unknown_restaurant(client):
    response = client.get("/api/restaurants/nowhere")

    assert response.status_code == 404
    assert response.json() == {"error": "Restaurant not found"}
