"""
Tests for table management and QR codes
"""

from dinedash.services.qr import render_qr_png

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


def test_render_qr_png():
    png = render_qr_png("http://localhost:3000/r/test-bistro?table=1")

    assert png.startswith(PNG_SIGNATURE)


def test_create_table_defaults_to_next_number(client, login_as, manager, table):
    login_as(manager)

    response = client.post("/api/tables", json={"capacity": 6})

    assert response.status_code == 201
    body = response.json()
    assert body["number"] == 2
    assert body["name"] == "Table 2"
    assert body["capacity"] == 6
    assert body["qr_code"].endswith("/r/test-bistro?table=2")


def test_duplicate_table_number(client, login_as, manager, table):
    login_as(manager)

    response = client.post("/api/tables", json={"number": 1})

    assert response.status_code == 409
    assert response.json() == {"error": "Table 1 already exists"}


def test_update_table(client, login_as, manager, table):
    login_as(manager)

    response = client.patch(f"/api/tables/{table.id}", json={"number": 7, "name": "Window"})

    assert response.status_code == 200
    assert response.json()["number"] == 7
    assert response.json()["name"] == "Window"
    assert response.json()["qr_code"].endswith("?table=7")


def test_delete_table_is_soft(client, login_as, manager, table):
    login_as(manager)

    response = client.delete(f"/api/tables/{table.id}")

    assert response.status_code == 200
    assert client.get("/api/tables").json() == []


def test_list_tables_publicly(client, tenant, table):
    response = client.get("/api/tables", params={"tenant_id": str(tenant.id)})

    assert response.status_code == 200
    assert [t["number"] for t in response.json()] == [1]


def test_waiter_cannot_manage_tables(client, login_as, waiter):
    login_as(waiter)

    assert client.post("/api/tables", json={}).status_code == 403


def test_table_qr_image(client, login_as, owner, table):
    login_as(owner)

    response = client.get(f"/api/tables/{table.id}/qr")

    assert response.status_code == 200
    assert response.headers["content-type"] == "image/png"
    assert response.content.startswith(PNG_SIGNATURE)
