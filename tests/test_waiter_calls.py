"""
Integration tests for waiter calls
"""

from dinedash.models.table import Table


def call_waiter(client, tenant, table, reason="Water please"):
    return client.post(
        "/api/waiter-calls",
        json={"tenant_id": str(tenant.id), "table_id": str(table.id), "reason": reason},
    )


def test_diner_calls_waiter(client, tenant, table):
    response = call_waiter(client, tenant, table)

    assert response.status_code == 201
    assert response.json()["status"] == "PENDING"
    assert response.json()["table"]["number"] == 1


def test_second_pending_call_is_refused(client, tenant, table):
    call_waiter(client, tenant, table)

    response = call_waiter(client, tenant, table, reason="Bill")

    assert response.status_code == 409
    assert response.json() == {"error": "A waiter has already been called for this table"}


def test_table_can_call_again_after_attended(client, login_as, waiter, tenant, table):
    call = call_waiter(client, tenant, table).json()
    login_as(waiter)

    attended = client.patch(f"/api/waiter-calls/{call['id']}", json={"status": "ATTENDED"})
    again = call_waiter(client, tenant, table)

    assert attended.status_code == 200
    assert attended.json()["attended_by"] == str(waiter.id)
    assert attended.json()["attended_at"] is not None
    assert again.status_code == 201


def test_call_for_unknown_table(client, tenant, other_tenant, db):
    foreign = Table(tenant_id=other_tenant.id, number=1)
    db.add(foreign)
    db.commit()
    db.refresh(foreign)

    response = call_waiter(client, tenant, foreign)

    assert response.status_code == 404


def test_list_calls_filtered_by_status(client, login_as, waiter, db, tenant, table):
    second = Table(tenant_id=tenant.id, number=2)
    db.add(second)
    db.commit()
    db.refresh(second)
    first_call = call_waiter(client, tenant, table).json()
    call_waiter(client, tenant, second)
    login_as(waiter)
    client.patch(f"/api/waiter-calls/{first_call['id']}", json={"status": "COMPLETED"})

    pending = client.get("/api/waiter-calls", params={"status": "PENDING"}).json()
    everything = client.get("/api/waiter-calls").json()

    assert [c["table_id"] for c in pending] == [str(second.id)]
    assert len(everything) == 2


def test_delete_call(client, login_as, waiter, tenant, table):
    call = call_waiter(client, tenant, table).json()
    login_as(waiter)

    assert client.delete(f"/api/waiter-calls/{call['id']}").status_code == 200
    assert client.get("/api/waiter-calls").json() == []


def test_update_requires_staff(client, tenant, table):
    call = call_waiter(client, tenant, table).json()

    response = client.patch(f"/api/waiter-calls/{call['id']}", json={"status": "ATTENDED"})

    assert response.status_code == 401
