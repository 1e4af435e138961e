from sqlalchemy import func, select, update

from ncf_pos.models import InvoiceSequence, Store
from ncf_pos.services import invoice_sequences


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_list_sequences_shows_next_number(client, db_session, store):
    invoice_sequences.set_counter(db_session, store.id, "B02", 1764)

    response = client.get(f"/stores/{store.id}/invoice-sequences")

    assert response.status_code == 200
    rows = {row["invoice_type_id"]: row for row in response.json()}
    assert rows["B02"]["current_number"] == 1764
    assert rows["B02"]["next_invoice_number"] == "B02-00001765"


def test_provision_rejects_unknown_type(client, db_session, store):
    response = client.post(
        f"/stores/{store.id}/invoice-sequences",
        json={"invoice_type_codes": ["B02", "B99"]},
    )

    assert response.status_code == 400
    assert "B99" in response.json()["detail"]


def test_peek_and_issue(client, store):
    base = f"/stores/{store.id}/invoice-sequences/B02"

    assert client.get(f"{base}/next").json()["invoice_number"] == "B02-00000001"
    issued = client.post(f"{base}/issue")
    assert issued.status_code == 201
    assert issued.json()["invoice_number"] == "B02-00000001"
    assert client.get(f"{base}/next").json()["invoice_number"] == "B02-00000002"


def test_missing_counter_is_404(client, store):
    response = client.get(f"/stores/{store.id}/invoice-sequences/E31/next")

    assert response.status_code == 404


def test_set_counter_validation(client, store):
    base = f"/stores/{store.id}"
    client.post(
        f"{base}/sales/sync",
        json={
            "invoice_type_id": "B02",
            "invoice_number": "B02-00001780",
            "subtotal": "100.00",
            "tax_total": "18.00",
            "payment_method": "cash",
        },
    )

    rejected = client.put(
        f"{base}/invoice-sequences/B02", json={"current_number": 1764}
    )
    accepted = client.put(
        f"{base}/invoice-sequences/B02", json={"current_number": 1780}
    )

    assert rejected.status_code == 400
    assert "1781" in rejected.json()["detail"]
    assert accepted.status_code == 200
    assert accepted.json()["next_invoice_number"] == "B02-00001781"


def test_set_counter_rejects_negative_body(client, store):
    response = client.put(
        f"/stores/{store.id}/invoice-sequences/B02", json={"current_number": -5}
    )

    assert response.status_code == 422


def test_create_and_fetch_sale(client, store):
    response = client.post(
        f"/stores/{store.id}/sales",
        json={
            "invoice_type_id": "B01",
            "subtotal": "500.00",
            "tax_total": "90.00",
            "payment_method": "transfer",
        },
    )

    assert response.status_code == 201
    body = response.json()
    assert body["invoice_number"] == "B01-00000001"
    assert body["total"] == "590.00"

    fetched = client.get(f"/stores/{store.id}/sales/{body['id']}")
    assert fetched.status_code == 200
    assert fetched.json()["invoice_number"] == "B01-00000001"


def test_sync_then_audit_and_reconcile(client, store):
    base = f"/stores/{store.id}"
    payload = {
        "invoice_type_id": "B02",
        "invoice_number": "B02-00000009",
        "subtotal": "100.00",
        "tax_total": "18.00",
        "payment_method": "cash",
    }

    first = client.post(f"{base}/sales/sync", json=payload)
    second = client.post(f"{base}/sales/sync", json=payload)

    assert first.json()["created"] is True
    assert first.json()["current_number"] == 9
    assert second.json()["created"] is False
    assert client.get(f"{base}/invoice-sequences/max-issued").json() == {"B02": 9}

    audit = client.get(f"{base}/invoice-sequences/audit").json()
    assert all(entry["behind"] is False for entry in audit)

    reconciled = client.post(
        f"{base}/invoice-sequences/B02/reconcile", json={"local_number": 12}
    )
    assert reconciled.json() == {
        "invoice_type_id": "B02",
        "current_number": 12,
        "advanced": True,
    }


def test_audit_reads_and_repair_writes(client, db_session, store):
    base = f"/stores/{store.id}/invoice-sequences"
    client.post(
        f"/stores/{store.id}/sales/sync",
        json={
            "invoice_type_id": "B02",
            "invoice_number": "B02-00000009",
            "subtotal": "100.00",
            "payment_method": "cash",
        },
    )
    db_session.execute(
        update(InvoiceSequence)
        .where(
            InvoiceSequence.store_id == store.id,
            InvoiceSequence.invoice_type_id == "B02",
        )
        .values(current_number=3)
    )
    db_session.commit()

    for url in (f"{base}/audit", f"{base}/audit?repair=1"):
        rows = {row["invoice_type_id"]: row for row in client.get(url).json()}
        assert rows["B02"]["behind"] is True
        assert rows["B02"]["repaired"] is False
    assert client.get(f"{base}/B02/next").json()["invoice_number"] == "B02-00000004"

    repaired = client.post(f"{base}/audit")
    assert repaired.status_code == 200
    rows = {row["invoice_type_id"]: row for row in repaired.json()}
    assert rows["B02"]["repaired"] is True
    assert rows["B02"]["current_number"] == 9
    assert client.get(f"{base}/B02/next").json()["invoice_number"] == "B02-00000010"


def test_create_store_provisions_counters(client):
    response = client.post(
        "/stores", json={"name": "Supermercado Bravo", "initial_number": 100}
    )

    assert response.status_code == 201
    body = response.json()
    assert body["name"] == "Supermercado Bravo"
    assert [row["invoice_type_id"] for row in body["invoice_sequences"]] == [
        "B01",
        "B02",
        "B14",
        "B15",
    ]
    assert body["invoice_sequences"][1]["next_invoice_number"] == "B02-00000101"

    fetched = client.get(f"/stores/{body['id']}")
    assert fetched.status_code == 200
    assert fetched.json()["invoice_sequences"] == body["invoice_sequences"]
    issued = client.post(f"/stores/{body['id']}/invoice-sequences/B02/issue")
    assert issued.json()["invoice_number"] == "B02-00000101"


def test_create_store_with_unknown_type_leaves_no_store(client, db_session):
    response = client.post(
        "/stores", json={"name": "Ferretería Ozama", "invoice_type_codes": ["B99"]}
    )

    assert response.status_code == 400
    assert db_session.scalar(select(func.count()).select_from(Store)) == 0
    assert client.get("/stores/1").status_code == 404
