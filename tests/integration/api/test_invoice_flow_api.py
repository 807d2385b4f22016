from __future__ import annotations

import pytest

API = "/api/v1"


@pytest.fixture
def seeded(client, auth_header):
    headers = auth_header("admin")
    customer = client.post(f"{API}/customers", json={"name": "Sharma Traders", "phone": "9820000000"}, headers=headers)
    assert customer.status_code == 201
    product = client.post(
        f"{API}/products", json={"name": "Steel Bottle", "price": 100, "gst_rate": 18}, headers=headers
    )
    assert product.status_code == 201
    return {"customer_id": customer.json()["id"], "product_id": product.json()["id"], "headers": headers}


def _create_invoice(client, seeded, quantity=3):
    response = client.post(
        f"{API}/invoices",
        json={
            "customer_id": seeded["customer_id"],
            "items": [{"product_id": seeded["product_id"], "quantity": quantity}],
            "invoice_date": "2026-10-18",
        },
        headers=seeded["headers"],
    )
    assert response.status_code == 201, response.text
    return response.json()


def test_invoice_payment_edit_flow(client, seeded):
    headers = seeded["headers"]
    invoice = _create_invoice(client, seeded)
    assert invoice["total_amount"] == 354.0
    assert invoice["payment_status"] == "unpaid"
    assert invoice["issue_date"] == "2026-10-18"

    paid = client.post(
        f"{API}/payments",
        json={"invoice_id": invoice["id"], "amount": 150, "payment_method": "cash"},
        headers=headers,
    )
    assert paid.status_code == 201
    assert paid.json()["amount"] == 150.0

    current = client.get(f"{API}/invoices/{invoice['id']}", headers=headers).json()
    assert current["payment_status"] == "partial"
    assert current["balance_amount"] == 204.0

    edited = client.patch(f"{API}/invoices/{invoice['id']}/lines/0", json={"quantity": 5}, headers=headers)
    assert edited.status_code == 200
    body = edited.json()
    assert body["total_amount"] == 590.0
    assert body["paid_amount"] == 150.0
    assert body["balance_amount"] == 440.0
    assert body["items"][0]["line_total"] == 500.0

    verified = client.get(f"{API}/invoices/{invoice['id']}/verify", headers=headers)
    assert verified.status_code == 200
    assert verified.json()["payment_status"] == "partial"

    history = client.get(f"{API}/invoices/{invoice['id']}/payments", headers=headers).json()
    assert [row["amount"] for row in history] == [150.0]

    listing = client.get(f"{API}/payments", params={"search": "sharma"}, headers=headers).json()
    assert listing[0]["invoice_number"] == invoice["invoice_number"]


def test_delete_invoice_with_payment_returns_conflict(client, seeded):
    invoice = _create_invoice(client, seeded, quantity=1)
    client.post(
        f"{API}/payments",
        json={"invoice_id": invoice["id"], "amount": 10, "payment_method": "upi"},
        headers=seeded["headers"],
    )
    response = client.delete(f"{API}/invoices/{invoice['id']}", headers=seeded["headers"])
    assert response.status_code == 409
    assert client.get(f"{API}/invoices/{invoice['id']}", headers=seeded["headers"]).status_code == 200


def test_delete_unpaid_invoice(client, seeded):
    invoice = _create_invoice(client, seeded, quantity=1)
    response = client.delete(f"{API}/invoices/{invoice['id']}", headers=seeded["headers"])
    assert response.status_code == 200
    assert client.get(f"{API}/invoices/{invoice['id']}", headers=seeded["headers"]).status_code == 404


def test_validation_and_not_found_errors(client, seeded):
    headers = seeded["headers"]
    invoice = _create_invoice(client, seeded, quantity=1)

    zero_payment = client.post(
        f"{API}/payments", json={"invoice_id": invoice["id"], "amount": 0, "payment_method": "cash"}, headers=headers
    )
    assert zero_payment.status_code == 422

    bad_index = client.patch(f"{API}/invoices/{invoice['id']}/lines/3", json={"quantity": 1}, headers=headers)
    assert bad_index.status_code == 422

    last_line = client.delete(f"{API}/invoices/{invoice['id']}/lines/0", headers=headers)
    assert last_line.status_code == 422

    missing = client.post(
        f"{API}/payments", json={"invoice_id": 999, "amount": 5, "payment_method": "cash"}, headers=headers
    )
    assert missing.status_code == 404

    unknown_product = client.post(
        f"{API}/invoices",
        json={"customer_id": seeded["customer_id"], "items": [{"product_id": 999, "quantity": 1}]},
        headers=headers,
    )
    assert unknown_product.status_code == 404


def test_auth_is_enforced(client, seeded, auth_header):
    invoice = _create_invoice(client, seeded, quantity=1)

    assert client.get(f"{API}/invoices").status_code == 401
    assert client.get(f"{API}/invoices", headers={"Authorization": "Bearer nope"}).status_code == 401

    viewer = auth_header("viewer", user_id=2, email="viewer@example.com")
    assert client.get(f"{API}/invoices", headers=viewer).status_code == 200
    forbidden = client.post(
        f"{API}/payments", json={"invoice_id": invoice["id"], "amount": 5, "payment_method": "cash"}, headers=viewer
    )
    assert forbidden.status_code == 403


def test_dashboard_and_settings_endpoints(client, seeded):
    headers = seeded["headers"]
    _create_invoice(client, seeded)

    stats = client.get(f"{API}/dashboard/stats", headers=headers)
    assert stats.status_code == 200
    assert stats.json()["total_revenue"] == 354.0
    assert len(stats.json()["monthly_revenue"]) == 6

    saved = client.put(f"{API}/settings/company", json={"company_name": "Demo Pvt Ltd"}, headers=headers)
    assert saved.status_code == 200
    assert client.get(f"{API}/settings/company", headers=headers).json()["company_name"] == "Demo Pvt Ltd"


def test_full_replace_keeps_lines_sent_back_with_their_id(client, seeded):
    headers = seeded["headers"]
    invoice = _create_invoice(client, seeded, quantity=1)
    line_id = invoice["items"][0]["id"]
    notebook = client.post(f"{API}/products", json={"name": "Notebook", "price": 50, "gst_rate": 12}, headers=headers)
    repriced = client.put(
        f"{API}/products/{seeded['product_id']}", json={"price": 80, "gst_rate": 5}, headers=headers
    )
    assert repriced.status_code == 200

    updated = client.put(
        f"{API}/invoices/{invoice['id']}",
        json={
            "items": [
                {"product_id": notebook.json()["id"], "quantity": 2},
                {"line_id": line_id, "quantity": 1},
            ]
        },
        headers=headers,
    )
    assert updated.status_code == 200, updated.text
    body = updated.json()
    assert [(item["product_name"], item["tax_rate"]) for item in body["items"]] == [
        ("Notebook", 12.0),
        ("Steel Bottle", 18.0),
    ]
    assert body["total_amount"] == 230.0

    stale = client.put(
        f"{API}/invoices/{invoice['id']}", json={"items": [{"line_id": 999999, "quantity": 1}]}, headers=headers
    )
    assert stale.status_code == 422
