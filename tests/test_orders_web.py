from decimal import Decimal


def test_order_index_page_loads(client, make_order):
    make_order(customer_name="Anna Nowak", status="paid")

    resp = client.get("/orders")

    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/html")
    assert "Anna Nowak" in resp.text
    assert "Showing 1 orders" in resp.text


def test_order_filtering_by_status(client, make_order):
    make_order(customer_name="Paid Customer", status="paid")
    make_order(customer_name="Pending Customer", status="pending")

    resp = client.get("/orders", params={"status": "pending"})

    assert resp.status_code == 200
    assert "Pending Customer" in resp.text
    assert "Paid Customer" not in resp.text
    assert '<option value="pending" selected>' in resp.text


def test_invalid_filter_renders_everything(client, make_order):
    make_order(customer_name="Paid Customer", status="paid")
    make_order(customer_name="Pending Customer", status="pending")

    resp = client.get("/orders", params={"status": "not_a_status"})

    assert resp.status_code == 200
    assert "Paid Customer" in resp.text
    assert "Pending Customer" in resp.text


def test_raw_listing_page(client, make_order):
    make_order(customer_name="Raw Customer", total_amount=Decimal("1234.50"))

    resp = client.get("/orders-raw")

    assert resp.status_code == 200
    assert "Raw Customer" in resp.text
    assert "1,234.50" in resp.text


def test_empty_listing(client):
    resp = client.get("/orders")
    assert resp.status_code == 200
    assert "No orders found." in resp.text


def test_listing_formats_totals(client, make_order):
    make_order(total_amount=Decimal("98765.4"))
    assert "98,765.40" in client.get("/orders").text


def test_web_status_route_uses_envelope_for_malformed_body(client):
    resp = client.post("/orders/1/status", json={})
    assert resp.status_code == 422
    body = resp.json()
    assert body["success"] is False
    assert body["message"].startswith("status")
    assert "detail" not in body

