"""HTTP Routes — form mutations redirect, reads are uncacheable, errors are structured.

Invariants:
    - POST create/update → 303 to /dashboard/invoices, listing path revalidated
    - Invalid form → 400 VALIDATION_ERROR, nothing written
    - Unknown invoice → 404 RESOURCE_NOT_FOUND
    - Every read response carries Cache-Control: no-store
"""

from uuid import uuid4

from sqlalchemy import func, select

from dashboard.models.invoice import Invoice

LISTING = "/dashboard/invoices"


async def _invoice_count(session_factory) -> int:
    async with session_factory() as db:
        return (await db.execute(select(func.count(Invoice.id)))).scalar_one()


async def _load_invoice(session_factory, invoice_id) -> Invoice:
    async with session_factory() as db:
        return await db.get(Invoice, invoice_id)


# --- mutations ----------------------------------------------------------------

async def test_create_invoice_redirects_to_listing(
    client, seed_data, test_session_factory, revalidator,
):
    evil = seed_data["customers"]["evil"]
    res = await client.post("/api/v1/invoices", data={
        "customerId": str(evil.id), "amount": "250.50", "status": "paid",
    })

    assert res.status_code == 303
    assert res.headers["location"] == LISTING
    assert revalidator.version(LISTING) == 1
    assert await _invoice_count(test_session_factory) == 9


async def test_create_invoice_stores_cents(client, seed_data, test_session_factory):
    lee = seed_data["customers"]["lee"]
    await client.post("/api/v1/invoices", data={
        "customerId": str(lee.id), "amount": "12.34", "status": "pending",
    })
    async with test_session_factory() as db:
        result = await db.execute(select(Invoice).where(Invoice.customer_id == lee.id))
        invoice = result.scalar_one()
    assert invoice.amount == 1234
    assert invoice.status == "pending"


async def test_create_invoice_invalid_form_is_400_and_writes_nothing(
    client, seed_data, test_session_factory, revalidator,
):
    res = await client.post("/api/v1/invoices", data={
        "customerId": str(seed_data["customers"]["evil"].id),
        "amount": "abc",
        "status": "unknown",
    })

    assert res.status_code == 400
    body = res.json()["error"]
    assert body["code"] == "VALIDATION_ERROR"
    assert len(body["details"]) == 2
    assert await _invoice_count(test_session_factory) == 8
    assert revalidator.version(LISTING) == 0


async def test_create_invoice_missing_fields_is_400(client, seed_data):
    res = await client.post("/api/v1/invoices", data={"amount": "10"})
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_create_invoice_amount_too_large_is_400_and_writes_nothing(
    client, seed_data, test_session_factory, revalidator,
):
    for amount in ("1e30", "100000000000000000000"):
        res = await client.post("/api/v1/invoices", data={
            "customerId": str(seed_data["customers"]["evil"].id),
            "amount": amount,
            "status": "pending",
        })
        assert res.status_code == 400
        assert res.json()["error"]["code"] == "VALIDATION_ERROR"

    assert await _invoice_count(test_session_factory) == 8
    assert revalidator.version(LISTING) == 0


async def test_update_invoice_amount_too_large_is_400(
    client, seed_data, test_session_factory,
):
    invoice = seed_data["invoices"][0]
    res = await client.post(f"/api/v1/invoices/{invoice.id}", data={
        "customerId": str(seed_data["customers"]["evil"].id),
        "amount": "1e30",
        "status": "paid",
    })
    assert res.status_code == 400
    unchanged = await _load_invoice(test_session_factory, invoice.id)
    assert unchanged.amount == 15795


async def test_update_invoice_redirects_and_preserves_date(
    client, seed_data, test_session_factory, revalidator,
):
    invoice = seed_data["invoices"][0]
    delba = seed_data["customers"]["delba"]

    res = await client.post(f"/api/v1/invoices/{invoice.id}", data={
        "customerId": str(delba.id), "amount": "1000", "status": "paid",
    })

    assert res.status_code == 303
    assert res.headers["location"] == LISTING
    assert revalidator.version(LISTING) == 1
    updated = await _load_invoice(test_session_factory, invoice.id)
    assert updated.customer_id == delba.id
    assert updated.amount == 100000
    assert updated.status == "paid"
    assert updated.date == invoice.date


async def test_update_unknown_invoice_is_404(client, seed_data):
    res = await client.post(f"/api/v1/invoices/{uuid4()}", data={
        "customerId": str(seed_data["customers"]["evil"].id),
        "amount": "1", "status": "paid",
    })
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "RESOURCE_NOT_FOUND"


async def test_update_with_malformed_id_is_400(client, seed_data):
    res = await client.post("/api/v1/invoices/not-a-uuid", data={
        "customerId": str(seed_data["customers"]["evil"].id),
        "amount": "1", "status": "paid",
    })
    assert res.status_code == 400


# --- invoice reads --------------------------------------------------------------

async def test_list_invoices_paginates(client, seed_data):
    first = await client.get("/api/v1/invoices", params={"query": "", "page": 1})
    second = await client.get("/api/v1/invoices", params={"query": "", "page": 2})

    assert first.status_code == 200
    assert first.headers["cache-control"] == "no-store"
    assert len(first.json()) == 6
    assert len(second.json()) == 2


async def test_list_invoices_filters_by_query(client, seed_data):
    res = await client.get("/api/v1/invoices", params={"query": "paid"})
    assert {row["status"] for row in res.json()} == {"paid"}
    assert len(res.json()) == 3


async def test_list_invoices_rejects_page_zero(client, seed_data):
    res = await client.get("/api/v1/invoices", params={"page": 0})
    assert res.status_code == 400


async def test_invoice_pages(client, seed_data):
    res = await client.get("/api/v1/invoices/pages", params={"query": ""})
    assert res.status_code == 200
    assert res.json() == {"total_pages": 2}
    assert res.headers["cache-control"] == "no-store"


async def test_latest_invoices(client, seed_data):
    res = await client.get("/api/v1/invoices/latest")
    rows = res.json()
    assert len(rows) == 5
    assert rows[0]["amount"] == "$448.00"
    assert rows[0]["name"] == "Delba de Oliveira"


async def test_get_invoice_by_id(client, seed_data):
    invoice = seed_data["invoices"][0]
    res = await client.get(f"/api/v1/invoices/{invoice.id}")
    assert res.status_code == 200
    assert res.json() == {
        "id": str(invoice.id),
        "customer_id": str(seed_data["customers"]["evil"].id),
        "amount": 157.95,
        "status": "pending",
    }


async def test_get_unknown_invoice_is_404(client, seed_data):
    res = await client.get(f"/api/v1/invoices/{uuid4()}")
    assert res.status_code == 404
    assert res.json()["error"]["category"] == "resource_not_found"


# --- customers / dashboard --------------------------------------------------------

async def test_list_customers(client, seed_data):
    res = await client.get("/api/v1/customers")
    assert res.status_code == 200
    assert res.headers["cache-control"] == "no-store"
    assert [c["name"] for c in res.json()] == [
        "Delba de Oliveira", "Evil Rabbit", "Lee Robinson",
    ]


async def test_customers_table(client, seed_data):
    res = await client.get("/api/v1/customers/table", params={"query": "evil"})
    rows = res.json()
    assert len(rows) == 1
    assert rows[0]["total_invoices"] == 4
    assert rows[0]["total_paid"] == "$30.40"


async def test_revenue(client, seed_data):
    res = await client.get("/api/v1/dashboard/revenue")
    assert res.status_code == 200
    assert res.headers["cache-control"] == "no-store"
    assert {r["month"] for r in res.json()} == {"Jan", "Feb"}


async def test_cards(client, seed_data):
    res = await client.get("/api/v1/dashboard/cards")
    assert res.status_code == 200
    assert res.json() == {
        "number_of_customers": 3,
        "number_of_invoices": 8,
        "total_paid_invoices": "$803.85",
        "total_pending_invoices": "$1,256.32",
    }


# --- health -----------------------------------------------------------------------

async def test_liveness(client):
    res = await client.get("/api/v1/health/")
    assert res.status_code == 200
    assert res.json()["status"] == "healthy"


async def test_readiness_checks_database(client):
    res = await client.get("/api/v1/health/ready")
    assert res.status_code == 200
    assert res.json()["checks"]["database"] == "healthy"
