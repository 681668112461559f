"""HTTP tests for the booking and ticket routes."""

from datetime import timedelta

import pytest

from conftest import make_ticket


@pytest.fixture
async def tickets(add_tickets):
    await add_tickets(
        make_ticket("C001", quota=10, price=100, category="Concert", name="Floor"),
        make_ticket("S001", quota=5, price=40, category="Seminar", name="Tech Talk"),
        make_ticket("OLD1", quota=5, price=40, category="Seminar", starts_in=timedelta(days=-1)),
    )


async def book(client, *pairs):
    return await client.post(
        "/api/v1/book-ticket",
        json=[{"ticket_code": code, "quantity": qty} for code, qty in pairs],
    )


async def test_health(client):
    r = await client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


async def test_book_ticket_returns_receipt(client, tickets):
    r = await book(client, ("C001", 2), ("S001", 1), ("C001", 1))

    assert r.status_code == 200
    body = r.json()
    assert [line["ticket_code"] for line in body["lines"]] == ["C001", "S001", "C001"]
    assert body["lines"][0]["total_price"] == 200
    assert body["category_totals"] == {"Concert": 300, "Seminar": 40}
    assert body["grand_total"] == 340


async def test_book_ticket_failure_is_a_problem_document(client, tickets):
    r = await book(client, ("C001", 2), ("S001", 6))

    assert r.status_code == 400
    assert r.headers["content-type"].startswith("application/problem+json")
    problem = r.json()
    assert problem["title"] == "Insufficient Quota"
    assert problem["detail"] == "Only 5 tickets available for S001."
    assert problem["instance"] == "/api/v1/book-ticket"

    listing = await client.get("/api/v1/get-available-ticket", params={"ticket_code": "C001"})
    assert listing.json()["data"][0]["available_quota"] == 10


@pytest.mark.parametrize(
    "pairs, status, title",
    [
        ((("NOPE", 1),), 404, "Ticket Not Found"),
        ((("OLD1", 1),), 400, "Event Date Invalid"),
        ((("C001", 0),), 400, "Invalid Quantity"),
    ],
)
async def test_book_ticket_error_mapping(client, tickets, pairs, status, title):
    r = await book(client, *pairs)
    assert r.status_code == status
    assert r.json()["title"] == title


async def test_empty_booking_is_a_validation_error(client, tickets):
    r = await client.post("/api/v1/book-ticket", json=[])
    assert r.status_code == 422


async def test_booked_ticket_revoke_and_edit_flow(client, tickets):
    booking_id = (await book(client, ("C001", 5))).json()["lines"][0]["booking_id"]

    r = await client.get(f"/api/v1/get-booked-ticket/{booking_id}")
    assert r.status_code == 200
    assert r.json()["quantity"] == 5
    assert r.json()["ticket_name"] == "Floor"
    assert set(r.json()["event_date"]) == {"minimum", "maximum"}

    r = await client.delete(f"/api/v1/revoke-ticket/{booking_id}/C001/2")
    assert r.status_code == 200
    assert r.json()["remaining_quantity"] == 3
    assert r.json()["category_name"] == "Concert"

    r = await client.put(
        f"/api/v1/edit-booked-ticket/{booking_id}",
        json=[{"ticket_code": "C001", "quantity": 9}],
    )
    assert r.status_code == 200
    assert r.json()["lines"] == [
        {"ticket_code": "C001", "ticket_name": "Floor", "category_name": "Concert", "quantity": 9, "remaining_quota": 1}
    ]

    r = await client.put(
        f"/api/v1/edit-booked-ticket/{booking_id}",
        json=[{"ticket_code": "C001", "quantity": 11}],
    )
    assert r.status_code == 400
    assert r.json()["title"] == "Insufficient Quota"

    r = await client.delete(f"/api/v1/revoke-ticket/{booking_id}/C001/9")
    assert r.json()["remaining_quantity"] == 0
    r = await client.get(f"/api/v1/get-booked-ticket/{booking_id}")
    assert r.status_code == 404
    assert r.json()["title"] == "Booked Ticket Not Found"


async def test_revoke_over_quantity(client, tickets):
    booking_id = (await book(client, ("S001", 2))).json()["lines"][0]["booking_id"]
    r = await client.delete(f"/api/v1/revoke-ticket/{booking_id}/S001/3")
    assert r.status_code == 400
    assert r.json()["title"] == "Invalid Quantity"


async def test_available_ticket_listing(client, tickets):
    await book(client, ("S001", 5))

    r = await client.get("/api/v1/get-available-ticket", params={"order_by": "Price", "order_state": "desc"})
    assert r.status_code == 200
    body = r.json()
    # S001 is sold out; OLD1 has already started but still has quota
    assert [t["ticket_code"] for t in body["data"]] == ["C001", "OLD1"]
    assert body["total_records"] == 2
    assert body["data"][0]["available_quota"] == 10


async def test_available_ticket_listing_rejects_unknown_order(client, tickets):
    r = await client.get("/api/v1/get-available-ticket", params={"order_by": "Quota"})
    assert r.status_code == 400
    assert "OrderBy must be one of" in r.json()["detail"]


async def test_ticket_availability_from_database(client, tickets):
    await book(client, ("C001", 4))
    r = await client.get("/api/v1/tickets/C001/availability")
    assert r.json() == {"ticket_code": "C001", "available_quota": 6, "cached": False}

    r = await client.get("/api/v1/tickets/NOPE/availability")
    assert r.status_code == 404


async def test_ticket_availability_from_mirror(client, tickets, monkeypatch):
    async def cached(ticket_code):
        return 7

    monkeypatch.setattr("acceloka.routes.tickets.get_cached_available_quota", cached)
    r = await client.get("/api/v1/tickets/C001/availability")
    assert r.json() == {"ticket_code": "C001", "available_quota": 7, "cached": True}
