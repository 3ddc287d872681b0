"""HTTP API tests."""

from datetime import timedelta
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from booking_engine import main
from booking_engine.engine import get_engine

from tests.conftest import LAST_SEAT

ALICE = {"id": "P-ALICE", "name": "Alice Mensah", "email": "alice@example.com"}
BOB = {"id": "P-BOB", "name": "Bob Owusu", "type": "VIP"}


@pytest.fixture
def client(engine, monkeypatch):
    monkeypatch.setattr(main, "get_engine", lambda: engine)
    main.app.dependency_overrides[get_engine] = lambda: engine
    with TestClient(main.app) as client:
        yield client
    main.app.dependency_overrides.clear()


def hold(client, flight_id="FL100", seat_id=LAST_SEAT, passenger=ALICE):
    return client.post(
        "/api/v1/reservations",
        json={"flight_id": flight_id, "seat_id": seat_id, "passenger": passenger},
    )


def join(client, flight_id, passenger, ticket_class="Economy"):
    return client.post(
        "/api/v1/waiting-list",
        json={"flight_id": flight_id, "ticket_class": ticket_class, "passenger": passenger},
    )


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json()["status"] == "healthy"


class TestFlights:
    def test_search(self, client):
        r = client.get("/api/v1/flights", params={"origin": "accra", "destination": "lhr"})
        assert r.status_code == 200, r.text
        assert [f["id"] for f in r.json()] == ["FL100"]

    def test_dates(self, client):
        r = client.get("/api/v1/flights/dates", params={"origin": "Accra"})
        assert r.json()["dates"] == ["2026-02-15", "2026-02-17"]

    def test_get_flight(self, client):
        r = client.get("/api/v1/flights/FL100")
        data = r.json()
        assert r.status_code == 200
        assert data["available_seats"] == 1
        assert data["status"] == "Limited Seats"
        assert Decimal(str(data["price"]["economy"])) == Decimal("549")

    def test_unknown_flight(self, client):
        assert client.get("/api/v1/flights/FL999").status_code == 404
        assert client.get("/api/v1/flights/FL999/seats").status_code == 404

    def test_seat_map_filters(self, client):
        r = client.get("/api/v1/flights/FL100/seats", params={"status_filter": "Available"})
        assert [s["id"] for s in r.json()] == [LAST_SEAT]

        r = client.get("/api/v1/flights/FL200/seats", params={"ticket_class": "First Class"})
        assert len(r.json()) == 12


class TestReservations:
    def test_hold_and_pay(self, client):
        r = hold(client)
        assert r.status_code == 201, r.text
        reservation = r.json()
        assert reservation["status"] == "Reserved"

        assert hold(client, passenger=BOB).status_code == 409

        r = client.post(
            f"/api/v1/reservations/{reservation['id']}/confirm",
            json={"payment_succeeded": True},
        )
        assert r.status_code == 200, r.text
        body = r.json()
        assert body["reservation"]["status"] == "Confirmed"
        reference = body["booking"]["booking_reference"]

        r = client.get(f"/api/v1/bookings/reference/{reference.lower()}")
        assert r.status_code == 200
        assert r.json()["seat_id"] == LAST_SEAT

        r = client.get(f"/api/v1/bookings/passenger/{ALICE['id']}")
        assert [b["booking_reference"] for b in r.json()] == [reference]

        booking_id = body["booking"]["id"]
        assert client.get(f"/api/v1/bookings/{booking_id}").status_code == 200

    def test_failed_payment(self, client):
        reservation = hold(client).json()

        r = client.post(
            f"/api/v1/reservations/{reservation['id']}/confirm",
            json={"payment_succeeded": False},
        )

        assert r.status_code == 200
        assert r.json()["booking"] is None
        assert r.json()["reservation"]["status"] == "Payment Failed"

    def test_late_confirmation(self, client, engine, clock):
        reservation = hold(client).json()
        clock.advance(timedelta(minutes=11))
        client.post("/api/v1/admin/sweep")

        r = client.post(
            f"/api/v1/reservations/{reservation['id']}/confirm",
            json={"payment_succeeded": True},
        )

        assert r.status_code == 410
        detail = r.json()["detail"]
        assert detail["error"] == "late_confirmation"
        assert detail["reservation_id"] == reservation["id"]
        assert "support" in detail["message"]

    def test_late_confirmation_differs_from_seat_conflict(self, client, clock):
        reservation = hold(client).json()
        taken = hold(client)
        clock.advance(timedelta(minutes=11))
        client.post("/api/v1/admin/sweep")
        late = client.post(
            f"/api/v1/reservations/{reservation['id']}/confirm",
            json={"payment_succeeded": True},
        )

        assert taken.status_code == 409
        assert late.status_code != taken.status_code

    def test_unknown_reservation(self, client):
        assert client.get("/api/v1/reservations/RES-NOPE").status_code == 404
        r = client.post("/api/v1/reservations/RES-NOPE/confirm", json={"payment_succeeded": True})
        assert r.status_code == 404
        assert client.delete("/api/v1/reservations/RES-NOPE").status_code == 404

    def test_cancel(self, client):
        reservation = hold(client).json()

        assert client.delete(f"/api/v1/reservations/{reservation['id']}").status_code == 200
        assert client.delete(f"/api/v1/reservations/{reservation['id']}").status_code == 409
        assert client.get("/api/v1/flights/FL100").json()["available_seats"] == 1

    def test_hold_validation(self, client):
        r = client.post("/api/v1/reservations", json={"flight_id": "FL100", "seat_id": LAST_SEAT})
        assert r.status_code == 422


class TestWaitingList:
    def test_join_and_overview(self, client):
        assert join(client, "FL300", ALICE).status_code == 201
        r = join(client, "FL300", BOB)
        entry = r.json()
        assert entry["priority"] == 11
        assert entry["position"] == 2

        r = client.get("/api/v1/waiting-list/FL300")
        overview = r.json()
        assert overview["total"] == 2
        assert [e["passenger"]["id"] for e in overview["entries"]] == ["P-BOB", "P-ALICE"]
        assert [e["passenger"]["id"] for e in overview["normal_lane"]] == ["P-ALICE"]

        r = client.get(f"/api/v1/waiting-list/FL300/entries/{entry['id']}/position")
        assert r.json()["position"] == 1

    def test_join_unknown_flight(self, client):
        assert join(client, "FL999", ALICE).status_code == 404

    def test_offer_flow(self, client, clock):
        reservation = hold(client).json()
        entry = join(client, "FL100", BOB).json()

        r = client.post(f"/api/v1/waiting-list/FL100/entries/{entry['id']}/accept")
        assert r.status_code == 409

        client.delete(f"/api/v1/reservations/{reservation['id']}")
        offers = client.get("/api/v1/waiting-list/offers/P-BOB").json()
        assert [o["id"] for o in offers] == [entry["id"]]

        r = client.post(f"/api/v1/waiting-list/FL100/entries/{entry['id']}/accept")
        assert r.status_code == 201, r.text
        assert r.json()["source"] == "waiting_list"
        assert r.json()["seat_id"] == LAST_SEAT

    def test_expired_offer(self, client, clock):
        entry = join(client, "FL200", BOB).json()
        # a released seat triggers the offer
        reservation = hold(client, "FL200", "FL200-1A").json()
        client.delete(f"/api/v1/reservations/{reservation['id']}")
        clock.advance(timedelta(minutes=6))

        r = client.post(f"/api/v1/waiting-list/FL200/entries/{entry['id']}/accept")
        assert r.status_code == 410


class TestAdmin:
    def test_logs_and_statistics(self, client):
        hold(client)

        r = client.get("/api/v1/admin/logs", params={"limit": 1})
        assert r.status_code == 200
        assert [e["action"] for e in r.json()] == ["Seat reserved"]

        stats = client.get("/api/v1/admin/statistics").json()
        assert stats["active_reservations"] == 1
        assert stats["total_flights"] == 3

    def test_sweep(self, client, clock):
        reservation = hold(client).json()
        entry = join(client, "FL100", BOB).json()
        clock.advance(timedelta(minutes=10))

        r = client.post("/api/v1/admin/sweep")

        assert r.json() == {
            "expired_flights": ["FL100"],
            "lapsed_offer_flights": [],
            "promoted_entries": [entry["id"]],
        }
        assert client.get(f"/api/v1/reservations/{reservation['id']}").json()["status"] == "Expired"
