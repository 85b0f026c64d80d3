"""Tests for the HTTP API."""

from dataclasses import replace
from datetime import UTC, datetime, timedelta

from fastapi.testclient import TestClient

from donr.api.app import create_app
from donr.domain.donations import CLAIMED
from donr.domain.geo import GeoPoint
from donr.domain.models import ACCEPTOR, DISTRIBUTOR, DONATOR, Identity
from tests.conftest import make_donation, make_user, miles_north

ORIGIN = GeoPoint(lat=41.8781, lng=-87.6298)


def _register(container, identity_verifier, role, location=ORIGIN, push_token=None):  # type: ignore[no-untyped-def]
    users = container.user_service.repository
    user = users.add(make_user(role, location, push_token=push_token))
    token = f"token-{user.id}"
    identity_verifier.tokens[token] = Identity(user_id=user.id, email=user.email)
    return user, {"Authorization": f"Bearer {token}"}


def test_health(container) -> None:
    client = TestClient(create_app(container))

    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_missing_token_is_unauthorized(container) -> None:
    client = TestClient(create_app(container))

    response = client.get("/donations")

    assert response.status_code == 401
    assert response.json() == {
        "success": False,
        "error": "No authorization token provided",
    }


def test_invalid_token_is_unauthorized(container) -> None:
    client = TestClient(create_app(container))

    response = client.get("/donations", headers={"Authorization": "Bearer nope"})

    assert response.status_code == 401
    assert response.json()["error"] == "Invalid or expired token"


def test_unknown_route_is_structured(container) -> None:
    client = TestClient(create_app(container))

    response = client.get("/nowhere")

    assert response.status_code == 404
    assert response.json() == {"success": False, "error": "Route not found"}


def test_user_profile_lifecycle(container, identity_verifier) -> None:
    identity_verifier.tokens["fresh"] = Identity(user_id="new-user", email="n@e.w")
    headers = {"Authorization": "Bearer fresh"}
    client = TestClient(create_app(container))

    created = client.post(
        "/users",
        json={"name": "Nia", "role": "acceptor", "location": {"lat": 1.5, "lng": 2.5}},
        headers=headers,
    )
    duplicate = client.post(
        "/users", json={"name": "Nia", "role": "acceptor"}, headers=headers
    )
    updated = client.put("/users/me", json={"fcmToken": "device-9"}, headers=headers)
    fetched = client.get("/users/me", headers=headers)

    assert created.status_code == 201
    assert created.json()["data"]["location"] == {"lat": 1.5, "lng": 2.5}
    assert duplicate.status_code == 409
    assert updated.json()["data"]["fcmToken"] == "device-9"
    assert fetched.json()["data"]["role"] == "acceptor"
    assert fetched.json()["data"]["email"] == "n@e.w"


def test_invalid_role_is_rejected(container, identity_verifier) -> None:
    identity_verifier.tokens["fresh"] = Identity(user_id="new-user")
    client = TestClient(create_app(container))

    response = client.post(
        "/users",
        json={"name": "Nia", "role": "admin"},
        headers={"Authorization": "Bearer fresh"},
    )

    assert response.status_code == 400
    assert response.json()["success"] is False
    assert "Invalid role" in response.json()["error"]


def test_post_donation_and_browse_nearby(container, identity_verifier) -> None:
    _donator, donator_headers = _register(container, identity_verifier, DONATOR)
    _acceptor, acceptor_headers = _register(container, identity_verifier, ACCEPTOR)
    expires = (datetime.now(tz=UTC) + timedelta(days=1)).isoformat()

    with TestClient(create_app(container)) as client:
        created = client.post(
            "/donations",
            json={
                "foodType": "Apples",
                "quantity": 12,
                "expirationDate": expires,
                "lat": ORIGIN.lat,
                "lng": ORIGIN.lng,
            },
            headers=donator_headers,
        )
        listed = client.get(
            "/donations",
            params={"lat": ORIGIN.lat, "lng": ORIGIN.lng, "radius": 5},
            headers=acceptor_headers,
        )

    assert created.status_code == 201
    body = created.json()["data"]
    assert body["status"] == "available"
    assert body["quantity"] == "12"
    assert "distributorId" not in body
    assert listed.status_code == 200
    assert listed.json()["count"] == 1
    assert listed.json()["data"][0]["id"] == body["id"]
    assert listed.json()["data"][0]["distance"] == 0.0


def test_post_donation_missing_fields(container, identity_verifier) -> None:
    _donator, headers = _register(container, identity_verifier, DONATOR)
    client = TestClient(create_app(container))

    response = client.post("/donations", json={"foodType": "Apples"}, headers=headers)

    assert response.status_code == 400
    assert response.json()["error"] == (
        "Missing required fields: quantity, expirationDate"
    )


def test_acceptor_cannot_post_donation(container, identity_verifier) -> None:
    _acceptor, headers = _register(container, identity_verifier, ACCEPTOR)
    client = TestClient(create_app(container))

    response = client.post(
        "/donations",
        json={
            "foodType": "Apples",
            "quantity": "1",
            "expirationDate": (datetime.now(tz=UTC) + timedelta(days=1)).isoformat(),
        },
        headers=headers,
    )

    assert response.status_code == 403


def test_list_donations_rejects_bad_coordinates(container, identity_verifier) -> None:
    _acceptor, headers = _register(container, identity_verifier, ACCEPTOR)
    client = TestClient(create_app(container))

    response = client.get(
        "/donations", params={"lat": "north", "lng": "1"}, headers=headers
    )

    assert response.status_code == 400


def test_claim_and_distribute_over_http(container, identity_verifier) -> None:
    distributor, headers = _register(container, identity_verifier, DISTRIBUTOR)
    _rival, rival_headers = _register(container, identity_verifier, DISTRIBUTOR)
    repo = container.donation_service.repository
    donation = repo.add(make_donation(miles_north(ORIGIN, 1)))

    with TestClient(create_app(container)) as client:
        claimed = client.put(f"/donations/{donation.id}/claim", headers=headers)
        second = client.put(f"/donations/{donation.id}/claim", headers=rival_headers)
        wrong_hand = client.put(
            f"/donations/{donation.id}/distribute", headers=rival_headers
        )
        distributed = client.put(
            f"/donations/{donation.id}/distribute", headers=headers
        )

    assert claimed.status_code == 200
    assert claimed.json()["data"]["status"] == CLAIMED
    assert claimed.json()["data"]["distributorId"] == distributor.id
    assert second.status_code == 409
    assert second.json() == {"success": False, "error": "Donation is already claimed"}
    assert wrong_hand.status_code == 403
    assert distributed.status_code == 200
    assert distributed.json()["data"]["status"] == "distributed"


def test_claim_expired_donation_over_http(container, identity_verifier) -> None:
    _distributor, headers = _register(container, identity_verifier, DISTRIBUTOR)
    repo = container.donation_service.repository
    donation = repo.add(make_donation(ORIGIN))
    repo.donations[donation.id] = replace(
        donation, expiration_date=datetime.now(tz=UTC) - timedelta(minutes=5)
    )
    client = TestClient(create_app(container))

    response = client.put(f"/donations/{donation.id}/claim", headers=headers)

    assert response.status_code == 409
    assert response.json()["error"] == "Donation has expired"


def test_claim_unknown_donation_over_http(container, identity_verifier) -> None:
    _distributor, headers = _register(container, identity_verifier, DISTRIBUTOR)
    client = TestClient(create_app(container))

    response = client.put("/donations/missing/claim", headers=headers)

    assert response.status_code == 404
    assert response.json()["error"] == "Donation not found"


def test_food_requests_over_http(container, identity_verifier) -> None:
    _acceptor, acceptor_headers = _register(container, identity_verifier, ACCEPTOR)
    _distributor, distributor_headers = _register(
        container, identity_verifier, DISTRIBUTOR
    )
    client = TestClient(create_app(container))

    created = client.post(
        "/requests",
        json={"foodType": "Formula", "urgency": "urgent", "lat": 1.0, "lng": 2.0},
        headers=acceptor_headers,
    )
    request_id = created.json()["data"]["id"]
    updated = client.put(
        f"/requests/{request_id}/status",
        json={"status": "accepted"},
        headers=distributor_headers,
    )
    listed = client.get("/requests", headers=acceptor_headers)

    assert created.status_code == 201
    assert created.json()["data"]["status"] == "pending"
    assert updated.json()["data"]["status"] == "accepted"
    assert [item["id"] for item in listed.json()["data"]] == [request_id]


def test_centers_over_http(container, identity_verifier) -> None:
    _user, headers = _register(container, identity_verifier, DISTRIBUTOR)
    client = TestClient(create_app(container))

    created = client.post(
        "/centers",
        json={"name": "Westside", "address": "5 Oak Ave", "lat": 3.0, "lng": 4.0},
        headers=headers,
    )
    missing = client.post("/centers", json={"name": "Nowhere"}, headers=headers)
    listed = client.get("/centers", headers=headers)

    assert created.status_code == 201
    assert created.json()["data"]["centerType"] == "food bank"
    assert missing.status_code == 400
    assert len(listed.json()["data"]) == 1


def test_send_notification_over_http(container, identity_verifier) -> None:
    _sender, headers = _register(container, identity_verifier, DISTRIBUTOR)
    recipient, _ = _register(
        container, identity_verifier, ACCEPTOR, push_token="device-1"
    )
    client = TestClient(create_app(container))

    sent = client.post(
        "/notifications/send",
        json={"userId": recipient.id, "title": "Hi", "body": "Food here"},
        headers=headers,
    )
    missing = client.post(
        "/notifications/send", json={"title": "Hi"}, headers=headers
    )

    assert sent.status_code == 200
    assert sent.json()["data"]["messageId"] == "projects/test/messages/1"
    assert missing.status_code == 400


def test_debug_detail_only_in_debug_environments(container, identity_verifier) -> None:
    container.settings.environment = "local"
    _acceptor, headers = _register(container, identity_verifier, ACCEPTOR)
    client = TestClient(create_app(container))

    response = client.post("/donations", content=b"not json", headers=headers)

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid request payload"
    assert "debug" in response.json()


def test_unresolvable_address_is_a_server_error(container, identity_verifier) -> None:
    _donator, headers = _register(container, identity_verifier, DONATOR, location=None)
    client = TestClient(create_app(container))

    response = client.post(
        "/donations",
        json={
            "foodType": "Apples",
            "quantity": "3 crates",
            "expirationDate": (datetime.now(tz=UTC) + timedelta(days=1)).isoformat(),
            "address": "nowhere street",
        },
        headers=headers,
    )

    assert response.status_code == 500
    assert response.json()["success"] is False
    assert response.json()["error"] == "Address not found"
    assert container.donation_service.repository.donations == {}
