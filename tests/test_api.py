import pytest


@pytest.mark.asyncio
async def test_health(client):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert "X-Request-ID" in response.headers


@pytest.mark.asyncio
async def test_sign_up_and_fetch_me(client):
    response = await client.post(
        "/api/v1/auth/sign-up",
        json={"email": "fresh@example.com", "password": "Secret123", "first_name": "Fresh"},
    )
    assert response.status_code == 201
    token = response.json()["access_token"]

    me = await client.get("/api/v1/users/me", headers={"Authorization": f"Bearer {token}"})

    assert me.status_code == 200
    assert me.json()["roles"] == ["signed-in"]
    assert me.json()["primary_role"] == "user"


@pytest.mark.asyncio
async def test_requests_without_token_are_rejected(client):
    response = await client.get("/api/v1/users/me")

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_primary_role_lock_returns_422(client, musician_user, auth_headers):
    response = await client.patch(
        "/api/v1/users/me", json={"primary_role": "venue"}, headers=auth_headers(musician_user)
    )

    assert response.status_code == 422
    assert "Primary role" in response.json()["detail"]


@pytest.mark.asyncio
async def test_role_update_creates_venue(client, make_user, auth_headers):
    user = await make_user(first_name="Dee")

    response = await client.post(
        "/api/v1/users/me/role", json={"primary_role": "venue"}, headers=auth_headers(user)
    )

    assert response.status_code == 200
    assert response.json()["primary_role"] == "venue"
    assert response.json()["roles"] == ["signed-in", "venueOwner"]

    venues = await client.get("/api/v1/venues/", headers=auth_headers(user))
    assert [v["name"] for v in venues.json()["venues"]] == ["Dee"]


@pytest.mark.asyncio
async def test_booking_flow_over_http(client, event, musician, musician_user, venue_owner, auth_headers):
    created = await client.post(
        "/api/v1/bookings/", json={"event_id": str(event.id)}, headers=auth_headers(musician_user)
    )
    assert created.status_code == 201
    booking = created.json()
    assert booking["status"] == "applied"
    assert booking["applied_at"] is not None

    confirmed = await client.patch(
        f"/api/v1/bookings/{booking['id']}",
        json={"status": "confirmed"},
        headers=auth_headers(venue_owner),
    )
    assert confirmed.status_code == 200
    assert confirmed.json()["confirmed_at"] is not None
    assert confirmed.json()["applied_at"] == booking["applied_at"]

    history = await client.get(f"/api/v1/events/{event.id}/history", headers=auth_headers(venue_owner))
    assert {h["change_type"] for h in history.json()} == {"booking_created", "booking_status"}


@pytest.mark.asyncio
async def test_reading_notification_over_http_marks_messages(
    client, event, musician, musician_user, venue_owner, auth_headers
):
    created = await client.post(
        "/api/v1/bookings/", json={"event_id": str(event.id)}, headers=auth_headers(musician_user)
    )
    booking_id = created.json()["id"]
    sent = await client.post(
        "/api/v1/messages/",
        json={"booking_id": booking_id, "content": "Can I bring a drummer?"},
        headers=auth_headers(musician_user),
    )
    assert sent.status_code == 201

    listing = await client.get(
        "/api/v1/notifications/", params={"unread_only": True}, headers=auth_headers(venue_owner)
    )
    new_message = next(n for n in listing.json()["notifications"] if n["type"] == "new_message")

    read = await client.patch(
        f"/api/v1/notifications/{new_message['id']}/read", headers=auth_headers(venue_owner)
    )
    assert read.status_code == 200
    assert read.json() == {"id": new_message["id"], "is_read": True, "propagated": 1}

    thread = await client.get(f"/api/v1/messages/booking/{booking_id}", headers=auth_headers(venue_owner))
    assert thread.json()["unread_count"] == 0


@pytest.mark.asyncio
async def test_only_recipient_marks_message_read(
    client, event, musician, musician_user, venue_owner, auth_headers
):
    created = await client.post(
        "/api/v1/bookings/", json={"event_id": str(event.id)}, headers=auth_headers(musician_user)
    )
    sent = await client.post(
        "/api/v1/messages/",
        json={"booking_id": created.json()["id"], "content": "Hello"},
        headers=auth_headers(musician_user),
    )

    response = await client.patch(
        f"/api/v1/messages/{sent.json()['id']}/read", headers=auth_headers(musician_user)
    )

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_read_all_notifications(client, event, musician, musician_user, venue_owner, auth_headers):
    await client.post(
        "/api/v1/bookings/", json={"event_id": str(event.id)}, headers=auth_headers(musician_user)
    )

    response = await client.post("/api/v1/notifications/read-all", headers=auth_headers(venue_owner))
    assert response.status_code == 204

    listing = await client.get("/api/v1/notifications/", headers=auth_headers(venue_owner))
    assert listing.json()["unread_count"] == 0
    assert listing.json()["total"] == 1


@pytest.mark.asyncio
async def test_event_update_ignores_explicit_nulls(client, event, venue_owner, auth_headers):
    response = await client.patch(
        f"/api/v1/events/{event.id}",
        json={"date": None, "is_active": None, "ticket_type": None, "title": "Late Set"},
        headers=auth_headers(venue_owner),
    )

    assert response.status_code == 200
    body = response.json()
    assert body["title"] == "Late Set"
    assert body["date"] is not None
    assert body["is_active"] is True


@pytest.mark.asyncio
async def test_invalid_recurrence_lists_field_errors(client, event, venue_owner, auth_headers):
    response = await client.patch(
        f"/api/v1/events/{event.id}",
        json={"is_recurring": True, "recurring_pattern": "weekly"},
        headers=auth_headers(venue_owner),
    )

    assert response.status_code == 422
    assert response.json()["errors"] == [
        {"field": "recurring_days", "message": "Recurring days are required for weekly recurring events"}
    ]


@pytest.mark.asyncio
async def test_review_flow_over_http(client, event, musician, musician_user, venue_owner, auth_headers):
    created = await client.post(
        "/api/v1/bookings/", json={"event_id": str(event.id)}, headers=auth_headers(musician_user)
    )
    booking_id = created.json()["id"]
    await client.patch(
        f"/api/v1/bookings/{booking_id}", json={"status": "confirmed"}, headers=auth_headers(venue_owner)
    )

    bad = await client.post(
        "/api/v1/reviews/", json={"booking_id": booking_id, "rating": 6}, headers=auth_headers(venue_owner)
    )
    assert bad.status_code == 422

    review = await client.post(
        "/api/v1/reviews/",
        json={"booking_id": booking_id, "rating": 5, "comment": "Packed the room"},
        headers=auth_headers(venue_owner),
    )
    assert review.status_code == 201
    assert review.json()["review_type"] == "venue_to_musician"

    listing = await client.get(f"/api/v1/reviews/musicians/{musician.id}")
    assert listing.status_code == 200
    assert listing.json()["total"] == 1
    assert listing.json()["average_rating"] == 5.0

    profile = await client.get(f"/api/v1/musicians/{musician.id}", headers=auth_headers(musician_user))
    assert profile.json()["rating"] == 5.0
