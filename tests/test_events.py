from datetime import date, timedelta

from app.models.enums import UserRole

API = "/api/events"


def test_create_event_requires_organizer(client, attendee_headers, make_event_payload):
    response = client.post(API, json=make_event_payload(), headers=attendee_headers)

    assert response.status_code == 403
    assert response.json()["success"] is False


def test_create_event(client, organizer, organizer_headers, make_event_payload):
    response = client.post(
        API, json=make_event_payload(time="9:05"), headers=organizer_headers
    )

    assert response.status_code == 201
    event = response.json()["data"]["event"]
    assert event["title"] == "Python Meetup"
    assert event["time"] == "09:05"
    assert event["organizerId"] == organizer.id
    assert event["organizer"]["email"] == "organizer@example.com"
    assert event["tickets"] == []


def test_create_event_rejects_bad_time(client, organizer_headers, make_event_payload):
    response = client.post(
        API, json=make_event_payload(time="25:00"), headers=organizer_headers
    )

    assert response.status_code == 400
    assert response.json()["error"] == "Validation failed"


def test_create_event_rejects_unknown_category(
    client, organizer_headers, make_event_payload
):
    response = client.post(
        API, json=make_event_payload(category="party"), headers=organizer_headers
    )

    assert response.status_code == 400


def test_anonymous_listing_shows_only_public_events(client, create_event):
    create_event(title="Open Day")
    create_event(title="Board Meeting", privacy="private")

    response = client.get(API)

    assert response.status_code == 200
    titles = [e["title"] for e in response.json()["data"]["events"]]
    assert titles == ["Open Day"]


def test_listing_includes_own_private_events(
    client, create_event, organizer_headers, attendee_headers, admin_headers
):
    create_event(title="Open Day")
    create_event(title="Board Meeting", privacy="private")

    own = client.get(API, headers=organizer_headers).json()["data"]["events"]
    other = client.get(API, headers=attendee_headers).json()["data"]["events"]
    admin = client.get(API, headers=admin_headers).json()["data"]["events"]

    assert len(own) == 2
    assert [e["title"] for e in other] == ["Open Day"]
    assert len(admin) == 2


def test_listing_is_ordered_by_date_and_paginated(client, create_event):
    today = date.today()
    for offset in (20, 5, 10):
        create_event(
            title=f"Event in {offset} days",
            date=(today + timedelta(days=offset)).isoformat(),
        )

    first_page = client.get(API, params={"page": 1, "limit": 2}).json()["data"]
    second_page = client.get(API, params={"page": 2, "limit": 2}).json()["data"]

    assert [e["title"] for e in first_page["events"]] == [
        "Event in 5 days",
        "Event in 10 days",
    ]
    assert [e["title"] for e in second_page["events"]] == ["Event in 20 days"]
    assert first_page["pagination"] == {
        "currentPage": 1,
        "totalPages": 2,
        "totalItems": 3,
        "itemsPerPage": 2,
    }


def test_search_filters(client, create_event):
    create_event(title="Jazz Night", category="concert", location="Blue Note, Chicago")
    create_event(title="Data Summit", category="conference", location="Expo Center, Austin")

    by_text = client.get(API, params={"q": "jazz"}).json()["data"]["events"]
    by_category = client.get(API, params={"category": "conference"}).json()["data"]["events"]
    by_location = client.get(API, params={"location": "austin"}).json()["data"]["events"]

    assert [e["title"] for e in by_text] == ["Jazz Night"]
    assert [e["title"] for e in by_category] == ["Data Summit"]
    assert [e["title"] for e in by_location] == ["Data Summit"]


def test_search_treats_wildcards_literally(client, create_event):
    create_event(title="Jazz Night")

    response = client.get(API, params={"q": "%%"})

    assert response.json()["data"]["events"] == []


def test_search_query_too_short(client):
    response = client.get(API, params={"q": "a"})

    assert response.status_code == 400


def test_date_filter(client, create_event):
    today = date.today()
    create_event(title="Soon", date=(today + timedelta(days=2)).isoformat())
    create_event(title="Later", date=(today + timedelta(days=60)).isoformat())

    response = client.get(
        API, params={"date": (today + timedelta(days=30)).isoformat()}
    )

    assert [e["title"] for e in response.json()["data"]["events"]] == ["Later"]


def test_private_event_is_forbidden_to_others(
    client, create_event, attendee_headers, organizer_headers, admin_headers
):
    private = create_event(privacy="private")
    url = f"{API}/{private['id']}"

    assert client.get(url).status_code == 403
    assert client.get(url, headers=attendee_headers).status_code == 403
    assert client.get(url, headers=organizer_headers).status_code == 200
    assert client.get(url, headers=admin_headers).status_code == 200


def test_get_event_includes_tickets(client, event, create_ticket):
    create_ticket(event["id"], name="VIP", price=100.0, quantity=10)
    create_ticket(event["id"], name="Early Bird", price=10.0, quantity=50)

    response = client.get(f"{API}/{event['id']}")

    tickets = response.json()["data"]["event"]["tickets"]
    assert [t["name"] for t in tickets] == ["Early Bird", "VIP"]
    assert tickets[0]["price"] == 10.0
    assert tickets[0]["availableQuantity"] == 50


def test_missing_event_is_404(client):
    response = client.get(f"{API}/4242")

    assert response.status_code == 404
    assert response.json() == {
        "success": False,
        "error": "Event not found",
        "message": "The specified event does not exist",
    }


def test_update_event_owner_only(
    client, event, organizer_headers, other_headers, make_user, headers_for
):
    url = f"{API}/{event['id']}"

    assert client.put(url, json={"title": "Hijacked"}, headers=other_headers).status_code == 403

    another_organizer = make_user(role=UserRole.ORGANIZER)
    response = client.put(
        url, json={"title": "Hijacked"}, headers=headers_for(another_organizer)
    )
    assert response.status_code == 403

    response = client.put(
        url, json={"title": "Python Meetup #2", "privacy": "private"}, headers=organizer_headers
    )
    assert response.status_code == 200
    updated = response.json()["data"]["event"]
    assert updated["title"] == "Python Meetup #2"
    assert updated["privacy"] == "private"
    assert updated["description"] == event["description"]


def test_delete_event_cascades(
    client, event, ticket, organizer_headers, attendee_headers, register
):
    register(attendee_headers, event["id"], ticket["id"])

    response = client.delete(f"{API}/{event['id']}", headers=organizer_headers)
    assert response.status_code == 200

    assert client.get(f"{API}/{event['id']}").status_code == 404
    assert client.get(f"/api/tickets/{ticket['id']}").status_code == 404
    registrations = client.get(
        "/api/attendees/my-registrations", headers=attendee_headers
    ).json()["data"]["registrations"]
    assert registrations == []


def test_my_events(client, create_event, organizer_headers, attendee_headers):
    create_event(title="Mine")

    mine = client.get(f"{API}/my-events", headers=organizer_headers)
    none = client.get(f"{API}/my-events", headers=attendee_headers)

    assert [e["title"] for e in mine.json()["data"]["events"]] == ["Mine"]
    assert none.json()["data"]["events"] == []


def test_event_attendees_for_organizer_only(
    client, event, ticket, organizer_headers, attendee_headers, register
):
    register(attendee_headers, event["id"], ticket["id"], quantity=2)

    forbidden = client.get(f"{API}/{event['id']}/attendees", headers=attendee_headers)
    assert forbidden.status_code == 403

    response = client.get(f"{API}/{event['id']}/attendees", headers=organizer_headers)
    attendees = response.json()["data"]["attendees"]
    assert len(attendees) == 1
    assert attendees[0]["user"]["email"] == "alice@example.com"
    assert attendees[0]["quantity"] == 2
