from app.models.enums import UserRole

API = "/api/notifications"


def notify(client, headers, event_id, title="Doors open at 6", **extra):
    payload = {"eventId": event_id, "title": title, "message": "See you there"}
    payload.update(extra)
    response = client.post(API, json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["data"]["notifications"]


def inbox(client, headers, **params):
    response = client.get(API, params=params, headers=headers)
    assert response.status_code == 200, response.text
    return response.json()["data"]["notifications"]


def test_direct_notifications(client, event, organizer_headers, attendee, other_user, attendee_headers):
    created = notify(
        client,
        organizer_headers,
        event["id"],
        targetUsers=[attendee.id, other_user.id, attendee.id],
        type="warning",
    )

    assert [n["userId"] for n in created] == [attendee.id, other_user.id]
    assert all(n["audience"] == "direct" for n in created)
    assert created[0]["isRead"] is False
    assert created[0]["type"] == "warning"
    assert [n["title"] for n in inbox(client, attendee_headers)] == ["Doors open at 6"]


def test_broadcast_reaches_active_attendees_only(
    client, event, ticket, organizer_headers, attendee_headers, other_headers, register
):
    register(attendee_headers, event["id"], ticket["id"])

    created = notify(client, organizer_headers, event["id"], title="Venue changed")

    assert len(created) == 1
    assert created[0]["audience"] == "broadcast"
    assert created[0]["userId"] is None
    assert [n["title"] for n in inbox(client, attendee_headers)] == ["Venue changed"]
    assert inbox(client, other_headers) == []


def test_broadcast_hidden_after_cancelling(
    client, event, ticket, organizer_headers, attendee_headers, register
):
    registration = register(attendee_headers, event["id"], ticket["id"]).json()["data"][
        "registration"
    ]
    notify(client, organizer_headers, event["id"])

    client.delete(f"/api/attendees/{registration['id']}", headers=attendee_headers)

    assert inbox(client, attendee_headers) == []


def test_create_requires_event_manager(
    client, event, attendee_headers, make_user, headers_for
):
    from_attendee = client.post(
        API,
        json={"eventId": event["id"], "title": "Hi", "message": "Hello"},
        headers=attendee_headers,
    )
    stranger = make_user(role=UserRole.ORGANIZER)
    from_stranger = client.post(
        API,
        json={"eventId": event["id"], "title": "Hi", "message": "Hello"},
        headers=headers_for(stranger),
    )

    assert from_attendee.status_code == 403
    assert from_stranger.status_code == 403


def test_unknown_target_users(client, event, organizer_headers, attendee):
    response = client.post(
        API,
        json={
            "eventId": event["id"],
            "title": "Hi",
            "message": "Hello",
            "targetUsers": [attendee.id, 4242],
        },
        headers=organizer_headers,
    )

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid target users"


def test_unread_count_and_mark_read(client, event, organizer_headers, attendee, attendee_headers):
    first, = notify(client, organizer_headers, event["id"], targetUsers=[attendee.id])
    notify(client, organizer_headers, event["id"], title="Second", targetUsers=[attendee.id])

    count = client.get(f"{API}/unread-count", headers=attendee_headers)
    assert count.json()["data"] == {"unreadCount": 2}

    read = client.put(f"{API}/{first['id']}/read", headers=attendee_headers)
    assert read.status_code == 200
    marked = read.json()["data"]["notification"]
    assert marked["isRead"] is True
    assert marked["readAt"] is not None

    count = client.get(f"{API}/unread-count", headers=attendee_headers)
    assert count.json()["data"] == {"unreadCount": 1}


def test_mark_all_as_read_counts_direct_only(
    client, event, ticket, organizer_headers, attendee, attendee_headers, register
):
    register(attendee_headers, event["id"], ticket["id"])
    notify(client, organizer_headers, event["id"], targetUsers=[attendee.id])
    notify(client, organizer_headers, event["id"], title="Second", targetUsers=[attendee.id])
    notify(client, organizer_headers, event["id"], title="Everyone")

    response = client.put(f"{API}/read-all", headers=attendee_headers)

    assert response.status_code == 200
    assert response.json()["data"] == {"updatedCount": 2}
    unread = inbox(client, attendee_headers, isRead="false")
    assert [n["title"] for n in unread] == ["Everyone"]


def test_filter_by_type(client, event, organizer_headers, attendee, attendee_headers):
    notify(client, organizer_headers, event["id"], title="Heads up", type="warning", targetUsers=[attendee.id])
    notify(client, organizer_headers, event["id"], title="FYI", targetUsers=[attendee.id])

    warnings = inbox(client, attendee_headers, type="warning")

    assert [n["title"] for n in warnings] == ["Heads up"]


def test_direct_notification_private_to_addressee(
    client, event, organizer_headers, attendee, attendee_headers, other_headers
):
    created, = notify(client, organizer_headers, event["id"], targetUsers=[attendee.id])
    url = f"{API}/{created['id']}"

    assert client.get(url, headers=attendee_headers).status_code == 200
    assert client.get(url, headers=other_headers).status_code == 403
    assert client.put(f"{url}/read", headers=other_headers).status_code == 403
    assert client.delete(url, headers=other_headers).status_code == 403


def test_broadcast_readable_by_attendee_managed_by_organizer(
    client, event, ticket, organizer_headers, attendee_headers, register
):
    register(attendee_headers, event["id"], ticket["id"])
    broadcast, = notify(client, organizer_headers, event["id"])
    url = f"{API}/{broadcast['id']}"

    assert client.get(url, headers=attendee_headers).status_code == 200
    assert client.put(f"{url}/read", headers=attendee_headers).status_code == 403

    assert client.put(f"{url}/read", headers=organizer_headers).status_code == 200
    assert client.delete(url, headers=organizer_headers).status_code == 200
    assert client.get(url, headers=organizer_headers).status_code == 404


def test_missing_notification(client, attendee_headers):
    response = client.get(f"{API}/999", headers=attendee_headers)

    assert response.status_code == 404
    assert response.json()["error"] == "Notification not found"
