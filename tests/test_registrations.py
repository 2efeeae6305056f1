API = "/api/attendees"


def availability(client, ticket_id):
    return client.get(f"/api/tickets/check-availability/{ticket_id}").json()["data"]


def test_register_for_event(client, event, ticket, attendee, attendee_headers, register):
    response = register(attendee_headers, event["id"], ticket["id"], quantity=2)

    assert response.status_code == 201
    registration = response.json()["data"]["registration"]
    assert registration["userId"] == attendee.id
    assert registration["status"] == "confirmed"
    assert registration["quantity"] == 2
    assert registration["totalAmount"] == 50.0
    assert registration["event"]["id"] == event["id"]
    assert registration["ticket"]["name"] == "General Admission"
    assert availability(client, ticket["id"])["soldTickets"] == 2


def test_register_requires_login(client, event, ticket):
    response = client.post(
        f"{API}/register", json={"eventId": event["id"], "ticketId": ticket["id"]}
    )

    assert response.status_code == 401


def test_register_twice_conflicts(client, event, ticket, attendee_headers, register):
    assert register(attendee_headers, event["id"], ticket["id"]).status_code == 201

    second = register(attendee_headers, event["id"], ticket["id"])

    assert second.status_code == 409
    assert second.json()["error"] == "Already registered"
    assert availability(client, ticket["id"])["soldTickets"] == 1


def test_register_with_insufficient_tickets(
    client, event, create_ticket, attendee_headers, other_headers, register
):
    ticket = create_ticket(event["id"], quantity=3)
    register(attendee_headers, event["id"], ticket["id"], quantity=2)

    response = register(other_headers, event["id"], ticket["id"], quantity=2)

    assert response.status_code == 409
    assert response.json() == {
        "success": False,
        "error": "Insufficient tickets",
        "message": "Only 1 tickets available",
    }
    assert availability(client, ticket["id"])["soldTickets"] == 2


def test_register_with_ticket_from_other_event(
    client, create_event, create_ticket, event, attendee_headers, register
):
    other_event = create_event(title="Another Event")
    foreign_ticket = create_ticket(other_event["id"])

    response = register(attendee_headers, event["id"], foreign_ticket["id"])

    assert response.status_code == 404


def test_register_quantity_limits(client, event, ticket, attendee_headers, register):
    assert register(attendee_headers, event["id"], ticket["id"], quantity=0).status_code == 400
    assert register(attendee_headers, event["id"], ticket["id"], quantity=11).status_code == 400


def test_cancel_frees_capacity_and_allows_reregistering(
    client, event, create_ticket, attendee_headers, register
):
    ticket = create_ticket(event["id"], quantity=2)
    registration = register(attendee_headers, event["id"], ticket["id"], quantity=2).json()[
        "data"
    ]["registration"]
    assert availability(client, ticket["id"])["availableTickets"] == 0

    cancelled = client.delete(f"{API}/{registration['id']}", headers=attendee_headers)
    assert cancelled.status_code == 200
    assert cancelled.json()["data"]["registration"]["status"] == "cancelled"
    assert availability(client, ticket["id"])["availableTickets"] == 2

    again = client.delete(f"{API}/{registration['id']}", headers=attendee_headers)
    assert again.status_code == 400

    assert register(attendee_headers, event["id"], ticket["id"]).status_code == 201


def test_other_users_cannot_touch_registration(
    client, event, ticket, attendee_headers, other_headers, admin_headers, register
):
    registration = register(attendee_headers, event["id"], ticket["id"]).json()["data"][
        "registration"
    ]
    url = f"{API}/{registration['id']}"

    assert client.get(url, headers=other_headers).status_code == 403
    assert client.put(url, json={"quantity": 2}, headers=other_headers).status_code == 403
    assert client.delete(url, headers=other_headers).status_code == 403
    assert client.get(url, headers=admin_headers).status_code == 200


def test_update_quantity_reserves_only_the_difference(
    client, event, create_ticket, attendee_headers, other_headers, register
):
    ticket = create_ticket(event["id"], quantity=5)
    registration = register(attendee_headers, event["id"], ticket["id"], quantity=2).json()[
        "data"
    ]["registration"]
    register(other_headers, event["id"], ticket["id"], quantity=2)
    url = f"{API}/{registration['id']}"

    grown = client.put(url, json={"quantity": 3}, headers=attendee_headers)
    assert grown.status_code == 200
    assert grown.json()["data"]["registration"]["quantity"] == 3
    assert grown.json()["data"]["registration"]["totalAmount"] == 75.0
    assert availability(client, ticket["id"])["soldTickets"] == 5

    too_many = client.put(url, json={"quantity": 4}, headers=attendee_headers)
    assert too_many.status_code == 409
    assert too_many.json()["message"] == "Only 3 tickets available"

    shrunk = client.put(url, json={"quantity": 1}, headers=attendee_headers)
    assert shrunk.status_code == 200
    assert availability(client, ticket["id"])["soldTickets"] == 3


def test_update_status_only_to_cancelled(
    client, event, ticket, attendee_headers, register
):
    registration = register(attendee_headers, event["id"], ticket["id"]).json()["data"][
        "registration"
    ]
    url = f"{API}/{registration['id']}"

    refunded = client.put(url, json={"status": "refunded"}, headers=attendee_headers)
    assert refunded.status_code == 400

    cancelled = client.put(url, json={"status": "cancelled"}, headers=attendee_headers)
    assert cancelled.status_code == 200
    assert cancelled.json()["data"]["registration"]["status"] == "cancelled"
    assert availability(client, ticket["id"])["soldTickets"] == 0


def test_my_registrations(client, event, ticket, attendee_headers, other_headers, register):
    register(attendee_headers, event["id"], ticket["id"])

    mine = client.get(f"{API}/my-registrations", headers=attendee_headers)
    theirs = client.get(f"{API}/my-registrations", headers=other_headers)

    assert len(mine.json()["data"]["registrations"]) == 1
    assert theirs.json()["data"]["registrations"] == []


def test_event_attendees_listing(
    client, event, ticket, attendee_headers, organizer_headers, other_headers, register
):
    register(attendee_headers, event["id"], ticket["id"])

    assert client.get(f"{API}/event/{event['id']}", headers=other_headers).status_code == 403

    response = client.get(f"{API}/event/{event['id']}", headers=organizer_headers)
    attendees = response.json()["data"]["attendees"]
    assert [a["user"]["name"] for a in attendees] == ["Alice Attendee"]
