API = "/api/forums"


def create_post(client, headers, event_id, content="Who is bringing snacks?", title="Snacks"):
    response = client.post(
        API,
        json={"eventId": event_id, "title": title, "content": content},
        headers=headers,
    )
    assert response.status_code == 201, response.text
    return response.json()["data"]["post"]


def reply(client, headers, post_id, content):
    response = client.post(
        f"{API}/{post_id}/reply", json={"content": content}, headers=headers
    )
    assert response.status_code == 201, response.text
    return response.json()["data"]["post"]


def test_create_post(client, event, attendee, attendee_headers):
    post = create_post(client, attendee_headers, event["id"])

    assert post["eventId"] == event["id"]
    assert post["userId"] == attendee.id
    assert post["user"]["name"] == "Alice Attendee"
    assert post["parentId"] is None
    assert post["replyCount"] == 0


def test_create_post_requires_login(client, event):
    response = client.post(API, json={"eventId": event["id"], "content": "hello"})

    assert response.status_code == 401


def test_blank_content_rejected(client, event, attendee_headers):
    response = client.post(
        API, json={"eventId": event["id"], "content": "   "}, headers=attendee_headers
    )

    assert response.status_code == 400


def test_private_event_forum_is_closed(client, create_event, attendee_headers):
    private = create_event(privacy="private")

    write = client.post(
        API, json={"eventId": private["id"], "content": "hi"}, headers=attendee_headers
    )
    read = client.get(f"{API}/event/{private['id']}")

    assert write.status_code == 403
    assert read.status_code == 403


def test_nested_replies(client, event, attendee_headers, other_headers, organizer_headers):
    post = create_post(client, attendee_headers, event["id"])
    first = reply(client, other_headers, post["id"], "I will bring chips")
    nested = reply(client, organizer_headers, first["id"], "Thanks, Bob!")
    reply(client, attendee_headers, post["id"], "Great")

    assert nested["parentId"] == first["id"]
    assert nested["eventId"] == event["id"]

    thread = client.get(f"{API}/{post['id']}").json()["data"]["post"]
    assert thread["replyCount"] == 2
    assert [r["content"] for r in thread["replies"]] == ["I will bring chips", "Great"]
    assert thread["replies"][0]["replies"][0]["content"] == "Thanks, Bob!"


def test_event_posts_lists_top_level_only(client, event, attendee_headers, other_headers):
    older = create_post(client, attendee_headers, event["id"], title="Older")
    newer = create_post(client, other_headers, event["id"], title="Newer")
    reply(client, other_headers, older["id"], "a reply")

    response = client.get(f"{API}/event/{event['id']}")

    data = response.json()["data"]
    assert [p["id"] for p in data["posts"]] == [newer["id"], older["id"]]
    assert data["posts"][1]["replyCount"] == 1
    assert data["pagination"]["totalItems"] == 2


def test_update_post_author_only(client, event, attendee_headers, other_headers):
    post = create_post(client, attendee_headers, event["id"])
    url = f"{API}/{post['id']}"

    assert client.put(url, json={"content": "edited"}, headers=other_headers).status_code == 403

    response = client.put(url, json={"content": "edited"}, headers=attendee_headers)
    assert response.status_code == 200
    assert response.json()["data"]["post"]["content"] == "edited"


def test_update_post_rejects_blank_content(client, event, attendee_headers):
    post = create_post(client, attendee_headers, event["id"])
    url = f"{API}/{post['id']}"

    blank = client.put(url, json={"content": "   "}, headers=attendee_headers)
    padded = client.put(url, json={"content": "  edited  "}, headers=attendee_headers)

    assert blank.status_code == 400
    assert padded.json()["data"]["post"]["content"] == "edited"


def test_delete_post_removes_replies(client, event, attendee_headers, other_headers, admin_headers):
    post = create_post(client, attendee_headers, event["id"])
    child = reply(client, other_headers, post["id"], "reply")

    assert client.delete(f"{API}/{post['id']}", headers=other_headers).status_code == 403
    assert client.delete(f"{API}/{post['id']}", headers=admin_headers).status_code == 200

    assert client.get(f"{API}/{post['id']}").status_code == 404
    assert client.get(f"{API}/{child['id']}").status_code == 404


def test_my_posts(client, event, attendee_headers, other_headers):
    post = create_post(client, attendee_headers, event["id"])
    reply(client, other_headers, post["id"], "not mine")

    response = client.get(f"{API}/my-posts", headers=attendee_headers)

    assert [p["id"] for p in response.json()["data"]["posts"]] == [post["id"]]


def test_reply_to_missing_post(client, attendee_headers):
    response = client.post(
        f"{API}/777/reply", json={"content": "anyone?"}, headers=attendee_headers
    )

    assert response.status_code == 404
    assert response.json()["error"] == "Post not found"
