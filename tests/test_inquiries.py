import pytest

from conftest import run

CONTACT = {
    "guestName": "Grace",
    "email": "grace@example.com",
    "subject": "Partnership",
    "message": "Hello there",
}

GUEST = {
    "guestId": "guest-42",
    "guestName": "Gus",
    "guestEmail": "gus@example.com",
    "subject": "Visit",
    "message": "Can I visit on Friday?",
    "timestamp": "2026-10-19T10:00:00.000Z",
}


def test_contact_inquiry_created_as_new(client, inquiry_store):
    response = client.post("/api/guest-inquiries", json=CONTACT)

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    inquiry = body["inquiry"]
    assert inquiry["status"] == "new"
    assert inquiry["id"].startswith("inq-")
    assert inquiry["guestName"] == "Grace"
    assert inquiry["date"] and inquiry["time"] and inquiry["createdAt"]
    assert len(run(inquiry_store.list_inquiries())) == 1


@pytest.mark.parametrize("field", ["guestName", "email", "subject", "message"])
def test_contact_inquiry_missing_field(client, inquiry_store, field):
    body = {k: v for k, v in CONTACT.items() if k != field}

    response = client.post("/api/guest-inquiries", json=body)

    assert response.status_code == 400
    assert response.json()["error"].startswith("Missing required fields")
    assert run(inquiry_store.list_inquiries()) == []


def test_contact_inquiries_listed_newest_first(client):
    client.post("/api/guest-inquiries", json={**CONTACT, "subject": "first"})
    client.post("/api/guest-inquiries", json={**CONTACT, "subject": "second"})

    response = client.get("/api/guest-inquiries")

    assert response.json()["success"] is True
    assert [i["subject"] for i in response.json()["inquiries"]] == ["second", "first"]


def test_guest_inquiry_created_with_201(client):
    response = client.post("/api/guest/inquiry", json=GUEST)

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["message"] == "Inquiry submitted successfully"
    assert body["inquiry"]["guestId"] == "guest-42"
    assert body["inquiry"]["email"] == "gus@example.com"
    assert body["inquiry"]["timestamp"] == GUEST["timestamp"]
    assert body["inquiry"]["status"] == "new"


def test_guest_inquiry_email_is_optional(client):
    body = {k: v for k, v in GUEST.items() if k != "guestEmail"}

    response = client.post("/api/guest/inquiry", json=body)

    assert response.status_code == 201
    assert "email" not in response.json()["inquiry"]


@pytest.mark.parametrize("field", ["guestId", "guestName", "subject", "message"])
def test_guest_inquiry_missing_field(client, field):
    body = {k: v for k, v in GUEST.items() if k != field}

    response = client.post("/api/guest/inquiry", json=body)

    assert response.status_code == 400


def test_guest_inquiry_listing_counts(client, inquiry_store):
    client.post("/api/guest/inquiry", json=GUEST)
    client.post("/api/guest/inquiry", json={**GUEST, "subject": "Parking"})
    client.post("/api/guest-inquiries", json=CONTACT)
    first = run(inquiry_store.list_inquiries())[0]
    run(inquiry_store.update_status(first.id, "read"))

    response = client.get("/api/guest/inquiry")

    assert response.status_code == 200
    body = response.json()
    assert "success" not in body
    assert body["total"] == 3
    assert body["newCount"] == 2
    assert [i["subject"] for i in body["inquiries"]] == ["Visit", "Parking", "Partnership"]


def test_ids_are_unique(client):
    ids = {client.post("/api/guest-inquiries", json=CONTACT).json()["inquiry"]["id"] for _ in range(5)}

    assert len(ids) == 5


def test_update_status_unknown_id(inquiry_store):
    assert run(inquiry_store.update_status("inq-missing", "resolved")) is None


def test_update_status_marks_inquiry_read(client, inquiry_store):
    created = client.post("/api/guest/inquiry", json=GUEST).json()["inquiry"]

    updated = run(inquiry_store.update_status(created["id"], "read"))

    assert updated.status == "read"
    body = client.get("/api/guest/inquiry").json()
    assert body["newCount"] == 0
    assert body["inquiries"][0]["status"] == "read"
