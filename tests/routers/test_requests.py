from app.models.connection_request import ConnectionRequest


def test_send_interested(client, alice, alice_headers, bob):
    response = client.post(
        f"/request/send/interested/{bob.id}", headers=alice_headers
    )
    assert response.status_code == 201
    data = response.json()
    assert data["from_user_id"] == alice.id
    assert data["to_user_id"] == bob.id
    assert data["status"] == "interested"


def test_send_invalid_status(client, alice_headers, bob):
    response = client.post(f"/request/send/accepted/{bob.id}", headers=alice_headers)
    assert response.status_code == 400
    assert response.json()["kind"] == "InvalidStatus"


def test_send_to_unknown_user(client, alice_headers):
    response = client.post("/request/send/interested/99999", headers=alice_headers)
    assert response.status_code == 404
    assert response.json()["kind"] == "UserNotFound"


def test_send_to_self(client, alice, alice_headers):
    response = client.post(
        f"/request/send/interested/{alice.id}", headers=alice_headers
    )
    assert response.status_code == 400
    assert response.json()["kind"] == "SelfRequestForbidden"


def test_send_duplicate(client, alice_headers, bob):
    client.post(f"/request/send/interested/{bob.id}", headers=alice_headers)

    response = client.post(f"/request/send/ignored/{bob.id}", headers=alice_headers)
    assert response.status_code == 409
    assert response.json()["kind"] == "DuplicateRelationship"


def test_send_twice_same_direction(client, alice, bob_headers):
    client.post(f"/request/send/interested/{alice.id}", headers=bob_headers)

    response = client.post(
        f"/request/send/interested/{alice.id}", headers=bob_headers
    )
    assert response.status_code == 409
    assert response.json()["kind"] == "DuplicateRelationship"


def test_send_back_to_requester(client, alice, alice_headers, bob, bob_headers):
    client.post(f"/request/send/interested/{bob.id}", headers=alice_headers)

    response = client.post(
        f"/request/send/interested/{alice.id}", headers=bob_headers
    )
    assert response.status_code == 409
    data = response.json()
    assert data["kind"] == "ReverseRequestExists"
    assert "review" in data["detail"]


def test_send_requires_auth(client, bob):
    response = client.post(
        f"/request/send/interested/{bob.id}",
        headers={"Authorization": "Bearer garbage"},
    )
    assert response.status_code == 401


def test_review_accept(client, alice, bob, bob_headers, make_request):
    make_request(alice, bob, "interested")

    response = client.post(
        f"/request/review/accepted/{alice.id}", headers=bob_headers
    )
    assert response.status_code == 200
    assert response.json()["status"] == "accepted"


def test_review_twice(client, alice, bob, bob_headers, make_request):
    make_request(alice, bob, "interested")
    client.post(f"/request/review/rejected/{alice.id}", headers=bob_headers)

    response = client.post(
        f"/request/review/accepted/{alice.id}", headers=bob_headers
    )
    assert response.status_code == 409
    assert response.json()["kind"] == "AlreadyReviewed"


def test_review_invalid_decision(client, alice, bob, bob_headers, make_request):
    make_request(alice, bob, "interested")

    response = client.post(
        f"/request/review/ignored/{alice.id}", headers=bob_headers
    )
    assert response.status_code == 400
    assert response.json()["kind"] == "InvalidStatus"


def test_review_missing_request(client, alice_headers, carol):
    response = client.post(
        f"/request/review/accepted/{carol.id}", headers=alice_headers
    )
    assert response.status_code == 404
    assert response.json()["kind"] == "RequestNotFound"


def test_review_leaves_record_in_place(
    client, alice, bob, bob_headers, make_request, db
):
    record = make_request(alice, bob, "interested")

    client.post(f"/request/review/accepted/{alice.id}", headers=bob_headers)

    db.refresh(record)
    assert record.status == "accepted"
    assert db.query(ConnectionRequest).count() == 1
