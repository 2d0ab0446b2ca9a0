URL = "/api/collections"


def _schedule(client, headers, dustbin_id, scheduled_date="2026-10-20", **extra):
    return client.post(URL, json={"dustbin_id": dustbin_id, "scheduled_date": scheduled_date, **extra}, headers=headers)


def test_schedule_for_own_bin(client, user_headers, make_dustbin):
    bin_id = make_dustbin()
    resp = _schedule(client, user_headers, bin_id, notes="Morning pickup")
    assert resp.status_code == 201
    body = resp.json()
    assert body["dustbinId"] == bin_id
    assert body["status"] == "scheduled"
    assert body["notes"] == "Morning pickup"
    assert body["completedDate"] is None


def test_schedule_for_other_accounts_bin_is_not_found(client, other_headers, make_dustbin):
    bin_id = make_dustbin()
    resp = _schedule(client, other_headers, bin_id)
    assert resp.status_code == 404
    assert resp.json()["code"] == "DUSTBIN_NOT_FOUND"


def test_schedule_rejects_owner_in_body(client, user_headers, make_dustbin):
    resp = _schedule(client, user_headers, make_dustbin(), user_id="user-2")
    assert resp.status_code == 400
    assert resp.json()["code"] == "USER_ID_NOT_ALLOWED"


def test_list_filters_and_ordering(client, user_headers, make_dustbin):
    bin_id = make_dustbin()
    _schedule(client, user_headers, bin_id, "2026-10-01")
    _schedule(client, user_headers, bin_id, "2026-10-15")
    _schedule(client, user_headers, bin_id, "2026-11-01")

    rows = client.get(URL, headers=user_headers).json()
    assert [r["scheduledDate"] for r in rows] == ["2026-11-01", "2026-10-15", "2026-10-01"]

    ranged = client.get(URL, params={"date_from": "2026-10-10", "date_to": "2026-10-31"}, headers=user_headers).json()
    assert [r["scheduledDate"] for r in ranged] == ["2026-10-15"]

    resp = client.get(URL, params={"status": "lost"}, headers=user_headers)
    assert resp.status_code == 400
    assert resp.json()["code"] == "INVALID_STATUS"


def test_complete_stamps_dates(client, user_headers, make_dustbin, load_dustbin):
    bin_id = make_dustbin()
    collection_id = _schedule(client, user_headers, bin_id).json()["id"]
    resp = client.put(f"{URL}/{collection_id}", json={"status": "completed"}, headers=user_headers)
    assert resp.status_code == 200
    completed = resp.json()["completedDate"]
    assert completed
    assert load_dustbin(bin_id).last_collection_date == completed


def test_complete_with_explicit_date(client, user_headers, make_dustbin, load_dustbin):
    bin_id = make_dustbin()
    collection_id = _schedule(client, user_headers, bin_id).json()["id"]
    client.put(
        f"{URL}/{collection_id}",
        json={"status": "completed", "completed_date": "2026-10-20T09:30:00Z"},
        headers=user_headers,
    )
    assert load_dustbin(bin_id).last_collection_date == "2026-10-20T09:30:00Z"


def test_notes_edit_does_not_touch_bin(client, user_headers, make_dustbin, load_dustbin):
    bin_id = make_dustbin()
    collection_id = _schedule(client, user_headers, bin_id).json()["id"]
    client.put(f"{URL}/{collection_id}", json={"notes": "Gate code 1234"}, headers=user_headers)
    assert load_dustbin(bin_id).last_collection_date is None


def test_invalid_status_update(client, user_headers, make_dustbin):
    collection_id = _schedule(client, user_headers, make_dustbin()).json()["id"]
    resp = client.put(f"{URL}/{collection_id}", json={"status": "done"}, headers=user_headers)
    assert resp.status_code == 400
    assert resp.json()["code"] == "INVALID_STATUS"


def test_cancel_keeps_row(client, user_headers, other_headers, make_dustbin):
    collection_id = _schedule(client, user_headers, make_dustbin()).json()["id"]
    assert client.delete(f"{URL}/{collection_id}", headers=other_headers).status_code == 404
    resp = client.delete(f"{URL}/{collection_id}", headers=user_headers)
    assert resp.status_code == 200
    assert resp.json()["collection"]["status"] == "cancelled"
    assert client.get(f"{URL}/{collection_id}", headers=user_headers).json()["status"] == "cancelled"
