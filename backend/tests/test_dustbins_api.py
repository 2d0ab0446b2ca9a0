URL = "/api/dustbins"

NEW_BIN = {
    "name": "  Canteen Wet Bin ",
    "type": "wet",
    "locationName": "Ground floor canteen",
    "latitude": "19.0760",
    "longitude": "72.8777",
}


def test_requires_session(client):
    resp = client.get(URL)
    assert resp.status_code == 401
    assert resp.json() == {"error": "Authentication required", "code": "AUTHENTICATION_REQUIRED"}


def test_create_starts_empty_and_active(client, user_headers):
    resp = client.post(URL, json=NEW_BIN, headers=user_headers)
    assert resp.status_code == 201
    body = resp.json()
    assert body["name"] == "Canteen Wet Bin"
    assert body["userId"] == "user-1"
    assert body["fillLevel"] == 0
    assert body["status"] == "empty"
    assert body["isActive"] is True


def test_create_rejects_owner_in_body(client, user_headers):
    resp = client.post(URL, json={**NEW_BIN, "userId": "user-2"}, headers=user_headers)
    assert resp.status_code == 400
    assert resp.json() == {"error": "User ID cannot be provided in request body", "code": "USER_ID_NOT_ALLOWED"}


def test_create_rejects_unknown_type(client, user_headers):
    resp = client.post(URL, json={**NEW_BIN, "type": "metal"}, headers=user_headers)
    assert resp.status_code == 400
    assert resp.json()["code"] == "INVALID_REQUEST"


def test_list_is_owner_scoped_and_filtered(client, user_headers, make_dustbin):
    make_dustbin(name="Kitchen Wet Bin", fill_level=10)
    make_dustbin(name="Office Dry Bin", fill_level=90, type_="dry")
    make_dustbin(name="Old Bin", is_active=False)
    make_dustbin(user_id="user-2", name="Someone Else")

    names = {b["name"] for b in client.get(URL, headers=user_headers).json()}
    assert names == {"Kitchen Wet Bin", "Office Dry Bin", "Old Bin"}

    full = client.get(URL, params={"status": "full"}, headers=user_headers).json()
    assert [b["name"] for b in full] == ["Office Dry Bin"]

    dry = client.get(URL, params={"type": "dry"}, headers=user_headers).json()
    assert [b["name"] for b in dry] == ["Office Dry Bin"]

    inactive = client.get(URL, params={"is_active": "0"}, headers=user_headers).json()
    assert [b["name"] for b in inactive] == ["Old Bin"]

    found = client.get(URL, params={"search": "Kitchen"}, headers=user_headers).json()
    assert [b["name"] for b in found] == ["Kitchen Wet Bin"]

    page = client.get(URL, params={"limit": 1, "offset": 1}, headers=user_headers).json()
    assert len(page) == 1


def test_other_accounts_bin_is_not_found(client, other_headers, make_dustbin):
    bin_id = make_dustbin()
    assert client.get(f"{URL}/{bin_id}", headers=other_headers).status_code == 404
    assert client.put(f"{URL}/{bin_id}", json={"name": "Mine"}, headers=other_headers).status_code == 404
    assert client.delete(f"{URL}/{bin_id}", headers=other_headers).status_code == 404


def test_update_fill_level_rederives_status(client, user_headers, make_dustbin):
    bin_id = make_dustbin(fill_level=10)
    resp = client.put(f"{URL}/{bin_id}", json={"fillLevel": 76, "name": "Renamed"}, headers=user_headers)
    assert resp.status_code == 200
    body = resp.json()
    assert body["fillLevel"] == 76
    assert body["status"] == "full"
    assert body["name"] == "Renamed"


def test_update_rejects_out_of_range_fill_level(client, user_headers, make_dustbin, load_dustbin):
    bin_id = make_dustbin(fill_level=10)
    resp = client.put(f"{URL}/{bin_id}", json={"fillLevel": 120}, headers=user_headers)
    assert resp.status_code == 400
    assert load_dustbin(bin_id).fill_level == 10


def test_update_ignores_status_field(client, user_headers, make_dustbin):
    bin_id = make_dustbin(fill_level=10)
    resp = client.put(f"{URL}/{bin_id}", json={"status": "full"}, headers=user_headers)
    assert resp.status_code == 200
    assert resp.json()["status"] == "empty"


def test_delete_is_soft(client, user_headers, make_dustbin, load_dustbin):
    bin_id = make_dustbin()
    resp = client.delete(f"{URL}/{bin_id}", headers=user_headers)
    assert resp.status_code == 200
    assert resp.json()["message"] == "Dustbin soft deleted successfully"
    assert resp.json()["dustbin"]["isActive"] is False
    assert load_dustbin(bin_id).is_active is False
