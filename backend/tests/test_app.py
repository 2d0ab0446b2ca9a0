def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_root_points_to_docs(client):
    body = client.get("/").json()
    assert body["docs"] == "/docs"


def test_unhandled_validation_error_uses_error_shape(client, user_headers):
    resp = client.get("/api/dustbins", params={"limit": 0}, headers=user_headers)
    assert resp.status_code == 400
    body = resp.json()
    assert set(body) == {"error", "code"}
    assert body["code"] == "INVALID_REQUEST"
