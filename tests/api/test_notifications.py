def _ops_setup(client, auth_headers):
    client.post("/api/v0/users", json={"email": "ops@example.com", "role": "ops-manager"}, headers=auth_headers)
    client.post("/api/v0/users", json={"email": "admin@example.com", "role": "super-admin"}, headers=auth_headers)
    job = client.post("/api/v0/jobs", json={"model_name": "HQ"}, headers=auth_headers).json()
    r = client.post(
        f"/api/v0/forms/job/{job['completion_token']}",
        json={"completion_status": "not-completed", "incompletion_reason": "poc-reschedule"},
    )
    assert r.status_code == 200
    return job


def test_notifications_are_scoped_to_caller(client, auth_headers):
    job = _ops_setup(client, auth_headers)

    mine = client.get("/api/v0/notifications", headers=auth_headers).json()
    assert [n["title"] for n in mine] == ["Job Incomplete"]
    assert mine[0]["related_job"] == job["id"]
    assert "POC requested reschedule" in mine[0]["message"]

    stranger = {**auth_headers, "X-User-Email": "nobody@example.com"}
    assert client.get("/api/v0/notifications", headers=stranger).json() == []
    r = client.post(f"/api/v0/notifications/{mine[0]['id']}:read", headers=stranger)
    assert r.status_code == 404


def test_mark_read(client, auth_headers):
    _ops_setup(client, auth_headers)
    note = client.get("/api/v0/notifications", headers=auth_headers).json()[0]

    r = client.post(f"/api/v0/notifications/{note['id']}:read", headers=auth_headers)
    assert r.status_code == 200
    assert r.json()["read"] is True
    assert client.get("/api/v0/notifications", params={"unread_only": True}, headers=auth_headers).json() == []


def test_list_users_by_role(client, auth_headers):
    _ops_setup(client, auth_headers)
    r = client.get("/api/v0/users", params={"role": "super-admin"}, headers=auth_headers)
    assert [u["email"] for u in r.json()] == ["admin@example.com"]
