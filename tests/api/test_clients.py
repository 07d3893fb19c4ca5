def test_client_crud_and_integrations_pass_through(client, auth_headers):
    r = client.post(
        "/api/v0/clients",
        json={"name": "Acme", "email": "ap@acme.test", "integrations": {"quickbooks": {"customer_id": "17"}}},
        headers=auth_headers,
    )
    assert r.status_code == 201
    created = r.json()
    assert created["id"].startswith("cli_")

    r = client.patch(
        f"/api/v0/clients/{created['id']}",
        json={"default_workflow": "direct-scan-floorplan", "integrations": {"quickbooks": {"customer_id": "18", "synced": True}}},
        headers=auth_headers,
    )
    assert r.status_code == 200
    fetched = client.get(f"/api/v0/clients/{created['id']}", headers=auth_headers).json()
    assert fetched["name"] == "Acme"
    assert fetched["default_workflow"] == "direct-scan-floorplan"
    assert fetched["integrations"] == {"quickbooks": {"customer_id": "18", "synced": True}}


def test_client_default_workflow_must_exist(client, auth_headers):
    r = client.post("/api/v0/clients", json={"name": "Acme", "default_workflow": "nope"}, headers=auth_headers)
    assert r.status_code == 422
    assert r.json()["error"]["code"] == "INVALID_WORKFLOW_TYPE"


def test_missing_client(client, auth_headers):
    assert client.get("/api/v0/clients/cli_missing", headers=auth_headers).status_code == 404
    r = client.patch("/api/v0/clients/cli_missing", json={"name": "X"}, headers=auth_headers)
    assert r.status_code == 404
