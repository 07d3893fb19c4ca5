def test_list_workflow_templates(client, auth_headers):
    r = client.get("/api/v0/workflow-templates", headers=auth_headers)
    assert r.status_code == 200
    items = r.json()
    assert len(items) == 8
    hosted = next(t for t in items if t["id"] == "direct-scan-hosted")
    assert hosted["name"] == "Direct: Scan Hosted by Us"
    assert hosted["steps"][0] == {
        "name": "Scan Completed",
        "description": "Tech completes the Matterport scan on-site",
        "assigned_role": "tech",
        "kind": "scan-completed",
    }


def test_get_workflow_template(client, auth_headers):
    r = client.get("/api/v0/workflow-templates/direct-scan-floorplan-photos", headers=auth_headers)
    assert r.status_code == 200
    assert len(r.json()["steps"]) == 13


def test_unknown_workflow_template_is_404(client, auth_headers):
    r = client.get("/api/v0/workflow-templates/nope", headers=auth_headers)
    assert r.status_code == 404
    assert r.json()["error"]["code"] == "NOT_FOUND"


def test_catalog_requires_operator_token(client):
    r = client.get("/api/v0/workflow-templates")
    assert r.status_code == 401
    assert r.json()["error"]["code"] == "UNAUTHORIZED"

    r = client.get("/api/v0/workflow-templates", headers={"Authorization": "Bearer nope"})
    assert r.status_code == 401


def test_healthz_and_request_id(client):
    r = client.get("/api/v0/healthz", headers={"X-Request-Id": "req-1"})
    assert r.status_code == 200
    assert r.json()["status"] == "ok"
    assert r.headers["X-Request-Id"] == "req-1"


def test_unknown_route_and_method_use_error_envelope(client, auth_headers):
    r = client.get("/api/v0/no-such-route", headers=auth_headers)
    assert r.status_code == 404
    assert r.json()["error"]["code"] == "NOT_FOUND"

    r = client.delete("/api/v0/workflow-templates", headers=auth_headers)
    assert r.status_code == 405
    assert r.json()["error"]["code"] == "METHOD_NOT_ALLOWED"
