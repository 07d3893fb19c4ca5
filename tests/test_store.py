# tests/test_store.py
import pytest

from app.errors import NotFoundError


def test_create_assigns_prefixed_id_and_timestamps(store):
    user = store.create("users", {"email": "tech@example.com", "role": "tech"})
    assert user["id"].startswith("usr_")
    assert user["created_at"] is not None
    assert store.find_by_id("users", user["id"])["email"] == "tech@example.com"


def test_find_filters_by_equality_membership_and_null(store):
    store.create("users", {"email": "a@example.com", "role": "tech"})
    store.create("users", {"email": "b@example.com", "role": "ops-manager"})
    store.create("users", {"email": "c@example.com", "role": "super-admin", "name": "Carol"})

    assert [u["email"] for u in store.find("users", {"role": "tech"})] == ["a@example.com"]
    admins = store.find("users", {"role": ["ops-manager", "super-admin"]}, order_by="email")
    assert [u["email"] for u in admins] == ["b@example.com", "c@example.com"]
    unnamed = store.find("users", {"name": None}, order_by="email", descending=True)
    assert [u["email"] for u in unnamed] == ["b@example.com", "a@example.com"]
    assert len(store.find("users", limit=2)) == 2


def test_depth_expands_relationship_fields(store):
    tech = store.create("users", {"email": "tech@example.com", "role": "tech"})
    client = store.create("clients", {"name": "Acme"})
    job = store.create("jobs", {"model_name": "HQ", "tech": tech["id"], "client": client["id"]})

    flat = store.find_by_id("jobs", job["id"])
    assert flat["tech"] == tech["id"]

    deep = store.find_by_id("jobs", job["id"], depth=1)
    assert deep["tech"]["email"] == "tech@example.com"
    assert deep["client"]["name"] == "Acme"


def test_update_is_partial_and_keeps_read_only_fields(store):
    job = store.create("jobs", {"model_name": "HQ", "city": "Austin"})
    updated = store.update("jobs", job["id"], {"status": "scheduled", "id": "job_other"})
    assert updated["id"] == job["id"]
    assert updated["status"] == "scheduled"
    assert updated["city"] == "Austin"
    assert updated["updated_at"] >= job["updated_at"]


def test_json_columns_round_trip(store):
    steps = [{"step_name": "Scan Completed", "completed": True, "notes": "", "kind": "scan-completed"}]
    job = store.create("jobs", {"model_name": "HQ", "workflow_type": "direct-scan-hosted", "workflow_steps": steps})
    assert store.find_by_id("jobs", job["id"])["workflow_steps"] == steps

    client = store.create("clients", {"name": "Acme", "integrations": {"quickbooks": {"customer_id": "42"}}})
    assert store.find_by_id("clients", client["id"])["integrations"]["quickbooks"]["customer_id"] == "42"


def test_update_missing_record_raises_not_found(store):
    with pytest.raises(NotFoundError):
        store.update("jobs", "job_missing", {"status": "done"})
    assert store.find_by_id("jobs", "job_missing") is None


def test_unknown_collection_and_fields_are_rejected(store):
    with pytest.raises(ValueError):
        store.find("invoices")
    with pytest.raises(ValueError):
        store.create("jobs", {"model_name": "HQ", "colour": "red"})
    with pytest.raises(ValueError):
        store.find("jobs", {"colour": "red"})
