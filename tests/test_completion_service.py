# tests/test_completion_service.py
import pytest

from app.errors import FormAlreadySubmittedError, NotFoundError
from app.models.job import CompletionFormSubmission, JobCreate
from app.services.completion import CompletionFormService
from app.workflows.automation import AUTO_COMPLETE_NOTE


@pytest.fixture()
def forms(jobs):
    return CompletionFormService(jobs)


@pytest.fixture()
def hosted_job(jobs, make_user):
    tech = make_user("tech@example.com")
    return jobs.create_job(JobCreate(
        model_name="HQ", job_number="J-7", tech=tech["id"], workflow_type="direct-scan-hosted", status="scheduled",
    ))


def test_get_job_by_token_exposes_site_details_only(forms, hosted_job):
    view = forms.get_job(hosted_job["completion_token"])
    assert view.id == hosted_job["id"]
    assert view.completion_form_submitted is False
    assert not hasattr(view, "total_price")


@pytest.mark.parametrize("token", ["", "unknown-token"])
def test_unknown_token_is_not_found(forms, token):
    with pytest.raises(NotFoundError):
        forms.get_job(token)
    with pytest.raises(NotFoundError):
        forms.submit(token, CompletionFormSubmission(completion_status="completed"))


def test_completed_submission_updates_job_and_checklist(forms, store, hosted_job, make_user):
    make_user("post@example.com", "post-producer")
    form = CompletionFormSubmission(completion_status="completed", tech_feedback="Smooth", scanned_date="2024-03-02")
    forms.submit(hosted_job["completion_token"], form)

    job = store.find_by_id("jobs", hosted_job["id"])
    assert job["status"] == "scanned"
    assert job["completion_form_submitted"] is True
    assert job["completion_status"] == "completed"
    assert job["tech_feedback"] == "Smooth"
    assert job["scanned_date"].isoformat() == "2024-03-02"

    steps = job["workflow_steps"]
    for step in steps[:2]:
        assert step["completed"] is True
        assert step["completed_by"] == "tech@example.com"
        assert step["notes"] == AUTO_COMPLETE_NOTE
    assert not any(step["completed"] for step in steps[2:])

    assert len(store.find("notifications", {"title": "Job Ready for QC"})) == 1


def test_partial_submission_keeps_status_and_checklist(forms, store, hosted_job):
    form = CompletionFormSubmission(
        completion_status="partially-completed", incompletion_reason="poc-no-show", incompletion_notes="No one there",
    )
    forms.submit(hosted_job["completion_token"], form)

    job = store.find_by_id("jobs", hosted_job["id"])
    assert job["status"] == "scheduled"
    assert job["incompletion_reason"] == "poc-no-show"
    assert job["workflow_steps"] == hosted_job["workflow_steps"]


def test_job_without_checklist_gets_no_steps(forms, jobs, store):
    job = jobs.create_job(JobCreate(model_name="HQ"))
    forms.submit(job["completion_token"], CompletionFormSubmission(completion_status="completed"))
    stored = store.find_by_id("jobs", job["id"])
    assert stored["status"] == "scanned"
    assert stored["workflow_steps"] == []


def test_second_submission_is_rejected(forms, store, hosted_job):
    token = hosted_job["completion_token"]
    forms.submit(token, CompletionFormSubmission(completion_status="completed"))
    with pytest.raises(FormAlreadySubmittedError):
        forms.submit(token, CompletionFormSubmission(completion_status="not-completed"))
    assert store.find_by_id("jobs", hosted_job["id"])["completion_status"] == "completed"


def test_failed_write_persists_nothing(forms, store, hosted_job, monkeypatch):
    def broken_update(collection, id, data):
        raise RuntimeError("database unavailable")

    monkeypatch.setattr(store, "update", broken_update)
    with pytest.raises(RuntimeError):
        forms.submit(hosted_job["completion_token"], CompletionFormSubmission(completion_status="completed"))
    monkeypatch.undo()

    job = store.find_by_id("jobs", hosted_job["id"])
    assert job["completion_form_submitted"] is False
    assert job["status"] == "scheduled"
    assert not any(step["completed"] for step in job["workflow_steps"])


def _seeded_job(store, token, step_names):
    return store.create("jobs", {
        "model_name": "Seeded",
        "completion_token": token,
        "workflow_steps": [{"step_name": name, "completed": False, "notes": ""} for name in step_names],
    })


def test_techless_job_steps_are_stamped_with_generic_actor(forms, store):
    job = _seeded_job(store, "tok-b", ["Scan Completed", "Upload to Client Account", "Confirm Upload"])
    forms.submit("tok-b", CompletionFormSubmission(completion_status="completed"))

    steps = store.find_by_id("jobs", job["id"])["workflow_steps"]
    assert [s["completed"] for s in steps] == [True, True, False]
    assert [s["completed_by"] for s in steps[:2]] == ["Tech", "Tech"]
    assert steps[2] == {"step_name": "Confirm Upload", "completed": False, "completed_at": None,
                        "completed_by": None, "notes": "", "kind": None}


def test_steps_without_scan_or_upload_are_left_alone(forms, store):
    job = _seeded_job(store, "tok-d", ["Request Floor Plan"])
    forms.submit("tok-d", CompletionFormSubmission(completion_status="completed"))

    stored = store.find_by_id("jobs", job["id"])
    assert stored["status"] == "scanned"
    assert stored["workflow_steps"] == [{"step_name": "Request Floor Plan", "completed": False, "completed_at": None,
                                         "completed_by": None, "notes": "", "kind": None}]
