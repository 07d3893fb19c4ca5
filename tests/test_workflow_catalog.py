# tests/test_workflow_catalog.py
import pytest
from pydantic import ValidationError

from app.models.workflow import StepKind, WorkflowTemplate
from app.workflows import get_steps, get_template, list_templates, workflow_catalog
from app.workflows.catalog import WorkflowCatalog

EXPECTED_STEP_COUNTS = {
    "outsourced-scan-upload-client": 3,
    "outsourced-scan-transfer": 4,
    "outsourced-scan-survey-images": 5,
    "direct-scan-hosted": 7,
    "direct-scan-transfer": 6,
    "direct-scan-floorplan": 9,
    "direct-scan-floorplan-photos": 13,
    "direct-scan-asbuilts": 10,
}


def test_catalog_has_exactly_the_stored_workflow_types():
    """Template ids are referenced by stored jobs and must not change."""
    assert [t.id for t in list_templates()] == list(EXPECTED_STEP_COUNTS)
    assert len(workflow_catalog) == 8


@pytest.mark.parametrize("workflow_type,count", EXPECTED_STEP_COUNTS.items())
def test_get_steps_returns_fixed_count(workflow_type, count):
    steps = get_steps(workflow_type)
    assert len(steps) == count
    assert get_template(workflow_type).steps == steps


@pytest.mark.parametrize("workflow_type", ["", None, "unknown", "Direct-Scan-Hosted", "direct-scan-hosted "])
def test_unknown_workflow_type_is_empty_not_error(workflow_type):
    assert get_template(workflow_type) is None
    assert get_steps(workflow_type) == ()


def test_direct_scan_hosted_step_order_and_roles():
    steps = get_steps("direct-scan-hosted")
    assert [s.name for s in steps] == [
        "Scan Completed",
        "Upload to Our Account",
        "Quality Check",
        "Confirm Square Footage",
        "Send Link to Customer",
        "Invoice Job",
        "Add Recurring Hosting Invoice",
    ]
    assert [s.assigned_role.value for s in steps] == [
        "tech", "tech", "ops-manager", "ops-manager", "ops-manager", "sales-admin", "sales-admin",
    ]


@pytest.mark.parametrize("workflow_type", EXPECTED_STEP_COUNTS)
def test_every_template_has_one_scan_step_and_first_upload_is_tagged(workflow_type):
    steps = get_steps(workflow_type)
    kinds = [s.kind for s in steps]
    assert kinds.count(StepKind.scan_completed) == 1
    assert kinds.count(StepKind.upload) == 1
    # The tagged upload is the first step whose name mentions an upload
    first_upload = next(s for s in steps if "upload" in s.name.lower())
    assert first_upload.kind == StepKind.upload


def test_templates_are_immutable():
    template = get_template("direct-scan-transfer")
    with pytest.raises(ValidationError):
        template.name = "changed"
    with pytest.raises(TypeError):
        workflow_catalog._templates["new"] = template


def test_duplicate_template_ids_are_rejected():
    template = WorkflowTemplate(id="dup", name="Dup", description="", steps=())
    with pytest.raises(ValueError):
        WorkflowCatalog((template, template))
