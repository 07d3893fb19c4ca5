"""
Workflow catalog.

Fixed registry of the business's delivery processes. Template ids are stored
on jobs (``Job.workflow_type``) and must never be renamed; step lists are
copied into jobs when their checklist is materialized.
"""
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple

from app.models.workflow import AssignedRole, StepKind, WorkflowStepTemplate, WorkflowTemplate

TECH = AssignedRole.tech
OPS = AssignedRole.ops_manager
POST = AssignedRole.post_producer
SALES = AssignedRole.sales_admin


def _step(name: str, description: str, role: AssignedRole, kind: StepKind = StepKind.other) -> WorkflowStepTemplate:
    return WorkflowStepTemplate(name=name, description=description, assigned_role=role, kind=kind)


# Shared steps
SCAN_COMPLETED = _step("Scan Completed", "Tech completes the Matterport scan on-site", TECH, StepKind.scan_completed)
UPLOAD_TO_OUR_ACCOUNT = _step("Upload to Our Account", "Tech uploads scan to our Matterport account", TECH, StepKind.upload)
QUALITY_CHECK = _step("Quality Check", "Review scan quality, accuracy, and coverage", OPS)
CONFIRM_SQFT = _step("Confirm Square Footage", "Verify and update square footage from scan", OPS)
SEND_LINK = _step("Send Link to Customer", "Email Matterport link to customer", OPS)
INVOICE_JOB = _step("Invoice Job", "Create and send invoice to customer", SALES)
HOSTING_INVOICE = _step("Add Recurring Hosting Invoice", "Set up $50/year hosting invoice (after first year)", SALES)
REQUEST_FLOOR_PLAN = _step("Request Floor Plan", "Send model link to floor plan supplier", OPS)
RECEIVE_FLOOR_PLAN = _step("Receive Floor Plan", "Receive completed floor plan from supplier", OPS)
SEND_FLOOR_PLAN = _step("Send Floor Plan to Customer", "Email floor plan to customer", OPS)


def _template(id: str, name: str, description: str, *steps: WorkflowStepTemplate) -> WorkflowTemplate:
    return WorkflowTemplate(id=id, name=name, description=description, steps=tuple(steps))


# Only the first step of each automated kind is ever auto-completed, so later
# uploads (images, drive folders) are tagged as ``other``.
_TEMPLATES: Tuple[WorkflowTemplate, ...] = (
    _template(
        "outsourced-scan-upload-client",
        "Outsourced: Scan & Upload to Client",
        "Matterport 3D Scan only and upload to client account",
        SCAN_COMPLETED,
        _step("Upload to Client Account", "Tech uploads scan directly to client's Matterport account", TECH, StepKind.upload),
        _step("Confirm Upload", "Verify upload completed successfully", OPS),
    ),
    _template(
        "outsourced-scan-transfer",
        "Outsourced: Scan & Transfer",
        "Scan, upload to our account, then transfer to client",
        SCAN_COMPLETED,
        UPLOAD_TO_OUR_ACCOUNT,
        _step("Model Processing", "Wait for Matterport model to finish processing", OPS),
        _step("Transfer to Client", "Transfer processed model to client's email/account", OPS),
    ),
    _template(
        "outsourced-scan-survey-images",
        "Outsourced: Scan, Survey & Images",
        "Scan, fill survey form, and upload images",
        SCAN_COMPLETED,
        _step("Upload Scan", "Upload scan to designated account", TECH, StepKind.upload),
        _step("Complete Survey Form", "Tech fills out client's survey form", TECH),
        _step("Upload Images", "Tech uploads photos to client's link", TECH),
        _step("Verify Completion", "Confirm all deliverables submitted", OPS),
    ),
    _template(
        "direct-scan-hosted",
        "Direct: Scan Hosted by Us",
        "Scan, QC, confirm sqft, send link, invoice, add hosting",
        SCAN_COMPLETED,
        UPLOAD_TO_OUR_ACCOUNT,
        QUALITY_CHECK,
        CONFIRM_SQFT,
        SEND_LINK,
        INVOICE_JOB,
        HOSTING_INVOICE,
    ),
    _template(
        "direct-scan-transfer",
        "Direct: Scan & Transfer",
        "Scan, QC, confirm sqft, transfer to customer, invoice",
        SCAN_COMPLETED,
        UPLOAD_TO_OUR_ACCOUNT,
        QUALITY_CHECK,
        CONFIRM_SQFT,
        _step("Transfer to Customer", "Transfer model to customer's email/account", OPS),
        INVOICE_JOB,
    ),
    _template(
        "direct-scan-floorplan",
        "Direct: Scan + Floor Plan",
        "Scan hosted by us with floor plan from supplier",
        SCAN_COMPLETED,
        UPLOAD_TO_OUR_ACCOUNT,
        QUALITY_CHECK,
        REQUEST_FLOOR_PLAN,
        SEND_LINK,
        RECEIVE_FLOOR_PLAN,
        SEND_FLOOR_PLAN,
        INVOICE_JOB,
        HOSTING_INVOICE,
    ),
    _template(
        "direct-scan-floorplan-photos",
        "Direct: Scan + Floor Plan + Photos",
        "Scan hosted with floor plan and photo extraction",
        SCAN_COMPLETED,
        UPLOAD_TO_OUR_ACCOUNT,
        QUALITY_CHECK,
        _step("Post-Processing", "Edit Matterport model and extract images", POST),
        REQUEST_FLOOR_PLAN,
        SEND_LINK,
        RECEIVE_FLOOR_PLAN,
        SEND_FLOOR_PLAN,
        _step("Upload Images to Drive", "Upload extracted images to Google Drive folder", POST),
        _step("Send Images Link to Customer", "Email Drive folder link to customer", OPS),
        CONFIRM_SQFT,
        INVOICE_JOB,
        HOSTING_INVOICE,
    ),
    _template(
        "direct-scan-asbuilts",
        "Direct: Scan + As-Builts",
        "Scan hosted with as-built drawings in various formats",
        SCAN_COMPLETED,
        UPLOAD_TO_OUR_ACCOUNT,
        QUALITY_CHECK,
        _step("Request As-Builts", "Send model link to as-built supplier with format specs", OPS),
        CONFIRM_SQFT,
        SEND_LINK,
        INVOICE_JOB,
        _step("Receive As-Builts", "Receive completed as-built drawings from supplier", OPS),
        _step("Send As-Builts to Customer", "Email as-built files to customer", OPS),
        HOSTING_INVOICE,
    ),
)


class WorkflowCatalog:
    """Read-only lookup over workflow templates, keyed by workflow type."""

    def __init__(self, templates: Tuple[WorkflowTemplate, ...]):
        by_id: Dict[str, WorkflowTemplate] = {}
        for template in templates:
            if template.id in by_id:
                raise ValueError(f"Duplicate workflow template id: {template.id}")
            by_id[template.id] = template
        self._templates: Mapping[str, WorkflowTemplate] = MappingProxyType(by_id)

    def get_template(self, workflow_type: Optional[str]) -> Optional[WorkflowTemplate]:
        if not workflow_type:
            return None
        return self._templates.get(workflow_type)

    def get_steps(self, workflow_type: Optional[str]) -> Tuple[WorkflowStepTemplate, ...]:
        """Steps for a workflow type; empty for unknown types so callers can always iterate."""
        template = self.get_template(workflow_type)
        return template.steps if template else ()

    def list_templates(self) -> List[WorkflowTemplate]:
        return list(self._templates.values())

    def __contains__(self, workflow_type: object) -> bool:
        return workflow_type in self._templates

    def __len__(self) -> int:
        return len(self._templates)


workflow_catalog = WorkflowCatalog(_TEMPLATES)


def get_template(workflow_type: Optional[str]) -> Optional[WorkflowTemplate]:
    return workflow_catalog.get_template(workflow_type)


def get_steps(workflow_type: Optional[str]) -> Tuple[WorkflowStepTemplate, ...]:
    return workflow_catalog.get_steps(workflow_type)


def list_templates() -> List[WorkflowTemplate]:
    return workflow_catalog.list_templates()
