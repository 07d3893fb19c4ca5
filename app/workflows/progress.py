"""
Per-job workflow progress.

Everything here is pure: functions take job documents / step lists and return
new values without touching storage. The only way progress reaches the store
is through ``commit_progress``, which builds the partial update callers hand
to ``DocumentStore.update``.
"""
from datetime import datetime, UTC
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from app.models.workflow import WorkflowStepProgress
from .catalog import WorkflowCatalog, workflow_catalog as default_catalog

StepLike = Union[WorkflowStepProgress, Mapping[str, Any]]


def _field(job: Any, name: str) -> Any:
    if isinstance(job, Mapping):
        return job.get(name)
    return getattr(job, name, None)


def parse_steps(raw: Optional[Iterable[StepLike]]) -> List[WorkflowStepProgress]:
    """Coerce persisted step documents into progress models, keeping order."""
    if not raw:
        return []
    return [
        step if isinstance(step, WorkflowStepProgress) else WorkflowStepProgress.model_validate(step)
        for step in raw
    ]


def steps_from_template(
    workflow_type: Optional[str], catalog: WorkflowCatalog = default_catalog
) -> List[WorkflowStepProgress]:
    """Fresh, all-incomplete checklist for a workflow type ([] if unknown)."""
    return [
        WorkflowStepProgress(step_name=step.name, kind=step.kind)
        for step in catalog.get_steps(workflow_type)
    ]


def materialize(job: Any, catalog: WorkflowCatalog = default_catalog) -> List[WorkflowStepProgress]:
    """
    Checklist to display for a job.

    Persisted steps win and are returned unchanged. Otherwise the checklist is
    generated from the job's workflow type. Nothing is written.
    """
    persisted = parse_steps(_field(job, "workflow_steps"))
    if persisted:
        return persisted
    return steps_from_template(_field(job, "workflow_type"), catalog)


def needs_materialization(job: Any, catalog: WorkflowCatalog = default_catalog) -> bool:
    """True for jobs with a known workflow type but no persisted steps."""
    return not _field(job, "workflow_steps") and catalog.get_template(_field(job, "workflow_type")) is not None


def set_workflow_type(
    job: Any, new_type: Optional[str], catalog: WorkflowCatalog = default_catalog
) -> Dict[str, Any]:
    """
    Job draft with ``workflow_type`` switched to ``new_type``.

    The checklist is always regenerated from the new template; progress on the
    previous checklist is discarded, even when the type does not change.
    """
    draft = dict(job) if isinstance(job, Mapping) else {"id": _field(job, "id")}
    draft["workflow_type"] = new_type or None
    draft["workflow_steps"] = steps_from_template(new_type, catalog)
    return draft


def toggle_step(
    steps: Iterable[StepLike],
    index: int,
    completed_by: Optional[str],
    now: Optional[datetime] = None,
) -> List[WorkflowStepProgress]:
    """
    Flip one step's completion flag.

    Completing stamps ``completed_at``/``completed_by``; un-completing clears
    both. ``index`` must be a valid, non-negative position.
    """
    updated = parse_steps(steps)
    if not 0 <= index < len(updated):
        raise IndexError(f"workflow step index {index} out of range for {len(updated)} steps")

    step = updated[index]
    if step.completed:
        updated[index] = step.model_copy(update={"completed": False, "completed_at": None, "completed_by": None})
    else:
        updated[index] = step.model_copy(
            update={"completed": True, "completed_at": now or datetime.now(UTC), "completed_by": completed_by}
        )
    return updated


def _is_completed(step: StepLike) -> bool:
    if isinstance(step, WorkflowStepProgress):
        return step.completed
    return bool(step.get("completed"))


def progress_percentage(steps: Optional[Iterable[StepLike]]) -> int:
    """Completed share of a checklist, 0-100, rounded half up; 0 for no steps."""
    steps = list(steps or [])
    total = len(steps)
    if total == 0:
        return 0
    done = sum(1 for step in steps if _is_completed(step))
    return (200 * done + total) // (2 * total)


def completed_count(steps: Optional[Iterable[StepLike]]) -> int:
    return sum(1 for step in (steps or []) if _is_completed(step))


def commit_progress(workflow_type: Optional[str], steps: Iterable[StepLike]) -> Dict[str, Any]:
    """Partial job update persisting a workflow type and its checklist."""
    return {
        "workflow_type": workflow_type or None,
        "workflow_steps": [step.model_dump(mode="json") for step in parse_steps(steps)],
    }
