"""
Completion-form automation.

When a tech reports a job as completed, the first "scan completed" step and
the first "upload" step of the job's checklist are completed on their behalf.
Steps are selected by their ``kind`` tag; steps persisted before tags existed
are matched on their name. The two searches are independent and may select
the same step.
"""
import logging
from datetime import datetime, UTC
from typing import Iterable, List, Optional

from app.models.workflow import StepKind, WorkflowStepProgress
from .progress import StepLike, parse_steps

logger = logging.getLogger(__name__)

AUTO_COMPLETE_NOTE = "Auto-completed via tech completion form"
FALLBACK_ACTOR = "Tech"
AUTOMATED_KINDS = (StepKind.scan_completed, StepKind.upload)

# kind -> name fragments for steps stored without a kind
NAME_PATTERNS = {
    StepKind.scan_completed: ("scan completed", "scan complete"),
    StepKind.upload: ("upload",),
}


def name_matches(step_name: Optional[str], kind: StepKind) -> bool:
    name = (step_name or "").casefold()
    return any(fragment in name for fragment in NAME_PATTERNS.get(kind, ()))


def matches_kind(step: WorkflowStepProgress, kind: StepKind) -> bool:
    if step.kind is not None:
        return step.kind == kind
    return name_matches(step.step_name, kind)


def apply_completion_automation(
    steps: Iterable[StepLike],
    completion_status: Optional[str],
    completed_by: Optional[str],
    now: Optional[datetime] = None,
) -> List[WorkflowStepProgress]:
    """
    Checklist after a completion-form submission.

    Only a ``completed`` status on a non-empty checklist changes anything. The
    result is always a new list; unmatched steps are returned as they were.
    """
    updated = parse_steps(steps)
    if completion_status != "completed" or not updated:
        return updated

    now = now or datetime.now(UTC)
    actor = completed_by or FALLBACK_ACTOR
    for kind in AUTOMATED_KINDS:
        index = next((i for i, step in enumerate(updated) if matches_kind(step, kind)), None)
        if index is None:
            continue
        updated[index] = updated[index].model_copy(
            update={
                "completed": True,
                "completed_at": now,
                "completed_by": actor,
                "notes": AUTO_COMPLETE_NOTE,
            }
        )
        logger.debug("Auto-completed step %r (%s)", updated[index].step_name, kind.value)
    return updated
