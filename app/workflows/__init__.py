from .catalog import WorkflowCatalog, workflow_catalog, get_template, get_steps, list_templates
from .progress import (
    commit_progress,
    materialize,
    needs_materialization,
    parse_steps,
    progress_percentage,
    set_workflow_type,
    steps_from_template,
    toggle_step,
)
from .automation import apply_completion_automation, matches_kind, name_matches

__all__ = [
    "WorkflowCatalog", "workflow_catalog", "get_template", "get_steps", "list_templates",
    "commit_progress", "materialize", "needs_materialization", "parse_steps",
    "progress_percentage", "set_workflow_type", "steps_from_template", "toggle_step",
    "apply_completion_automation", "matches_kind", "name_matches",
]
