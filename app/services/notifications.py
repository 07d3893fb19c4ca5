"""
Job change notifications (Observer pattern).

JobService publishes a JobEvent after every job update; observers react to
status transitions. The NotificationObserver fans the interesting ones out as
notification records to role-filtered staff.
"""
import logging
from abc import ABC, abstractmethod
from datetime import date, datetime, UTC
from typing import Any, Dict, Iterable, List, Optional

from app.models import NotificationType, UserRole
from .store import DocumentStore

logger = logging.getLogger(__name__)

ADMIN_ROLES = (UserRole.super_admin.value, UserRole.ops_manager.value)
QC_ROLES = (UserRole.post_producer.value,)
FINANCE_ROLES = (UserRole.super_admin.value, UserRole.sales_admin.value)

INCOMPLETE_STATUSES = ("not-completed", "partially-completed")

REASON_TEXT = {
    "no-access": "Unable to access location",
    "poc-no-show": "POC did not show up",
    "poc-reschedule": "POC requested reschedule",
}


class JobEvent:
    """A job document before and after one update."""

    def __init__(self, event_type: str, previous: Optional[Dict[str, Any]], current: Dict[str, Any]):
        self.event_type = event_type
        self.previous = previous
        self.current = current
        self.timestamp = datetime.now(UTC).isoformat()

    @property
    def job_id(self) -> str:
        return self.current["id"]

    def changed(self, field: str) -> bool:
        return (self.previous or {}).get(field) != self.current.get(field)

    def became(self, field: str, value: Any) -> bool:
        return self.current.get(field) == value and (self.previous or {}).get(field) != value

    def to_dict(self) -> Dict[str, Any]:
        return {
            "event_type": self.event_type,
            "job_id": self.job_id,
            "timestamp": self.timestamp,
        }


class JobObserver(ABC):

    @abstractmethod
    def update(self, event: JobEvent) -> None:
        """Receive a job event."""


class LogObserver(JobObserver):
    """Logs every job event."""

    def update(self, event: JobEvent) -> None:
        current = event.current
        logger.info(
            "[JobEvent] %s job=%s status=%s completion_status=%s",
            event.event_type,
            current.get("job_number") or event.job_id,
            current.get("status"),
            current.get("completion_status"),
        )


class NotificationObserver(JobObserver):
    """Creates in-app notifications for staff when a job changes hands."""

    def __init__(self, store: DocumentStore, today=None):
        self.store = store
        self._today = today or date.today

    def update(self, event: JobEvent) -> None:
        if event.event_type != "updated" or event.previous is None:
            return

        doc = event.current
        label = f"Job {doc.get('job_number') or doc['id']} ({doc.get('model_name')})"

        # 1. Tech reported the job completed -> QC team
        if event.became("completion_status", "completed"):
            self._fan_out(
                QC_ROLES, doc,
                title="Job Ready for QC",
                message=f"{label} has been marked as completed by the tech and is ready for quality control review.",
                type=NotificationType.info,
            )

        # 2. Job not (fully) completed -> admins
        if doc.get("completion_status") in INCOMPLETE_STATUSES and (
            event.changed("completion_status") or event.changed("incompletion_reason")
        ):
            state = "not completed" if doc["completion_status"] == "not-completed" else "partially completed"
            reason = REASON_TEXT.get(doc.get("incompletion_reason"), "Other reason")
            notes = f" Notes: {doc['incompletion_notes']}" if doc.get("incompletion_notes") else ""
            self._fan_out(
                ADMIN_ROLES, doc,
                title="Job Incomplete",
                message=f"{label} was marked as {state}. Reason: {reason}.{notes}",
                type=NotificationType.warning,
            )

        # 3. Past the scheduled date and still moving -> admins
        target_date = doc.get("target_date")
        if (
            target_date
            and doc.get("status") != "done"
            and target_date < self._today()
            and event.changed("status")
        ):
            self._fan_out(
                ADMIN_ROLES, doc,
                title="Job Delayed",
                message=f"{label} is past its scheduled date ({target_date.isoformat()}) and has not been completed yet.",
                type=NotificationType.warning,
            )

        # 4. QC approved the job -> finance
        if event.became("status", "done"):
            self._fan_out(
                FINANCE_ROLES, doc,
                title="Job Ready for Invoicing",
                message=f"{label} has been completed and approved by QC. It is now ready for invoicing.",
                type=NotificationType.success,
                action_url="/oms/invoicing",
            )

    def _fan_out(
        self,
        roles: Iterable[str],
        doc: Dict[str, Any],
        title: str,
        message: str,
        type: NotificationType,
        action_url: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        recipients = self.store.find("users", {"role": list(roles)})
        created = [
            self.store.create(
                "notifications",
                {
                    "user": user["id"],
                    "title": title,
                    "message": message,
                    "type": type.value,
                    "read": False,
                    "related_job": doc["id"],
                    "action_url": action_url or f"/oms/jobs/{doc['id']}",
                },
            )
            for user in recipients
        ]
        logger.info("[Notification] %s: notified %d user(s) about job %s", title, len(created), doc["id"])
        return created


class JobSubject:
    """Keeps the observer list and publishes job events."""

    def __init__(self):
        self._observers: List[JobObserver] = []

    def attach(self, observer: JobObserver) -> None:
        if observer not in self._observers:
            self._observers.append(observer)

    def detach(self, observer: JobObserver) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    def notify(self, event: JobEvent) -> None:
        """Deliver to every observer; one failing observer never fails the job write."""
        for observer in self._observers:
            try:
                observer.update(event)
            except Exception:
                logger.exception("[Notification] %s failed for job %s", type(observer).__name__, event.job_id)

    def notify_created(self, current: Dict[str, Any]) -> None:
        self.notify(JobEvent("created", None, current))

    def notify_updated(self, previous: Dict[str, Any], current: Dict[str, Any]) -> None:
        self.notify(JobEvent("updated", previous, current))
