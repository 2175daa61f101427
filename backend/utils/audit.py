import logging
import threading
from datetime import datetime, timezone

from sqlalchemy.orm import Session
from models.log import ActivityLog, AuditAction, EntityType

logger = logging.getLogger(__name__)

_failures = 0
_failures_lock = threading.Lock()


def audit_failure_count() -> int:
    return _failures


def _record_failure():
    global _failures
    with _failures_lock:
        _failures += 1


def build_entry(entity_type, entity_id, action, details=None) -> ActivityLog:
    entity_type = EntityType(str(getattr(entity_type, "value", entity_type)).upper())
    action = AuditAction(str(getattr(action, "value", action)).upper())
    now = datetime.now(timezone.utc)

    entry = ActivityLog(entity_type=entity_type, entity_id=entity_id, action=action, details=details)
    if action == AuditAction.CREATE:
        entry.created_at = now
    elif action == AuditAction.UPDATE:
        entry.updated_at = now
    else:
        entry.deleted_at = now
    return entry


def write_log(db: Session, entity_type, entity_id, action, details=None) -> bool:
    """Append one audit row after the business transaction has committed.

    Failures are rolled back, logged and counted; they never reach the caller.
    """
    try:
        db.add(build_entry(entity_type, entity_id, action, details))
        db.commit()
        return True
    except Exception:
        db.rollback()
        _record_failure()
        logger.exception(
            "Failed to write activity log for %s %s action %s", entity_type, entity_id, action
        )
        return False
