# repositories/logs.py
from datetime import datetime
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session, Query

from models.log import ActivityLog, AuditAction, EntityType


def _event_time():
    # Only one of the three timestamps is set per row
    return func.coalesce(ActivityLog.created_at, ActivityLog.updated_at, ActivityLog.deleted_at)


def search_logs(
    db: Session,
    entity_type: Optional[EntityType] = None,
    entity_id: Optional[int] = None,
    action: Optional[AuditAction] = None,
    date_from: Optional[datetime] = None,
    date_to: Optional[datetime] = None,
) -> Query:
    query = db.query(ActivityLog)

    if entity_type is not None:
        query = query.filter(ActivityLog.entity_type == entity_type)
    if entity_id is not None:
        query = query.filter(ActivityLog.entity_id == entity_id)
    if action is not None:
        query = query.filter(ActivityLog.action == action)
    if date_from is not None:
        query = query.filter(_event_time() >= date_from)
    if date_to is not None:
        query = query.filter(_event_time() <= date_to)

    return query.order_by(ActivityLog.id.desc())
