# backend/routes/logs.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional
from datetime import datetime

from config import settings
from database import get_db
from models.log import AuditAction, EntityType
from repositories.logs import search_logs
from utils.errors import BadRequestError
from utils.pagination import paginate
from schemas.log import ActivityLogPage

router = APIRouter(prefix="/activity-logs", tags=["Activity Logs"])


def _parse_date(value: Optional[str], end_of_day: bool = False) -> Optional[datetime]:
    if not value:
        return None
    # Plain dates cover the whole day at the upper bound
    if end_of_day and len(value) == 10:
        value += " 23:59:59"
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        raise BadRequestError(f"Invalid date: {value}")


@router.get("", response_model=ActivityLogPage)
def get_logs(
    page: int = Query(1, ge=1),
    page_size: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    entity_type: Optional[EntityType] = Query(None, description="Filter by entity type"),
    entity_id: Optional[int] = Query(None, description="Filter by entity id"),
    action: Optional[AuditAction] = Query(None, description="Filter by action"),
    date_from: Optional[str] = Query(None, description="From date (YYYY-MM-DD)"),
    date_to: Optional[str] = Query(None, description="To date (YYYY-MM-DD)"),
    db: Session = Depends(get_db),
):
    query = search_logs(
        db,
        entity_type=entity_type,
        entity_id=entity_id,
        action=action,
        date_from=_parse_date(date_from),
        date_to=_parse_date(date_to, end_of_day=True),
    )
    return paginate(query, page, page_size)
