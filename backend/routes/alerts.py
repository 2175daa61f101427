# backend/routes/alerts.py
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from config import settings
from database import get_db
from models.alert import AlertType
from services.alert_service import AlertService
from utils.pagination import paginate
import schemas.alert as alert_schemas

router = APIRouter(prefix="/alerts", tags=["Alerts"])


@router.get("", response_model=alert_schemas.AlertPage)
def list_alerts(
    warehouse_id: Optional[int] = Query(None),
    resolved: Optional[bool] = Query(None),
    alert_type: Optional[AlertType] = Query(None, alias="type"),
    page: int = Query(1, ge=1),
    page_size: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    db: Session = Depends(get_db),
):
    query = AlertService(db).list_alerts(warehouse_id, resolved, alert_type)
    return paginate(query, page, page_size)


@router.patch("/{alert_id}/resolve", response_model=alert_schemas.AlertOut)
def resolve_alert(alert_id: int, db: Session = Depends(get_db)):
    return AlertService(db).resolve_alert(alert_id)
