# repositories/alerts.py
from typing import Optional

from sqlalchemy.orm import Session, Query

from models.alert import Alert, AlertType


def get_alert(db: Session, alert_id: int) -> Optional[Alert]:
    return db.query(Alert).filter(Alert.id == alert_id).first()


def find_open_alert(db: Session, warehouse_id: int, alert_type: AlertType) -> Optional[Alert]:
    return (
        db.query(Alert)
        .filter(
            Alert.warehouse_id == warehouse_id,
            Alert.type == alert_type,
            Alert.is_resolved == False,  # noqa: E712
        )
        .first()
    )


def list_alerts(
    db: Session,
    warehouse_id: Optional[int] = None,
    resolved: Optional[bool] = None,
    alert_type: Optional[AlertType] = None,
) -> Query:
    query = db.query(Alert)
    if warehouse_id is not None:
        query = query.filter(Alert.warehouse_id == warehouse_id)
    if resolved is not None:
        query = query.filter(Alert.is_resolved == resolved)
    if alert_type is not None:
        query = query.filter(Alert.type == alert_type)
    return query.order_by(Alert.created_at.desc(), Alert.id.desc())
