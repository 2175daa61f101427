# services/alert_service.py
import logging
from datetime import datetime, timezone
from typing import List, Optional

from config import settings
from models.alert import Alert, AlertSeverity, AlertType
from models.log import AuditAction, EntityType
from models.warehouse import Warehouse
from repositories import alerts as alert_repo
from repositories import warehouses as warehouse_repo
from services.base import BaseService
from utils.audit import write_log
from utils.errors import ConflictError, NotFoundError

logger = logging.getLogger(__name__)


class AlertService(BaseService):

    def open_capacity_alerts(self, warehouse: Warehouse) -> List[Alert]:
        """Stage capacity alerts for the warehouse's current usage.

        Runs inside the caller's transaction; pending quantity changes must
        be flushed first. Returns the alerts added to the session.
        """
        if not warehouse.max_capacity or warehouse.max_capacity <= 0:
            return []

        used = warehouse_repo.total_quantity(self.db, warehouse.id)
        percent = used * 100.0 / warehouse.max_capacity

        if used > warehouse.max_capacity:
            alert_type, severity = AlertType.CAPACITY_EXCEEDED, AlertSeverity.CRITICAL
        elif percent >= settings.CAPACITY_ALERT_THRESHOLD:
            alert_type, severity = AlertType.CAPACITY_NEAR_LIMIT, AlertSeverity.WARNING
        else:
            return []

        if alert_repo.find_open_alert(self.db, warehouse.id, alert_type):
            return []

        alert = Alert(type=alert_type, severity=severity, warehouse_id=warehouse.id)
        self.db.add(alert)
        logger.info(
            "Opening %s alert for warehouse %s (%d/%d units)",
            alert_type.value, warehouse.id, used, warehouse.max_capacity,
        )
        return [alert]

    def audit_opened(self, alerts: List[Alert], warehouse_name: str):
        for alert in alerts:
            write_log(
                self.db, EntityType.ALERT, alert.id, AuditAction.CREATE,
                f"{alert.type.value} alert opened for warehouse {warehouse_name}",
            )

    def list_alerts(
        self,
        warehouse_id: Optional[int] = None,
        resolved: Optional[bool] = None,
        alert_type: Optional[AlertType] = None,
    ):
        return alert_repo.list_alerts(self.db, warehouse_id, resolved, alert_type)

    def resolve_alert(self, alert_id: int) -> Alert:
        alert = alert_repo.get_alert(self.db, alert_id)
        if not alert:
            raise NotFoundError(f"Alert with ID {alert_id} not found")
        if alert.is_resolved:
            raise ConflictError(f"Alert with ID {alert_id} is already resolved")

        alert.is_resolved = True
        alert.resolved_at = datetime.now(timezone.utc)
        self._commit()
        self.db.refresh(alert)

        write_log(self.db, EntityType.ALERT, alert.id, AuditAction.UPDATE, "Alert resolved")
        return alert
