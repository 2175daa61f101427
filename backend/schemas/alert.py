# backend/schemas/alert.py
from pydantic import BaseModel, ConfigDict
from typing import List, Optional
from datetime import datetime

from models.alert import AlertSeverity, AlertType


class AlertOut(BaseModel):
    id: int
    type: AlertType
    severity: AlertSeverity
    is_resolved: bool
    created_at: Optional[datetime] = None
    resolved_at: Optional[datetime] = None
    warehouse_id: Optional[int] = None
    inventory_id: Optional[int] = None

    model_config = ConfigDict(from_attributes=True)


class AlertPage(BaseModel):
    items: List[AlertOut]
    total: int
    page: int
    page_size: int
