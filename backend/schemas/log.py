# backend/schemas/log.py
from pydantic import BaseModel
from typing import List, Optional
from datetime import datetime

from models.log import AuditAction, EntityType


class ActivityLogResponse(BaseModel):
    id: int
    entity_type: EntityType
    entity_id: int
    action: AuditAction
    details: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ActivityLogPage(BaseModel):
    items: List[ActivityLogResponse]
    total: int
    page: int
    page_size: int
