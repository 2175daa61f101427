import enum
from sqlalchemy import Column, Integer, Text, DateTime, Enum
from database import Base


class EntityType(str, enum.Enum):
    WAREHOUSE = "WAREHOUSE"
    INVENTORY = "INVENTORY"
    PRODUCT = "PRODUCT"
    ALERT = "ALERT"


class AuditAction(str, enum.Enum):
    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"


# Append-only audit trail, one row per (entity, action) event.
# Only the timestamp column matching the action is populated.
class ActivityLog(Base):
    __tablename__ = "activity_log"

    id = Column(Integer, primary_key=True, index=True)
    entity_id = Column(Integer, nullable=False, index=True)
    entity_type = Column(Enum(EntityType), nullable=False, index=True)
    action = Column(Enum(AuditAction), nullable=False, index=True)

    # Human readable summary of what changed
    details = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=True, index=True)
    updated_at = Column(DateTime(timezone=True), nullable=True)
    deleted_at = Column(DateTime(timezone=True), nullable=True)
