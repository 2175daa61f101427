# backend/models/alert.py
import enum
from sqlalchemy import Column, Integer, Boolean, DateTime, ForeignKey, Enum, CheckConstraint, func
from sqlalchemy.orm import relationship
from database import Base


class AlertType(str, enum.Enum):
    CAPACITY_NEAR_LIMIT = "CAPACITY_NEAR_LIMIT"
    CAPACITY_EXCEEDED = "CAPACITY_EXCEEDED"
    OBSOLETE = "OBSOLETE"
    LOSS_RISK = "LOSS_RISK"


class AlertSeverity(str, enum.Enum):
    INFO = "INFO"
    WARNING = "WARNING"
    CRITICAL = "CRITICAL"


# Operational alert raised against a warehouse or a single batch
class Alert(Base):
    __tablename__ = "alert"

    id = Column(Integer, primary_key=True, index=True)
    type = Column(Enum(AlertType), nullable=False, index=True)
    severity = Column(Enum(AlertSeverity), nullable=False, default=AlertSeverity.INFO)
    is_resolved = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    resolved_at = Column(DateTime(timezone=True), nullable=True)
    warehouse_id = Column(Integer, ForeignKey("warehouse.id", ondelete="CASCADE"), nullable=True, index=True)
    inventory_id = Column(Integer, ForeignKey("inventory.id", ondelete="CASCADE"), nullable=True)

    warehouse = relationship("Warehouse", back_populates="alerts")

    __table_args__ = (
        CheckConstraint(
            "warehouse_id IS NOT NULL OR inventory_id IS NOT NULL",
            name="chk_alert_has_reference",
        ),
    )
