"""Shipment models for inbound and outbound goods movement."""
from datetime import datetime, timezone
from enum import Enum
from typing import Optional, List

from sqlalchemy import String, DateTime, ForeignKey, Integer, Text, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base


class ShipmentType(str, Enum):
    """Direction of a shipment."""
    INBOUND = "Inbound"
    OUTBOUND = "Outbound"


SHIPMENT_COMPLETED = "Completed"


class Shipment(Base):
    """
    Shipment with a caller-supplied id.

    Status is free text; "Completed" is the only value with meaning here:
    entering it for the first time stamps completed_at/completed_by.
    """
    __tablename__ = "shipments"

    id: Mapped[str] = mapped_column(String(50), primary_key=True)

    type: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        index=True,
        comment="Inbound, Outbound"
    )
    partner_name: Mapped[str] = mapped_column(String(200), nullable=False, index=True)
    status: Mapped[str] = mapped_column(String(50), default="Pending", nullable=False, index=True)
    eta: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    priority: Mapped[str] = mapped_column(
        String(20),
        default="Medium",
        nullable=False,
        comment="Low, Medium, High, Urgent"
    )
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Audit
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False
    )
    created_by: Mapped[str] = mapped_column(String(50), default="System", nullable=False)
    completed_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    completed_by: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)

    row_version: Mapped[int] = mapped_column(Integer, nullable=False)

    # Relationships
    items: Mapped[List["ShipmentItem"]] = relationship(
        "ShipmentItem",
        back_populates="shipment",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="ShipmentItem.sku",
    )

    __mapper_args__ = {"version_id_col": row_version}

    @property
    def is_completed(self) -> bool:
        return self.status == SHIPMENT_COMPLETED

    def __repr__(self) -> str:
        return f"<Shipment(id='{self.id}', type='{self.type}', status='{self.status}')>"


class ShipmentItem(Base):
    """
    One line of a shipment.

    `sku` is a weak reference to Item; it is not enforced by the schema.
    """
    __tablename__ = "shipment_items"
    __table_args__ = (
        CheckConstraint("quantity >= 1", name="ck_shipment_item_quantity_positive"),
    )

    shipment_id: Mapped[str] = mapped_column(
        String(50),
        ForeignKey("shipments.id", ondelete="CASCADE"),
        primary_key=True
    )
    sku: Mapped[str] = mapped_column(String(50), primary_key=True)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    shipment: Mapped["Shipment"] = relationship("Shipment", back_populates="items")

    def __repr__(self) -> str:
        return f"<ShipmentItem(shipment='{self.shipment_id}', sku='{self.sku}', qty={self.quantity})>"
