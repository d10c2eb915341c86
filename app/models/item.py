"""Inventory item model."""
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import String, Integer, DateTime, Text, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class Item(Base):
    """
    A stocked item, keyed by its SKU.

    `location` is free text; while an item travels with a shipment it holds
    the shipment id.
    """
    __tablename__ = "items"
    __table_args__ = (
        CheckConstraint("quantity >= 0", name="ck_item_quantity_non_negative"),
    )

    sku: Mapped[str] = mapped_column(String(50), primary_key=True)

    name: Mapped[str] = mapped_column(String(200), nullable=False, index=True)
    category: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    quantity: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    location: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    condition: Mapped[str] = mapped_column(String(50), nullable=False)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Audit
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False
    )
    created_by: Mapped[str] = mapped_column(String(50), default="System", nullable=False)
    updated_by: Mapped[str] = mapped_column(String(50), default="System", nullable=False)

    # Optimistic concurrency token
    row_version: Mapped[int] = mapped_column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": row_version}

    def __repr__(self) -> str:
        return f"<Item(sku='{self.sku}', name='{self.name}', qty={self.quantity})>"
