"""Warehouse task model."""
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from sqlalchemy import String, Integer, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class TaskStatus(str, Enum):
    PENDING = "Pending"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"
    OVERDUE = "Overdue"


class TaskPriority(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    URGENT = "Urgent"


class WarehouseTask(Base):
    """
    A to-do item for warehouse staff.

    related_item_sku / related_shipment_id are weak references.
    """
    __tablename__ = "tasks"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    title: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    due_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, index=True)

    status: Mapped[str] = mapped_column(
        String(20),
        default=TaskStatus.PENDING.value,
        nullable=False,
        index=True,
        comment="Pending, In Progress, Completed, Overdue"
    )
    priority: Mapped[str] = mapped_column(
        String(20),
        default=TaskPriority.MEDIUM.value,
        nullable=False,
        comment="Low, Medium, High, Urgent"
    )
    category: Mapped[str] = mapped_column(String(50), default="General", nullable=False)
    assigned_to: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)

    related_item_sku: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    related_shipment_id: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
        index=True
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False
    )
    completed_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    @property
    def completion_date(self) -> Optional[datetime]:
        """Alias of completed_at."""
        return self.completed_at

    @completion_date.setter
    def completion_date(self, value: Optional[datetime]) -> None:
        self.completed_at = value

    @property
    def is_completed(self) -> bool:
        return self.status == TaskStatus.COMPLETED.value

    def __repr__(self) -> str:
        return f"<WarehouseTask(id={self.id}, title='{self.title}', status='{self.status}')>"
