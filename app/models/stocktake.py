"""Stocktake (physical count) model."""
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from sqlalchemy import String, Integer, DateTime, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class StocktakeStatus(str, Enum):
    """Stocktake lifecycle status."""
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"


class Stocktake(Base):
    """A physical inventory count for one zone/shelf."""
    __tablename__ = "stocktakes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    zone: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    shelf: Mapped[str] = mapped_column(String(50), nullable=False)
    counter: Mapped[str] = mapped_column(String(100), nullable=False)

    status: Mapped[str] = mapped_column(
        String(20),
        default=StocktakeStatus.IN_PROGRESS.value,
        nullable=False,
        index=True,
        comment="In Progress, Completed, Cancelled"
    )
    started_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False
    )
    completed_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    row_version: Mapped[int] = mapped_column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": row_version}

    def __repr__(self) -> str:
        return f"<Stocktake(id={self.id}, zone='{self.zone}', status='{self.status}')>"
