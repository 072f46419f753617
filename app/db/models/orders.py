from __future__ import annotations

import enum
from datetime import datetime

from sqlalchemy import String, Integer, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base
from app.db.models.common import HasId, HasCreatedAt


class OrderType(str, enum.Enum):
    MANUAL = "Manual"
    INTEGRATED = "Integrated"


class OrderStatus(str, enum.Enum):
    PENDING = "pending"
    IN_PROCESS = "in-process"
    BREACHED = "breached"
    COMPLETED = "completed"
    DISPATCHED = "dispatched"


class Order(Base, HasId, HasCreatedAt):
    __tablename__ = "orders"

    order_id: Mapped[str] = mapped_column(String(64), unique=True, nullable=False, index=True)  # display id, ORD-001
    customer: Mapped[str] = mapped_column(String(256), nullable=False)
    type: Mapped[str] = mapped_column(String(16), nullable=False)
    status: Mapped[str] = mapped_column(String(16), default=OrderStatus.PENDING.value, nullable=False, index=True)
    total_quantity: Mapped[int] = mapped_column(Integer, nullable=False)

    # fulfillment milestones, drive the order timeline
    picked_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    packed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    manifested_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    dispatched_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)


class OrderItem(Base, HasId):
    __tablename__ = "order_items"

    order_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    sku_id: Mapped[int] = mapped_column(Integer, nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
