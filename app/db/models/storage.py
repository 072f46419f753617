from __future__ import annotations

from datetime import datetime

from sqlalchemy import String, Integer, DateTime, Index
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base
from app.db.models.common import HasId, utcnow


class Rack(Base, HasId):
    __tablename__ = "racks"

    name: Mapped[str] = mapped_column(String(128), nullable=False)
    location_code: Mapped[str] = mapped_column(String(64), nullable=False)  # zone, e.g. "Zone 1"
    warehouse: Mapped[str] = mapped_column(String(128), default="Main", nullable=False)
    capacity: Mapped[int] = mapped_column(Integer, nullable=False)
    # may exceed capacity, over-capacity allocations are flagged rather than rejected
    current_load: Mapped[int] = mapped_column(Integer, default=0, nullable=False)


class StockAllocation(Base, HasId):
    __tablename__ = "stock_allocations"

    # plain ids, no FKs: SKUs and racks can be deleted under an allocation
    sku_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    rack_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    reserved_qty: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    value: Mapped[int] = mapped_column(Integer, default=0, nullable=False)  # minor currency units
    inbound_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)


Index("ix_stock_alloc_rack_sku", StockAllocation.rack_id, StockAllocation.sku_id)
