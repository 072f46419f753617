from __future__ import annotations

import enum

from sqlalchemy import String, Integer, JSON, Index
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base
from app.db.models.common import HasId, HasCreatedAt


class PicklistPriority(str, enum.Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class PicklistStatus(str, enum.Enum):
    NOT_STARTED = "Not Started"
    IN_PROGRESS = "In Progress"
    PAUSED = "Paused"
    COMPLETED = "Completed"


class PicklistItemStatus(str, enum.Enum):
    PENDING = "Pending"
    PICKED = "Picked"
    SHORT = "Short"


class ShortPickReason(str, enum.Enum):
    DAMAGED = "Damaged"
    MISSING = "Missing"
    NOT_FOUND = "Not Found"


class Picklist(Base, HasId, HasCreatedAt):
    __tablename__ = "picklists"

    order_ids: Mapped[list] = mapped_column(JSON, default=list, nullable=False)
    priority: Mapped[str] = mapped_column(String(16), nullable=False)
    warehouse: Mapped[str] = mapped_column(String(128), nullable=False)
    status: Mapped[str] = mapped_column(String(16), default=PicklistStatus.NOT_STARTED.value, nullable=False)
    assigned_picker_id: Mapped[int | None] = mapped_column(Integer, nullable=True)


class PicklistItem(Base, HasId):
    __tablename__ = "picklist_items"

    picklist_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    sku_id: Mapped[int] = mapped_column(Integer, nullable=False)
    rack_id: Mapped[int] = mapped_column(Integer, nullable=False)
    required_qty: Mapped[int] = mapped_column(Integer, nullable=False)
    picked_qty: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    status: Mapped[str] = mapped_column(String(16), default=PicklistItemStatus.PENDING.value, nullable=False)
    pick_sequence: Mapped[int] = mapped_column(Integer, nullable=False)
    short_pick_reason: Mapped[str | None] = mapped_column(String(16), nullable=True)  # only with status Short


Index("ix_picklist_items_seq", PicklistItem.picklist_id, PicklistItem.pick_sequence)
