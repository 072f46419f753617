from __future__ import annotations

import enum

from sqlalchemy import String, Integer
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base
from app.db.models.common import HasId


class SkuStatus(str, enum.Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class Sku(Base, HasId):
    __tablename__ = "skus"

    code: Mapped[str] = mapped_column(String(64), unique=True, nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(256), nullable=False)
    category: Mapped[str] = mapped_column(String(128), nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    dimensions: Mapped[str | None] = mapped_column(String(64), nullable=True)  # free text, e.g. 10x5x2
    weight: Mapped[str | None] = mapped_column(String(32), nullable=True)  # free text, e.g. 0.2kg
    status: Mapped[str] = mapped_column(String(16), default=SkuStatus.ACTIVE.value, nullable=False)
    location: Mapped[str | None] = mapped_column(String(64), nullable=True)  # display only
