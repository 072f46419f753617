from __future__ import annotations

import enum
from datetime import datetime

from sqlalchemy import String, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base
from app.db.models.common import HasId


class ConnectorStatus(str, enum.Enum):
    ACTIVE = "active"
    BROKEN = "broken"


class ApiConnector(Base, HasId):
    """Sales-channel connector status. Seeded, read-only through the API."""

    __tablename__ = "api_connectors"

    name: Mapped[str] = mapped_column(String(128), nullable=False)  # e.g. Shopify, Amazon
    status: Mapped[str] = mapped_column(String(16), nullable=False)
    last_sync: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
