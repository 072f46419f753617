from __future__ import annotations

import enum

from sqlalchemy import String, JSON
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base
from app.db.models.common import HasId


class UserRole(str, enum.Enum):
    ADMIN = "admin"
    WAREHOUSE_STAFF = "warehouse_staff"
    VIEWER = "viewer"


PERMISSION_FLAGS = ("orderEdit", "inventoryEdit", "userCreation")


def default_permissions() -> dict:
    return {flag: False for flag in PERMISSION_FLAGS}


class User(Base, HasId):
    __tablename__ = "users"

    username: Mapped[str] = mapped_column(String(64), unique=True, nullable=False, index=True)
    password_hash: Mapped[str] = mapped_column(String(256), nullable=False)
    name: Mapped[str] = mapped_column(String(128), nullable=False)
    role: Mapped[str] = mapped_column(String(32), default=UserRole.VIEWER.value, nullable=False)
    # {orderEdit, inventoryEdit, userCreation}; capability flags, not RBAC
    permissions: Mapped[dict] = mapped_column(JSON, default=default_permissions, nullable=False)
