from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from app.core.errors import ValidationError, ensure_member
from app.core.security import hash_password
from app.db import stores
from app.db.models.auth import User, UserRole, PERMISSION_FLAGS, default_permissions
from app.events.bus import publish
from services._crud import commit

logger = logging.getLogger(__name__)


def list_users(db: Session) -> list[User]:
    return stores.users.list(db)


def get_user(db: Session, user_id: int) -> User:
    return stores.users.get_or_404(db, user_id)


def get_user_by_username(db: Session, username: str) -> User | None:
    rows = stores.users.find_by(db, username=username)
    return rows[0] if rows else None


def create_user(
    db: Session,
    *,
    username: str,
    password: str,
    name: str,
    role: str = UserRole.VIEWER.value,
    permissions: dict | None = None,
) -> User:
    role = ensure_member(UserRole, role, "role")
    if get_user_by_username(db, username):
        raise ValidationError("Username already exists", field="username")

    perms = default_permissions()
    for flag, enabled in (permissions or {}).items():
        if flag not in PERMISSION_FLAGS:
            raise ValidationError(f"Unknown permission '{flag}'", field=f"permissions.{flag}")
        perms[flag] = bool(enabled)

    user = stores.users.create(
        db,
        username=username,
        password_hash=hash_password(password),
        name=name,
        role=role,
        permissions=perms,
    )
    publish(db, "user.created", {"id": user.id, "username": user.username, "role": user.role})
    commit(db)
    logger.info("created user %s (%s)", user.username, user.role)
    return user


def update_permissions(db: Session, user_id: int, changes: dict) -> User:
    """Flip individual capability flags; flags not named in ``changes`` keep their value."""
    user = stores.users.get_or_404(db, user_id)
    perms = dict(default_permissions(), **(user.permissions or {}))
    for flag, enabled in changes.items():
        if flag not in PERMISSION_FLAGS:
            raise ValidationError(f"Unknown permission '{flag}'", field=flag)
        perms[flag] = bool(enabled)
    # reassign so the JSON column is marked dirty
    user.permissions = perms
    publish(db, "user.permissions_changed", {"id": user.id, "permissions": perms})
    commit(db)
    logger.info("permissions for user %s now %s", user.username, perms)
    return user
