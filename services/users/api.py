from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import Field
from sqlalchemy.orm import Session

from app.core.schemas import CamelModel
from app.db.models.auth import User, UserRole
from app.db.session import get_db
from services.users import service

router = APIRouter(prefix="/api/users", tags=["users"])


class PermissionsIn(CamelModel):
    order_edit: bool = False
    inventory_edit: bool = False
    user_creation: bool = False


class PermissionsPatch(CamelModel):
    order_edit: bool | None = None
    inventory_edit: bool | None = None
    user_creation: bool | None = None


class UserIn(CamelModel):
    username: str = Field(..., min_length=1, max_length=64)
    password: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, max_length=128)
    role: UserRole = UserRole.VIEWER
    permissions: PermissionsIn = Field(default_factory=PermissionsIn)


def user_out(u: User) -> dict:
    # password hash never leaves the service
    return {
        "id": u.id,
        "username": u.username,
        "name": u.name,
        "role": u.role,
        "permissions": dict(u.permissions or {}),
    }


@router.get("")
def list_users(db: Session = Depends(get_db)):
    return [user_out(u) for u in service.list_users(db)]


@router.get("/{user_id}")
def get_user(user_id: int, db: Session = Depends(get_db)):
    return user_out(service.get_user(db, user_id))


@router.post("", status_code=201)
def create_user(payload: UserIn, db: Session = Depends(get_db)):
    user = service.create_user(
        db,
        username=payload.username,
        password=payload.password,
        name=payload.name,
        role=payload.role.value,
        permissions=payload.permissions.model_dump(by_alias=True),
    )
    return user_out(user)


@router.patch("/{user_id}/permissions")
def update_permissions(user_id: int, payload: PermissionsPatch, db: Session = Depends(get_db)):
    changes = payload.model_dump(by_alias=True, exclude_none=True)
    return user_out(service.update_permissions(db, user_id, changes))
