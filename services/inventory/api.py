from __future__ import annotations

from fastapi import APIRouter, Depends, Response
from pydantic import Field
from sqlalchemy.orm import Session

from app.core.schemas import CamelModel
from app.db.models.inventory import Sku, SkuStatus
from app.db.session import get_db
from services.inventory import service

router = APIRouter(prefix="/api/skus", tags=["skus"])


class SkuIn(CamelModel):
    code: str = Field(..., min_length=1, max_length=64)
    name: str = Field(..., min_length=1, max_length=256)
    category: str = Field(..., min_length=1, max_length=128)
    quantity: int = Field(default=0, ge=0)
    dimensions: str | None = Field(default=None, max_length=64)
    weight: str | None = Field(default=None, max_length=32)
    status: SkuStatus = SkuStatus.ACTIVE
    location: str | None = Field(default=None, max_length=64)


class SkuPatch(CamelModel):
    code: str | None = Field(default=None, min_length=1, max_length=64)
    name: str | None = Field(default=None, min_length=1, max_length=256)
    category: str | None = Field(default=None, min_length=1, max_length=128)
    quantity: int | None = Field(default=None, ge=0)
    dimensions: str | None = Field(default=None, max_length=64)
    weight: str | None = Field(default=None, max_length=32)
    status: SkuStatus | None = None
    location: str | None = Field(default=None, max_length=64)


def sku_out(s: Sku) -> dict:
    return {
        "id": s.id,
        "code": s.code,
        "name": s.name,
        "category": s.category,
        "quantity": s.quantity,
        "dimensions": s.dimensions,
        "weight": s.weight,
        "status": s.status,
        "location": s.location,
    }


@router.get("")
def list_skus(db: Session = Depends(get_db)):
    return [sku_out(s) for s in service.list_skus(db)]


@router.get("/{sku_id}")
def get_sku(sku_id: int, db: Session = Depends(get_db)):
    return sku_out(service.get_sku(db, sku_id))


@router.post("", status_code=201)
def create_sku(payload: SkuIn, db: Session = Depends(get_db)):
    return sku_out(service.create_sku(db, **payload.model_dump(mode="json")))


@router.put("/{sku_id}")
def update_sku(sku_id: int, payload: SkuPatch, db: Session = Depends(get_db)):
    changes = payload.model_dump(mode="json", exclude_unset=True)
    return sku_out(service.update_sku(db, sku_id, changes))


@router.delete("/{sku_id}", status_code=204)
def delete_sku(sku_id: int, db: Session = Depends(get_db)):
    service.delete_sku(db, sku_id)
    return Response(status_code=204)
